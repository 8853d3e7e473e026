# agroquote/business_logic/quote_manager.py
from datetime import date
from decimal import Decimal
from typing import Optional, List, Any, Dict, Union, TYPE_CHECKING

from agroquote.business_logic.entities.quote_entity import QuoteEntity
from agroquote.constants import DEFAULT_CONVERSION_FACTOR
from agroquote.utils.number_parser import parse_decimal
from agroquote.utils.date_converter import parse_iso_date

if TYPE_CHECKING:
    from ..data_access.quotes_repository import QuotesRepository
    from .product_manager import ProductManager
    from .store_manager import StoreManager

import logging

logger = logging.getLogger(__name__)

Number = Union[str, int, float, Decimal]

class QuoteManager:
    def __init__(self,
                 quotes_repository: 'QuotesRepository',
                 product_manager: 'ProductManager',
                 store_manager: 'StoreManager'):
        if quotes_repository is None:
            raise ValueError("quotes_repository cannot be None")
        self.quotes_repo = quotes_repository
        self.product_manager = product_manager
        self.store_manager = store_manager

    def _validated_fields(self, product_id: int, store_id: int, price: Number, packaging_size: Number,
                          packaging_unit: str, quote_date: Union[date, str],
                          conversion_factor: Number) -> Dict[str, Any]:
        if not self.product_manager.get_product_by_id(product_id):
            raise ValueError(f"Produto com ID {product_id} não encontrado.")
        if not self.store_manager.get_store_by_id(store_id):
            raise ValueError(f"Loja com ID {store_id} não encontrada.")

        price_dec = parse_decimal(price, "preço")
        size_dec = parse_decimal(packaging_size, "tamanho da embalagem")
        factor_dec = parse_decimal(conversion_factor, "fator de conversão")
        if price_dec <= 0:
            raise ValueError("O preço deve ser maior que zero.")
        if size_dec <= 0:
            raise ValueError("O tamanho da embalagem deve ser maior que zero.")
        if factor_dec <= 0:
            raise ValueError("O fator de conversão deve ser maior que zero.")

        packaging_unit = (packaging_unit or "").strip()
        if not packaging_unit:
            raise ValueError("A unidade da embalagem é obrigatória.")

        if isinstance(quote_date, str):
            parsed_date = parse_iso_date(quote_date)
            if parsed_date is None:
                raise ValueError("Formato de data inválido (use AAAA-MM-DD).")
            quote_date = parsed_date
        if not isinstance(quote_date, date):
            raise ValueError("A data da cotação é obrigatória.")

        return {
            "product_id": product_id, "store_id": store_id, "price": price_dec,
            "packaging_size": size_dec, "packaging_unit": packaging_unit,
            "conversion_factor": factor_dec, "quote_date": quote_date,
        }

    def create_quote(self,
                     product_id: int,
                     store_id: int,
                     price: Number,
                     packaging_size: Number,
                     packaging_unit: str,
                     quote_date: Union[date, str],
                     conversion_factor: Number = DEFAULT_CONVERSION_FACTOR) -> Optional[QuoteEntity]:
        values = self._validated_fields(product_id, store_id, price, packaging_size,
                                        packaging_unit, quote_date, conversion_factor)
        created_quote = self.quotes_repo.add(QuoteEntity(**values))
        if created_quote:
            logger.info(f"Quote ID {created_quote.id} created: product {product_id}, store {store_id}, "
                        f"price {values['price']} on {values['quote_date']}.")
        else:
            logger.error(f"Failed to create quote for product {product_id} and store {store_id}.")
        return created_quote

    def update_quote(self, quote_id: int, update_data: Dict[str, Any]) -> Optional[QuoteEntity]:
        quote = self.get_quote_by_id(quote_id)
        if not quote:
            return None
        merged = {
            "product_id": quote.product_id, "store_id": quote.store_id, "price": quote.price,
            "packaging_size": quote.packaging_size, "packaging_unit": quote.packaging_unit,
            "quote_date": quote.quote_date, "conversion_factor": quote.conversion_factor,
        }
        merged.update(update_data)
        values = self._validated_fields(**merged)
        updated = QuoteEntity(id=quote_id, **values)
        return self.quotes_repo.update(updated)

    def delete_quote(self, quote_id: int) -> bool:
        deleted = self.quotes_repo.delete(quote_id)
        if deleted:
            logger.info(f"Quote ID {quote_id} deleted.")
        else:
            logger.warning(f"Quote ID {quote_id} not deleted (not found or storage error).")
        return deleted

    def get_quote_by_id(self, quote_id: int) -> Optional[QuoteEntity]:
        quote = self.quotes_repo.get_by_id(quote_id)
        if not quote:
            logger.warning(f"Quote with ID {quote_id} not found.")
        return quote

    def get_all_quotes(self) -> List[QuoteEntity]:
        """All quotes, newest date first, with product and store attached."""
        return self.quotes_repo.get_all_with_relations()

    def get_quotes_for(self, product_id: int, quote_date: date) -> List[QuoteEntity]:
        return self.quotes_repo.find_by_product_and_date(product_id, quote_date)
