# agroquote/business_logic/product_manager.py
from typing import Optional, List, Any, Dict, TYPE_CHECKING

from agroquote.business_logic.entities.product_entity import ProductEntity
if TYPE_CHECKING:
    from ..data_access.products_repository import ProductsRepository
    from ..data_access.quotes_repository import QuotesRepository
    from ..data_access.prescriptions_repository import PrescriptionsRepository

import logging

logger = logging.getLogger(__name__)

class ProductManager:
    def __init__(self,
                 product_repository: 'ProductsRepository',
                 quotes_repository: 'QuotesRepository',
                 prescriptions_repository: 'PrescriptionsRepository'):
        if product_repository is None:
            raise ValueError("product_repository cannot be None")
        self.product_repo = product_repository
        self.quotes_repo = quotes_repository
        self.prescriptions_repo = prescriptions_repository

    def get_product_by_id(self, product_id: int) -> Optional[ProductEntity]:
        """Fetches a product by its ID."""
        logger.debug(f"Fetching product by ID: {product_id}")
        product = self.product_repo.get_by_id(product_id)
        if not product:
            logger.warning(f"Product with ID {product_id} not found.")
            return None
        return product

    def get_all_products(self) -> List[ProductEntity]:
        logger.debug("Fetching all products.")
        return self.product_repo.get_all(order_by="name ASC")

    def create_product(self, name: str, standard_unit: str) -> Optional[ProductEntity]:
        name = (name or "").strip()
        standard_unit = (standard_unit or "").strip()
        if not name:
            raise ValueError("O nome do produto não pode ser vazio.")
        if not standard_unit:
            raise ValueError("A unidade padrão do produto é obrigatória.")

        existing = self.product_repo.get_by_exact_name(name)
        if existing:
            logger.warning(f"Product '{name}' already exists with ID {existing.id}.")
            raise ValueError(f"Já existe um produto com o nome '{name}' (ID: {existing.id}).")

        created_product = self.product_repo.add(ProductEntity(name=name, standard_unit=standard_unit))
        if created_product:
            logger.info(f"Product '{created_product.name}' (ID: {created_product.id}) created successfully.")
        else:
            logger.error(f"Failed to create product: {name}")
        return created_product

    def update_product(self, product_id: int, update_data: Dict[str, Any]) -> Optional[ProductEntity]:
        """Updates name and/or standard unit of an existing product."""
        logger.info(f"Attempting to update product ID: {product_id} with data: {update_data}")
        product_to_update = self.get_product_by_id(product_id)
        if not product_to_update:
            return None

        if "name" in update_data:
            new_name = (update_data["name"] or "").strip()
            if not new_name:
                raise ValueError("O nome do produto não pode ser vazio.")
            if new_name != product_to_update.name:
                existing = self.product_repo.get_by_exact_name(new_name)
                if existing and existing.id != product_id:
                    raise ValueError(f"Outro produto já usa o nome '{new_name}' (ID: {existing.id}).")
            product_to_update.name = new_name

        if "standard_unit" in update_data:
            new_unit = (update_data["standard_unit"] or "").strip()
            if not new_unit:
                raise ValueError("A unidade padrão do produto é obrigatória.")
            product_to_update.standard_unit = new_unit

        return self.product_repo.update(product_to_update)

    def delete_product(self, product_id: int) -> bool:
        """Deletes a product that no quote or prescription references."""
        product = self.get_product_by_id(product_id)
        if not product:
            return False

        quote_count = self.quotes_repo.count_by_criteria({"product_id": product_id})
        prescription_count = self.prescriptions_repo.count_by_criteria({"product_id": product_id})
        if quote_count or prescription_count:
            logger.warning(f"Refusing to delete product {product_id}: {quote_count} quotes, {prescription_count} prescriptions reference it.")
            raise ValueError(f"O produto '{product.name}' possui {quote_count} cotação(ões) e "
                             f"{prescription_count} prescrição(ões) e não pode ser excluído.")

        deleted = self.product_repo.delete(product_id)
        if deleted:
            logger.info(f"Product '{product.name}' (ID: {product_id}) deleted.")
        return deleted
