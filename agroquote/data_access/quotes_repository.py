# agroquote/data_access/quotes_repository.py

from datetime import date
from typing import Dict, Any, List

from agroquote.data_access.base_repository import BaseRepository
from agroquote.data_access.database_manager import DatabaseManager
from agroquote.business_logic.entities.quote_entity import QuoteEntity
from agroquote.business_logic.entities.product_entity import ProductEntity
from agroquote.business_logic.entities.store_entity import StoreEntity
import logging

logger = logging.getLogger(__name__)

_JOINED_SELECT = """
    SELECT q.*,
           s.id AS s_id, s.name AS s_name, s.address AS s_address, s.phone AS s_phone,
           p.id AS p_id, p.name AS p_name, p.standard_unit AS p_standard_unit
    FROM quotes q
    LEFT JOIN stores s ON s.id = q.store_id
    LEFT JOIN products p ON p.id = q.product_id
"""

class QuotesRepository(BaseRepository[QuoteEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=QuoteEntity,
                         table_name="quotes")

    def _entity_with_relations(self, row: Dict[str, Any]) -> QuoteEntity:
        quote = self._entity_from_row(row)
        if row.get('s_id') is not None:
            quote.store = StoreEntity(id=row['s_id'], name=row['s_name'],
                                      address=row['s_address'], phone=row.get('s_phone'))
        if row.get('p_id') is not None:
            quote.product = ProductEntity(id=row['p_id'], name=row['p_name'],
                                          standard_unit=row['p_standard_unit'])
        return quote

    def find_by_product_and_date(self, product_id: int, quote_date: date) -> List[QuoteEntity]:
        """
        All quotes of a product on a calendar date, with store (and product) resolved.
        Rows come back in insertion order, which the ranking keeps for ties.
        """
        query = _JOINED_SELECT + " WHERE q.product_id = ? AND q.quote_date = ? ORDER BY q.id ASC"
        rows = self.db_manager.fetch_all(query, (product_id, quote_date.isoformat()))
        logger.debug(f"Found {len(rows)} quotes for product {product_id} on {quote_date}.")
        return [self._entity_with_relations(dict(row)) for row in rows]

    def get_all_with_relations(self) -> List[QuoteEntity]:
        query = _JOINED_SELECT + " ORDER BY q.quote_date DESC, q.id ASC"
        rows = self.db_manager.fetch_all(query)
        return [self._entity_with_relations(dict(row)) for row in rows]
