# agroquote/data_access/products_repository.py

from typing import Optional, List

from agroquote.data_access.base_repository import BaseRepository
from agroquote.data_access.database_manager import DatabaseManager
from agroquote.business_logic.entities.product_entity import ProductEntity
import logging

logger = logging.getLogger(__name__)

class ProductsRepository(BaseRepository[ProductEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=ProductEntity,
                         table_name="products")

    def get_by_exact_name(self, name: str) -> Optional[ProductEntity]:
        """Retrieves a product by its exact name (case-sensitive)."""
        query = f"SELECT * FROM {self._table_name} WHERE name = ?"
        row = self.db_manager.fetch_one(query, (name,))
        return self._entity_from_row(dict(row)) if row else None

    def search_by_name(self, name_query: str) -> List[ProductEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE name LIKE ? ORDER BY name ASC"
        rows = self.db_manager.fetch_all(query, (f"%{name_query}%",))
        return [self._entity_from_row(dict(row)) for row in rows if row]
