# agroquote/data_access/stores_repository.py

from typing import Optional

from agroquote.data_access.base_repository import BaseRepository
from agroquote.data_access.database_manager import DatabaseManager
from agroquote.business_logic.entities.store_entity import StoreEntity
import logging

logger = logging.getLogger(__name__)

class StoresRepository(BaseRepository[StoreEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=StoreEntity,
                         table_name="stores")

    def get_by_exact_name(self, name: str) -> Optional[StoreEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE name = ?"
        row = self.db_manager.fetch_one(query, (name,))
        return self._entity_from_row(dict(row)) if row else None

    def get_by_address(self, address: str) -> Optional[StoreEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE address = ?"
        row = self.db_manager.fetch_one(query, (address,))
        return self._entity_from_row(dict(row)) if row else None

    def get_by_phone(self, phone: str) -> Optional[StoreEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE phone = ?"
        row = self.db_manager.fetch_one(query, (phone,))
        return self._entity_from_row(dict(row)) if row else None
