# agroquote/data_access/prescriptions_repository.py

from typing import List

from agroquote.data_access.base_repository import BaseRepository
from agroquote.data_access.database_manager import DatabaseManager
from agroquote.business_logic.entities.prescription_entity import PrescriptionEntity
from agroquote.business_logic.entities.product_entity import ProductEntity
import logging

logger = logging.getLogger(__name__)

class PrescriptionsRepository(BaseRepository[PrescriptionEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=PrescriptionEntity,
                         table_name="prescriptions")

    def get_all_with_products(self) -> List[PrescriptionEntity]:
        """All prescriptions with their product attached (None if it doesn't resolve)."""
        query = """
            SELECT pr.*, p.id AS p_id, p.name AS p_name, p.standard_unit AS p_standard_unit
            FROM prescriptions pr
            LEFT JOIN products p ON p.id = pr.product_id
            ORDER BY pr.id ASC
        """
        rows = self.db_manager.fetch_all(query)
        prescriptions = []
        for row in rows:
            row_dict = dict(row)
            prescription = self._entity_from_row(row_dict)
            if row_dict.get('p_id') is not None:
                prescription.product = ProductEntity(id=row_dict['p_id'], name=row_dict['p_name'],
                                                     standard_unit=row_dict['p_standard_unit'])
            prescriptions.append(prescription)
        return prescriptions
