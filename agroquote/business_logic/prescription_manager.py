# agroquote/business_logic/prescription_manager.py
from decimal import Decimal
from typing import Optional, List, Any, Dict, Union, TYPE_CHECKING

from agroquote.business_logic.entities.prescription_entity import PrescriptionEntity
from agroquote.utils.number_parser import parse_decimal

if TYPE_CHECKING:
    from ..data_access.prescriptions_repository import PrescriptionsRepository
    from .product_manager import ProductManager

import logging

logger = logging.getLogger(__name__)

class PrescriptionManager:
    def __init__(self, prescriptions_repository: 'PrescriptionsRepository', product_manager: 'ProductManager'):
        if prescriptions_repository is None:
            raise ValueError("prescriptions_repository cannot be None")
        self.prescriptions_repo = prescriptions_repository
        self.product_manager = product_manager

    def create_prescription(self,
                            product_id: int,
                            required_quantity: Union[str, int, float, Decimal],
                            required_unit: str) -> Optional[PrescriptionEntity]:
        """
        Registers how much of a product is needed.
        The required unit must equal the product's standard unit.
        """
        product = self.product_manager.get_product_by_id(product_id)
        if not product:
            raise ValueError(f"Produto com ID {product_id} não encontrado.")

        quantity = parse_decimal(required_quantity, "quantidade requerida")
        if quantity <= 0:
            raise ValueError("A quantidade requerida deve ser maior que zero.")
        required_unit = (required_unit or "").strip()
        if not required_unit:
            raise ValueError("A unidade requerida é obrigatória.")
        self._check_unit(required_unit, product)

        created = self.prescriptions_repo.add(PrescriptionEntity(
            product_id=product_id, required_quantity=quantity, required_unit=required_unit))
        if created:
            created.product = product
            logger.info(f"Prescription ID {created.id} created: {quantity} {required_unit} of '{product.name}'.")
        else:
            logger.error(f"Failed to create prescription for product {product_id}.")
        return created

    @staticmethod
    def _check_unit(required_unit: str, product) -> None:
        # Reports still flag mismatches for products whose standard unit changes later.
        if required_unit != product.standard_unit:
            logger.warning(f"Rejected prescription unit '{required_unit}' for product '{product.name}' "
                           f"(standard unit '{product.standard_unit}').")
            raise ValueError(f"Unidade requerida '{required_unit}' não compatível com "
                             f"unidade padrão '{product.standard_unit}'.")

    def update_prescription(self, prescription_id: int, update_data: Dict[str, Any]) -> Optional[PrescriptionEntity]:
        prescription = self.prescriptions_repo.get_by_id(prescription_id)
        if not prescription:
            logger.warning(f"Prescription with ID {prescription_id} not found.")
            return None

        product_id = update_data.get("product_id", prescription.product_id)
        product = self.product_manager.get_product_by_id(product_id)
        if not product:
            raise ValueError(f"Produto com ID {product_id} não encontrado.")
        prescription.product_id = product_id
        if "required_quantity" in update_data:
            quantity = parse_decimal(update_data["required_quantity"], "quantidade requerida")
            if quantity <= 0:
                raise ValueError("A quantidade requerida deve ser maior que zero.")
            prescription.required_quantity = quantity
        if "required_unit" in update_data:
            unit = (update_data["required_unit"] or "").strip()
            if not unit:
                raise ValueError("A unidade requerida é obrigatória.")
            prescription.required_unit = unit
        self._check_unit(prescription.required_unit, product)

        updated = self.prescriptions_repo.update(prescription)
        if updated:
            updated.product = product
        return updated

    def delete_prescription(self, prescription_id: int) -> bool:
        deleted = self.prescriptions_repo.delete(prescription_id)
        if deleted:
            logger.info(f"Prescription ID {prescription_id} deleted.")
        return deleted

    def get_all_prescriptions(self) -> List[PrescriptionEntity]:
        """All prescriptions with their product attached."""
        return self.prescriptions_repo.get_all_with_products()
