# agroquote/business_logic/entities/prescription_entity.py
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from .base_entity import BaseEntity
from .product_entity import ProductEntity

@dataclass
class PrescriptionEntity(BaseEntity):
    product_id: int
    required_quantity: Decimal
    required_unit: str

    # None when the referenced product no longer resolves.
    product: Optional[ProductEntity] = field(default=None, init=False, repr=False, compare=False)
