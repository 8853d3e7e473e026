# agroquote/business_logic/entities/product_entity.py
from dataclasses import dataclass
from .base_entity import BaseEntity

@dataclass
class ProductEntity(BaseEntity):
    name: str
    standard_unit: str   # e.g. "KG"; prescriptions must ask for this unit
