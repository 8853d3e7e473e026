# agroquote/business_logic/entities/quote_entity.py
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from .base_entity import BaseEntity
from .product_entity import ProductEntity
from .store_entity import StoreEntity

@dataclass
class QuoteEntity(BaseEntity):
    product_id: int
    store_id: int
    price: Decimal
    packaging_size: Decimal
    packaging_unit: str          # informational only, never converted
    quote_date: date
    conversion_factor: Decimal = field(default_factory=lambda: Decimal("1.0"))

    # Resolved by the repository on joined reads; not persisted.
    product: Optional[ProductEntity] = field(default=None, init=False, repr=False, compare=False)
    store: Optional[StoreEntity] = field(default=None, init=False, repr=False, compare=False)
