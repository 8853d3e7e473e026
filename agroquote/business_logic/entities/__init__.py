# agroquote/business_logic/entities/__init__.py
from .base_entity import BaseEntity
from .product_entity import ProductEntity
from .store_entity import StoreEntity
from .quote_entity import QuoteEntity
from .prescription_entity import PrescriptionEntity

__all__ = [
    "BaseEntity", "ProductEntity", "StoreEntity", "QuoteEntity", "PrescriptionEntity",
]
