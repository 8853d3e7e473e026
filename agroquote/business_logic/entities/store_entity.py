# agroquote/business_logic/entities/store_entity.py
from dataclasses import dataclass, field
from typing import Optional
from .base_entity import BaseEntity

@dataclass
class StoreEntity(BaseEntity):
    name: str
    address: str
    phone: Optional[str] = field(default=None)
