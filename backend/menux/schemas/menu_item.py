"""Pydantic schemas for MenuItems."""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class MenuItemCreate(BaseModel):
    name: str
    category: str = "food"  # food, alcohol
    description: Optional[str] = None
    price: Decimal
    is_available: bool = True


class MenuItemUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    is_available: Optional[bool] = None


class MenuItemOut(BaseModel):
    item_id: str
    name: str
    category: str
    description: Optional[str] = None
    price: Decimal
    is_available: bool
    created_at: datetime

    model_config = {"from_attributes": True}
