"""MenuItem ORM model — catalog entries edited by admins."""
import uuid
import enum
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Enum as SAEnum
from sqlalchemy.sql import func
from menux.database import Base


class ItemCategory(str, enum.Enum):
    food = "food"
    alcohol = "alcohol"


class MenuItem(Base):
    __tablename__ = "menu_items"

    item_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(150), nullable=False)
    category = Column(SAEnum(ItemCategory), nullable=False, default=ItemCategory.food)
    description = Column(String(1000), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
