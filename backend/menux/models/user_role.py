"""UserRole ORM model — at most one role assignment per identity."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from menux.database import Base


class Role(str, enum.Enum):
    admin = "admin"
    user = "user"


class UserRole(Base):
    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Not a foreign key: roles may be granted to provider ids not yet mirrored locally
    user_id = Column(String(36), nullable=False, unique=True)
    role = Column(SAEnum(Role), nullable=False, default=Role.user)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
