"""User ORM model — local directory of identities issued by the identity provider."""
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from menux.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(320), nullable=False, unique=True, index=True)  # normalized
    created_at = Column(DateTime(timezone=True), server_default=func.now())
