"""AdminRequest ORM model — email-keyed request for the admin role.

Rows are never deleted; approved/rejected rows are terminal.
"""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from menux.database import Base


class RequestStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class AdminRequest(Base):
    __tablename__ = "admin_requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(320), nullable=False, index=True)
    requested_by = Column(String(36), nullable=True)
    status = Column(SAEnum(RequestStatus), nullable=False, default=RequestStatus.pending, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    resolved_by = Column(String(36), nullable=True)
