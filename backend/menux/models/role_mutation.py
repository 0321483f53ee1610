"""RoleMutation ORM model — append-only ledger of role assignment writes."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from menux.database import Base
from menux.models.user_role import Role


class MutationSource(str, enum.Enum):
    direct = "direct"
    request = "request"
    signup = "signup"


class RoleMutation(Base):
    __tablename__ = "role_mutations"

    mutation_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    before_role = Column(SAEnum(Role), nullable=True)
    after_role = Column(SAEnum(Role), nullable=False)
    actor_user_id = Column(String(36), nullable=True)
    source = Column(SAEnum(MutationSource), nullable=False)
    request_email = Column(String(320), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
