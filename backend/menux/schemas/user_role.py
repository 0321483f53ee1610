"""Pydantic schemas for UserRoles and the role ledger."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class RoleSet(BaseModel):
    role: str  # admin, user


class UserRoleOut(BaseModel):
    id: str
    user_id: str
    role: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RoleMutationOut(BaseModel):
    mutation_id: str
    user_id: str
    before_role: Optional[str] = None
    after_role: str
    actor_user_id: Optional[str] = None
    source: str  # direct, request, signup
    request_email: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
