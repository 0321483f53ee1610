"""Pydantic schemas for identities and sessions."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Credentials(BaseModel):
    email: str


class UserOut(BaseModel):
    user_id: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SignUpOut(BaseModel):
    user: UserOut
    admin_granted: bool = False


class SessionOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    expires_at: int


class CurrentSessionOut(BaseModel):
    authenticated: bool
    user_id: Optional[str] = None
    email: Optional[str] = None


class AccessOut(BaseModel):
    state: str  # unauthenticated, forbidden, authorized
