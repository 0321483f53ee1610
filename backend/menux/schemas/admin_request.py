"""Pydantic schemas for AdminRequests."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class AdminRequestCreate(BaseModel):
    email: str


class EmailTarget(BaseModel):
    email: str


class AdminRequestOut(BaseModel):
    id: str
    email: str
    requested_by: Optional[str] = None
    status: str  # pending, approved, rejected
    created_at: datetime
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None

    model_config = {"from_attributes": True}


class ApprovalOut(BaseModel):
    email: str
    approved_count: int
    granted_user_id: Optional[str] = None

    model_config = {"from_attributes": True}


class RejectionOut(BaseModel):
    email: str
    rejected_count: int
