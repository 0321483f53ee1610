"""AdminRequest API routes — request, approve and reject admin access by email."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menux.database import get_db
from menux.services import access_service
from menux.services.guard import require_admin
from menux.services.identity_provider import AuthSession, current_session, normalize_email
from menux.schemas.admin_request import (
    AdminRequestCreate,
    AdminRequestOut,
    ApprovalOut,
    EmailTarget,
    RejectionOut,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=AdminRequestOut, status_code=status.HTTP_201_CREATED)
def submit_admin_request(
    payload: AdminRequestCreate,
    db: Session = Depends(get_db),
    session: Optional[AuthSession] = Depends(current_session),
):
    """Submit a request for admin access. Open to anyone; the submitter is
    recorded when signed in.
    """
    return access_service.submit_request(
        db, payload.email, requested_by=session.user_id if session else None
    )


@router.get("/pending", response_model=list[AdminRequestOut])
def list_pending_admin_requests(
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    return access_service.list_pending_requests(db)


@router.post("/approve", response_model=ApprovalOut)
def approve_admin_by_email(
    payload: EmailTarget,
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    """Approve every pending request for the email and grant admin to its identity."""
    return access_service.approve(db, payload.email, actor_user_id=admin.user_id)


@router.post("/reject", response_model=RejectionOut)
def reject_admin_request(
    payload: EmailTarget,
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    count = access_service.reject(db, payload.email, actor_user_id=admin.user_id)
    return RejectionOut(email=normalize_email(payload.email), rejected_count=count)
