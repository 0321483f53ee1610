"""Auth API routes — thin wrapper over the identity provider plus access status."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menux.database import get_db
from menux.errors import Unauthenticated
from menux.services import access_service
from menux.services.guard import access_status
from menux.services.identity_provider import (
    AuthSession,
    IdentityProvider,
    current_session,
    get_identity_provider,
    session_token,
)
from menux.schemas.user import (
    AccessOut,
    Credentials,
    CurrentSessionOut,
    SessionOut,
    SignUpOut,
    UserOut,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/sign-up", response_model=SignUpOut, status_code=status.HTTP_201_CREATED)
def sign_up(
    payload: Credentials,
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Register an identity. Applies any admin grant already approved for its email."""
    user = provider.sign_up(db, payload.email)
    granted = access_service.link_approved_requests(db, user.user_id, user.email)
    return SignUpOut(user=UserOut.model_validate(user), admin_granted=granted is not None)


@router.post("/sign-in", response_model=SessionOut)
def sign_in(
    payload: Credentials,
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Open a session. Applies any approved admin grant the identity is still missing."""
    session = provider.sign_in(db, payload.email)
    access_service.link_approved_requests(db, session.user_id, session.email)
    return SessionOut(
        access_token=session.session_id,
        user_id=session.user_id,
        email=session.email,
        expires_at=session.expires_at,
    )


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(
    token: Optional[str] = Depends(session_token),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    if not token:
        raise Unauthenticated("Not signed in")
    provider.sign_out(token)


@router.get("/session", response_model=CurrentSessionOut)
def get_current_session(session: Optional[AuthSession] = Depends(current_session)):
    """The caller's session, if any."""
    if session is None:
        return CurrentSessionOut(authenticated=False)
    return CurrentSessionOut(authenticated=True, user_id=session.user_id, email=session.email)


@router.get("/access", response_model=AccessOut)
def get_access(
    session: Optional[AuthSession] = Depends(current_session),
    db: Session = Depends(get_db),
):
    """Whether the caller may enter the admin surface, without raising on denial."""
    return AccessOut(state=access_status(db, session).value)
