"""Authorization guard — the check every privileged route passes first.

Outcomes are kept distinct because the remedy differs:
no session → Unauthenticated (sign in), no admin row → Forbidden (ask an
admin), store failure → TransportError (retry). The guard only reads.
"""
import enum
import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from menux.database import get_db
from menux.errors import Forbidden, Unauthenticated
from menux.models.user_role import Role, UserRole
from menux.services.identity_provider import AuthSession, current_session
from menux.services.store import store_call

logger = logging.getLogger(__name__)


class AccessState(str, enum.Enum):
    unauthenticated = "unauthenticated"
    forbidden = "forbidden"
    authorized = "authorized"


def _has_admin_role(db: Session, user_id: str) -> bool:
    with store_call(db, "admin role lookup"):
        row = (
            db.query(UserRole.id)
            .filter(UserRole.user_id == user_id, UserRole.role == Role.admin)
            .first()
        )
    return row is not None


def authorize(db: Session, session: Optional[AuthSession]) -> AuthSession:
    """Return ``session`` if it belongs to an admin, otherwise raise."""
    if session is None:
        raise Unauthenticated("Sign in to continue")
    if not _has_admin_role(db, session.user_id):
        logger.warning("Denied admin access to %s (%s)", session.user_id, session.email)
        raise Forbidden("You need admin privileges to access this page")
    return session


def access_status(db: Session, session: Optional[AuthSession]) -> AccessState:
    """Like ``authorize`` but reports denials instead of raising them.

    Store failures still raise TransportError.
    """
    if session is None:
        return AccessState.unauthenticated
    if _has_admin_role(db, session.user_id):
        return AccessState.authorized
    return AccessState.forbidden


def require_admin(
    session: Optional[AuthSession] = Depends(current_session),
    db: Session = Depends(get_db),
) -> AuthSession:
    """FastAPI dependency gating privileged routes."""
    return authorize(db, session)
