"""Identity provider seam.

The access-control layer only needs three things from an identity provider:
sign-in, sign-out and "who is the current session". ``IdentityProvider`` is
that contract; ``InMemoryIdentityProvider`` is the development implementation
(sessions held in process memory, no credentials). Production deployments
swap in a hosted provider by overriding ``get_identity_provider``.

Cookies/headers carry only an opaque session token; session data stays
server-side.
"""
from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Optional, Protocol

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menux.config import settings
from menux.errors import Unauthenticated, ValidationError
from menux.models.user import User
from menux.services.store import store_call

logger = logging.getLogger(__name__)

ALREADY_REGISTERED = "This email is already registered. Please log in instead."


def _now() -> int:
    return int(time.time())


def normalize_email(email: Optional[str]) -> str:
    """Strip and lower-case an email; raise ValidationError if it is malformed."""
    normalized = (email or "").strip().lower()
    local, sep, domain = normalized.partition("@")
    if not sep or not local or not domain or "@" in domain or any(c.isspace() for c in normalized):
        raise ValidationError("Enter a valid email")
    return normalized


@dataclass(frozen=True)
class AuthSession:
    """Proof that an identity is currently signed in."""

    session_id: str
    user_id: str
    email: str
    expires_at: int


class IdentityProvider(Protocol):
    def sign_up(self, db: Session, email: str) -> User: ...

    def sign_in(self, db: Session, email: str) -> AuthSession: ...

    def sign_out(self, session_id: str) -> None: ...

    def current_session(self, session_id: Optional[str]) -> Optional[AuthSession]: ...


class InMemoryIdentityProvider:
    """Development identity provider. Not for production use."""

    def __init__(self, ttl_seconds: int = 3600):
        self._ttl_seconds = ttl_seconds
        self._sessions: dict[str, AuthSession] = {}

    def sign_up(self, db: Session, email: str) -> User:
        email = normalize_email(email)
        with store_call(db, "sign-up"):
            if db.query(User.user_id).filter(User.email == email).first():
                raise ValidationError(ALREADY_REGISTERED)
            user = User(email=email)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # lost a race with a concurrent sign-up for the same email
                db.rollback()
                raise ValidationError(ALREADY_REGISTERED) from None
            db.refresh(user)
        logger.info("Registered identity %s (%s)", user.user_id, email)
        return user

    def sign_in(self, db: Session, email: str) -> AuthSession:
        email = normalize_email(email)
        with store_call(db, "sign-in"):
            user = db.query(User).filter(User.email == email).first()
        if not user:
            raise Unauthenticated("Invalid login credentials")
        session = AuthSession(
            session_id=secrets.token_urlsafe(24),
            user_id=user.user_id,
            email=user.email,
            expires_at=_now() + self._ttl_seconds,
        )
        self._purge_expired()
        self._sessions[session.session_id] = session
        logger.info("Identity %s signed in", user.user_id)
        return session

    def _purge_expired(self) -> None:
        now = _now()
        for sid in [sid for sid, s in self._sessions.items() if s.expires_at < now]:
            del self._sessions[sid]

    def sign_out(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session:
            logger.info("Identity %s signed out", session.user_id)

    def current_session(self, session_id: Optional[str]) -> Optional[AuthSession]:
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if not session:
            return None
        if session.expires_at < _now():
            self._sessions.pop(session_id, None)
            return None
        return session


_provider = InMemoryIdentityProvider(ttl_seconds=settings.SESSION_TTL_SECONDS)
_bearer = HTTPBearer(auto_error=False)


def get_identity_provider() -> IdentityProvider:
    return _provider


def session_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)) -> Optional[str]:
    return credentials.credentials if credentials else None


def current_session(
    token: Optional[str] = Depends(session_token),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Optional[AuthSession]:
    """FastAPI dependency — the caller's session, or None when signed out."""
    return provider.current_session(token)
