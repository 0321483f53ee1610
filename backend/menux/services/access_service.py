"""Access control service — admin request lifecycle and role assignment.

Responsibilities:
- Admin requests: submit, list pending, approve/reject by email
- Role assignments: list, upsert keyed on user_id (grant and demotion)
- Deferred grants: an approved email gains the admin role once its identity signs up or in
- Role ledger (RoleMutations) for every role assignment write

Authorization is not checked here; routes gate privileged calls with the Guard.
Input is validated before any store call. Store failures surface as
TransportError and are never retried.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from menux.config import settings
from menux.errors import NotFoundError, ValidationError
from menux.models.admin_request import AdminRequest, RequestStatus
from menux.models.role_mutation import MutationSource, RoleMutation
from menux.models.user import User
from menux.models.user_role import Role, UserRole
from menux.services.identity_provider import normalize_email
from menux.services.store import store_call

logger = logging.getLogger(__name__)


@dataclass
class ApprovalResult:
    email: str
    approved_count: int
    granted_user_id: Optional[str] = None


def _validate_role(role) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise ValidationError(f"Role must be one of: {', '.join(r.value for r in Role)}") from None


def _validate_user_id(user_id: Optional[str]) -> str:
    user_id = (user_id or "").strip()
    if not user_id:
        raise ValidationError("Enter a valid user ID")
    return user_id


def _upsert_role(
    db: Session,
    user_id: str,
    role: Role,
    source: MutationSource,
    actor_user_id: Optional[str] = None,
    request_email: Optional[str] = None,
) -> None:
    """Insert or overwrite the single role row for ``user_id`` and ledger it.

    Does not commit; the caller owns the transaction.
    """
    before = db.query(UserRole.role).filter(UserRole.user_id == user_id).scalar()

    dialect = db.get_bind().dialect.name
    if dialect in ("postgresql", "sqlite"):
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        stmt = insert(UserRole.__table__).values(id=str(uuid.uuid4()), user_id=user_id, role=role)
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserRole.__table__.c.user_id],
            set_={"role": stmt.excluded.role, "updated_at": func.now()},
        )
        db.execute(stmt)
    else:
        row = db.query(UserRole).filter(UserRole.user_id == user_id).with_for_update().first()
        if row:
            row.role = role
        else:
            db.add(UserRole(user_id=user_id, role=role))
        db.flush()

    db.add(RoleMutation(
        user_id=user_id,
        before_role=before,
        after_role=role,
        actor_user_id=actor_user_id,
        source=source,
        request_email=request_email,
    ))


def _get_role_row(db: Session, user_id: str) -> UserRole:
    return (
        db.query(UserRole)
        .populate_existing()
        .filter(UserRole.user_id == user_id)
        .one()
    )


# ── Admin requests ─────────────────────────────────────────────────


def submit_request(db: Session, email: str, requested_by: Optional[str] = None) -> AdminRequest:
    """Record a pending request to make the identity owning ``email`` an admin.

    Duplicate pending requests for the same email are allowed.
    """
    email = normalize_email(email)
    with store_call(db, "submit admin request"):
        req = AdminRequest(email=email, requested_by=requested_by, status=RequestStatus.pending)
        db.add(req)
        db.commit()
        db.refresh(req)
    logger.info("AdminRequest %s submitted for %s (by %s)", req.id, email, requested_by or "anonymous")
    return req


def list_pending_requests(db: Session) -> list[AdminRequest]:
    with store_call(db, "list pending admin requests"):
        return (
            db.query(AdminRequest)
            .filter(AdminRequest.status == RequestStatus.pending)
            .order_by(AdminRequest.created_at.asc(), AdminRequest.id.asc())
            .all()
        )


def _resolve_pending(db: Session, email: str, new_status: RequestStatus, actor_user_id: Optional[str]) -> int:
    """Move every pending request for ``email`` to ``new_status``.

    The update is conditional on ``status = pending``, so terminal rows are
    never touched and a concurrent resolver finds nothing left to resolve.
    """
    count = (
        db.query(AdminRequest)
        .filter(AdminRequest.email == email, AdminRequest.status == RequestStatus.pending)
        .update(
            {
                AdminRequest.status: new_status,
                AdminRequest.resolved_at: datetime.now(timezone.utc),
                AdminRequest.resolved_by: actor_user_id,
            },
            synchronize_session=False,
        )
    )
    if count == 0:
        db.rollback()
        raise NotFoundError(f"No pending admin request for {email}")
    return count


def approve(db: Session, email: str, actor_user_id: Optional[str] = None) -> ApprovalResult:
    """Approve all pending requests for ``email`` and grant admin to its identity.

    Runs as a single transaction. If no identity owns the email yet, the
    requests are still approved and the grant is deferred until sign-up
    (see ``link_approved_requests``).
    """
    email = normalize_email(email)
    with store_call(db, "approve admin request"):
        count = _resolve_pending(db, email, RequestStatus.approved, actor_user_id)
        user = db.query(User).filter(User.email == email).first()
        granted = None
        if user:
            _upsert_role(db, user.user_id, Role.admin, MutationSource.request, actor_user_id, request_email=email)
            granted = user.user_id
        db.commit()

    if granted:
        logger.info("Approved %d admin request(s) for %s; admin granted to %s", count, email, granted)
    else:
        logger.info("Approved %d admin request(s) for %s; no identity yet, grant deferred", count, email)
    return ApprovalResult(email=email, approved_count=count, granted_user_id=granted)


def reject(db: Session, email: str, actor_user_id: Optional[str] = None) -> int:
    """Reject all pending requests for ``email``. Role assignments are untouched."""
    email = normalize_email(email)
    with store_call(db, "reject admin request"):
        count = _resolve_pending(db, email, RequestStatus.rejected, actor_user_id)
        db.commit()
    logger.info("Rejected %d admin request(s) for %s", count, email)
    return count


def link_approved_requests(db: Session, user_id: str, email: str) -> Optional[UserRole]:
    """Grant admin to an identity whose email was approved (or is listed in
    BOOTSTRAP_ADMIN_EMAILS) before it had any role. Returns the role row if
    the identity is admin afterwards.

    Runs at sign-up and again at every sign-in, so a grant lost to a store
    failure is applied on the next sign-in. An existing role row, including
    an explicit demotion to "user", is never overwritten here.
    """
    with store_call(db, "link approved admin requests"):
        current = db.query(UserRole.role).filter(UserRole.user_id == user_id).scalar()
        if current == Role.admin:
            return _get_role_row(db, user_id)
        if current is not None:
            return None
        approved = (
            db.query(AdminRequest.id)
            .filter(AdminRequest.email == email, AdminRequest.status == RequestStatus.approved)
            .first()
        )
        if not approved and email not in settings.bootstrap_admin_emails:
            return None
        _upsert_role(db, user_id, Role.admin, MutationSource.signup, request_email=email)
        db.commit()
        row = _get_role_row(db, user_id)
    logger.info("Deferred admin grant applied to %s (%s)", user_id, email)
    return row


# ── Role assignments ───────────────────────────────────────────────


def list_roles(db: Session) -> list[UserRole]:
    """All role assignments, most recently created first."""
    with store_call(db, "list user roles"):
        return db.query(UserRole).order_by(UserRole.created_at.desc(), UserRole.id.desc()).all()


def set_role(db: Session, user_id: str, role, actor_user_id: Optional[str] = None) -> UserRole:
    """Grant or demote directly: upsert the role row keyed on ``user_id``.

    Idempotent; concurrent calls for the same user resolve last-writer-wins.
    """
    user_id = _validate_user_id(user_id)
    role = _validate_role(role)
    with store_call(db, "set user role"):
        _upsert_role(db, user_id, role, MutationSource.direct, actor_user_id)
        db.commit()
        row = _get_role_row(db, user_id)
    logger.info("Role for %s set to %s by %s", user_id, role.value, actor_user_id or "system")
    return row


def list_role_mutations(db: Session, user_id: Optional[str] = None) -> list[RoleMutation]:
    """Role ledger, newest first, optionally for one identity."""
    with store_call(db, "list role mutations"):
        query = db.query(RoleMutation)
        if user_id:
            query = query.filter(RoleMutation.user_id == user_id)
        return query.order_by(RoleMutation.created_at.desc()).all()
