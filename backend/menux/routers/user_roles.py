"""UserRole API routes — direct grant and demotion by existing admins."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from menux.database import get_db
from menux.services import access_service
from menux.services.guard import require_admin
from menux.services.identity_provider import AuthSession
from menux.schemas.user_role import RoleMutationOut, RoleSet, UserRoleOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[UserRoleOut])
def list_user_roles(
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    """List all role assignments, newest first."""
    return access_service.list_roles(db)


@router.get("/mutations", response_model=list[RoleMutationOut])
def list_role_mutations(
    user_id: Optional[str] = None,
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    """Role ledger, optionally for a single identity."""
    return access_service.list_role_mutations(db, user_id=user_id)


@router.put("/{user_id}", response_model=UserRoleOut)
def set_user_role(
    user_id: str,
    payload: RoleSet,
    db: Session = Depends(get_db),
    admin: AuthSession = Depends(require_admin),
):
    """Grant or demote: role "admin" or "user". Overwrites any existing role."""
    return access_service.set_role(db, user_id, payload.role, actor_user_id=admin.user_id)
