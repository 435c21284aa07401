from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from grc_portal.db.session import get_db
from grc_portal.models.security import Role, User
from grc_portal.rbac import ROLES, Action
from grc_portal.schemas.security import RoleAssignmentIn, RoleDefinitionOut, UserOut
from grc_portal.security.context import SessionUser
from grc_portal.security.decorators import require_permission
from grc_portal.security.dependencies import get_session_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/roles", response_model=list[RoleDefinitionOut])
@require_permission("organization.users", Action.VIEW)
def list_roles() -> list[dict]:
    return [
        {
            "name": role.name,
            "description": role.description,
            "grants": [g.to_dict() for g in sorted(role.grants, key=lambda g: (g.resource, g.action.value))],
        }
        for role in ROLES.values()
    ]


@router.get("/users", response_model=list[UserOut])
@require_permission("organization.users", Action.VIEW)
def list_users(
    db: Session = Depends(get_db),
    authz: SessionUser = Depends(get_session_user),
) -> list[User]:
    stmt = select(User).options(selectinload(User.department), selectinload(User.roles)).order_by(User.id)
    users = db.scalars(stmt).all()
    return [u for u in users if authz.can("organization.users", Action.VIEW, u.department_id)]


@router.put("/users/{user_id}/roles", response_model=UserOut)
@require_permission("organization.users", Action.EDIT)
def assign_roles(
    user_id: int,
    body: RoleAssignmentIn,
    db: Session = Depends(get_db),
    authz: SessionUser = Depends(get_session_user),
) -> User:
    """Replace a user's role assignments. An empty list falls back to the default role at login."""

    user = db.execute(
        select(User).where(User.id == user_id).options(selectinload(User.department), selectinload(User.roles))
    ).scalar_one_or_none()
    if user is None or not authz.can("organization.users", Action.EDIT, user.department_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    wanted = sorted(set(body.roles))
    rows = {r.name: r for r in db.scalars(select(Role).where(Role.name.in_(wanted))).all()}
    missing = [name for name in wanted if name not in rows or name not in ROLES]
    if missing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Role not found: {', '.join(missing)}")

    user.roles = [rows[name] for name in wanted]
    db.commit()
    db.refresh(user)
    logger.info("Roles updated user_id=%s roles=%s by=%s", user.id, wanted, authz.user_id)
    return user
