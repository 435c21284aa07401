from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from grc_portal.db.session import get_db
from grc_portal.models.grc import Control
from grc_portal.rbac import Action
from grc_portal.schemas.grc import ControlIn, ControlOut
from grc_portal.security.context import SessionUser
from grc_portal.security.decorators import require_permission
from grc_portal.security.dependencies import get_session_user

router = APIRouter(prefix="/api/controls", tags=["controls"])


@router.get("", response_model=list[ControlOut])
@require_permission(Control.__resource__, Action.VIEW)
def list_controls(db: Session = Depends(get_db)) -> list[Control]:
    return list(db.scalars(select(Control).order_by(Control.id)).all())


@router.get("/{control_id}", response_model=ControlOut)
@require_permission(Control.__resource__, Action.VIEW)
def get_control(control_id: int, db: Session = Depends(get_db)) -> Control:
    control = db.scalars(select(Control).where(Control.id == control_id)).first()
    if control is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Control not found")
    return control


@router.post("", response_model=ControlOut, status_code=status.HTTP_201_CREATED)
@require_permission(Control.__resource__, Action.CREATE)
def create_control(
    body: ControlIn,
    db: Session = Depends(get_db),
    authz: SessionUser = Depends(get_session_user),
) -> Control:
    department_id = body.department_id if body.department_id is not None else authz.department_id
    if not authz.can(Control.__resource__, Action.CREATE, department_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You don't have permission to create {Control.__resource__}",
        )

    control = Control(code=body.code, name=body.name, description=body.description, department_id=department_id)
    db.add(control)
    db.commit()
    db.refresh(control)
    return control
