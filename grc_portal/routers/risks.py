from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from grc_portal.db.session import get_db
from grc_portal.models.grc import Risk
from grc_portal.rbac import Action
from grc_portal.schemas.grc import RiskIn, RiskOut, RiskUpdate
from grc_portal.security.context import SessionUser
from grc_portal.security.decorators import require_permission
from grc_portal.security.dependencies import get_session_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/risks", tags=["risks"])

RESOURCE = Risk.__resource__


def _get_risk(db: Session, risk_id: int) -> Risk:
    risk = db.scalars(select(Risk).where(Risk.id == risk_id)).first()
    if risk is None:
        # Rows outside the caller's department are filtered out and look missing.
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Risk not found")
    return risk


def _require(authz: SessionUser, action: Action, department_id: int | None) -> None:
    if not authz.can(RESOURCE, action, department_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You don't have permission to {action.value} {RESOURCE}",
        )


@router.get("", response_model=list[RiskOut])
@require_permission(RESOURCE, Action.VIEW)
def list_risks(db: Session = Depends(get_db)) -> list[Risk]:
    return list(db.scalars(select(Risk).order_by(Risk.id)).all())


@router.get("/{risk_id}", response_model=RiskOut)
@require_permission(RESOURCE, Action.VIEW)
def get_risk(risk_id: int, db: Session = Depends(get_db)) -> Risk:
    return _get_risk(db, risk_id)


@router.post("", response_model=RiskOut, status_code=status.HTTP_201_CREATED)
@require_permission(RESOURCE, Action.CREATE)
def create_risk(
    body: RiskIn,
    db: Session = Depends(get_db),
    authz: SessionUser = Depends(get_session_user),
) -> Risk:
    department_id = body.department_id if body.department_id is not None else authz.department_id
    _require(authz, Action.CREATE, department_id)

    risk = Risk(title=body.title, description=body.description, department_id=department_id)
    db.add(risk)
    db.commit()
    db.refresh(risk)
    logger.info("Risk created id=%s department_id=%s by=%s", risk.id, department_id, authz.user_id)
    return risk


@router.put("/{risk_id}", response_model=RiskOut)
@require_permission(RESOURCE, Action.EDIT)
def update_risk(
    risk_id: int,
    body: RiskUpdate,
    db: Session = Depends(get_db),
    authz: SessionUser = Depends(get_session_user),
) -> Risk:
    risk = _get_risk(db, risk_id)
    _require(authz, Action.EDIT, risk.department_id)

    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(risk, field, value)
    db.commit()
    db.refresh(risk)
    return risk


@router.post("/{risk_id}/approve", response_model=RiskOut)
@require_permission(RESOURCE, Action.APPROVE)
def approve_risk(
    risk_id: int,
    db: Session = Depends(get_db),
    authz: SessionUser = Depends(get_session_user),
) -> Risk:
    risk = _get_risk(db, risk_id)
    _require(authz, Action.APPROVE, risk.department_id)

    risk.status = "approved"
    risk.approved_by_id = authz.user_id
    db.commit()
    db.refresh(risk)
    logger.info("Risk approved id=%s by=%s", risk.id, authz.user_id)
    return risk
