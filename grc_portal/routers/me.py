from __future__ import annotations

from fastapi import APIRouter, Depends

from grc_portal.rbac import NAVIGATION, filter_navigation
from grc_portal.schemas.security import NavItemOut, SessionUserOut
from grc_portal.security.context import SessionUser
from grc_portal.security.dependencies import get_session_user

router = APIRouter(prefix="/api/me", tags=["session"])


@router.get("", response_model=SessionUserOut)
def me(authz: SessionUser = Depends(get_session_user)) -> dict:
    return authz.to_dict()


@router.get("/navigation", response_model=list[NavItemOut])
def my_navigation(authz: SessionUser = Depends(get_session_user)) -> list[dict]:
    return [item.to_dict() for item in filter_navigation(NAVIGATION, authz.permissions)]
