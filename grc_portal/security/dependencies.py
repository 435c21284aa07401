from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from grc_portal.db.session import attach_authz, get_db
from grc_portal.rbac import can_access_route
from grc_portal.security.auth import build_session_user, extract_user_id, load_user
from grc_portal.security.config import SecurityConfig
from grc_portal.security.context import SessionUser
from grc_portal.security.decorators import required_permissions

logger = logging.getLogger(__name__)


def get_security_config(request: Request) -> SecurityConfig:
    config = getattr(request.app.state, "security_config", None)
    if config is None:
        raise RuntimeError("Security config not loaded. Did app startup run?")
    return config


def get_session_user(request: Request) -> SessionUser:
    authz = getattr(request.state, "authz", None)
    if authz is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return authz


def enforce_security(
    request: Request,
    config: SecurityConfig = Depends(get_security_config),
    db: Session = Depends(get_db, use_cache=False),
) -> None:
    """
    Global security dependency.

    Runs after routing so endpoint metadata from `require_permission` is
    available. API endpoints answer 403 on denial; page routes are checked
    against the navigation tree and redirect to the landing page with the
    access-denied flag.
    """

    path = request.url.path
    method = request.method.upper()

    if config.is_public(path):
        return

    user_id = extract_user_id(request, config)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing user id")

    user = load_user(db, user_id)
    session_user = build_session_user(user)
    request.state.user = user
    request.state.authz = session_user
    # The endpoint may reuse this session; scope its queries to the acting user.
    attach_authz(db, request)

    if config.is_api(path):
        endpoint = request.scope.get("endpoint")
        for resource, action in sorted(required_permissions(endpoint), key=lambda p: (p[0], p[1].value)):
            if not session_user.granted(resource, action):
                logger.info(
                    "Permission denied user_id=%s roles=%s method=%s path=%s required=%s:%s",
                    session_user.user_id,
                    sorted(session_user.roles),
                    method,
                    path,
                    resource,
                    action.value,
                )
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"You don't have permission to {action.value} {resource}",
                )
        return

    if config.is_auth_only(path):
        return

    if not can_access_route(session_user.permissions, path):
        logger.info("Route denied user_id=%s roles=%s path=%s", session_user.user_id, sorted(session_user.roles), path)
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Access denied",
            headers={"Location": config.access_denied_url()},
        )
