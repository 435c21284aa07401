from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from grc_portal.rbac.navigation import NAVIGATION, find_items_by_href, normalize_path
from grc_portal.security.config import SecurityConfig
from grc_portal.security.dependencies import get_security_config

router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/dashboard")
def dashboard(request: Request, config: SecurityConfig = Depends(get_security_config)) -> dict[str, object]:
    """Landing page shell; the access-denied flag is echoed so the UI can show a notice."""
    return {
        "page": "/dashboard",
        "title": "Dashboard",
        "access_denied": request.query_params.get(config.routes.access_denied_param) == "true",
    }


@router.get("/profile")
def profile() -> dict[str, object]:
    return {"page": "/profile", "title": "Profile"}


@router.get("/{page_path:path}")
def page(page_path: str) -> dict[str, object]:
    """Page shell for navigation entries. Rendering lives in the frontend."""
    path = normalize_path("/" + page_path)
    items = find_items_by_href(path, NAVIGATION)
    if not items:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    return {"page": path, "title": items[0].name}
