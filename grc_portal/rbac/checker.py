"""
Authorization decisions over an effective permission set.

All functions here are pure and never raise for malformed input: unknown
resources, actions or missing department context resolve to deny. The one
exception to deny-by-default is `can_access_route` for paths the navigation
tree does not know about (unguarded pages such as the landing dashboard).
"""

from __future__ import annotations

import logging
from typing import Sequence

from grc_portal.rbac.catalog import is_known
from grc_portal.rbac.navigation import NAVIGATION, NavItem, find_items_by_href
from grc_portal.rbac.types import Action, CheckContext, EffectivePermissions, Scope

logger = logging.getLogger(__name__)


def _normalize_action(action: Action | str) -> Action | None:
    try:
        return Action(action)
    except ValueError:
        return None


def permission_scope(effective: EffectivePermissions, resource: str, action: Action | str) -> Scope | None:
    """
    Return the scope `effective` grants for (resource, action), or None.

    Pairs outside the catalog are logged as configuration gaps and return None.
    """

    if not isinstance(resource, str):
        logger.warning("RBAC: check against malformed resource %r action=%r", resource, action)
        return None

    normalized = _normalize_action(action)
    if normalized is None or not is_known(resource, normalized):
        logger.warning("RBAC: check against uncatalogued pair resource=%r action=%r", resource, action)
        return None
    return effective.scope_for(resource, normalized)


def is_granted(effective: EffectivePermissions, resource: str, action: Action | str) -> bool:
    """True if (resource, action) is granted at any scope, regardless of record ownership."""
    return permission_scope(effective, resource, action) is not None


def has_permission(
    effective: EffectivePermissions,
    resource: str,
    action: Action | str,
    context: CheckContext | None = None,
) -> bool:
    """
    Decide whether `effective` allows `action` on `resource`.

    Global grants allow unconditionally. Department grants allow only when
    the record's department equals the acting user's department; if either
    id is missing the check fails closed.
    """

    scope = permission_scope(effective, resource, action)
    if scope is None:
        return False

    if scope is Scope.GLOBAL:
        return True

    if scope is Scope.DEPARTMENT:
        if context is None:
            logger.debug("RBAC: department grant without context resource=%s action=%s", resource, action)
            return False
        record_dept = context.record_department_id
        acting_dept = context.acting_user_department_id
        if record_dept is None or acting_dept is None:
            logger.debug(
                "RBAC: department grant with incomplete context resource=%s action=%s record=%r acting=%r",
                resource,
                action,
                record_dept,
                acting_dept,
            )
            return False
        return str(record_dept) == str(acting_dept)

    logger.error("RBAC: unhandled scope %r for resource=%s action=%s", scope, resource, action)
    return False


def route_resources(path: str, tree: Sequence[NavItem] = NAVIGATION) -> list[str | None]:
    """Required resources of the navigation items rendering `path` (None = ungated item)."""
    return [item.resource for item in find_items_by_href(path, tree)]


def can_access_route(
    effective: EffectivePermissions,
    path: str,
    tree: Sequence[NavItem] = NAVIGATION,
) -> bool:
    """
    Route-level guard driven by the navigation tree.

    Only exact `href` matches are considered. A path no item renders is
    unguarded and allowed; otherwise at least one matching item must be
    ungated or have its resource's `view` granted.

    Uses `is_granted` rather than `has_permission`: a page is not a record,
    so a department-scoped `view` grant opens it and the data layer limits
    the rows it shows.
    """

    required = route_resources(path, tree)
    if not required:
        logger.debug("RBAC: no navigation entry for path=%s, treating as unguarded", path)
        return True

    for resource in required:
        if resource is None or is_granted(effective, resource, Action.VIEW):
            return True

    logger.debug("RBAC: route denied path=%s required=%s", path, required)
    return False
