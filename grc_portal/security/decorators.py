from __future__ import annotations

from collections.abc import Callable

from grc_portal.rbac import Action


def require_permission(resource: str, action: Action | str = Action.VIEW) -> Callable:
    """
    Declare the (resource, action) an endpoint needs.

    Implementation detail:
    - This decorator does NOT perform the check itself.
    - It attaches metadata that the global security dependency reads
      *after* routing (during dependency resolution).
    - Stacking several decorators requires all of them.
    """

    required = (resource, Action(action))

    def decorator(fn: Callable) -> Callable:
        existing = set(getattr(fn, "__security_required_permissions__", set()))
        setattr(fn, "__security_required_permissions__", existing | {required})
        return fn

    return decorator


def required_permissions(endpoint: Callable | None) -> frozenset[tuple[str, Action]]:
    if endpoint is None:
        return frozenset()
    return frozenset(getattr(endpoint, "__security_required_permissions__", set()))
