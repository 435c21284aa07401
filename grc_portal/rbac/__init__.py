"""
Role-based access control for the GRC portal.

Pure Python, no FastAPI or SQLAlchemy dependency:

- catalog: every (resource, action) pair the portal recognizes
- roles: the eleven static role definitions
- expander: role names -> effective permission set (global scope wins)
- checker: permission and route decisions
- navigation / nav_filter: static menu tree and its per-user pruning
"""

from .catalog import CATALOG, is_known, valid_actions
from .checker import can_access_route, has_permission, is_granted, permission_scope
from .expander import effective_permissions_for, expand_roles
from .nav_filter import filter_navigation
from .navigation import NAVIGATION, NavItem
from .roles import DEFAULT_ROLE, ROLE_GRANTS, ROLES, resolve_role_names, role_grants
from .types import Action, CheckContext, EffectivePermissions, Grant, Scope

__all__ = [
    "CATALOG",
    "DEFAULT_ROLE",
    "NAVIGATION",
    "ROLES",
    "ROLE_GRANTS",
    "Action",
    "CheckContext",
    "EffectivePermissions",
    "Grant",
    "NavItem",
    "Scope",
    "can_access_route",
    "effective_permissions_for",
    "expand_roles",
    "filter_navigation",
    "has_permission",
    "is_granted",
    "is_known",
    "permission_scope",
    "resolve_role_names",
    "role_grants",
    "valid_actions",
]
