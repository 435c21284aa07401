"""
Role expansion: role names -> effective permission set.
"""

from __future__ import annotations

import logging
from typing import Iterable

from grc_portal.rbac.roles import ROLE_GRANTS, resolve_role_names
from grc_portal.rbac.types import Action, EffectivePermissions, Grant, Scope, widest_scope

logger = logging.getLogger(__name__)


def merge_grants(grants: Iterable[Grant]) -> dict[tuple[str, Action], Scope]:
    """
    Collapse grants to one scope per (resource, action).

    When the same pair is granted under several scopes the widest one is kept,
    so a global grant from one role always beats a department grant from another.
    """

    merged: dict[tuple[str, Action], Scope] = {}
    for grant in grants:
        key = (grant.resource, grant.action)
        current = merged.get(key)
        merged[key] = grant.scope if current is None else widest_scope(current, grant.scope)
    return merged


def expand_roles(role_names: Iterable[str]) -> EffectivePermissions:
    """
    Expand role names into an effective permission set.

    Unknown role names are ignored (stale assignments must not break login).
    No fallback is applied here: an empty input yields an empty set.
    """

    collected: list[Grant] = []
    for name in sorted({n for n in role_names if isinstance(n, str)}):
        grants = ROLE_GRANTS.get(name)
        if grants is None:
            logger.debug("RBAC: ignoring unknown role %r", name)
            continue
        collected.extend(grants)
    return EffectivePermissions(merge_grants(collected))


def effective_permissions_for(assigned_roles: Iterable[str]) -> EffectivePermissions:
    """Expand a user's assigned roles, substituting the default role when none are assigned."""
    return expand_roles(resolve_role_names(assigned_roles))
