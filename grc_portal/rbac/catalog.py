"""
Permission catalog: every (resource, action) pair the portal recognizes.

Resources are namespaced strings (`module.area`). The catalog is static and
closed; a check against a pair missing from it is a configuration gap and
resolves to deny.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from grc_portal.rbac.types import ALL_ACTIONS, Action

logger = logging.getLogger(__name__)


VIEW_ONLY: frozenset[Action] = frozenset({Action.VIEW})
SETTINGS: frozenset[Action] = frozenset({Action.VIEW, Action.CREATE, Action.EDIT, Action.DELETE})
RECORDS: frozenset[Action] = ALL_ACTIONS


_CATALOG: dict[str, frozenset[Action]] = {
    # Platform administration
    "grc": VIEW_ONLY,
    "grc.customer-accounts": RECORDS,
    "grc.customers": RECORDS,
    "grc.configuration": SETTINGS,
    "grc.configuration.excel-import": SETTINGS,
    "grc.configuration.excel-export": SETTINGS,
    "grc.configuration.email": SETTINGS,
    "grc.configuration.pdf-report": SETTINGS,
    "grc.configuration.sso": SETTINGS,
    # Organization
    "organization.dashboard": VIEW_ONLY,
    "organization.profile": SETTINGS,
    "organization.context": RECORDS,
    "organization.users": RECORDS,
    "organization.process": RECORDS,
    "organization.settings": SETTINGS,
    "organization.reports": VIEW_ONLY,
    # Compliance
    "compliance.dashboard": VIEW_ONLY,
    "compliance.framework": RECORDS,
    "compliance.controls": RECORDS,
    "compliance.governance": RECORDS,
    "compliance.evidence": RECORDS,
    "compliance.domain": RECORDS,
    "compliance.artifacts": RECORDS,
    "compliance.exceptions": RECORDS,
    "compliance.kpi": RECORDS,
    "compliance.risk-matrix": RECORDS,
    "compliance.reports": VIEW_ONLY,
    "compliance.settings": SETTINGS,
    # Asset management
    "asset.dashboard": VIEW_ONLY,
    "asset.inventory": RECORDS,
    "asset.classification": RECORDS,
    "asset.settings": SETTINGS,
    "asset.reports": VIEW_ONLY,
    # Risk management
    "risk.dashboard": VIEW_ONLY,
    "risk.register": RECORDS,
    "risk.assessment": RECORDS,
    "risk.response": RECORDS,
    "risk.settings": SETTINGS,
    "risk.reports": VIEW_ONLY,
    # Internal audit
    "audit.dashboard": VIEW_ONLY,
    "audit.auditables": RECORDS,
    "audit.risk-universe": RECORDS,
    "audit.risk-register": RECORDS,
    "audit.planning": RECORDS,
    "audit.execution": RECORDS,
    "audit.reporting": RECORDS,
    "audit.followup": RECORDS,
    "audit.documents": RECORDS,
    "audit.settings": SETTINGS,
}

CATALOG: Mapping[str, frozenset[Action]] = MappingProxyType(_CATALOG)


def valid_actions(resource: str) -> frozenset[Action]:
    if not isinstance(resource, str):
        return frozenset()
    return CATALOG.get(resource, frozenset())


def is_known(resource: str, action: Action | str) -> bool:
    """Return True if the catalog lists `action` for `resource`."""
    try:
        normalized = Action(action)
    except ValueError:
        return False
    return normalized in valid_actions(resource)


def resources_matching(pattern: str) -> tuple[str, ...]:
    """
    Expand a resource pattern against the catalog.

    Supported forms:
        *               every resource
        audit.*         every resource under the `audit` namespace
        audit.settings  exactly that resource (must exist)
    """

    if pattern == "*":
        return tuple(CATALOG.keys())
    if pattern.endswith(".*"):
        prefix = pattern[:-1]
        return tuple(r for r in CATALOG if r.startswith(prefix))
    if pattern in CATALOG:
        return (pattern,)
    logger.warning("RBAC: resource pattern %r matches nothing in the catalog", pattern)
    return ()
