"""
Static role definitions.

Each role is a flat bundle of grants. Adding a role or changing what it may
do is a data change in this module; nothing else needs to know.

Department roles are declared independently of their global counterparts
and must keep the same shape (tests/test_rbac/test_roles.py holds them to it).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from grc_portal.rbac.catalog import resources_matching, valid_actions
from grc_portal.rbac.types import Action, Grant, Scope

logger = logging.getLogger(__name__)

ANY = "*"

V = (Action.VIEW,)
VCE = (Action.VIEW, Action.CREATE, Action.EDIT)

GLOBAL = Scope.GLOBAL
DEPT = Scope.DEPARTMENT


def _grants(pattern: str, actions: Iterable[Action] | str, scope: Scope = GLOBAL) -> tuple[Grant, ...]:
    """
    Expand one declaration line into grants.

    `pattern` may use catalog wildcards (`*`, `audit.*`); `actions` may be
    `"*"` for every action the catalog lists for each matched resource.
    """

    out: list[Grant] = []
    for resource in resources_matching(pattern):
        allowed = valid_actions(resource)
        wanted = allowed if actions == ANY else frozenset(actions)
        for action in sorted(wanted & allowed, key=lambda a: a.value):
            out.append(Grant(resource, action, scope))
    return tuple(out)


def _role(*lines: tuple[Grant, ...]) -> frozenset[Grant]:
    return frozenset(g for line in lines for g in line)


@dataclass(frozen=True)
class RoleDef:
    name: str
    description: str
    grants: frozenset[Grant]


_ROLES: tuple[RoleDef, ...] = (
    RoleDef(
        name="GRCAdministrator",
        description="Platform administration: customer accounts, configuration and compliance master data",
        grants=_role(
            _grants("grc", ANY),
            _grants("grc.*", ANY),
            _grants("compliance.framework", ANY),
            _grants("compliance.controls", ANY),
            _grants("compliance.governance", ANY),
            _grants("compliance.evidence", ANY),
            _grants("compliance.domain", ANY),
            _grants("compliance.settings", ANY),
        ),
    ),
    RoleDef(
        name="CustomerAdministrator",
        description="Organization-level admin, manages users and settings; read access to every module",
        grants=_role(
            _grants("organization.*", ANY),
            _grants("compliance.*", V),
            _grants("asset.*", V),
            _grants("risk.*", V),
            _grants("audit.*", V),
        ),
    ),
    RoleDef(
        name="AuditHead",
        description="Full access to the internal audit module",
        grants=_role(
            _grants("audit.*", ANY),
        ),
    ),
    RoleDef(
        name="AuditManager",
        description="Manages audits, assigns auditors, reviews findings",
        grants=_role(
            _grants("audit.dashboard", V),
            _grants("audit.auditables", VCE),
            _grants("audit.planning", ANY),
            _grants("audit.execution", (Action.VIEW, Action.CREATE, Action.EDIT, Action.APPROVE)),
            _grants("audit.reporting", ANY),
            _grants("audit.followup", ANY),
            _grants("audit.settings", V),
            _grants("organization.dashboard", V),
            _grants("organization.process", V),
            _grants("organization.users", V),
        ),
    ),
    RoleDef(
        name="AuditUser",
        description="Basic read access to the internal audit module",
        grants=_role(
            _grants("audit.dashboard", V),
            _grants("audit.auditables", V),
            _grants("audit.planning", V),
            _grants("audit.execution", V),
            _grants("audit.reporting", V),
            _grants("audit.followup", V),
            _grants("organization.dashboard", V),
        ),
    ),
    RoleDef(
        name="Auditor",
        description="Conducts audits and records findings",
        grants=_role(
            _grants("audit.dashboard", V),
            _grants("audit.auditables", V),
            _grants("audit.planning", V),
            _grants("audit.execution", VCE),
            _grants("audit.reporting", (Action.VIEW, Action.CREATE)),
            _grants("audit.followup", (Action.VIEW, Action.EDIT)),
            _grants("organization.dashboard", V),
            _grants("organization.process", V),
            _grants("compliance.controls", V),
        ),
    ),
    RoleDef(
        name="Auditee",
        description="Receives audit requests and responds to findings for their department",
        grants=_role(
            _grants("audit.dashboard", V, DEPT),
            _grants("audit.execution", V, DEPT),
            _grants("audit.followup", (Action.VIEW, Action.EDIT), DEPT),
            _grants("organization.dashboard", V, DEPT),
            _grants("organization.process", V, DEPT),
        ),
    ),
    RoleDef(
        name="Reviewer",
        description="Reviews compliance, risk and asset content; no settings or audit access",
        grants=_role(
            _grants("organization.dashboard", V),
            _grants("organization.context", V),
            _grants("organization.process", (Action.VIEW, Action.APPROVE)),
            _grants("compliance.dashboard", V),
            _grants("compliance.framework", V),
            _grants("compliance.controls", (Action.VIEW, Action.APPROVE)),
            _grants("compliance.governance", V),
            _grants("compliance.evidence", (Action.VIEW, Action.APPROVE)),
            _grants("compliance.artifacts", V),
            _grants("compliance.exceptions", V),
            _grants("compliance.kpi", V),
            _grants("compliance.risk-matrix", V),
            _grants("compliance.reports", V),
            _grants("asset.dashboard", V),
            _grants("asset.inventory", (Action.VIEW, Action.APPROVE)),
            _grants("asset.classification", V),
            _grants("asset.reports", V),
            _grants("risk.dashboard", V),
            _grants("risk.register", (Action.VIEW, Action.APPROVE)),
            _grants("risk.assessment", V),
            _grants("risk.response", V),
            _grants("risk.reports", V),
        ),
    ),
    RoleDef(
        name="Contributor",
        description="Creates and edits content across modules",
        grants=_role(
            _grants("organization.dashboard", V),
            _grants("organization.process", VCE),
            _grants("compliance.dashboard", V),
            _grants("compliance.framework", V),
            _grants("compliance.controls", VCE),
            _grants("compliance.governance", VCE),
            _grants("compliance.evidence", VCE),
            _grants("compliance.artifacts", VCE),
            _grants("compliance.exceptions", VCE),
            _grants("compliance.kpi", VCE),
            _grants("compliance.risk-matrix", V),
            _grants("risk.dashboard", V),
            _grants("risk.register", VCE),
            _grants("risk.assessment", VCE),
            _grants("risk.response", VCE),
            _grants("asset.dashboard", V),
            _grants("asset.inventory", VCE),
            _grants("asset.classification", VCE),
        ),
    ),
    RoleDef(
        name="DepartmentReviewer",
        description="Reviewer limited to records owned by their own department",
        grants=_role(
            _grants("organization.dashboard", V, DEPT),
            _grants("organization.context", V, DEPT),
            _grants("organization.process", (Action.VIEW, Action.APPROVE), DEPT),
            _grants("compliance.dashboard", V, DEPT),
            _grants("compliance.framework", V, DEPT),
            _grants("compliance.controls", (Action.VIEW, Action.APPROVE), DEPT),
            _grants("compliance.governance", V, DEPT),
            _grants("compliance.evidence", (Action.VIEW, Action.APPROVE), DEPT),
            _grants("compliance.artifacts", V, DEPT),
            _grants("compliance.exceptions", V, DEPT),
            _grants("compliance.kpi", V, DEPT),
            _grants("compliance.risk-matrix", V, DEPT),
            _grants("compliance.reports", V, DEPT),
            _grants("asset.dashboard", V, DEPT),
            _grants("asset.inventory", (Action.VIEW, Action.APPROVE), DEPT),
            _grants("asset.classification", V, DEPT),
            _grants("asset.reports", V, DEPT),
            _grants("risk.dashboard", V, DEPT),
            _grants("risk.register", (Action.VIEW, Action.APPROVE), DEPT),
            _grants("risk.assessment", V, DEPT),
            _grants("risk.response", V, DEPT),
            _grants("risk.reports", V, DEPT),
        ),
    ),
    RoleDef(
        name="DepartmentContributor",
        description="Contributor limited to records owned by their own department",
        grants=_role(
            _grants("organization.dashboard", V, DEPT),
            _grants("organization.process", VCE, DEPT),
            _grants("compliance.dashboard", V, DEPT),
            _grants("compliance.framework", V, DEPT),
            _grants("compliance.controls", VCE, DEPT),
            _grants("compliance.governance", VCE, DEPT),
            _grants("compliance.evidence", VCE, DEPT),
            _grants("compliance.artifacts", VCE, DEPT),
            _grants("compliance.exceptions", VCE, DEPT),
            _grants("compliance.kpi", VCE, DEPT),
            _grants("compliance.risk-matrix", V, DEPT),
            _grants("risk.dashboard", V, DEPT),
            _grants("risk.register", VCE, DEPT),
            _grants("risk.assessment", VCE, DEPT),
            _grants("risk.response", VCE, DEPT),
            _grants("asset.dashboard", V, DEPT),
            _grants("asset.inventory", VCE, DEPT),
            _grants("asset.classification", VCE, DEPT),
        ),
    ),
)

ROLES: Mapping[str, RoleDef] = MappingProxyType({r.name: r for r in _ROLES})
ROLE_GRANTS: Mapping[str, frozenset[Grant]] = MappingProxyType({r.name: r.grants for r in _ROLES})

# Substituted for users with no assigned roles so accounts are never fully locked out.
DEFAULT_ROLE = "Contributor"


def role_grants(role_name: str) -> frozenset[Grant]:
    return ROLE_GRANTS.get(role_name, frozenset())


def resolve_role_names(assigned: Iterable[str]) -> frozenset[str]:
    """Apply the zero-role fallback to a user's assigned role names."""
    names = frozenset(str(n) for n in assigned if n)
    if not names:
        logger.info("RBAC: no roles assigned, falling back to %s", DEFAULT_ROLE)
        return frozenset({DEFAULT_ROLE})
    return names
