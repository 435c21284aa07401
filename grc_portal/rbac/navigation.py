"""
Static navigation tree.

Leaf items carry an `href` and, when gated, the resource whose `view`
permission they require. Group items only carry children.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Sequence


@dataclass(frozen=True)
class NavItem:
    name: str
    href: str | None = None
    resource: str | None = None
    always_visible: bool = False
    children: tuple[NavItem, ...] = ()

    @property
    def is_group(self) -> bool:
        return bool(self.children) or self.href is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "href": self.href,
            "resource": self.resource,
            "always_visible": self.always_visible,
            "children": [c.to_dict() for c in self.children],
        }


def _group(name: str, *children: NavItem, always_visible: bool = False) -> NavItem:
    return NavItem(name=name, always_visible=always_visible, children=tuple(children))


def _link(name: str, href: str, resource: str | None = None) -> NavItem:
    return NavItem(name=name, href=href, resource=resource)


NAVIGATION: tuple[NavItem, ...] = (
    _link("Dashboard", "/dashboard"),
    _group(
        "Organization",
        _link("Organization Dashboard", "/organization", "organization.dashboard"),
        _link("Profile", "/organization/profile", "organization.profile"),
        _link("Context", "/organization/context", "organization.context"),
        _link("Users", "/organization/users", "organization.users"),
        _link("Process", "/organization/process", "organization.process"),
        _link("Organization Settings", "/organization/settings", "organization.settings"),
        _link("Reports", "/organization/reports", "organization.reports"),
    ),
    _group(
        "Compliance",
        _link("Compliance Dashboard", "/compliance", "compliance.dashboard"),
        _link("Framework", "/compliance/framework", "compliance.framework"),
        _link("Control", "/compliance/control", "compliance.controls"),
        _link("Governance", "/compliance/governance", "compliance.governance"),
        _link("Evidence", "/compliance/evidence", "compliance.evidence"),
        _link("Exception Management", "/compliance/exceptions", "compliance.exceptions"),
        _link("KPI", "/compliance/kpis", "compliance.kpi"),
        _link("Risk Compliance Matrix", "/compliance/risk-matrix", "compliance.risk-matrix"),
        _link("Reports", "/compliance/reports", "compliance.reports"),
        _link("Master Data", "/compliance/master-data", "compliance.settings"),
    ),
    _group(
        "Asset Management",
        _link("Asset Dashboard", "/assets", "asset.dashboard"),
        _link("Asset Inventory", "/assets/inventory", "asset.inventory"),
        _link("Asset Classification", "/assets/classification", "asset.classification"),
        _link("Asset Settings", "/assets/settings", "asset.settings"),
        _link("Reports", "/assets/reports", "asset.reports"),
    ),
    _group(
        "Risk Management",
        _link("Risk Dashboard", "/risks/dashboard", "risk.dashboard"),
        _link("Risk Register", "/risks/register", "risk.register"),
        _link("Risk Assessment", "/risks/assessment", "risk.assessment"),
        _link("Risk Response Strategy", "/risks/response", "risk.response"),
        _link("Risk Settings", "/risks/settings", "risk.settings"),
        _link("Reports", "/risks/reports", "risk.reports"),
    ),
    _group(
        "Internal Audit",
        _link("Audit Dashboard", "/internal-audit/dashboard", "audit.dashboard"),
        _link("Audit Universe", "/internal-audit/audit-universe", "audit.auditables"),
        _link("Risk Universe", "/internal-audit/risk-universe", "audit.risk-universe"),
        _link("Risk Register", "/internal-audit/risk-register", "audit.risk-register"),
        _link("Audit Planning", "/internal-audit/audit-planning", "audit.planning"),
        _link("Fieldwork", "/internal-audit/fieldwork", "audit.execution"),
        _link("Reports", "/internal-audit/report", "audit.reporting"),
        _link("CAPA Tracking", "/internal-audit/capa-tracking", "audit.followup"),
        _link("Document Library", "/internal-audit/document-library", "audit.documents"),
        _link("Settings", "/internal-audit/settings", "audit.settings"),
    ),
    _group(
        "GRC Administration",
        _link("Overview", "/grc", "grc"),
        _link("Customer Accounts", "/grc/customer-accounts", "grc.customer-accounts"),
        _link("Customers", "/grc/customers", "grc.customers"),
        _group(
            "Configuration",
            _link("Excel Import", "/grc/configuration/excel-import", "grc.configuration.excel-import"),
            _link("Excel Export", "/grc/configuration/excel-export", "grc.configuration.excel-export"),
            _link("Email", "/grc/configuration/email", "grc.configuration.email"),
            _link("PDF Report", "/grc/configuration/pdf-report", "grc.configuration.pdf-report"),
            _link("SSO", "/grc/configuration/sso", "grc.configuration.sso"),
        ),
    ),
    NavItem(name="Log Out", href="/login", always_visible=True),
)


def normalize_path(path: str) -> str:
    """Strip query string and trailing slash; `/` stays `/`."""
    if not isinstance(path, str):
        return ""
    path = path.split("?", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def iter_nav_items(tree: Sequence[NavItem]) -> Iterator[NavItem]:
    """Depth-first walk over every item (groups and leaves)."""
    for item in tree:
        yield item
        yield from iter_nav_items(item.children)


def find_items_by_href(path: str, tree: Sequence[NavItem] = NAVIGATION) -> list[NavItem]:
    """Return every item whose `href` is exactly `path` (after normalization)."""
    target = normalize_path(path)
    return [item for item in iter_nav_items(tree) if item.href is not None and normalize_path(item.href) == target]
