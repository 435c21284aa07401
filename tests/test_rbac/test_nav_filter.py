"""Tests for navigation pruning."""

import pytest

from grc_portal.rbac.expander import expand_roles
from grc_portal.rbac.nav_filter import filter_navigation
from grc_portal.rbac.navigation import NAVIGATION, NavItem, find_items_by_href, iter_nav_items, normalize_path
from grc_portal.rbac.roles import ROLE_GRANTS


def _names(tree):
    return [item.name for item in tree]


def _assert_no_empty_groups(tree):
    for item in iter_nav_items(tree):
        if item.href is None:
            assert item.children or item.always_visible, item.name


@pytest.mark.parametrize("roles", [set(), *({r} for r in sorted(ROLE_GRANTS)), {"Reviewer", "AuditUser"}])
def test_no_empty_groups_for_any_role(roles):
    _assert_no_empty_groups(filter_navigation(NAVIGATION, expand_roles(roles)))


def test_no_roles_sees_only_ungated_items():
    assert _names(filter_navigation(NAVIGATION, expand_roles(set()))) == ["Dashboard", "Log Out"]


def test_reviewer_sees_no_audit_or_admin_groups():
    names = _names(filter_navigation(NAVIGATION, expand_roles({"Reviewer"})))
    assert "Internal Audit" not in names
    assert "GRC Administration" not in names
    assert {"Organization", "Compliance", "Asset Management", "Risk Management"} <= set(names)


def test_leaves_filtered_inside_group():
    tree = filter_navigation(NAVIGATION, expand_roles({"Reviewer"}))
    compliance = next(item for item in tree if item.name == "Compliance")
    hrefs = [c.href for c in compliance.children]
    assert "/compliance/governance" in hrefs
    assert "/compliance/master-data" not in hrefs


def test_nested_groups_pruned():
    tree = filter_navigation(NAVIGATION, expand_roles({"GRCAdministrator"}))
    admin = next(item for item in tree if item.name == "GRC Administration")
    config = next(item for item in admin.children if item.name == "Configuration")
    assert len(config.children) == 5


def test_department_roles_see_their_pages():
    names = _names(filter_navigation(NAVIGATION, expand_roles({"DepartmentReviewer"})))
    assert "Risk Management" in names


def test_always_visible_group_survives_without_children():
    tree = (
        NavItem(name="Help", always_visible=True, children=(NavItem(name="Admin", href="/x", resource="audit.settings"),)),
        NavItem(name="Secret", children=(NavItem(name="Admin", href="/y", resource="audit.settings"),)),
        NavItem(name="Empty"),
    )
    pruned = filter_navigation(tree, expand_roles({"Reviewer"}))
    assert _names(pruned) == ["Help"]
    assert pruned[0].children == ()


def test_always_visible_leaf_kept_without_permission():
    tree = (NavItem(name="Pinned", href="/pinned", resource="audit.settings", always_visible=True),)
    assert _names(filter_navigation(tree, expand_roles(set()))) == ["Pinned"]


def test_filter_does_not_mutate_source_tree():
    before = NAVIGATION
    filter_navigation(NAVIGATION, expand_roles({"Auditee"}))
    assert NAVIGATION is before
    assert len(next(i for i in NAVIGATION if i.name == "Compliance").children) == 10


def test_find_items_by_href_exact_only():
    assert [i.name for i in find_items_by_href("/risks/register")] == ["Risk Register"]
    assert find_items_by_href("/risks/register/42") == []
    assert normalize_path("/risks/register/?page=2") == "/risks/register"
    assert normalize_path("/") == "/"


def test_nav_item_to_dict():
    item = NavItem(name="G", children=(NavItem(name="L", href="/l", resource="risk.register"),))
    assert item.to_dict() == {
        "name": "G",
        "href": None,
        "resource": None,
        "always_visible": False,
        "children": [
            {"name": "L", "href": "/l", "resource": "risk.register", "always_visible": False, "children": []}
        ],
    }


def test_every_gated_nav_item_names_a_catalog_resource():
    from grc_portal.rbac.catalog import CATALOG

    for item in iter_nav_items(NAVIGATION):
        if item.resource is not None:
            assert item.resource in CATALOG, item.name
