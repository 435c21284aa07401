"""Tests for building the per-request session user."""

from types import SimpleNamespace

from grc_portal.rbac import Scope, expand_roles
from grc_portal.security.auth import build_session_user


def _user(roles, department_id=1, department_name="Finance"):
    department = SimpleNamespace(id=department_id, name=department_name) if department_id is not None else None
    return SimpleNamespace(
        id=7,
        username="u7",
        department_id=department_id,
        department=department,
        roles=[SimpleNamespace(name=r) for r in roles],
    )


def test_session_user_expands_assigned_roles():
    authz = build_session_user(_user(["Reviewer", "Auditor"]))
    assert authz.roles == frozenset({"Reviewer", "Auditor"})
    assert authz.permissions == expand_roles({"Reviewer", "Auditor"})


def test_session_user_zero_roles_falls_back():
    authz = build_session_user(_user([]))
    assert authz.assigned_roles == frozenset()
    assert authz.roles == frozenset({"Contributor"})
    assert authz.permissions == expand_roles({"Contributor"})


def test_can_uses_current_department():
    authz = build_session_user(_user(["DepartmentContributor"], department_id=2))
    assert authz.can("risk.register", "edit", 2) is True
    assert authz.can("risk.register", "edit", 3) is False
    assert authz.granted("risk.register", "edit") is True
    assert authz.scope("risk.register", "edit") is Scope.DEPARTMENT


def test_user_without_department_fails_department_checks():
    authz = build_session_user(_user(["DepartmentReviewer"], department_id=None))
    assert authz.department_name is None
    assert authz.can("risk.register", "view", 1) is False


def test_to_dict_is_serializable():
    d = build_session_user(_user(["AuditUser"])).to_dict()
    assert d["user_id"] == 7
    assert d["roles"] == ["AuditUser"]
    assert d["department_name"] == "Finance"
    assert {"resource": "audit.dashboard", "action": "view", "scope": "global"} in d["permissions"]
