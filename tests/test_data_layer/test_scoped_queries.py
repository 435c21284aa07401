"""
Tests for transparent department scoping of ORM queries.
"""
from __future__ import annotations

from types import SimpleNamespace

from sqlalchemy import select

from grc_portal.models.grc import Control, Risk
from grc_portal.models.security import Department
from grc_portal.rbac import effective_permissions_for
from grc_portal.security.context import SessionUser


def _authz(roles, department_id):
    return SessionUser(
        user_id=1,
        username="tester",
        department_id=department_id,
        department_name=None,
        assigned_roles=frozenset(roles),
        roles=frozenset(roles),
        permissions=effective_permissions_for(roles),
    )


def _seed(db_session):
    it = Department(name="IT", code="IT")
    fin = Department(name="Finance", code="FIN")
    db_session.add_all([it, fin])
    db_session.flush()
    db_session.add_all(
        [
            Risk(title="IT risk", department_id=it.id),
            Risk(title="Finance risk", department_id=fin.id),
            Control(code="C-IT", name="IT control", department_id=it.id),
            Control(code="C-FIN", name="Finance control", department_id=fin.id),
        ]
    )
    db_session.commit()
    return SimpleNamespace(it=it.id, fin=fin.id)


def _titles(db_session):
    return sorted(r.title for r in db_session.scalars(select(Risk)).all())


def test_no_authz_means_no_scoping(db_session):
    _seed(db_session)
    assert _titles(db_session) == ["Finance risk", "IT risk"]


def test_global_view_sees_every_department(db_session):
    _seed(db_session)
    db_session.info["authz"] = _authz(["Reviewer"], None)
    assert _titles(db_session) == ["Finance risk", "IT risk"]


def test_department_view_sees_own_department_only(db_session):
    depts = _seed(db_session)
    db_session.info["authz"] = _authz(["DepartmentReviewer"], depts.fin)
    assert _titles(db_session) == ["Finance risk"]
    codes = [c.code for c in db_session.scalars(select(Control)).all()]
    assert codes == ["C-FIN"]


def test_department_view_without_department_sees_nothing(db_session):
    _seed(db_session)
    db_session.info["authz"] = _authz(["DepartmentReviewer"], None)
    assert _titles(db_session) == []


def test_no_view_grant_sees_nothing(db_session):
    _seed(db_session)
    db_session.info["authz"] = _authz(["AuditHead"], None)
    assert _titles(db_session) == []
    assert db_session.scalars(select(Control)).all() == []


def test_mixed_scopes_per_model(db_session):
    depts = _seed(db_session)
    # Auditor sees controls globally but has no risk register access.
    db_session.info["authz"] = _authz(["Auditor", "DepartmentContributor"], depts.it)
    assert _titles(db_session) == ["IT risk"]
    assert sorted(c.code for c in db_session.scalars(select(Control)).all()) == ["C-FIN", "C-IT"]
