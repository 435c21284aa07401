from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from grc_portal.db.base import Base
from grc_portal.db.session import SessionLocal, engine
from grc_portal.models.grc import Control, Risk
from grc_portal.models.security import Department, Role, User
from grc_portal.rbac import ROLES

logger = logging.getLogger(__name__)


def init_db(seed: bool = True) -> None:
    """
    Create tables, sync role rows and (optionally) seed demo data.

    Role rows mirror the compiled-in role definitions so user assignments
    always reference a name the expander knows.
    """

    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        sync_roles(db)
        if seed and not _has_seed_data(db):
            seed_demo_data(db)
        db.commit()


def sync_roles(db: Session) -> None:
    existing = {r.name: r for r in db.scalars(select(Role)).all()}
    for role in ROLES.values():
        row = existing.get(role.name)
        if row is None:
            db.add(Role(name=role.name, description=role.description))
            logger.info("Created role %s", role.name)
        elif row.description != role.description:
            row.description = role.description
    db.flush()

    stale = sorted(set(existing) - set(ROLES))
    if stale:
        # Left in place; the expander ignores names it does not know.
        logger.warning("Roles in database without a definition: %s", stale)


def _has_seed_data(db: Session) -> bool:
    return db.execute(select(Department.id).limit(1)).first() is not None


def seed_demo_data(db: Session) -> None:
    roles = {r.name: r for r in db.scalars(select(Role)).all()}

    # Departments
    it = Department(name="Information Technology", code="IT")
    fin = Department(name="Finance", code="FIN")
    audit = Department(name="Internal Audit", code="IA")
    db.add_all([it, fin, audit])
    db.flush()

    # Users (bearer token = user id)
    def user(username: str, full_name: str, dept: Department | None, *role_names: str) -> User:
        u = User(
            username=username,
            email=f"{username}@example.com",
            full_name=full_name,
            department_id=dept.id if dept is not None else None,
            is_active=True,
        )
        for name in role_names:
            u.roles.append(roles[name])
        return u

    db.add_all(
        [
            user("grc_admin", "Grace Admin", None, "GRCAdministrator"),
            user("cust_admin", "Carl Customer", it, "CustomerAdministrator"),
            user("rita_reviewer", "Rita Reviewer", fin, "Reviewer"),
            user("colin_contrib", "Colin Contributor", it, "Contributor"),
            user("dora_dept_rev", "Dora Department", fin, "DepartmentReviewer"),
            user("dan_dept_contrib", "Dan Department", it, "DepartmentContributor"),
            user("hank_audit_head", "Hank Head", audit, "AuditHead"),
            user("ada_auditee", "Ada Auditee", fin, "Auditee"),
            user("nora_no_roles", "Nora Noroles", fin),
        ]
    )
    db.flush()

    # Records
    db.add_all(
        [
            Control(code="AC-01", name="Access control policy", department_id=it.id),
            Control(code="FIN-07", name="Segregation of duties", department_id=fin.id),
            Risk(title="Unpatched servers", department_id=it.id),
            Risk(title="Payment fraud", department_id=fin.id),
            Risk(title="Vendor lock-in", department_id=it.id, status="approved"),
        ]
    )
    db.flush()
