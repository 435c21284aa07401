from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from grc_portal.rbac import Action, CheckContext, EffectivePermissions, has_permission, is_granted, permission_scope
from grc_portal.rbac.types import Scope


@dataclass(frozen=True)
class SessionUser:
    """
    Per-request authorization context.

    Rebuilt on every request from the user's current roles and department, so
    role or department changes apply immediately. Attached to:
    - request.state (FastAPI request lifetime)
    - Session.info (SQLAlchemy session lifetime)
    """

    user_id: int
    username: str
    department_id: int | None
    department_name: str | None
    assigned_roles: frozenset[str]
    roles: frozenset[str]
    permissions: EffectivePermissions

    def can(self, resource: str, action: Action | str, record_department_id: int | str | None = None) -> bool:
        """Record-level check against this user's current department."""
        return has_permission(
            self.permissions,
            resource,
            action,
            CheckContext(
                record_department_id=record_department_id,
                acting_user_department_id=self.department_id,
            ),
        )

    def granted(self, resource: str, action: Action | str) -> bool:
        return is_granted(self.permissions, resource, action)

    def scope(self, resource: str, action: Action | str) -> Scope | None:
        return permission_scope(self.permissions, resource, action)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "department_id": self.department_id,
            "department_name": self.department_name,
            "assigned_roles": sorted(self.assigned_roles),
            "roles": sorted(self.roles),
            "permissions": self.permissions.to_list(),
        }
