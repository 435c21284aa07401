"""Value types shared by the RBAC core."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping


class Action(str, enum.Enum):
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    APPROVE = "approve"


ALL_ACTIONS: frozenset[Action] = frozenset(Action)


class Scope(str, enum.Enum):
    """How broadly a grant applies."""

    GLOBAL = "global"
    DEPARTMENT = "department"


def widest_scope(a: Scope, b: Scope) -> Scope:
    """Return the more permissive of two scopes (global beats department)."""

    if a is Scope.GLOBAL or b is Scope.GLOBAL:
        return Scope.GLOBAL
    if a is Scope.DEPARTMENT and b is Scope.DEPARTMENT:
        return Scope.DEPARTMENT
    raise ValueError(f"unhandled scope combination: {a!r}, {b!r}")


@dataclass(frozen=True)
class Grant:
    """Single (resource, action, scope) triple."""

    resource: str
    action: Action
    scope: Scope = Scope.GLOBAL

    def __post_init__(self) -> None:
        # Accept plain strings; `.value` and identity checks expect enum members.
        object.__setattr__(self, "action", Action(self.action))
        object.__setattr__(self, "scope", Scope(self.scope))

    def to_dict(self) -> dict[str, str]:
        return {"resource": self.resource, "action": self.action.value, "scope": self.scope.value}


@dataclass(frozen=True)
class CheckContext:
    """
    Record context for department-scoped checks.

    Both ids must be present for a department grant to apply.
    """

    record_department_id: str | int | None = None
    acting_user_department_id: str | int | None = None


@dataclass(frozen=True)
class EffectivePermissions:
    """
    Merged permissions of a user: exactly one scope per (resource, action).

    Built by `grc_portal.rbac.expander.expand_roles`; read-only afterwards.
    """

    _scopes: Mapping[tuple[str, Action], Scope] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_scopes", MappingProxyType(dict(self._scopes)))

    def scope_for(self, resource: str, action: Action | str) -> Scope | None:
        if not isinstance(resource, str):
            return None
        try:
            normalized = Action(action)
        except ValueError:
            return None
        return self._scopes.get((resource, normalized))

    @property
    def grants(self) -> frozenset[Grant]:
        return frozenset(Grant(resource, action, scope) for (resource, action), scope in self._scopes.items())

    def resources(self) -> frozenset[str]:
        return frozenset(resource for resource, _action in self._scopes)

    def to_list(self) -> list[dict[str, str]]:
        """Return a JSON-serializable, deterministically ordered list of grants."""
        ordered = sorted(self.grants, key=lambda g: (g.resource, g.action.value))
        return [g.to_dict() for g in ordered]

    def __iter__(self) -> Iterator[Grant]:
        return iter(self.grants)

    def __len__(self) -> int:
        return len(self._scopes)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, Grant):
            return False
        return self.scope_for(item.resource, item.action) is item.scope

    def __hash__(self) -> int:
        return hash(self.grants)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EffectivePermissions):
            return NotImplemented
        return dict(self._scopes) == dict(other._scopes)
