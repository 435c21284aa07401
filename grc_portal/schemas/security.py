from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DepartmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str


class RoleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    full_name: str | None
    is_active: bool
    department: DepartmentOut | None
    roles: list[RoleOut]


class GrantOut(BaseModel):
    resource: str
    action: str
    scope: str


class SessionUserOut(BaseModel):
    user_id: int
    username: str
    department_id: int | None
    department_name: str | None
    assigned_roles: list[str]
    roles: list[str]
    permissions: list[GrantOut]


class RoleDefinitionOut(BaseModel):
    name: str
    description: str
    grants: list[GrantOut]


class RoleAssignmentIn(BaseModel):
    roles: list[str] = Field(default_factory=list)


class NavItemOut(BaseModel):
    name: str
    href: str | None
    resource: str | None
    always_visible: bool
    children: list[NavItemOut] = Field(default_factory=list)
