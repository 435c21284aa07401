from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlencode

import yaml
from pydantic import BaseModel, Field

from grc_portal.rbac.navigation import normalize_path


class AuthConfig(BaseModel):
    provider: str = "dummy"
    authorization_header: str = "Authorization"
    bearer_prefix: str = "Bearer"


class RoutesConfig(BaseModel):
    api_prefix: str = "/api"
    # Exact paths that skip authentication entirely.
    public: list[str] = Field(default_factory=lambda: ["/health", "/login"])
    # Path prefixes open to any authenticated user (no navigation check).
    auth_only: list[str] = Field(default_factory=list)
    landing_page: str = "/dashboard"
    access_denied_param: str = "accessDenied"


class SecurityConfigModel(BaseModel):
    auth: AuthConfig = Field(default_factory=AuthConfig)
    routes: RoutesConfig = Field(default_factory=RoutesConfig)


class SecurityConfig:
    """
    Runtime helper around the validated config: path classification only.

    Which role may do what is not configured here; see grc_portal.rbac.roles.
    """

    def __init__(self, model: SecurityConfigModel):
        self.model = model
        self._public = frozenset(normalize_path(p) for p in model.routes.public)
        self._auth_only = tuple(normalize_path(p) for p in model.routes.auth_only)

    @property
    def auth(self) -> AuthConfig:
        return self.model.auth

    @property
    def routes(self) -> RoutesConfig:
        return self.model.routes

    def is_public(self, path: str) -> bool:
        return normalize_path(path) in self._public

    def is_api(self, path: str) -> bool:
        prefix = normalize_path(self.routes.api_prefix)
        path = normalize_path(path)
        return path == prefix or path.startswith(prefix + "/")

    def is_auth_only(self, path: str) -> bool:
        path = normalize_path(path)
        for prefix in self._auth_only:
            if path == prefix or path.startswith(prefix.rstrip("/") + "/"):
                return True
        return False

    def access_denied_url(self) -> str:
        query = urlencode({self.routes.access_denied_param: "true"})
        return f"{self.routes.landing_page}?{query}"


def load_security_config(path: Path) -> SecurityConfig:
    raw_text = path.read_text(encoding="utf-8")
    raw: dict[str, Any] = yaml.safe_load(raw_text) or {}

    if "security" not in raw:
        raise ValueError(f"Missing top-level 'security' key in config: {path}")

    model = SecurityConfigModel.model_validate(raw["security"] or {})
    return SecurityConfig(model)
