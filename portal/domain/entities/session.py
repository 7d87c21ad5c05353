from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from portal.domain.exceptions import AccessDeniedError


ADMIN_ROLES = frozenset({"Admin", "admin"})
RESEARCH_ROLES = frozenset({"approved_user", "Approved User", "Admin", "admin"})


@dataclass(frozen=True)
class SessionContext:
    access_token: str
    user_id: str | None
    name: str | None
    email: str | None
    phone_number: str | None
    profile_picture_url: str | None
    tenant_id: str | None
    claims_metadata: dict[str, Any] | None
    roles: tuple[str, ...]

    def has_any_role(self, allowed: frozenset[str]) -> bool:
        return any(role in allowed for role in self.roles)

    def require_any_role(self, allowed: frozenset[str]) -> None:
        if not self.has_any_role(allowed):
            raise AccessDeniedError("You don't have the privileges to access this page.")
