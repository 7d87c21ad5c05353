from __future__ import annotations

from typing import Any, Protocol


class LoginMetadataPort(Protocol):
    async def get_entity_metadata(self, *, vendor_token: str, entity_name: str) -> dict[str, Any]:
        ...

    async def save_entity_metadata(
        self,
        *,
        vendor_token: str,
        entity_name: str,
        configuration: dict[str, Any],
    ) -> None:
        ...
