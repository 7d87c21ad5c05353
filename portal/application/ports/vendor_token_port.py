from __future__ import annotations

from typing import Protocol


class VendorTokenPort(Protocol):
    async def get_token(self) -> str:
        ...
