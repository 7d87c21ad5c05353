from __future__ import annotations

from typing import Any, Protocol


class LoginOverridesSourcePort(Protocol):
    def load(self) -> dict[str, Any]:
        ...
