from __future__ import annotations

from functools import lru_cache
import json
from pathlib import Path
from typing import Any

from portal.application.ports.login_overrides_source_port import LoginOverridesSourcePort


DOCUMENT_PATH = Path(__file__).resolve().parents[2] / "resources" / "login_overrides.json"
ASSET_PLACEHOLDER = "{asset_base_url}"


@lru_cache(maxsize=4)
def _read_document(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _with_asset_base(value: Any, asset_base_url: str) -> Any:
    if isinstance(value, str):
        return value.replace(ASSET_PLACEHOLDER, asset_base_url)
    if isinstance(value, dict):
        return {key: _with_asset_base(item, asset_base_url) for key, item in value.items()}
    if isinstance(value, list):
        return [_with_asset_base(item, asset_base_url) for item in value]
    return value


class PackagedLoginOverrides(LoginOverridesSourcePort):
    """Theme and copy for the hosted login box, shipped with the package."""

    def __init__(self, *, asset_base_url: str, path: Path = DOCUMENT_PATH):
        self._asset_base_url = asset_base_url.rstrip("/")
        self._path = path

    def load(self) -> dict[str, Any]:
        document = json.loads(_read_document(str(self._path)))
        return _with_asset_base(document, self._asset_base_url)
