from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import tempfile
from threading import Lock

from portal.application.ports.credential_store_port import CredentialStorePort
from portal.domain.entities.credential import VendorCredential


logger = logging.getLogger(__name__)


class InMemoryCredentialStore(CredentialStorePort):
    def __init__(self):
        self._credential: VendorCredential | None = None
        self._lock = Lock()

    def load(self) -> VendorCredential | None:
        with self._lock:
            return self._credential

    def save(self, credential: VendorCredential) -> None:
        with self._lock:
            self._credential = credential


class JsonFileCredentialStore(CredentialStorePort):
    """Credential cache persisted to disk so separate processes can share it.

    Last write wins. Writes land in a sibling temp file that replaces the cache
    atomically, and a corrupt or unreadable file counts as an empty cache.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def load(self) -> VendorCredential | None:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("credential_store: read_failed path=%s error=%s", self._path, exc)
            return None

        try:
            payload = json.loads(raw)
            token = payload["token"]
            expires_at_ms = int(payload["expiresAtEpochMs"])
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("credential_store: corrupt_cache path=%s error=%s", self._path, exc)
            return None

        if not isinstance(token, str) or not token:
            return None
        return VendorCredential(token=token, expires_at_ms=expires_at_ms)

    def save(self, credential: VendorCredential) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({"token": credential.token, "expiresAtEpochMs": credential.expires_at_ms})
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f"{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
