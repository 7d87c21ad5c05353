from __future__ import annotations

from typing import Protocol

from portal.domain.entities.credential import VendorCredential


class CredentialStorePort(Protocol):
    def load(self) -> VendorCredential | None:
        ...

    def save(self, credential: VendorCredential) -> None:
        ...
