from __future__ import annotations

import json

from portal.domain.entities.credential import VendorCredential, credential_from_exchange
from portal.infrastructure.stores.credential_store import JsonFileCredentialStore


def test_json_store_round_trips_credential(tmp_path):
    store = JsonFileCredentialStore(tmp_path / "cache" / "vendor-token.json")
    credential = VendorCredential(token="token-1", expires_at_ms=1_700_000_000_000)

    store.save(credential)

    assert store.load() == credential
    on_disk = json.loads((tmp_path / "cache" / "vendor-token.json").read_text())
    assert on_disk == {"token": "token-1", "expiresAtEpochMs": 1_700_000_000_000}


def test_json_store_missing_file_is_empty(tmp_path):
    assert JsonFileCredentialStore(tmp_path / "absent.json").load() is None


def test_json_store_corrupt_file_is_empty(tmp_path):
    path = tmp_path / "vendor-token.json"
    path.write_text("{not json")

    assert JsonFileCredentialStore(path).load() is None


def test_json_store_missing_fields_is_empty(tmp_path):
    path = tmp_path / "vendor-token.json"
    path.write_text(json.dumps({"token": "token-1"}))

    assert JsonFileCredentialStore(path).load() is None


def test_credential_validity_uses_expiry():
    credential = credential_from_exchange(token="token-1", expires_in=60, now_ms=1_000)

    assert credential.expires_at_ms == 61_000
    assert credential.is_valid(now_ms=60_999)
    assert not credential.is_valid(now_ms=61_000)


def test_json_store_replaces_existing_file_without_leftovers(tmp_path):
    path = tmp_path / "vendor-token.json"
    store = JsonFileCredentialStore(path)
    store.save(VendorCredential(token="token-1", expires_at_ms=1_000))

    store.save(VendorCredential(token="token-2", expires_at_ms=2_000))

    assert store.load() == VendorCredential(token="token-2", expires_at_ms=2_000)
    assert [item.name for item in tmp_path.iterdir()] == ["vendor-token.json"]
