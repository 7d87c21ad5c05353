from __future__ import annotations

import asyncio
import json

import pytest

from portal.application.use_cases.configure_login_overrides import ConfigureLoginOverridesUseCase
from portal.application.use_cases.get_login_overrides import GetLoginOverridesUseCase
from portal.cli.configure_login_overrides import main
from portal.domain.exceptions import VendorApiError, VendorConfigurationError
from portal.infrastructure.stores.login_overrides_document import PackagedLoginOverrides

from fakes import FakeTokenPort


class FakeLoginMetadataPort:
    def __init__(self, current: dict, *, save_error: VendorApiError | None = None):
        self.current = current
        self.save_error = save_error
        self.saved: list[dict] = []

    async def get_entity_metadata(self, *, vendor_token: str, entity_name: str) -> dict:
        return self.current

    async def save_entity_metadata(self, *, vendor_token: str, entity_name: str, configuration: dict) -> None:
        if self.save_error is not None:
            raise self.save_error
        self.saved.append({"entity_name": entity_name, "configuration": configuration})


def test_packaged_document_roots_assets_at_public_url():
    document = PackagedLoginOverrides(asset_base_url="https://portal.example.com/").load()

    login_box = document["themeV2"]["loginBox"]
    assert login_box["logo"]["image"] == "https://portal.example.com/pharmacy.png"
    assert 'url("https://portal.example.com/molecule-pattern-background.jpg")' in login_box["rootStyle"]["background"]
    assert document["localizations"]["en"]["loginBox"]["login"]["title"] == "Welcome to Dignified Labs"
    assert "{asset_base_url}" not in json.dumps(document)


@pytest.mark.parametrize("requested", [None, "", "other-app"])
def test_overrides_are_empty_for_other_applications(requested):
    use_case = GetLoginOverridesUseCase(
        source=PackagedLoginOverrides(asset_base_url="https://portal.example.com"),
        application_id="app-123",
    )

    assert use_case.execute(requested_application_id=requested) == {}


def test_unconfigured_application_id_never_matches():
    use_case = GetLoginOverridesUseCase(
        source=PackagedLoginOverrides(asset_base_url="https://portal.example.com"),
        application_id="",
    )

    assert use_case.execute(requested_application_id="") == {}


def test_configure_merges_overrides_url_into_existing_configuration():
    port = FakeLoginMetadataPort({"configuration": {"theme": "dark", "metadataOverrides": {"url": "old"}}})
    use_case = ConfigureLoginOverridesUseCase(login_metadata_port=port, token_port=FakeTokenPort())

    configuration = asyncio.run(use_case.execute(overrides_url="https://portal.example.com/api/frontegg-login-overrides"))

    assert configuration == {
        "theme": "dark",
        "metadataOverrides": {"url": "https://portal.example.com/api/frontegg-login-overrides"},
    }
    assert port.saved == [{"entity_name": "loginBox", "configuration": configuration}]


def test_configure_requires_url():
    use_case = ConfigureLoginOverridesUseCase(
        login_metadata_port=FakeLoginMetadataPort({}),
        token_port=FakeTokenPort(),
    )

    with pytest.raises(VendorConfigurationError):
        asyncio.run(use_case.execute(overrides_url=""))


def test_cli_exits_with_failure_when_vendor_rejects_update():
    port = FakeLoginMetadataPort({}, save_error=VendorApiError("Failed to update metadata: 400", status_code=400))
    use_case = ConfigureLoginOverridesUseCase(login_metadata_port=port, token_port=FakeTokenPort())

    assert main(["--url", "https://portal.example.com/overrides"], use_case=use_case) == 1


def test_cli_prints_merged_configuration(capsys):
    port = FakeLoginMetadataPort({"configuration": {}})
    use_case = ConfigureLoginOverridesUseCase(login_metadata_port=port, token_port=FakeTokenPort())

    assert main(["--url", "https://portal.example.com/overrides"], use_case=use_case) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed == {"metadataOverrides": {"url": "https://portal.example.com/overrides"}}
