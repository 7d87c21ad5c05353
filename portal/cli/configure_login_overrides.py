"""Register the login-overrides endpoint with the vendor's hosted login box.

Usage: python -m portal.cli.configure_login_overrides [--url URL]
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from portal.application.use_cases.configure_login_overrides import ConfigureLoginOverridesUseCase
from portal.domain.exceptions import DomainError
from portal.infrastructure.clients.frontegg_client import FronteggClient
from portal.infrastructure.clients.vendor_credentials import VendorCredentialProvider
from portal.infrastructure.stores.credential_store import InMemoryCredentialStore
from portal.shared.config import Settings, get_settings


logger = logging.getLogger(__name__)


def build_use_case(settings: Settings) -> ConfigureLoginOverridesUseCase:
    client = FronteggClient(
        base_url=settings.vendor_base_url,
        api_url=settings.vendor_api_url,
        timeout_seconds=settings.vendor_timeout_seconds,
    )
    provider = VendorCredentialProvider(
        client_id=settings.vendor_client_id,
        secret=settings.vendor_api_key,
        api_url=settings.vendor_api_url,
        store=InMemoryCredentialStore(),
        timeout_seconds=settings.vendor_timeout_seconds,
    )
    return ConfigureLoginOverridesUseCase(login_metadata_port=client, token_port=provider)


def main(argv: list[str] | None = None, *, use_case: ConfigureLoginOverridesUseCase | None = None) -> int:
    parser = argparse.ArgumentParser(description="Point the hosted login box at the overrides endpoint.")
    parser.add_argument("--url", default=None, help="Overrides endpoint URL (default: FRONTEGG_OVERRIDES_URL).")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    settings = get_settings()
    overrides_url = args.url or settings.login_overrides_url
    use_case = use_case or build_use_case(settings)

    try:
        configuration = asyncio.run(use_case.execute(overrides_url=overrides_url))
    except DomainError as exc:
        logger.error("configure_login_overrides: failed error=%s", exc)
        return 1

    print(json.dumps(configuration, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
