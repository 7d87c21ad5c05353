from __future__ import annotations

import logging
from typing import Any

from portal.application.ports.login_overrides_source_port import LoginOverridesSourcePort


logger = logging.getLogger(__name__)


class GetLoginOverridesUseCase:
    """Serve the hosted login page's theme only to the configured application."""

    def __init__(self, *, source: LoginOverridesSourcePort, application_id: str):
        self._source = source
        self._application_id = application_id

    def execute(self, *, requested_application_id: str | None) -> dict[str, Any]:
        if not self._application_id or requested_application_id != self._application_id:
            logger.info(
                "login_overrides: application_mismatch requested=%s",
                requested_application_id or "none",
            )
            return {}
        logger.info("login_overrides: applied application_id=%s", requested_application_id)
        return self._source.load()
