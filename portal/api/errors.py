from __future__ import annotations

import logging

from fastapi import HTTPException

from portal.domain.exceptions import (
    DomainError,
    InvalidImageError,
    UnrecognizedEnvelopeError,
    ValidationFailedError,
    VendorApiError,
    VendorConfigurationError,
)


logger = logging.getLogger(__name__)


def to_http_exception(exc: DomainError, *, context: str) -> HTTPException:
    """Map a domain failure to the inline error the screen shows."""
    if isinstance(exc, ValidationFailedError):
        return HTTPException(status_code=422, detail={"message": str(exc), "errors": exc.errors})
    if isinstance(exc, InvalidImageError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, VendorConfigurationError):
        logger.error("%s: configuration_error detail=%s", context, exc)
        return HTTPException(status_code=500, detail=str(exc))
    if isinstance(exc, VendorApiError):
        logger.warning("%s: vendor_error status=%s detail=%s", context, exc.status_code, exc)
        return HTTPException(
            status_code=502,
            detail={"message": str(exc), "vendor_status": exc.status_code, "vendor_body": exc.body},
        )
    if isinstance(exc, UnrecognizedEnvelopeError):
        logger.error("%s: unrecognized_envelope detail=%s", context, exc)
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))
