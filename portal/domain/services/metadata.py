from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
import json
import logging
from typing import Any

from portal.domain.entities.user import METADATA_VERSION, Address, ProfileMetadata


logger = logging.getLogger(__name__)


OWNED_KEYS = frozenset(
    {
        "company",
        "jobTitle",
        "university",
        "qualification",
        "graduationYear",
        "onboardingComplete",
        "address",
        "metadataVersion",
    }
)
LEGACY_KEYS = frozenset({"country", "postcode"})


def parse_metadata(raw: Any) -> dict[str, Any] | None:
    """Parse metadata that may arrive absent, JSON-encoded, or already decoded.

    Returns ``None`` when nothing usable is present, so callers can tell an
    absent source apart from an empty one.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (str, bytes)):
        try:
            decoded = json.loads(raw)
        except ValueError:
            logger.warning("metadata: parse_failed length=%s", len(raw))
            return None
        if isinstance(decoded, dict):
            return decoded
        logger.warning("metadata: not_an_object type=%s", type(decoded).__name__)
        return None
    return None


def normalize_metadata(raw: Any) -> dict[str, Any]:
    return parse_metadata(raw) or {}


def reconcile_metadata(
    claims_metadata: dict[str, Any] | None,
    fetched_metadata: dict[str, Any] | None,
) -> dict[str, Any]:
    if fetched_metadata is not None:
        return fetched_metadata
    if claims_metadata is not None:
        return claims_metadata
    return {}


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def _migrate_address(mapping: Mapping[str, Any]) -> Address:
    raw_address = mapping.get("address")
    nested = raw_address if isinstance(raw_address, Mapping) else {}
    # legacy flat layout: address line as a string, country/postcode at the root
    legacy_line = raw_address if isinstance(raw_address, str) else ""
    return Address(
        address1=_text(nested.get("address1")) or legacy_line,
        city=_text(nested.get("city")),
        state=_text(nested.get("state")),
        country=_text(nested.get("country")) or _text(mapping.get("country")),
        post_code=_text(nested.get("postCode")) or _text(mapping.get("postcode")),
    )


def profile_metadata_from_mapping(mapping: Mapping[str, Any] | None) -> ProfileMetadata:
    mapping = mapping or {}
    extra = {
        key: value
        for key, value in mapping.items()
        if key not in OWNED_KEYS and key not in LEGACY_KEYS
    }
    return ProfileMetadata(
        company=_text(mapping.get("company")),
        job_title=_text(mapping.get("jobTitle")),
        university=_text(mapping.get("university")),
        qualification=_text(mapping.get("qualification")),
        graduation_year=_text(mapping.get("graduationYear")),
        onboarding_complete=mapping.get("onboardingComplete") is True,
        address=_migrate_address(mapping),
        extra=extra,
    )


def profile_metadata_to_mapping(metadata: ProfileMetadata) -> dict[str, Any]:
    mapping: dict[str, Any] = dict(metadata.extra)
    mapping.update(
        {
            "company": metadata.company,
            "jobTitle": metadata.job_title,
            "university": metadata.university,
            "qualification": metadata.qualification,
            "graduationYear": metadata.graduation_year,
            "address": metadata.address.to_mapping(),
            "metadataVersion": METADATA_VERSION,
        }
    )
    if metadata.onboarding_complete:
        mapping["onboardingComplete"] = True
    return mapping


def serialize_metadata(metadata: ProfileMetadata) -> str:
    return json.dumps(profile_metadata_to_mapping(metadata))


def merge_profile_metadata(
    metadata: ProfileMetadata,
    *,
    company: str,
    job_title: str,
    university: str,
    qualification: str,
    graduation_year: str,
    address: Address,
    onboarding_complete: bool | None = None,
) -> ProfileMetadata:
    merged = replace(
        metadata,
        company=company,
        job_title=job_title,
        university=university,
        qualification=qualification,
        graduation_year=graduation_year,
        address=address,
    )
    if onboarding_complete is not None:
        merged = replace(merged, onboarding_complete=onboarding_complete)
    return merged
