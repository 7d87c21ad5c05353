from __future__ import annotations

from collections.abc import Mapping
import re
from typing import Any, Literal


OnboardingState = Literal["checking", "blocking", "clear"]

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{6,14}$")
PHONE_ERROR = "Please enter a valid phone number, e.g. +441234567890"

REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "Name is required"),
    ("phone", "Phone is required"),
    ("company", "Company is required"),
    ("job_title", "Job Title is required"),
    ("university", "University/College is required"),
    ("qualification", "Qualification is required"),
    ("graduation_year", "Year of Graduation is required"),
    ("address1", "Address line 1 is required"),
    ("city", "City is required"),
    ("state", "State is required"),
    ("country", "Country is required"),
    ("post_code", "Post code is required"),
)


def is_valid_phone(value: str) -> bool:
    return bool(PHONE_PATTERN.match(value.strip()))


def validate_optional_phone(value: str | None) -> dict[str, str]:
    phone = (value or "").strip()
    if phone and not is_valid_phone(phone):
        return {"phone": PHONE_ERROR}
    return {}


def validate_onboarding_fields(values: Mapping[str, str | None]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for key, message in REQUIRED_FIELDS:
        if not (values.get(key) or "").strip():
            errors[key] = message
    errors.update(validate_optional_phone(values.get("phone")))
    return errors


def is_onboarding_complete(metadata: Mapping[str, Any] | None) -> bool:
    return bool(metadata) and metadata.get("onboardingComplete") is True
