from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .subscription import SubscriptionEntitlement


METADATA_VERSION = 2


@dataclass(frozen=True)
class Address:
    address1: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    post_code: str = ""

    def to_mapping(self) -> dict[str, str]:
        return {
            "address1": self.address1,
            "city": self.city,
            "state": self.state,
            "postCode": self.post_code,
            "country": self.country,
        }


@dataclass(frozen=True)
class ProfileMetadata:
    """Structured view over the vendor's free-form user metadata.

    Keys this application does not own are kept in ``extra`` so a merge never
    drops data written by other tools.
    """

    company: str = ""
    job_title: str = ""
    university: str = ""
    qualification: str = ""
    graduation_year: str = ""
    onboarding_complete: bool = False
    address: Address = field(default_factory=Address)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UserProfile:
    id: str
    name: str | None
    email: str | None
    phone_number: str | None
    profile_picture_url: str | None
    tenant_id: str | None
    metadata: ProfileMetadata


@dataclass(frozen=True)
class RosterEntry:
    user: UserProfile
    subscriptions: list[SubscriptionEntitlement]
