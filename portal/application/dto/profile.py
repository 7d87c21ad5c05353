from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from portal.domain.entities.user import Address


ProfileSource = Literal["vendor", "claims"]


@dataclass(frozen=True)
class ProfileFormInput:
    name: str
    phone: str
    company: str
    job_title: str
    university: str
    qualification: str
    graduation_year: str
    address1: str
    city: str
    state: str
    country: str
    post_code: str

    def as_mapping(self) -> dict[str, str]:
        return {
            "name": self.name,
            "phone": self.phone,
            "company": self.company,
            "job_title": self.job_title,
            "university": self.university,
            "qualification": self.qualification,
            "graduation_year": self.graduation_year,
            "address1": self.address1,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "post_code": self.post_code,
        }

    def address(self) -> Address:
        return Address(
            address1=self.address1,
            city=self.city,
            state=self.state,
            country=self.country,
            post_code=self.post_code,
        )


@dataclass(frozen=True)
class ProfileOutput:
    id: str | None
    name: str | None
    email: str | None
    phone_number: str | None
    profile_picture_url: str | None
    metadata: dict[str, Any]
    address: Address
    source: ProfileSource


@dataclass(frozen=True)
class UpdateProfileInput:
    form: ProfileFormInput
    profile_picture_url: str | None


@dataclass(frozen=True)
class UploadProfileImageInput:
    filename: str
    content_type: str
    content: bytes


@dataclass(frozen=True)
class UploadProfileImageOutput:
    profile_picture_url: str
