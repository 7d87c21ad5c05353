from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from portal.application.dto.profile import ProfileFormInput


MIGRATED_METADATA_DESCRIPTION = (
    "Current-version view of the vendor metadata, not the stored mapping. Owned text "
    "fields are always present as strings (empty when missing), legacy address keys "
    "are folded into address and metadataVersion is set. Keys this service does not "
    "own pass through unchanged."
)


class AddressSchema(BaseModel):
    address1: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    post_code: str = ""


class ProfileForm(BaseModel):
    name: str = Field("", description="Full name.")
    phone: str = Field("", description="Phone number in E.164 form, e.g. +441234567890.")
    company: str = ""
    job_title: str = ""
    university: str = ""
    qualification: str = ""
    graduation_year: str = ""
    address1: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    post_code: str = ""

    def to_input(self) -> ProfileFormInput:
        return ProfileFormInput(
            name=self.name,
            phone=self.phone,
            company=self.company,
            job_title=self.job_title,
            university=self.university,
            qualification=self.qualification,
            graduation_year=self.graduation_year,
            address1=self.address1,
            city=self.city,
            state=self.state,
            country=self.country,
            post_code=self.post_code,
        )


class UpdateProfileRequest(ProfileForm):
    profile_picture_url: str | None = Field(None, description="URL returned by the image upload.")


class ProfileResponse(BaseModel):
    id: str | None
    name: str | None
    email: str | None
    phone_number: str | None
    profile_picture_url: str | None
    metadata: dict[str, Any] = Field(..., description=MIGRATED_METADATA_DESCRIPTION)
    address: AddressSchema
    source: Literal["vendor", "claims"]


class ProfileImageResponse(BaseModel):
    profile_picture_url: str


class StatusResponse(BaseModel):
    ok: bool = True
