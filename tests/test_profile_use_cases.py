from __future__ import annotations

import asyncio

import pytest

from portal.application.dto.profile import (
    ProfileFormInput,
    UpdateProfileInput,
    UploadProfileImageInput,
)
from portal.application.use_cases.get_profile import GetProfileUseCase
from portal.application.use_cases.update_profile import UpdateProfileUseCase
from portal.application.use_cases.upload_profile_image import UploadProfileImageUseCase
from portal.domain.exceptions import InvalidImageError, ValidationFailedError, VendorApiError
from portal.domain.services.metadata import profile_metadata_from_mapping

from fakes import FakeIdentityPort, make_profile, make_session


def _form(**overrides) -> ProfileFormInput:
    values = {key: "" for key in ProfileFormInput.__dataclass_fields__}
    values.update(overrides)
    return ProfileFormInput(**values)


def test_get_profile_prefers_vendor_profile():
    profile = make_profile(
        name="Ada L.",
        metadata=profile_metadata_from_mapping({"company": "Fresh Co", "country": "UK"}),
    )
    use_case = GetProfileUseCase(identity_port=FakeIdentityPort(profile=profile))

    output = asyncio.run(
        use_case.execute(session=make_session(claims_metadata={"company": "Claims Co"}))
    )

    assert output.source == "vendor"
    assert output.name == "Ada L."
    assert output.metadata["company"] == "Fresh Co"
    assert output.address.country == "UK"


def test_get_profile_falls_back_to_claims_on_vendor_error():
    identity = FakeIdentityPort(get_me_error=VendorApiError("Failed to load profile: 401", status_code=401))
    use_case = GetProfileUseCase(identity_port=identity)

    output = asyncio.run(
        use_case.execute(
            session=make_session(
                phone_number="+15551234567",
                claims_metadata={"company": "Claims Co"},
            )
        )
    )

    assert output.source == "claims"
    assert output.email == "ada@example.com"
    assert output.phone_number == "+15551234567"
    assert output.metadata["company"] == "Claims Co"


def test_update_profile_rejects_malformed_optional_phone():
    identity = FakeIdentityPort()
    use_case = UpdateProfileUseCase(identity_port=identity)

    with pytest.raises(ValidationFailedError):
        asyncio.run(
            use_case.execute(
                session=make_session(),
                command=UpdateProfileInput(form=_form(phone="call me"), profile_picture_url=None),
            )
        )
    assert identity.calls == []


def test_update_profile_keeps_onboarding_flag_and_blank_phone_is_omitted():
    existing = profile_metadata_from_mapping({"onboardingComplete": True, "company": "Old Co"})
    identity = FakeIdentityPort(profile=make_profile(metadata=existing))
    use_case = UpdateProfileUseCase(identity_port=identity)

    asyncio.run(
        use_case.execute(
            session=make_session(),
            command=UpdateProfileInput(
                form=_form(name="Ada", company="New Co", phone="  "),
                profile_picture_url=None,
            ),
        )
    )

    update = identity.me_updates[0]
    assert update["name"] == "Ada"
    assert update["phone_number"] is None
    assert update["metadata"].company == "New Co"
    assert update["metadata"].onboarding_complete is True


def test_upload_rejects_non_images_and_oversized_files():
    identity = FakeIdentityPort()
    use_case = UploadProfileImageUseCase(identity_port=identity, max_bytes=10)

    with pytest.raises(InvalidImageError):
        asyncio.run(
            use_case.execute(
                session=make_session(),
                command=UploadProfileImageInput(filename="cv.pdf", content_type="application/pdf", content=b"%PDF"),
            )
        )
    with pytest.raises(InvalidImageError):
        asyncio.run(
            use_case.execute(
                session=make_session(),
                command=UploadProfileImageInput(filename="big.png", content_type="image/png", content=b"x" * 11),
            )
        )
    assert identity.calls == []


def test_upload_returns_vendor_url():
    identity = FakeIdentityPort(upload_url=" https://cdn.example.com/ada-2.png ")
    use_case = UploadProfileImageUseCase(identity_port=identity)

    output = asyncio.run(
        use_case.execute(
            session=make_session(),
            command=UploadProfileImageInput(filename="ada.png", content_type="image/png", content=b"png"),
        )
    )

    assert output.profile_picture_url == "https://cdn.example.com/ada-2.png"
    assert identity.uploads[0]["access_token"] == "session-token"


def test_upload_with_empty_vendor_url_is_an_error():
    use_case = UploadProfileImageUseCase(identity_port=FakeIdentityPort(upload_url=""))

    with pytest.raises(VendorApiError):
        asyncio.run(
            use_case.execute(
                session=make_session(),
                command=UploadProfileImageInput(filename="ada.png", content_type="image/png", content=b"png"),
            )
        )
