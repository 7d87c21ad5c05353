from __future__ import annotations

import json
import time

import jwt
from jwt.exceptions import PyJWKClientConnectionError
import pytest

from portal.domain.exceptions import InvalidSessionError, VendorApiError
from portal.infrastructure.security.session_claims import SessionTokenVerifier, build_session_context

from fakes import SESSION_SIGNING_KEY, FakeSigningKeySource, make_verifier, signed_session_token


def test_verified_token_yields_claims():
    token = signed_session_token({"email": "ada@example.com"})

    claims = make_verifier().decode(token)

    assert claims["sub"] == "user-1"
    assert claims["email"] == "ada@example.com"


def test_token_signed_with_another_key_is_rejected():
    token = signed_session_token({"roles": ["Admin"]}, key="attacker-chosen-key-that-is-long-enough-000")

    with pytest.raises(InvalidSessionError):
        make_verifier().decode(token)


def test_expired_token_is_rejected():
    token = signed_session_token({"exp": int(time.time()) - 60})

    with pytest.raises(InvalidSessionError):
        make_verifier().decode(token)


def test_token_without_expiry_is_rejected():
    token = jwt.encode({"sub": "user-1"}, SESSION_SIGNING_KEY, algorithm="HS256")

    with pytest.raises(InvalidSessionError):
        make_verifier().decode(token)


def test_malformed_token_is_rejected():
    with pytest.raises(InvalidSessionError):
        make_verifier().decode("not-a-jwt")


def test_unsigned_token_is_rejected():
    token = jwt.encode({"sub": "user-1", "exp": int(time.time()) + 60}, None, algorithm="none")

    with pytest.raises(InvalidSessionError):
        make_verifier().decode(token)


def test_audience_is_checked_when_configured():
    verifier = SessionTokenVerifier(
        key_source=FakeSigningKeySource(),
        algorithms=("HS256",),
        audience="client-1",
    )

    assert verifier.decode(signed_session_token({"aud": "client-1"}))["aud"] == "client-1"
    with pytest.raises(InvalidSessionError):
        verifier.decode(signed_session_token({"aud": "someone-else"}))


def test_unreachable_signing_keys_are_a_vendor_failure():
    verifier = make_verifier(error=PyJWKClientConnectionError("connection refused"))

    with pytest.raises(VendorApiError):
        verifier.decode(signed_session_token({}))


def test_session_context_reads_profile_roles_and_string_metadata():
    token = "session-token"
    claims = {
        "sub": "user-1",
        "name": "Ada",
        "email": "ada@example.com",
        "phoneNumber": "+441234567890",
        "profilePictureUrl": "https://cdn.example.com/ada.png",
        "tenantId": "tenant-1",
        "roles": ["approved_user", {"name": "Admin", "key": "admin"}],
        "metadata": json.dumps({"onboardingComplete": True}),
    }

    session = build_session_context(token, claims)

    assert session.user_id == "user-1"
    assert session.phone_number == "+441234567890"
    assert session.tenant_id == "tenant-1"
    assert session.roles == ("approved_user", "Admin", "admin")
    assert session.claims_metadata == {"onboardingComplete": True}
    assert session.access_token == token


def test_vendor_metadata_claim_is_the_fallback_source():
    session = build_session_context("t", {"sub": "user-1", "vendorMetadata": {"company": "Acme"}})

    assert session.claims_metadata == {"company": "Acme"}


def test_missing_metadata_claims_stay_absent():
    session = build_session_context("t", {"sub": "user-1"})

    assert session.claims_metadata is None
    assert session.roles == ()
