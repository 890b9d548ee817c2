from datetime import timedelta

import jwt
import pytest

from app.features.auth.utils.security import (
    create_email_token,
    create_session_token,
    decode_email_token,
)


def test_email_token_round_trip(settings):
    token = create_email_token("a@x.com", "acme", settings)

    claims = decode_email_token(token, settings)

    assert claims["email"] == "a@x.com"
    assert claims["tenant"] == "acme"


def test_expired_email_token(settings):
    token = create_email_token("a@x.com", "acme", settings, expires_delta=timedelta(seconds=-5))

    with pytest.raises(ValueError, match="expired"):
        decode_email_token(token, settings)


def test_email_token_rejects_other_algorithms(settings):
    token = jwt.encode({"email": "a@x.com"}, settings.EMAIL_SECRET, algorithm="HS512")

    with pytest.raises(ValueError, match="Invalid token"):
        decode_email_token(token, settings)


def test_session_token_is_not_an_email_token(settings):
    session = create_session_token(
        email="a@x.com", user_id="u1", tenant_path="acme", role="owner", settings=settings
    )

    with pytest.raises(ValueError):
        decode_email_token(session, settings)


def test_session_token_claims(settings):
    session = create_session_token(
        email="a@x.com", user_id="u1", tenant_path="acme", role="member", settings=settings
    )

    claims = jwt.decode(session, settings.JWT_SECRET_KEY, algorithms=["HS256"])

    assert jwt.get_unverified_header(session)["alg"] == "HS256"
    assert claims["userId"] == "u1"
    assert claims["tenantPath"] == "acme"
    assert claims["role"] == "member"
    assert claims["authenticated"] is True
    assert claims["externalDomain"] == settings.EXTERNAL_APP_URL
    assert claims["exp"] - claims["iat"] == settings.SESSION_TOKEN_EXPIRE_DAYS * 24 * 60 * 60
