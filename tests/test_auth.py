"""
Authentication tests: registration, login, token rotation and bearer parsing.
"""

import jwt
from datetime import timedelta

from app import security
from app.config import settings
from domain.models import utcnow
from repositories import UserRepository, RefreshTokenRepository
from test_fixtures import client, db_session, register_user, auth_headers
from test_constants import DEFAULT_PASSWORD
from test_helpers import unique_email


# =============================================================================
# REGISTRATION AND LOGIN
# =============================================================================


def test_register_returns_user_and_tokens():
    account = register_user("sarah")
    assert account["user"]["email"] == account["email"]
    assert account["user"]["role"] == "user"
    assert account["user"]["is_active"] is True
    assert account["tokens"]["token_type"] == "bearer"

    claims = jwt.decode(
        account["tokens"]["access_token"],
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
    )
    assert claims["sub"] == account["user"]["user_id"]
    assert claims["type"] == "access"
    assert claims["role"] == "user"


def test_register_stores_email_lower_case():
    email = unique_email("Mixed.Case").replace("Mixed.Case", "Mixed.CASE")
    r = client.post(
        "/api/auth/register",
        json={"email": email, "password": DEFAULT_PASSWORD, "full_name": "Mixed"},
    )
    assert r.status_code == 201
    assert r.json()["user"]["email"] == email.lower()


def test_register_duplicate_email_conflict():
    account = register_user("emma")
    r = client.post(
        "/api/auth/register",
        json={
            "email": account["email"].upper(),
            "password": DEFAULT_PASSWORD,
            "full_name": "Someone Else",
        },
    )
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


def test_register_short_password_rejected():
    r = client.post(
        "/api/auth/register",
        json={"email": unique_email(), "password": "short", "full_name": "Shorty"},
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_login_success_and_failures():
    account = register_user("michael")

    ok = client.post(
        "/api/auth/login",
        json={"email": account["email"], "password": DEFAULT_PASSWORD},
    )
    assert ok.status_code == 200
    assert ok.json()["user"]["user_id"] == account["user"]["user_id"]

    wrong = client.post(
        "/api/auth/login", json={"email": account["email"], "password": "not-the-password"}
    )
    assert wrong.status_code == 401
    assert wrong.json()["error"]["message"] == "Invalid email or password."

    unknown = client.post(
        "/api/auth/login", json={"email": unique_email(), "password": DEFAULT_PASSWORD}
    )
    assert unknown.status_code == 401
    assert unknown.json()["error"]["message"] == "Invalid email or password."


def test_login_inactive_user_forbidden(db_session):
    account = register_user("raj")
    user = UserRepository(db_session).get_by_email(account["email"])
    user.is_active = False
    db_session.commit()

    r = client.post(
        "/api/auth/login", json={"email": account["email"], "password": DEFAULT_PASSWORD}
    )
    assert r.status_code == 403
    assert r.json()["error"]["message"] == "User is inactive."


# =============================================================================
# CURRENT USER AND BEARER PARSING
# =============================================================================


def test_me_returns_current_user():
    account = register_user("sarah")
    r = client.get("/api/auth/me", headers=auth_headers(account))
    assert r.status_code == 200
    assert r.json()["email"] == account["email"]


def test_me_requires_authorization_header():
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Missing Authorization header."


def test_me_rejects_malformed_and_non_bearer_headers():
    malformed = client.get("/api/auth/me", headers={"Authorization": "Bearer"})
    assert malformed.status_code == 401
    assert malformed.json()["error"]["message"] == "Malformed Authorization header."

    basic = client.get("/api/auth/me", headers={"Authorization": "Basic abc"})
    assert basic.status_code == 401
    assert basic.json()["error"]["message"] == "Authorization scheme must be Bearer."


def test_me_rejects_invalid_and_expired_tokens():
    invalid = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert invalid.status_code == 401
    assert invalid.json()["error"]["message"] == "Invalid access token."

    account = register_user("emma")
    now = utcnow()
    expired = jwt.encode(
        {
            "sub": account["user"]["user_id"],
            "email": account["email"],
            "role": "user",
            "type": "access",
            "iat": now - timedelta(hours=2),
            "exp": now - timedelta(hours=1),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Access token has expired."


def test_refresh_token_cannot_be_used_as_access_token():
    account = register_user("michael")
    now = utcnow()
    refresh_like = jwt.encode(
        {
            "sub": account["user"]["user_id"],
            "type": "refresh",
            "iat": now,
            "exp": now + timedelta(minutes=5),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {refresh_like}"})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Token is not an access token."


# =============================================================================
# TOKEN ROTATION AND LOGOUT
# =============================================================================


def test_refresh_rotates_tokens(db_session):
    account = register_user("sarah")
    old_refresh = account["tokens"]["refresh_token"]

    r = client.post("/api/auth/refresh", json={"refresh_token": old_refresh})
    assert r.status_code == 200
    new_refresh = r.json()["refresh_token"]
    assert new_refresh != old_refresh

    repo = RefreshTokenRepository(db_session)
    old = repo.get_by_hash(security.hash_refresh_token(old_refresh))
    new = repo.get_by_hash(security.hash_refresh_token(new_refresh))
    assert old.revoked_at is not None
    assert old.replaced_by_token_id == new.token_id

    reuse = client.post("/api/auth/refresh", json={"refresh_token": old_refresh})
    assert reuse.status_code == 401
    assert reuse.json()["error"]["message"] == "Refresh token is revoked."


def test_refresh_unknown_token_unauthorized():
    r = client.post("/api/auth/refresh", json={"refresh_token": "x" * 40})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Invalid refresh token."


def test_logout_revokes_given_refresh_token():
    account = register_user("emma")
    refresh = account["tokens"]["refresh_token"]

    r = client.post("/api/auth/logout", json={"refresh_token": refresh})
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    again = client.post("/api/auth/refresh", json={"refresh_token": refresh})
    assert again.status_code == 401


def test_logout_without_token_revokes_all_sessions():
    account = register_user("raj")
    second = client.post(
        "/api/auth/login", json={"email": account["email"], "password": DEFAULT_PASSWORD}
    ).json()

    r = client.post("/api/auth/logout", json={}, headers=auth_headers(account))
    assert r.status_code == 200

    for refresh in (account["tokens"]["refresh_token"], second["tokens"]["refresh_token"]):
        assert (
            client.post("/api/auth/refresh", json={"refresh_token": refresh}).status_code
            == 401
        )


def test_logout_anonymous_without_token_is_bad_request():
    r = client.post("/api/auth/logout", json={})
    assert r.status_code == 400


# =============================================================================
# PASSWORD HASHING
# =============================================================================


def test_password_hash_roundtrip():
    hashed = security.hash_password("s3cret-password")
    assert hashed != "s3cret-password"
    assert security.verify_password("s3cret-password", hashed)
    assert not security.verify_password("other-password", hashed)
    assert not security.verify_password("s3cret-password", "not-a-bcrypt-hash")
