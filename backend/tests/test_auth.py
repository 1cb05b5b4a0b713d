"""
Tests for authentication endpoints and token handling.
"""

import time

import jwt
import pytest

from shared.config.constants import Roles
from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET
from shared.security.auth import (
    REFRESH_TOKEN,
    sign_jwt,
    sign_refresh_token,
    verify_jwt,
)
from shared.security.password import needs_rehash, verify_password
from shared.utils.exceptions import UnauthorizedError
from tests.conftest import TEST_PASSWORD


class TestPasswordHashing:
    """Test password hashing utilities."""

    def test_hash_password_returns_bcrypt_hash(self, password_hash):
        assert password_hash.startswith("$2b$")

    def test_verify_password(self, password_hash):
        assert verify_password(TEST_PASSWORD, password_hash) is True
        assert verify_password("wrongpassword", password_hash) is False

    def test_plain_text_never_verifies(self):
        assert verify_password("plaintext", "plaintext") is False
        assert verify_password("anything", None) is False

    def test_needs_rehash(self, password_hash):
        assert needs_rehash("plaintext") is True
        assert needs_rehash(password_hash) is False


class TestTokens:

    def test_refresh_token_rejected_as_access_token(self):
        token = sign_refresh_token(1)

        with pytest.raises(UnauthorizedError):
            verify_jwt(token)
        assert verify_jwt(token, expected_type=REFRESH_TOKEN)["sub"] == "1"

    def test_expired_token(self):
        token = sign_jwt({"sub": "1", "role": Roles.ADMIN}, ttl_seconds=-10)

        with pytest.raises(UnauthorizedError, match="Token expired"):
            verify_jwt(token)

    def test_unknown_role_claim(self):
        token = sign_jwt({"sub": "1", "role": "OWNER"})

        with pytest.raises(UnauthorizedError):
            verify_jwt(token)

    def test_foreign_signature(self):
        now = int(time.time())
        token = jwt.encode(
            {
                "sub": "1",
                "role": Roles.SUPER_ADMIN,
                "iss": JWT_ISSUER,
                "aud": JWT_AUDIENCE,
                "iat": now,
                "exp": now + 60,
                "type": "access",
            },
            JWT_SECRET + "-forged",
            algorithm="HS256",
        )

        with pytest.raises(UnauthorizedError):
            verify_jwt(token)


class TestAuthEndpoints:
    """Test authentication API endpoints."""

    def test_login_success(self, client, make_user, seed_cafe):
        make_user(Roles.ADMIN, seed_cafe.id, email="admin@test.com")

        response = client.post(
            "/api/auth/login",
            json={"email": "Admin@Test.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "Bearer"
        assert data["user"]["email"] == "admin@test.com"
        assert data["user"]["cafe_id"] == seed_cafe.id
        assert "refresh_token" not in data
        assert "refresh_token" in response.cookies
        assert "httponly" in response.headers["set-cookie"].lower()

        claims = verify_jwt(data["access_token"])
        assert claims["role"] == Roles.ADMIN
        assert claims["cafe_id"] == seed_cafe.id

    def test_login_wrong_password(self, client, make_user):
        make_user(Roles.SUPER_ADMIN, email="root@test.com")

        response = client.post(
            "/api/auth/login",
            json={"email": "root@test.com", "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_login_unknown_email(self, client):
        response = client.post(
            "/api/auth/login",
            json={"email": "ghost@test.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_login_deleted_user(self, client, make_user, db_session):
        user = make_user(Roles.KITCHEN, email="gone@test.com")
        user.soft_delete(None, None)
        db_session.commit()

        response = client.post(
            "/api/auth/login",
            json={"email": "gone@test.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == 401

    def test_refresh_rotates_token(self, client, make_user, seed_cafe):
        make_user(Roles.WAITER, seed_cafe.id, email="waiter@test.com")
        client.post("/api/auth/login", json={"email": "waiter@test.com", "password": TEST_PASSWORD})

        response = client.post("/api/auth/refresh")

        assert response.status_code == 200
        assert response.json()["user"]["role"] == Roles.WAITER
        assert "refresh_token" in response.cookies

    def test_refresh_without_cookie(self, client):
        client.cookies.clear()

        response = client.post("/api/auth/refresh")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing refresh token"

    def test_logout_clears_cookie(self, client):
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "refresh_token" in response.headers["set-cookie"]

    def test_me(self, client, make_user, token_headers):
        user = make_user(Roles.SUPER_ADMIN, email="boss@test.com")

        response = client.get("/api/auth/me", headers=token_headers(user))

        assert response.status_code == 200
        assert response.json() == {
            "id": user.id,
            "name": user.name,
            "email": "boss@test.com",
            "role": Roles.SUPER_ADMIN,
            "cafe_id": None,
        }

    def test_me_requires_token(self, client):
        assert client.get("/api/auth/me").status_code == 401
        assert client.get("/api/auth/me", headers={"Authorization": "Token abc"}).status_code == 401

    def test_me_with_tampered_token(self, client, make_user, token_headers):
        headers = token_headers(make_user(Roles.SUPER_ADMIN))
        headers["Authorization"] += "x"

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401


class TestSuperAdminBootstrap:

    def test_exists_is_false_on_fresh_install(self, client):
        response = client.get("/api/auth/super-admin/exists")

        assert response.status_code == 200
        assert response.json()["exists"] is False
        assert response.json()["count"] == 0

    def test_register_then_login(self, client):
        response = client.post(
            "/api/auth/super-admin",
            json={"name": " Root ", "email": "Root@Test.com", "password": "longenough1"},
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Root"
        assert response.json()["role"] == Roles.SUPER_ADMIN
        assert client.get("/api/auth/super-admin/exists").json()["exists"] is True

        login = client.post(
            "/api/auth/login",
            json={"email": "root@test.com", "password": "longenough1"},
        )
        assert login.status_code == 200

    def test_second_super_admin_conflicts(self, client, make_user):
        make_user(Roles.SUPER_ADMIN)

        response = client.post(
            "/api/auth/super-admin",
            json={"name": "Another", "email": "another@test.com", "password": "longenough1"},
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Super admin already exists"

    def test_short_password_rejected(self, client):
        response = client.post(
            "/api/auth/super-admin",
            json={"name": "Root", "email": "root@test.com", "password": "short"},
        )

        assert response.status_code == 422

