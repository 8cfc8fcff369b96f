"""인증 API 테스트 — Azure AD 공개 설정, bypass 로그인, /me.

Bypass hashes use a low bcrypt cost to keep the suite fast.
"""

import pytest
from httpx import AsyncClient

from erp_hub.config import settings
from erp_hub.utils.bypass import generate_bypass_credentials, verify_bypass_credentials
from erp_hub.utils.password import hash_password, verify_password
from tests.conftest import auth_header, make_token

URL = "/api/auth"


@pytest.fixture
def bypass(monkeypatch):
    """bypass 자격 증명을 설정하고 (username, password)를 반환."""
    creds = generate_bypass_credentials(rounds=4)
    monkeypatch.setattr(settings, "BYPASS_AUTH_USERNAME", creds.username)
    monkeypatch.setattr(settings, "BYPASS_AUTH_PASSWORD_HASH", creds.password_hash)
    return creds


class TestAuthConfig:
    """공개 설정 테스트."""

    async def test_config(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "AZURE_AD_CLIENT_ID", "client-1")
        monkeypatch.setattr(settings, "AZURE_AD_TENANT_ID", "tenant-1")
        res = await client.get(f"{URL}/config")
        assert res.status_code == 200
        data = res.json()
        assert data["msal"]["clientId"] == "client-1"
        assert data["msal"]["authority"] == "https://login.microsoftonline.com/tenant-1"
        assert data["msal"]["cacheLocation"] == "sessionStorage"
        assert data["scopes"] == ["openid", "profile", "User.Read"]
        assert data["graphMeEndpoint"] == "https://graph.microsoft.com/v1.0/me"
        assert data["bypassEnabled"] is False

    async def test_config_bypass_enabled(self, client: AsyncClient, bypass):
        assert (await client.get(f"{URL}/config")).json()["bypassEnabled"] is True


class TestBypassLogin:
    """bypass 로그인 테스트."""

    async def test_login_success(self, client: AsyncClient, bypass):
        res = await client.post(f"{URL}/bypass", json={
            "username": bypass.username,
            "password": bypass.password,
        })
        assert res.status_code == 200
        data = res.json()
        assert data["tokenType"] == "bearer"
        assert data["expiresIn"] == settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60

        me = await client.get(f"{URL}/me", headers=auth_header(data["accessToken"]))
        assert me.status_code == 200
        assert me.json() == {"username": bypass.username, "name": "Bypass User", "authMethod": "bypass"}

    async def test_login_wrong_password(self, client: AsyncClient, bypass):
        res = await client.post(f"{URL}/bypass", json={"username": bypass.username, "password": "nope"})
        assert res.status_code == 401
        assert res.json() == {"success": False, "error": "Invalid credentials"}

    async def test_login_wrong_username(self, client: AsyncClient, bypass):
        res = await client.post(f"{URL}/bypass", json={"username": "admin_x", "password": bypass.password})
        assert res.status_code == 401

    async def test_login_not_configured(self, client: AsyncClient):
        res = await client.post(f"{URL}/bypass", json={"username": "a", "password": "b"})
        assert res.status_code == 503


class TestGetMe:
    """/me 테스트."""

    async def test_me_with_token(self, client: AsyncClient):
        res = await client.get(f"{URL}/me", headers=auth_header(make_token("admin_abc", "Tester")))
        assert res.status_code == 200
        assert res.json()["name"] == "Tester"

    async def test_me_no_token(self, client: AsyncClient):
        res = await client.get(f"{URL}/me")
        assert res.status_code == 401

    async def test_me_invalid_token(self, client: AsyncClient):
        res = await client.get(f"{URL}/me", headers=auth_header("not-a-jwt"))
        assert res.status_code == 401
        assert res.json()["error"] == "Invalid or expired token"


class TestBypassCredentials:
    """자격 증명 생성/검증 단위 테스트."""

    def test_generated_shape(self):
        creds = generate_bypass_credentials(rounds=4)
        assert creds.username.startswith("admin_")
        assert len(creds.username) == len("admin_") + 64
        assert len(creds.password) == 96
        assert verify_password(creds.password, creds.password_hash)
        assert creds.password not in creds.password_hash

    def test_verify_requires_configuration(self):
        assert verify_bypass_credentials("admin_x", "y") is False

    def test_verify_password_malformed_hash(self):
        assert verify_password("x", "not-a-bcrypt-hash") is False

    def test_hash_password_rounds(self):
        assert hash_password("secret", rounds=4).startswith("$2b$04$")

    def test_long_password_round_trip(self):
        """96자 hex 비밀번호도 해시/검증 가능 (72 bytes로 잘라 사용)."""
        password = "ab" * 48
        hashed = hash_password(password, rounds=4)
        assert verify_password(password, hashed)
        assert not verify_password("cd" * 48, hashed)

    def test_long_password_truncated_at_72_bytes(self):
        hashed = hash_password("a" * 96, rounds=4)
        assert verify_password("a" * 72, hashed)
        assert verify_password("a" * 72 + "different tail", hashed)
