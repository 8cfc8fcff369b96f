"""Bypass 로그인 자격 증명 — 테스트/진단용 비대화형 로그인.

Bypass credentials let testers skip the Azure AD popup. The username and
plain password are high-entropy random hex strings; only the bcrypt hash
of the password is kept in the environment.
"""

import hmac
import secrets
from dataclasses import dataclass

from erp_hub.config import settings
from erp_hub.utils.password import BCRYPT_ROUNDS, hash_password, verify_password

USERNAME_PREFIX: str = "admin_"
USERNAME_RANDOM_BYTES: int = 32
PASSWORD_RANDOM_BYTES: int = 48


@dataclass(frozen=True)
class BypassCredentials:
    username: str
    password: str
    password_hash: str


def generate_bypass_credentials(rounds: int = BCRYPT_ROUNDS) -> BypassCredentials:
    """새 자격 증명 생성 — username 70자, password 96자 (hex)."""
    username = f"{USERNAME_PREFIX}{secrets.token_hex(USERNAME_RANDOM_BYTES)}"
    password = secrets.token_hex(PASSWORD_RANDOM_BYTES)
    return BypassCredentials(
        username=username,
        password=password,
        password_hash=hash_password(password, rounds=rounds),
    )


def is_bypass_configured() -> bool:
    return bool(settings.BYPASS_AUTH_USERNAME and settings.BYPASS_AUTH_PASSWORD_HASH)


def verify_bypass_credentials(username: str, password: str) -> bool:
    """설정된 bypass 자격 증명과 비교합니다. 미설정이면 항상 False."""
    if not is_bypass_configured():
        return False
    username_ok = hmac.compare_digest(username.encode("utf-8"), settings.BYPASS_AUTH_USERNAME.encode("utf-8"))
    # 사용자 이름이 틀려도 해시 비교는 수행 — timing 차이 최소화
    password_ok = verify_password(password, settings.BYPASS_AUTH_PASSWORD_HASH)
    return username_ok and password_ok
