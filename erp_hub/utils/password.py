"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification utility module.
Uses bcrypt directly. Only the bypass login password hash is ever stored;
the plain password never leaves the generator script output.

bcrypt only reads the first 72 bytes of a password and bcrypt>=5 rejects
longer input, so both helpers truncate the encoded password to 72 bytes.
The generated bypass password (96 hex chars) is hashed and checked the
same way on both sides.
"""

import bcrypt

# bcrypt cost factor — 2^12 rounds
BCRYPT_ROUNDS: int = 12

# bcrypt 입력 한도 (bytes)
BCRYPT_MAX_BYTES: int = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt with the given cost factor.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)
        rounds: bcrypt cost factor (log2 of the iteration count)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Returns False instead of raising when the stored hash is malformed.
    """
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
