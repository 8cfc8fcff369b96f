"""FastAPI 의존성 주입 모듈 — bypass 세션 토큰 인증.

FastAPI dependency injection module.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT 서명/만료를 검증
       (decode_token verifies signature and expiration)
    3. 페이로드의 "sub"/"name"/"auth"로 현재 사용자 구성
       (Current user is built from the payload; there is no user table)
"""

from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from erp_hub.schemas.auth import CurrentUser
from erp_hub.utils.exceptions import UnauthorizedError
from erp_hub.utils.jwt import decode_token

# auto_error=False — 헤더 누락도 401로 통일 (missing header also maps to 401)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """JWT 토큰에서 현재 사용자를 추출합니다.

    Raises:
        UnauthorizedError: 토큰 누락, 만료, 형식 오류 (Missing, expired or malformed token)
    """
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload: dict = decode_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid or expired token")

    if payload.get("type") != "access" or not payload.get("sub"):
        raise UnauthorizedError("Invalid token")

    return CurrentUser(
        username=payload["sub"],
        name=payload.get("name") or payload["sub"],
        auth_method=payload.get("auth", "bypass"),
    )
