"""인증 라우터 — Azure AD 공개 설정, bypass 로그인, 현재 사용자.

Auth Router.
    - GET /config: 브라우저 MSAL 로그인에 필요한 공개 설정
    - POST /bypass: bypass 자격 증명으로 액세스 토큰 발급
    - GET /me: 토큰의 사용자 정보
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from erp_hub.api.deps import get_current_user
from erp_hub.schemas.auth import AuthConfigResponse, BypassLoginRequest, CurrentUser, TokenResponse
from erp_hub.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.get("/config", response_model=AuthConfigResponse)
async def get_auth_config() -> AuthConfigResponse:
    return AuthConfigResponse.model_validate(auth_service.get_auth_config())


@router.post("/bypass", response_model=TokenResponse)
async def bypass_login(data: BypassLoginRequest) -> TokenResponse:
    """bypass 로그인 (Bypass login). 미설정 시 503, 불일치 시 401."""
    return TokenResponse(**auth_service.bypass_login(data.username, data.password))


@router.get("/me", response_model=CurrentUser)
async def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    return current_user
