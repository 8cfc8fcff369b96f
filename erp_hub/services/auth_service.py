"""인증 서비스 — Azure AD 공개 설정과 bypass 로그인.

Authentication service.
Interactive login runs in the browser against Azure AD (MSAL); this service
only publishes that configuration. Bypass login exchanges the configured
username/password for a signed access token.
"""

import logging
from typing import Any

from erp_hub.config import settings
from erp_hub.utils.bypass import is_bypass_configured, verify_bypass_credentials
from erp_hub.utils.exceptions import ServiceUnavailableError, UnauthorizedError
from erp_hub.utils.jwt import create_access_token

logger = logging.getLogger(__name__)

LOGIN_SCOPES: list[str] = ["openid", "profile", "User.Read"]
GRAPH_ME_ENDPOINT: str = "https://graph.microsoft.com/v1.0/me"
BYPASS_DISPLAY_NAME: str = "Bypass User"


class AuthService:

    def get_auth_config(self) -> dict[str, Any]:
        return {
            "msal": {
                "client_id": settings.AZURE_AD_CLIENT_ID,
                "authority": f"https://login.microsoftonline.com/{settings.AZURE_AD_TENANT_ID}",
                "redirect_uri": settings.AZURE_AD_REDIRECT_URI,
            },
            "scopes": LOGIN_SCOPES,
            "graph_me_endpoint": GRAPH_ME_ENDPOINT,
            "bypass_enabled": is_bypass_configured(),
        }

    def bypass_login(self, username: str, password: str) -> dict[str, Any]:
        """bypass 자격 증명을 검증하고 액세스 토큰을 발급합니다."""
        if not is_bypass_configured():
            raise ServiceUnavailableError("Bypass authentication is not configured")
        if not verify_bypass_credentials(username, password):
            logger.warning("Rejected bypass login attempt")
            raise UnauthorizedError("Invalid credentials")

        token = create_access_token({"sub": username, "name": BYPASS_DISPLAY_NAME, "auth": "bypass"})
        return {
            "access_token": token,
            "token_type": "bearer",
            "expires_in": settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        }


auth_service: AuthService = AuthService()
