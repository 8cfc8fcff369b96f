"""인증 관련 Pydantic 스키마.

Authentication schemas — Azure AD public config and bypass login.
"""

from erp_hub.schemas.common import CamelModel


class BypassLoginRequest(CamelModel):
    username: str
    password: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class CurrentUser(CamelModel):
    username: str
    name: str
    auth_method: str


class MsalAuthConfig(CamelModel):
    client_id: str
    authority: str
    redirect_uri: str
    cache_location: str = "sessionStorage"


class AuthConfigResponse(CamelModel):
    msal: MsalAuthConfig
    scopes: list[str]
    graph_me_endpoint: str
    bypass_enabled: bool
