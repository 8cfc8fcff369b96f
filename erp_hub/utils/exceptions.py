"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Pre-configured HTTPException subclasses so services can raise errors
without specifying status codes at each call site. All of them are
rendered as ``{"success": false, "error": detail}`` by the handler in main.

Usage:
    from erp_hub.utils.exceptions import NotFoundError, BadRequestError
    raise NotFoundError("Issue not found")
    raise BadRequestError("Title is required")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a requested issue, note, attachment, template or draft does not exist.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised for request data problems beyond what Pydantic validation catches
    (e.g. missing multipart fields, unknown AI action, OAuth state mismatch).
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용."""

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class ServerError(HTTPException):
    """500 Internal Server Error 예외 — 외부 연동 실패 또는 처리 실패.

    Raised when a storage, Zendesk or OpenAI call fails, or when a
    required integration setting is missing. The underlying cause is
    logged by the caller; only a generic message reaches the client.
    """

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class ServiceUnavailableError(HTTPException):
    """503 Service Unavailable 예외 — 선택적 연동이 설정되지 않았을 때."""

    def __init__(self, detail: str = "Service not configured") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
