"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러, 라우터 등록.

FastAPI application entry point.
Configures Axiom logging, CORS, the JSON error envelope, health check,
the /api routers and the server-rendered pages.

Run:
    uvicorn erp_hub.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from erp_hub.config import settings
from erp_hub.middleware.axiom_logging import AxiomLoggingMiddleware

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
# (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """모든 HTTP 오류를 {"success": false, "error": ...} 형태로 반환."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 실패 → 400, 필드별 메시지 목록 포함."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "body"
        errors.setdefault(field, []).append(error["msg"])
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid input", "errors": errors},
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse("/dashboard")


# ---------------------------------------------------------------------------
# 라우터 등록 — JSON API (/api) + HTML 페이지 (/dashboard)
# ---------------------------------------------------------------------------
from erp_hub.api import api_router  # noqa: E402
from erp_hub.api.pages import router as pages_router  # noqa: E402

app.include_router(api_router, prefix="/api")
app.include_router(pages_router, tags=["Pages"])
