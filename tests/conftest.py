"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite database, session, and httpx client fixtures.
Every test gets a fresh schema (StaticPool keeps the single in-memory
connection alive). Integration settings are blanked so a developer .env
never leaks into the run; tests that need one set it with monkeypatch.
"""

import os

# 앱 임포트 전에 환경 고정 — pin the environment before erp_hub is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AXIOM_API_TOKEN"] = ""
os.environ["AXIOM_DATASET"] = ""

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from erp_hub.config import settings  # noqa: E402
from erp_hub.database import Base, get_db  # noqa: E402
from erp_hub.main import app  # noqa: E402
from erp_hub.models import *  # noqa: F401,F403,E402 — register all models with metadata
from erp_hub.models import ActionItem, Category, Issue, Note  # noqa: E402
from erp_hub.services.dashboard_service import dashboard_service  # noqa: E402
from erp_hub.services.zendesk_service import zendesk_service  # noqa: E402
from erp_hub.utils.jwt import create_access_token  # noqa: E402
from erp_hub.utils.openai_client import reset_openai_client  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

_BLANK_SETTINGS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_S3_BUCKET",
    "ZENDESK_SUBDOMAIN",
    "ZENDESK_API_EMAIL",
    "ZENDESK_API_TOKEN",
    "ZENDESK_OAUTH_CLIENT_ID",
    "ZENDESK_OAUTH_CLIENT_SECRET",
    "ZENDESK_OAUTH_REDIRECT_URI",
    "ZENDESK_OAUTH_ACCESS_TOKEN",
    "BYPASS_AUTH_USERNAME",
    "BYPASS_AUTH_PASSWORD_HASH",
    "OPENAI_API_KEY",
)


# ---------------------------------------------------------------------------
# 전역 상태 초기화
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """연동 설정 비우기 + 캐시/클라이언트 초기화."""
    for name in _BLANK_SETTINGS:
        monkeypatch.setattr(settings, name, "")
    monkeypatch.setattr(settings, "LOCAL_UPLOADS_DIR", str(tmp_path / "uploads"))
    dashboard_service._cache.clear()
    zendesk_service.transport = None
    reset_openai_client()
    yield
    dashboard_service._cache.clear()
    zendesk_service.transport = None
    reset_openai_client()


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 인메모리 DB와 스키마를 만듭니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite는 FK 제약을 기본으로 끔 — enable ON DELETE actions
    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_issue(db: AsyncSession, **fields) -> Issue:
    """이슈 한 건을 직접 저장합니다 (기본값: MEDIUM/OPEN)."""
    fields.setdefault("title", "Test Issue")
    issue = Issue(**fields)
    db.add(issue)
    await db.flush()
    await db.refresh(issue)
    return issue


async def make_note(db: AsyncSession, issue_id: str, content: str = "A note", **fields) -> Note:
    note = Note(issue_id=issue_id, content=content, **fields)
    db.add(note)
    await db.flush()
    await db.refresh(note)
    return note


async def make_action_item(db: AsyncSession, issue_id: str, **fields) -> ActionItem:
    fields.setdefault("title", "Follow up")
    item = ActionItem(issue_id=issue_id, original_issue_id=issue_id, **fields)
    db.add(item)
    await db.flush()
    await db.refresh(item)
    return item


@pytest_asyncio.fixture
async def category(db: AsyncSession) -> Category:
    """테스트 카테고리를 생성합니다."""
    c = Category(name="Finance", description="GL and AP", color="#3498db")
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


@pytest_asyncio.fixture
async def issue(db: AsyncSession, category: Category) -> Issue:
    """카테고리가 있는 테스트 이슈를 생성합니다."""
    return await make_issue(
        db,
        title="Payroll export fails",
        description="Export job times out",
        priority="HIGH",
        category_id=category.id,
    )


@pytest_asyncio.fixture
async def note(db: AsyncSession, issue: Issue) -> Note:
    return await make_note(db, issue.id, content="Checked the job logs", author="Dana")


def make_token(username: str = "admin_test", name: str = "Bypass User") -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": username, "name": name, "auth": "bypass"})


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
