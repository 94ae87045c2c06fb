"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite (aiosqlite) database, session, and
httpx client fixtures. Each test gets a fresh schema.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from portal.database import Base, get_db
from portal.main import app
from portal.models import *  # noqa: F401,F403 — register all models with metadata
from portal.models.content import GeneralAdminYear, NewsUpdate
from portal.models.notification import DeliveredNotification, PendingNotification

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite+aiosqlite://"

# 기준 시각 — 알림 created_at 순서를 고정하기 위한 기준 (Fixed base time for deterministic ordering)
BASE_TIME = datetime(2026, 1, 15, 9, 0, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 만듭니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
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
async def make_notification(
    db: AsyncSession,
    role: str,
    heading: str = "Approved",
    description: str = "Entry has been successfully approved.",
    readed: bool = False,
    minutes: int = 0,
) -> DeliveredNotification:
    """전달 알림을 생성합니다. minutes가 클수록 최신."""
    n = DeliveredNotification(
        heading=heading,
        description=description,
        role=role,
        readed=readed,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db.add(n)
    await db.flush()
    await db.refresh(n)
    return n


async def make_pending(
    db: AsyncSession,
    entity,
    kind: str,
    role: str,
    description: str,
    date: str = "2026-01-15",
    time: str = "09:00:00",
    state: str = "open",
) -> PendingNotification:
    """승인 대기 알림을 생성합니다."""
    p = PendingNotification(
        target_entity_id=entity.id,
        target_entity_kind=kind,
        role=role,
        description=description,
        date=date,
        time=time,
        state=state,
    )
    db.add(p)
    await db.flush()
    await db.refresh(p)
    return p


@pytest_asyncio.fixture
async def year_entry(db: AsyncSession) -> GeneralAdminYear:
    """승인 대기 중인 부서 연도 항목을 생성합니다."""
    entry = GeneralAdminYear(
        department_id="7",
        department_heading="Finance Department",
        year="2025-26",
        meetingtype="General Body",
        pdfheading="Budget Q1",
        pdf="uploads/budget-q1.pdf",
    )
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    return entry


@pytest_asyncio.fixture
async def news_item(db: AsyncSession) -> NewsUpdate:
    """승인 대기 중인 뉴스 항목을 생성합니다."""
    item = NewsUpdate(description="Property tax deadline extended")
    db.add(item)
    await db.flush()
    await db.refresh(item)
    return item
