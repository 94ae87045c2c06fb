"""알림 폴링 세션 테스트.

Notification polling session tests — reconciliation against the real API
through ASGITransport, plus failure and timing cases through
httpx.MockTransport.
"""

import asyncio
import uuid

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from portal.client.errors import NotificationActionError
from portal.client.polling import NotificationPollingSession, select_visible
from tests.conftest import make_notification

# 틱이 돌지 않도록 충분히 긴 주기 (Long enough that no tick fires during a test)
IDLE_INTERVAL = 60.0


def _payload(role: str, description: str, readed: int = 0) -> dict:
    return {
        "id": str(uuid.uuid4()),
        "heading": "Approved",
        "description": description,
        "role": role,
        "readed": readed,
        "avatar": None,
        "created_at": "2026-01-15T09:00:00+00:00",
    }


def _mock_client(handler) -> AsyncClient:
    return AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")


class TestReconcileWithServer:
    """서버 상태와의 동기화 테스트."""

    async def test_mark_read_then_refresh(self, client: AsyncClient, db: AsyncSession):
        """admin 미읽음 2건 → 읽음 1건 → 재조회 시 2건 모두 존재, 미읽음 1."""
        first = await make_notification(db, role="admin", description="first", minutes=1)
        await make_notification(db, role="admin", description="second", minutes=2)

        async with NotificationPollingSession(client, interval=IDLE_INTERVAL) as session:
            await session.start("admin")
            assert session.state == "polling"
            assert session.unread_count == 2

            await session.mark_read(str(first.id))
            assert session.unread_count == 1

            assert await session.refresh() is True
            assert len(session.notifications) == 2
            assert session.unread_count == 1

        assert session.state == "idle"

    async def test_only_own_role_is_shown(self, client: AsyncClient, db: AsyncSession):
        await make_notification(db, role="admin", description="admin one")
        await make_notification(db, role="finance", description="finance one")

        async with NotificationPollingSession(client, interval=IDLE_INTERVAL) as session:
            await session.start("finance")
            assert [n.description for n in session.notifications] == ["finance one"]

    async def test_delete_removes_and_refetches(self, client: AsyncClient, db: AsyncSession):
        target = await make_notification(db, role="admin", description="first", minutes=1)
        await make_notification(db, role="admin", description="second", minutes=2)

        async with NotificationPollingSession(client, interval=IDLE_INTERVAL) as session:
            await session.start("admin")
            await session.delete(str(target.id))

            assert [n.description for n in session.notifications] == ["second"]
            assert session.unread_count == 1


class TestDisplayPolicy:
    """상위 N개/전체 표시 테스트."""

    async def test_top_five_of_seven_and_toggle(self, client: AsyncClient, db: AsyncSession):
        for i in range(7):
            await make_notification(db, role="hr", description=f"n{i}", minutes=i)

        async with NotificationPollingSession(client, interval=IDLE_INTERVAL, display_limit=5) as session:
            await session.start("hr")
            assert [n.description for n in session.visible] == ["n6", "n5", "n4", "n3", "n2"]
            # 미읽음 수는 표시 개수와 무관 (Unread count covers the whole list)
            assert session.unread_count == 7

            assert session.toggle_show_all() is True
            assert len(session.visible) == 7
            assert session.toggle_show_all() is False
            assert len(session.visible) == 5

    def test_select_visible_short_list(self):
        assert select_visible([], show_all=False, limit=5) == []


class TestFailures:
    """조회/작업 실패 처리 테스트."""

    async def test_fetch_failure_keeps_local_list(self):
        calls = {"fail": False}
        items = [_payload("admin", "first")]

        def handler(request: httpx.Request) -> httpx.Response:
            if calls["fail"]:
                return httpx.Response(500, json={"detail": "Database error"})
            return httpx.Response(200, json=items)

        async with _mock_client(handler) as http:
            async with NotificationPollingSession(http, interval=IDLE_INTERVAL) as session:
                await session.start("admin")
                calls["fail"] = True

                assert await session.refresh() is False
                assert [n.description for n in session.notifications] == ["first"]
                assert session.unread_count == 1

    async def test_network_error_is_swallowed_by_poll(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _mock_client(handler) as http:
            async with NotificationPollingSession(http, interval=IDLE_INTERVAL) as session:
                await session.start("admin")
                assert session.state == "polling"
                assert session.notifications == []

    async def test_mark_read_failure_raises(self):
        items = [_payload("admin", "first")]

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "PUT":
                return httpx.Response(500, json={"detail": "Database error"})
            return httpx.Response(200, json=items)

        async with _mock_client(handler) as http:
            async with NotificationPollingSession(http, interval=IDLE_INTERVAL) as session:
                await session.start("admin")
                with pytest.raises(NotificationActionError):
                    await session.mark_read(items[0]["id"])
                # 로컬 반영은 유지, 다음 조회에서 서버 상태로 복원
                assert session.unread_count == 0

                await session.refresh()
                assert session.unread_count == 1


class TestTiming:
    """폴링 주기 및 동시성 테스트."""

    async def test_tick_replaces_list(self):
        items: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=items)

        async with _mock_client(handler) as http:
            async with NotificationPollingSession(http, interval=0.01) as session:
                await session.start("admin")
                assert session.notifications == []

                items.append(_payload("admin", "arrived later"))
                for _ in range(100):
                    if session.notifications:
                        break
                    await asyncio.sleep(0.01)

                assert [n.description for n in session.notifications] == ["arrived later"]

    async def test_tick_skipped_while_fetch_in_flight(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[])

        async with _mock_client(handler) as http:
            session = NotificationPollingSession(http, interval=IDLE_INTERVAL)
            session.role = "admin"
            session._fetching_role = "admin"

            assert await session.refresh() is False
            assert requests == []

    async def test_result_discarded_when_role_changes_mid_flight(self):
        session: NotificationPollingSession

        def handler(request: httpx.Request) -> httpx.Response:
            session.role = "hr"
            return httpx.Response(200, json=[_payload("admin", "stale")])

        async with _mock_client(handler) as http:
            session = NotificationPollingSession(http, interval=IDLE_INTERVAL)
            session.role = "admin"

            assert await session.refresh() is False
            assert session.notifications == []

    async def test_start_same_role_is_noop(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[])

        async with _mock_client(handler) as http:
            async with NotificationPollingSession(http, interval=IDLE_INTERVAL) as session:
                await session.start("admin")
                await session.start("admin")
                assert len(requests) == 1

                await session.start("hr")
                assert len(requests) == 2
                assert requests[-1].url.params["role"] == "hr"

    async def test_clearing_role_stops_polling(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[])

        async with _mock_client(handler) as http:
            session = NotificationPollingSession(http, interval=IDLE_INTERVAL)
            await session.set_role("admin")
            assert session.state == "polling"

            await session.set_role(None)
            assert session.state == "idle"
            assert session.role is None
            assert await session.refresh() is False


class TestRoleChange:
    """역할 변경/로그아웃 시 로컬 목록 초기화 테스트."""

    async def test_switch_with_failed_fetch_shows_nothing_of_old_role(self):
        """새 역할의 첫 조회가 실패해도 이전 역할의 알림은 남지 않음."""
        calls = {"fail": False}

        def handler(request: httpx.Request) -> httpx.Response:
            if calls["fail"]:
                return httpx.Response(500, json={"detail": "Database error"})
            return httpx.Response(200, json=[_payload("admin", "admin only")])

        async with _mock_client(handler) as http:
            async with NotificationPollingSession(http, interval=IDLE_INTERVAL) as session:
                await session.start("admin")
                session.toggle_show_all()
                assert session.unread_count == 1

                calls["fail"] = True
                await session.set_role("finance")

                assert session.role == "finance"
                assert session.notifications == []
                assert session.unread_count == 0
                assert session.show_all is False

    async def test_logout_clears_local_view(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[_payload("admin", "admin only")])

        async with _mock_client(handler) as http:
            session = NotificationPollingSession(http, interval=IDLE_INTERVAL)
            await session.start("admin")
            assert len(session.notifications) == 1

            await session.set_role(None)
            assert session.state == "idle"
            assert session.notifications == []
            assert session.unread_count == 0
            assert session.visible == []

    async def test_switch_during_in_flight_fetch(self):
        """이전 역할의 요청이 진행 중이어도 새 역할은 즉시 조회되고, 이전 결과는 폐기됨."""
        admin_started = asyncio.Event()
        release_admin = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            role = request.url.params["role"]
            if role == "admin":
                admin_started.set()
                await release_admin.wait()
                return httpx.Response(200, json=[_payload("admin", "admin only")])
            return httpx.Response(200, json=[_payload("finance", "finance only")])

        async with _mock_client(handler) as http:
            async with NotificationPollingSession(http, interval=IDLE_INTERVAL) as session:
                session.role = "admin"
                in_flight = asyncio.create_task(session.refresh())
                await admin_started.wait()

                await session.start("finance")
                assert [n.description for n in session.notifications] == ["finance only"]

                release_admin.set()
                assert await in_flight is False
                assert [n.role for n in session.notifications] == ["finance"]
