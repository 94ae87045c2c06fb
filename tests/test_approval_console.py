"""관리자 승인 콘솔 테스트.

Approval console tests — the step-by-step dashboard flow against the real
API, and partial failures injected through httpx.MockTransport.
"""

import uuid

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.client.approval_console import (
    STEP_NOTIFY,
    STEP_REMARK,
    STEP_REMOVE_PENDING,
    STEP_STATUS,
    ApprovalConsole,
)
from portal.client.errors import NotificationActionError, PartialFailureError, RemarkStateError
from portal.models.notification import DeliveredNotification, PendingNotification
from tests.conftest import make_pending


async def _delivered(db: AsyncSession) -> list[DeliveredNotification]:
    result = await db.execute(select(DeliveredNotification))
    return list(result.scalars().all())


class TestConsoleAgainstApi:
    """실제 API를 통한 승인/반려 흐름 테스트."""

    async def test_approve(self, client: AsyncClient, db: AsyncSession, year_entry):
        pending = await make_pending(db, year_entry, "generaladminaddyear", "finance", "Budget Q1")

        console = ApprovalConsole(client)
        await console.load()
        await console.approve(str(pending.id))

        assert console.pending == []
        await db.refresh(year_entry)
        assert year_entry.status == "approved"

        delivered = await _delivered(db)
        assert [(n.heading, n.role, n.readed) for n in delivered] == [("Approved", "finance", False)]
        assert delivered[0].description == "Budget Q1 has been successfully approved."

    async def test_disapprove_and_remark(self, client: AsyncClient, db: AsyncSession, news_item):
        pending = await make_pending(db, news_item, "newsupdate", "hr", "Tax news")

        console = ApprovalConsole(client)
        await console.load()
        await console.disapprove(str(pending.id))
        assert console.selected_id == str(pending.id)

        await db.refresh(news_item)
        assert news_item.status == "rejected"
        assert await _delivered(db) == []

        await console.submit_remark("Missing signature")
        assert console.selected_id is None
        assert console.pending[0].remark == "Missing signature"
        assert console.pending[0].state == "rejected"

        # 서버 측 상태도 워크플로우 API와 동일 (Server record ends in the same state as the workflow path)
        stored = await db.get(PendingNotification, pending.id, populate_existing=True)
        assert stored.state == "rejected"
        assert stored.remark == "Missing signature"

        delivered = await _delivered(db)
        assert len(delivered) == 1
        assert delivered[0].heading == "Rejected"
        assert delivered[0].role == "hr"
        assert "Missing signature" in delivered[0].description

    async def test_remark_without_selection(self, client: AsyncClient, db: AsyncSession, news_item):
        await make_pending(db, news_item, "newsupdate", "hr", "Tax news")

        console = ApprovalConsole(client)
        await console.load()
        with pytest.raises(RemarkStateError):
            await console.submit_remark("Missing signature")
        assert await _delivered(db) == []

    async def test_cancel_remark_clears_selection(self, client: AsyncClient, db: AsyncSession, news_item):
        pending = await make_pending(db, news_item, "newsupdate", "hr", "Tax news")

        console = ApprovalConsole(client)
        await console.load()
        await console.disapprove(str(pending.id))
        console.cancel_remark()

        with pytest.raises(RemarkStateError):
            await console.submit_remark("Missing signature")

    async def test_approve_unknown_record(self, client: AsyncClient):
        console = ApprovalConsole(client)
        await console.load()
        with pytest.raises(NotificationActionError):
            await console.approve(str(uuid.uuid4()))

    async def test_approve_missing_target_changes_nothing(self, client: AsyncClient, db: AsyncSession, year_entry):
        """첫 단계(상태 변경) 실패 시 부분 실패가 아닌 일반 실패."""
        pending = await make_pending(db, year_entry, "generaladminaddyear", "finance", "Budget Q1")
        console = ApprovalConsole(client)
        await console.load()

        await db.delete(year_entry)
        await db.flush()

        with pytest.raises(NotificationActionError) as exc_info:
            await console.approve(str(pending.id))
        assert not isinstance(exc_info.value, PartialFailureError)
        assert len(console.pending) == 1


class TestPartialFailure:
    """단계별 REST 호출의 부분 실패 보고 테스트."""

    PENDING = {
        "id": str(uuid.uuid4()),
        "target_entity_id": str(uuid.uuid4()),
        "target_entity_kind": "newsupdate",
        "role": "hr",
        "description": "Tax news",
        "date": "2026-01-15",
        "time": "09:00:00",
        "remark": None,
        "state": "open",
    }

    def _console(self, failing: tuple[str, str]) -> ApprovalConsole:
        def handler(request: httpx.Request) -> httpx.Response:
            if (request.method, request.url.path) == failing:
                return httpx.Response(500, json={"detail": "Database error"})
            if request.method == "GET":
                return httpx.Response(200, json=[self.PENDING])
            return httpx.Response(200, json={"message": "ok"})

        http = AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
        return ApprovalConsole(http)

    async def test_approve_notify_step_fails(self):
        console = self._console(("POST", "/notification"))
        await console.load()

        with pytest.raises(PartialFailureError) as exc_info:
            await console.approve(self.PENDING["id"])

        assert exc_info.value.completed_steps == [STEP_STATUS, STEP_REMOVE_PENDING]
        assert exc_info.value.failed_step == STEP_NOTIFY
        assert console.pending == []

    async def test_approve_remove_step_fails(self):
        console = self._console(("DELETE", f"/admin-notifications/{self.PENDING['id']}"))
        await console.load()

        with pytest.raises(PartialFailureError) as exc_info:
            await console.approve(self.PENDING["id"])

        assert exc_info.value.completed_steps == [STEP_STATUS]
        assert exc_info.value.failed_step == STEP_REMOVE_PENDING
        assert len(console.pending) == 1

    async def test_remark_step_fails(self):
        console = self._console(("PUT", f"/admin-notifications/{self.PENDING['id']}"))
        await console.load()
        await console.disapprove(self.PENDING["id"])

        with pytest.raises(PartialFailureError) as exc_info:
            await console.submit_remark("Missing signature")

        assert exc_info.value.completed_steps == [STEP_STATUS]
        assert exc_info.value.failed_step == STEP_REMARK
        # 선택 유지 — 재시도 가능 (Selection kept so the remark can be retried)
        assert console.selected_id == self.PENDING["id"]

    async def test_status_step_fails_is_not_partial(self):
        path = f"/edit_newsupdate/{self.PENDING['target_entity_id']}"
        console = self._console(("PUT", path))
        await console.load()

        with pytest.raises(NotificationActionError) as exc_info:
            await console.disapprove(self.PENDING["id"])
        assert not isinstance(exc_info.value, PartialFailureError)
        assert console.selected_id is None

    async def test_load_failure(self):
        console = self._console(("GET", "/admin-notifications"))
        with pytest.raises(NotificationActionError):
            await console.load()
