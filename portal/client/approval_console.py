"""관리자 승인 콘솔 — 단일 단계 API로 승인/반려를 진행.

Admin approval console — Drives the approval workflow through the
single-step endpoints, one REST call per step, the way the admin dashboard
does. Because the steps are separate requests there is no transaction
around them: when the content status changed but a later step failed, a
PartialFailureError reports exactly which steps completed.

Remark entry is a small local state machine: `disapprove(id)` selects the
record, `submit_remark(text)` is only valid while a record is selected.
"""

import logging

import httpx

from portal.client.errors import NotificationActionError, PartialFailureError, RemarkStateError
from portal.models.notification import PENDING_STATE_REJECTED
from portal.schemas.notification import PendingNotificationResponse

logger = logging.getLogger(__name__)

STEP_STATUS = "update_status"
STEP_REMOVE_PENDING = "remove_pending"
STEP_REMARK = "store_remark"
STEP_NOTIFY = "deliver_notification"


class ApprovalConsole:
    """관리자 승인 콘솔.

    Attributes:
        pending: 로컬 대기 알림 목록 (Local pending list, newest first)
        selected_id: 사유 입력 대기 중인 대기 알림 ID (Record awaiting a remark)
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http: httpx.AsyncClient = http
        self.pending: list[PendingNotificationResponse] = []
        self.selected_id: str | None = None

    def _find(self, pending_id: str) -> PendingNotificationResponse | None:
        return next((p for p in self.pending if p.id == pending_id), None)

    async def load(self) -> list[PendingNotificationResponse]:
        """대기 알림 목록 조회.

        Raises:
            NotificationActionError: 조회 실패 (Fetch failed)
        """
        try:
            response = await self._http.get("/admin-notifications")
            response.raise_for_status()
            self.pending = [PendingNotificationResponse.model_validate(item) for item in response.json()]
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error fetching admin notifications: %s", exc)
            raise NotificationActionError("Failed to fetch notifications. Please try again later.") from exc
        return self.pending

    async def _set_status(self, item: PendingNotificationResponse, flag: int) -> None:
        try:
            response = await self._http.put(
                f"/edit_{item.target_entity_kind}/{item.target_entity_id}", json={"status": flag}
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Error updating status of %s %s: %s", item.target_entity_kind, item.target_entity_id, exc)
            raise NotificationActionError("Failed to update content status") from exc

    async def _deliver(self, heading: str, description: str, role: str) -> None:
        response = await self._http.post(
            "/notification",
            json={"heading": heading, "description": description, "role": role, "readed": 0},
        )
        response.raise_for_status()

    async def approve(self, pending_id: str) -> None:
        """승인 — 상태 변경, 대기 알림 삭제, "Approved" 알림 전달.

        Raises:
            NotificationActionError: 대상이 없거나 첫 단계 실패 (Unknown record or status update failed)
            PartialFailureError: 상태 변경 후 단계 실패 (A step after the status update failed)
        """
        item = self._find(pending_id)
        if item is None:
            raise NotificationActionError("Notification data not found.")

        await self._set_status(item, 1)
        completed: list[str] = [STEP_STATUS]

        step = STEP_REMOVE_PENDING
        try:
            response = await self._http.delete(f"/admin-notifications/{pending_id}")
            response.raise_for_status()
            completed.append(step)
            self.pending = [p for p in self.pending if p.id != pending_id]

            step = STEP_NOTIFY
            await self._deliver("Approved", f"{item.description} has been successfully approved.", item.role)
            completed.append(step)
        except httpx.HTTPError as exc:
            logger.error("Approval of %s stopped at %s: %s", pending_id, step, exc)
            raise PartialFailureError(
                f"Approval of {pending_id} failed at {step}", completed_steps=completed, failed_step=step
            ) from exc

    async def disapprove(self, pending_id: str) -> None:
        """반려 1단계 — 상태를 반려로 바꾸고 사유 입력 대상으로 선택.

        Raises:
            NotificationActionError: 대상이 없거나 상태 변경 실패 (Unknown record or status update failed)
        """
        item = self._find(pending_id)
        if item is None:
            raise NotificationActionError("Notification data not found.")

        await self._set_status(item, 0)
        self.selected_id = pending_id

    def cancel_remark(self) -> None:
        """사유 입력 취소 — Close the remark entry without submitting."""
        self.selected_id = None

    async def submit_remark(self, remark: str) -> None:
        """반려 2단계 — 사유 저장 후 "Rejected" 알림 전달.

        Raises:
            RemarkStateError: 선택된 반려 대상 없음 (No record selected by disapprove)
            PartialFailureError: 사유 저장 또는 알림 전달 실패 (Remark or delivery failed;
                                 the content is already rejected)
        """
        if self.selected_id is None:
            raise RemarkStateError("No disapproved notification is awaiting a remark")
        item = self._find(self.selected_id)
        if item is None:
            self.selected_id = None
            raise RemarkStateError("Notification data not found.")

        completed: list[str] = [STEP_STATUS]
        step = STEP_REMARK
        try:
            response = await self._http.put(f"/admin-notifications/{item.id}", json={"remark": remark})
            response.raise_for_status()
            completed.append(step)

            step = STEP_NOTIFY
            await self._deliver("Rejected", f"{item.description} has been rejected. Remark: {remark}", item.role)
            completed.append(step)
        except httpx.HTTPError as exc:
            logger.error("Rejection of %s stopped at %s: %s", item.id, step, exc)
            raise PartialFailureError(
                f"Rejection of {item.id} failed at {step}", completed_steps=completed, failed_step=step
            ) from exc

        self.pending = [
            p.model_copy(update={"remark": remark, "state": PENDING_STATE_REJECTED}) if p.id == item.id else p for p in self.pending
        ]
        self.selected_id = None
