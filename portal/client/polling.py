"""알림 폴링 세션 — 역할별 알림 목록을 주기적으로 동기화.

Notification polling session — Keeps a local view of the delivered
notifications for one role converged with the server.

The session owns its timer task explicitly:

    idle ──start(role)──▶ polling ──stop()──▶ idle

Starting fetches once immediately and then every `interval` seconds. Each
fetch replaces the local list wholesale and recomputes the unread count.
Mark-read and delete update the local list first, then call the server;
the next tick reconciles whatever the server actually holds.
"""

import asyncio
import contextlib
import logging
from typing import Sequence

import httpx

from portal.client.errors import NotificationActionError
from portal.config import settings
from portal.schemas.notification import NotificationResponse

logger = logging.getLogger(__name__)

STATE_IDLE = "idle"
STATE_POLLING = "polling"


def count_unread(notifications: Sequence[NotificationResponse]) -> int:
    """읽지 않은 알림 수 — Count notifications whose readed flag is 0."""
    return sum(1 for n in notifications if n.readed == 0)


def select_visible(
    notifications: Sequence[NotificationResponse],
    show_all: bool,
    limit: int,
) -> list[NotificationResponse]:
    """표시 대상 선택 — Top `limit` notifications, or all of them when show_all is set."""
    if show_all:
        return list(notifications)
    return list(notifications[:limit])


class NotificationPollingSession:
    """역할별 알림 폴링 세션.

    One session per signed-in client. Not thread-safe; meant to be driven
    from a single event loop.

    Attributes:
        role: 현재 역할 (Role being polled, None when idle)
        notifications: 로컬 알림 목록 (Local copy, newest first)
        unread_count: 미읽음 수 (Unread count derived from the local copy)
        show_all: 전체 표시 여부 (Whether every notification is visible)
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        interval: float | None = None,
        display_limit: int | None = None,
    ) -> None:
        self._http: httpx.AsyncClient = http
        self.interval: float = interval if interval is not None else settings.NOTIFICATION_POLL_INTERVAL_SECONDS
        self.display_limit: int = display_limit if display_limit is not None else settings.NOTIFICATION_DISPLAY_LIMIT

        self.role: str | None = None
        self.notifications: list[NotificationResponse] = []
        self.unread_count: int = 0
        self.show_all: bool = False

        self._task: asyncio.Task | None = None
        # 요청 중인 역할 (Role whose fetch is in flight, None when idle)
        self._fetching_role: str | None = None

    async def __aenter__(self) -> "NotificationPollingSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    @property
    def state(self) -> str:
        return STATE_POLLING if self._task is not None else STATE_IDLE

    @property
    def visible(self) -> list[NotificationResponse]:
        return select_visible(self.notifications, self.show_all, self.display_limit)

    def toggle_show_all(self) -> bool:
        """상위 N개/전체 표시 전환 — Flip between top-N and all; the fetched list is untouched."""
        self.show_all = not self.show_all
        return self.show_all

    # --- 상태 전이 (Transitions) ---

    async def set_role(self, role: str | None) -> None:
        """역할 변경 — A known role starts polling, None (e.g. logout) stops it."""
        if role:
            await self.start(role)
        else:
            await self.stop()

    async def start(self, role: str) -> None:
        """폴링 시작 — Fetch once now, then schedule a fetch every interval.

        Starting with the role already being polled is a no-op; a different
        role restarts the session.
        """
        if self._task is not None and self.role == role:
            return
        await self.stop()

        self.role = role
        await self.refresh()
        self._task = asyncio.create_task(self._run(), name=f"notification-poll-{role}")
        logger.info("Notification polling started for role %s every %.1fs", role, self.interval)

    async def stop(self) -> None:
        """폴링 중지 — Cancel future ticks and clear the local view.

        A fetch already in flight is left to finish; its result is discarded
        because the role no longer matches.
        """
        task, self._task = self._task, None
        role, self.role = self.role, None
        self.notifications = []
        self.unread_count = 0
        self.show_all = False
        if task is None:
            return

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Notification polling stopped for role %s", role)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            # shield: 중지가 진행 중인 요청을 취소하지 않음 (stop() never cancels a request mid-flight)
            await asyncio.shield(self.refresh())

    # --- 동기화 (Sync) ---

    async def refresh(self) -> bool:
        """알림 목록을 다시 가져와 로컬 목록을 교체합니다.

        Fetch the role's notifications and replace the local list. A tick
        that fires while a fetch is still outstanding is skipped. Failures
        are logged and ignored; the local list stays as it was.

        Returns:
            bool: 로컬 목록 교체 여부 (Whether the local list was replaced)
        """
        role: str | None = self.role
        if role is None:
            return False
        if self._fetching_role == role:
            logger.debug("Skipping poll tick for role %s: fetch still in flight", role)
            return False

        self._fetching_role = role
        try:
            response = await self._http.get("/notification", params={"role": role})
            response.raise_for_status()
            fetched = [NotificationResponse.model_validate(item) for item in response.json()]
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Error fetching notifications for role %s: %s", role, exc)
            return False
        finally:
            if self._fetching_role == role:
                self._fetching_role = None

        # 요청 중 역할이 바뀌었으면 결과 폐기 (Role changed while the request was in flight)
        if self.role != role:
            return False

        self.notifications = [n for n in fetched if n.role == role]
        self.unread_count = count_unread(self.notifications)
        return True

    # --- 사용자 작업 (User actions) ---

    async def mark_read(self, notification_id: str) -> None:
        """알림 읽음 처리 — 로컬 먼저 반영 후 서버 호출.

        Mark a notification read locally, then on the server.

        Raises:
            NotificationActionError: 서버 호출 실패 (Server call failed)
        """
        self.notifications = [
            n.model_copy(update={"readed": 1}) if n.id == notification_id else n
            for n in self.notifications
        ]
        self.unread_count = count_unread(self.notifications)

        try:
            response = await self._http.put(f"/update/{notification_id}", json={"readed": 1})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Error updating notification status %s: %s", notification_id, exc)
            raise NotificationActionError("Failed to mark notification as read") from exc

    async def delete(self, notification_id: str) -> None:
        """알림 삭제 — 로컬 먼저 제거 후 서버 호출, 성공 시 재조회.

        Remove a notification locally, delete it on the server, then refetch.

        Raises:
            NotificationActionError: 서버 호출 실패 (Server call failed)
        """
        self.notifications = [n for n in self.notifications if n.id != notification_id]
        self.unread_count = count_unread(self.notifications)

        try:
            response = await self._http.delete(f"/notification/{notification_id}")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Error deleting notification %s: %s", notification_id, exc)
            raise NotificationActionError("Failed to delete notification") from exc

        await self.refresh()
