"""승인 대기 알림 레포지토리.

Admin notification repository — Queries over pending decision records.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from portal.models.notification import PendingNotification
from portal.repositories.base import BaseRepository


class AdminNotificationRepository(BaseRepository[PendingNotification]):
    """승인 대기 알림 레포지토리.

    Extends:
        BaseRepository[PendingNotification]
    """

    def __init__(self) -> None:
        super().__init__(PendingNotification)

    async def get_pending(
        self,
        db: AsyncSession,
        state: str | None = None,
    ) -> Sequence[PendingNotification]:
        """승인 대기 알림을 최신 제출순으로 조회합니다.

        List pending records newest submission first (date, then time, descending).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            state: 상태 필터, 선택 (Optional state filter)

        Returns:
            Sequence[PendingNotification]: 대기 알림 목록 (Pending records)
        """
        return await self.get_all(
            db,
            filters={"state": state},
            order_by=(PendingNotification.date.desc(), PendingNotification.time.desc()),
        )


# 싱글턴 인스턴스 — Singleton instance
admin_notification_repository: AdminNotificationRepository = AdminNotificationRepository()
