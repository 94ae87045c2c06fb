"""알림 레포지토리 — 전달 알림 관련 DB 쿼리 담당.

Notification Repository — Handles delivered-notification database queries.
Extends BaseRepository with role-scoped read/unread operations.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal.models.notification import DeliveredNotification
from portal.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[DeliveredNotification]):
    """전달 알림 레포지토리.

    Delivered notification repository with role-scoped read/unread operations.

    Extends:
        BaseRepository[DeliveredNotification]
    """

    def __init__(self) -> None:
        super().__init__(DeliveredNotification)

    async def get_notifications(
        self,
        db: AsyncSession,
        role: str | None = None,
    ) -> Sequence[DeliveredNotification]:
        """알림 목록을 최신순으로 조회합니다.

        Retrieve delivered notifications newest first, optionally
        restricted to an exact role match.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role: 수신 역할 필터, None이면 전체 (Exact role filter; None returns every role)

        Returns:
            Sequence[DeliveredNotification]: 알림 목록 (Notifications, created_at descending)
        """
        query: Select = select(DeliveredNotification)
        if role is not None:
            query = query.where(DeliveredNotification.role == role)
        query = query.order_by(DeliveredNotification.created_at.desc())

        result = await db.execute(query)
        return result.scalars().all()

    async def get_unread_count(
        self,
        db: AsyncSession,
        role: str,
    ) -> int:
        """역할의 읽지 않은 알림 수를 조회합니다.

        Get the count of unread notifications visible to a role.
        """
        query: Select = (
            select(func.count())
            .select_from(DeliveredNotification)
            .where(
                DeliveredNotification.role == role,
                DeliveredNotification.readed.is_(False),
            )
        )
        count: int = (await db.execute(query)).scalar() or 0
        return count

    async def mark_read(
        self,
        db: AsyncSession,
        notification_id: UUID,
    ) -> bool:
        """단일 알림을 읽음 처리합니다. 이미 읽은 알림이면 변경 없음.

        Mark a single notification as read. Idempotent: an already-read
        notification is left as is and still reported as found.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            notification_id: 알림 UUID (Notification UUID)

        Returns:
            bool: 알림 존재 여부 (Whether the notification exists)
        """
        notification: DeliveredNotification | None = await self.get_by_id(db, notification_id)
        if notification is None:
            return False

        if not notification.readed:
            notification.readed = True
            await db.flush()
        return True

    async def mark_all_read(
        self,
        db: AsyncSession,
        role: str,
    ) -> int:
        """역할의 모든 읽지 않은 알림을 읽음 처리합니다.

        Mark all unread notifications as read for a role.

        Returns:
            int: 업데이트된 알림 수 (Count of updated notifications)
        """
        result = await db.execute(
            update(DeliveredNotification)
            .where(
                DeliveredNotification.role == role,
                DeliveredNotification.readed.is_(False),
            )
            .values(readed=True)
        )
        await db.flush()
        return result.rowcount

    async def create_notification(
        self,
        db: AsyncSession,
        heading: str,
        description: str,
        role: str,
        readed: bool = False,
        avatar: str | None = None,
    ) -> DeliveredNotification:
        """새 전달 알림을 생성합니다.

        Create a new delivered notification.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            heading: 결과 제목 (Outcome label)
            description: 결과 상세 (Outcome detail)
            role: 수신 역할 (Recipient role)
            readed: 읽음 여부, 기본 미읽음 (Read flag, unread by default)
            avatar: 표시 이미지, 선택 (Optional display image)

        Returns:
            DeliveredNotification: 생성된 알림 (Created notification)
        """
        notification: DeliveredNotification = DeliveredNotification(
            heading=heading,
            description=description,
            role=role,
            readed=readed,
            avatar=avatar,
        )
        db.add(notification)
        await db.flush()
        await db.refresh(notification)
        return notification


# 싱글턴 인스턴스 — Singleton instance
notification_repository: NotificationRepository = NotificationRepository()
