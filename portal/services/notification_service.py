"""알림 서비스 — 전달 알림 및 읽음 상태 비즈니스 로직.

Notification Service — Delivery and read-state tracking for role-scoped
notifications. Handles role filtering, unread counts, mark-read,
and deletion.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from portal.models.notification import DeliveredNotification
from portal.repositories.notification_repository import notification_repository
from portal.schemas.notification import NotificationCreate
from portal.utils.exceptions import NotFoundError


class NotificationService:
    """알림 서비스.

    Delivered notification service. Visibility is an exact role match:
    no hierarchy, no wildcard.
    """

    # --- 조회 (Queries) ---

    async def list_notifications(
        self,
        db: AsyncSession,
    ) -> Sequence[DeliveredNotification]:
        """모든 역할의 알림을 최신순으로 조회합니다.

        List every delivered notification newest first, regardless of role.
        """
        return await notification_repository.get_notifications(db)

    async def fetch_for_role(
        self,
        db: AsyncSession,
        role: str,
    ) -> Sequence[DeliveredNotification]:
        """역할에 보이는 알림만 최신순으로 조회합니다.

        Fetch the notifications visible to `role`, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role: 수신 역할 (Recipient role, exact match)

        Returns:
            Sequence[DeliveredNotification]: 알림 목록 (Visible notifications)
        """
        return await notification_repository.get_notifications(db, role)

    async def get_unread_count(
        self,
        db: AsyncSession,
        role: str,
    ) -> int:
        """역할의 읽지 않은 알림 수를 조회합니다."""
        return await notification_repository.get_unread_count(db, role)

    # --- 읽음/삭제 (Read state and deletion) ---

    async def mark_read(
        self,
        db: AsyncSession,
        notification_id: UUID,
    ) -> None:
        """단일 알림을 읽음 처리합니다. 두 번 호출해도 결과는 같습니다.

        Mark a single notification as read. Idempotent.

        Raises:
            NotFoundError: 알림이 없음 (Notification not found)
        """
        found: bool = await notification_repository.mark_read(db, notification_id)
        if not found:
            raise NotFoundError("알림을 찾을 수 없습니다 (Notification not found)")

    async def mark_all_read(
        self,
        db: AsyncSession,
        role: str,
    ) -> int:
        """역할의 모든 읽지 않은 알림을 읽음 처리합니다.

        Returns:
            int: 읽음 처리된 알림 수 (Count of notifications marked as read)
        """
        return await notification_repository.mark_all_read(db, role)

    async def delete_notification(
        self,
        db: AsyncSession,
        notification_id: UUID,
    ) -> None:
        """알림을 영구 삭제합니다.

        Raises:
            NotFoundError: 알림이 없음 (Notification not found)
        """
        deleted: bool = await notification_repository.delete(db, notification_id)
        if not deleted:
            raise NotFoundError("알림을 찾을 수 없습니다 (Notification not found)")

    # --- 생성 (Creation) ---

    async def create_notification(
        self,
        db: AsyncSession,
        data: NotificationCreate,
    ) -> DeliveredNotification:
        """전달 알림을 생성합니다.

        Create a delivered notification from a request body.
        """
        return await notification_repository.create_notification(
            db,
            heading=data.heading,
            description=data.description,
            role=data.role,
            readed=bool(data.readed),
            avatar=data.avatar,
        )

    @staticmethod
    def build_response(notification: DeliveredNotification) -> dict:
        """알림 ORM 객체를 응답 딕셔너리로 변환합니다.

        Serialize a delivered notification; `readed` becomes 0/1.
        """
        return {
            "id": str(notification.id),
            "heading": notification.heading,
            "description": notification.description,
            "role": notification.role,
            "readed": 1 if notification.readed else 0,
            "avatar": notification.avatar,
            "created_at": notification.created_at,
        }


# 싱글턴 인스턴스 — Singleton instance
notification_service: NotificationService = NotificationService()
