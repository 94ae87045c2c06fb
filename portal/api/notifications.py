"""전달 알림 라우터 — 역할별 알림 조회 및 읽음/삭제 API.

Delivered Notification Router — Endpoints polled by the dashboard header:
list, unread count, create, mark read, and delete.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.database import commit_or_rollback, get_db
from portal.schemas.common import CreatedResponse, MessageResponse
from portal.schemas.notification import (
    NotificationCreate,
    NotificationReadUpdate,
    NotificationResponse,
    UnreadCountResponse,
)
from portal.services.notification_service import notification_service

router: APIRouter = APIRouter()


@router.get("/notification", response_model=list[NotificationResponse])
async def list_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    role: str | None = None,
) -> list[dict]:
    """전달 알림 목록을 최신순으로 조회합니다.

    List delivered notifications newest first. Without `role` every
    notification is returned and the caller filters by its own role.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        role: 수신 역할 필터, 선택 (Optional exact role filter)

    Returns:
        list[dict]: 알림 목록 (Notification list)
    """
    if role is None:
        notifications = await notification_service.list_notifications(db)
    else:
        notifications = await notification_service.fetch_for_role(db, role)
    return [notification_service.build_response(n) for n in notifications]


@router.get("/notification/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    role: str,
) -> dict:
    """역할의 읽지 않은 알림 수를 조회합니다."""
    count: int = await notification_service.get_unread_count(db, role=role)
    return {"role": role, "unread_count": count}


@router.post("/notification", response_model=CreatedResponse)
async def create_notification(
    data: NotificationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """전달 알림을 생성합니다.

    Create a delivered notification.

    Args:
        data: 알림 생성 요청 (heading, description, role, readed)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        dict: 처리 메시지와 생성된 ID (Message and created id)
    """
    notification = await notification_service.create_notification(db, data)
    await commit_or_rollback(db)
    return {"message": "Notification created successfully", "id": str(notification.id)}


@router.put("/notification/read-all", response_model=MessageResponse)
async def mark_all_read(
    db: Annotated[AsyncSession, Depends(get_db)],
    role: str,
) -> dict:
    """역할의 모든 읽지 않은 알림을 읽음 처리합니다."""
    count: int = await notification_service.mark_all_read(db, role=role)
    await commit_or_rollback(db)
    return {"message": f"{count} notifications marked as read"}


@router.put("/update/{notification_id}", response_model=MessageResponse)
async def mark_read(
    notification_id: UUID,
    data: NotificationReadUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """단일 알림을 읽음 처리합니다 (`{readed: 1}`).

    Mark a single notification as read. Repeating the call is harmless.

    Args:
        notification_id: 알림 UUID (Notification UUID)
        data: 읽음 처리 요청 본문 (Request body, readed must be 1)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        dict: 처리 결과 메시지 (Result message)
    """
    await notification_service.mark_read(db, notification_id)
    await commit_or_rollback(db)
    return {"message": "Notification marked as read"}


@router.delete("/notification/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """전달 알림을 삭제합니다."""
    await notification_service.delete_notification(db, notification_id)
    await commit_or_rollback(db)
    return {"message": "Notification deleted successfully"}
