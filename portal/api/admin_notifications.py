"""관리자 승인 알림 라우터 — 승인 대기 알림 및 승인/반려 API.

Admin Notification Router — Pending decision records and the approval
workflow. Exposes both the single-step endpoints the admin dashboard calls
one at a time and the workflow endpoints that apply a whole decision in
one transaction.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.database import commit_or_rollback, get_db
from portal.schemas.common import CreatedResponse, MessageResponse
from portal.schemas.notification import (
    DecisionResponse,
    PendingNotificationCreate,
    PendingNotificationResponse,
    RemarkUpdate,
)
from portal.services.approval_service import approval_service
from portal.services.notification_service import notification_service

router: APIRouter = APIRouter()


@router.get("/admin-notifications", response_model=list[PendingNotificationResponse])
async def list_admin_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    state: str | None = None,
) -> list[dict]:
    """승인 대기 알림 목록을 최신 제출순으로 조회합니다.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        state: 상태 필터, 선택 (open | awaiting_remark | rejected)

    Returns:
        list[dict]: 대기 알림 목록 (Pending records, newest first)
    """
    pending = await approval_service.list_pending(db, state=state)
    return [approval_service.build_response(p) for p in pending]


@router.post("/admin-notifications", response_model=CreatedResponse)
async def create_admin_notification(
    data: PendingNotificationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """콘텐츠 제출 시 승인 대기 알림을 생성합니다."""
    pending = await approval_service.create_pending(db, data)
    await commit_or_rollback(db)
    return {"message": "Admin notification created successfully", "id": str(pending.id)}


@router.put("/admin-notifications/{pending_id}", response_model=MessageResponse)
async def update_admin_notification_remark(
    pending_id: UUID,
    data: RemarkUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """대기 알림에 반려 사유를 기록합니다 (단일 단계).

    Attach a remark to a pending record whose content was already rejected
    and mark it rejected, without emitting a notification.

    Raises:
        InvalidStateError(409): 콘텐츠가 반려 상태가 아님 (Content not rejected)
    """
    await approval_service.update_remark(db, pending_id, data.remark)
    await commit_or_rollback(db)
    return {"message": "Remark updated successfully"}


@router.delete("/admin-notifications/{pending_id}", response_model=MessageResponse)
async def delete_admin_notification(
    pending_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """대기 알림을 삭제합니다 (단일 단계)."""
    await approval_service.delete_pending(db, pending_id)
    await commit_or_rollback(db)
    return {"message": "Admin notification deleted successfully"}


# ---------------------------------------------------------------------------
# 워크플로우 — Workflow endpoints (one decision per transaction)
# ---------------------------------------------------------------------------

@router.post("/admin-notifications/{pending_id}/approve", response_model=DecisionResponse)
async def approve_admin_notification(
    pending_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """제출 건을 승인합니다.

    Approve: content → approved, pending record deleted, "Approved"
    notification delivered to the record's role.

    Args:
        pending_id: 대기 알림 UUID (Pending record UUID)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        dict: 처리 메시지와 전달 알림 (Message and delivered notification)
    """
    notification = await approval_service.approve(db, pending_id)
    await commit_or_rollback(db)
    return {
        "message": "Notification approved",
        "notification": notification_service.build_response(notification),
        "pending": None,
    }


@router.post("/admin-notifications/{pending_id}/disapprove", response_model=DecisionResponse)
async def disapprove_admin_notification(
    pending_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """반려 1단계 — 콘텐츠를 반려하고 사유 입력 대기 상태로 전환합니다."""
    pending = await approval_service.disapprove(db, pending_id)
    await commit_or_rollback(db)
    return {
        "message": "Notification disapproved, awaiting remark",
        "notification": None,
        "pending": approval_service.build_response(pending),
    }


@router.post("/admin-notifications/{pending_id}/remark", response_model=DecisionResponse)
async def submit_admin_notification_remark(
    pending_id: UUID,
    data: RemarkUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """반려 2단계 — 사유를 저장하고 "Rejected" 알림을 전달합니다.

    Raises:
        InvalidStateError(409): 반려 1단계 없이 호출됨 (No preceding disapprove)
    """
    pending, notification = await approval_service.submit_remark(db, pending_id, data.remark)
    await commit_or_rollback(db)
    return {
        "message": "Remark submitted, rejection delivered",
        "notification": notification_service.build_response(notification),
        "pending": approval_service.build_response(pending),
    }
