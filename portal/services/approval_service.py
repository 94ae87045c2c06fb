"""승인 워크플로우 서비스 — 제출 콘텐츠의 승인/반려 처리.

Approval Workflow Service — Applies approve/disapprove decisions to pending
records, transitions the referenced content status, and emits the
role-scoped delivered notification describing the outcome.

Pending record state machine:
    open ──disapprove──▶ awaiting_remark ──submit_remark──▶ rejected
    (any state) ──approve──▶ deleted

All writes belonging to one decision share the request session and are
committed together by the router, so the status change and the delivered
notification land atomically.
"""

import logging
from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.models.content import STATUS_APPROVED, STATUS_REJECTED
from portal.models.notification import (
    DeliveredNotification,
    PendingNotification,
    PENDING_STATE_AWAITING_REMARK,
    PENDING_STATE_OPEN,
    PENDING_STATE_REJECTED,
    PENDING_STATES,
)
from portal.repositories.admin_notification_repository import admin_notification_repository
from portal.repositories.notification_repository import notification_repository
from portal.schemas.notification import PendingNotificationCreate
from portal.services.content_service import content_service
from portal.utils.exceptions import BadRequestError, InvalidStateError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

HEADING_APPROVED = "Approved"
HEADING_REJECTED = "Rejected"


class ApprovalService:
    """승인 워크플로우 서비스.

    Approval workflow engine. Concurrent approve/disapprove calls on the
    same record are not serialized against each other; the last write to
    the content status wins.
    """

    # --- 조회/생성 (Listing and submission) ---

    async def list_pending(
        self,
        db: AsyncSession,
        state: str | None = None,
    ) -> Sequence[PendingNotification]:
        """승인 대기 알림을 최신 제출순으로 조회합니다.

        List pending records newest first, optionally filtered by state.

        Raises:
            BadRequestError: 알 수 없는 상태 필터 (Unknown state filter)
        """
        if state is not None and state not in PENDING_STATES:
            raise BadRequestError(f"알 수 없는 상태입니다 (Unknown state: {state})")
        return await admin_notification_repository.get_pending(db, state)

    async def get_pending(
        self,
        db: AsyncSession,
        pending_id: UUID,
    ) -> PendingNotification:
        """승인 대기 알림을 조회합니다.

        Raises:
            NotFoundError: 대기 알림이 없음 (Pending record not found)
        """
        pending: PendingNotification | None = await admin_notification_repository.get_by_id(db, pending_id)
        if pending is None:
            raise NotFoundError("승인 대기 알림을 찾을 수 없습니다 (Pending notification not found)")
        return pending

    async def create_pending(
        self,
        db: AsyncSession,
        data: PendingNotificationCreate,
    ) -> PendingNotification:
        """콘텐츠 제출 시 승인 대기 알림을 생성합니다.

        Create the pending record for a submitted entity. Date and time
        default to the current local clock.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 제출 정보 (Submission details)

        Returns:
            PendingNotification: 생성된 대기 알림 (Created pending record)

        Raises:
            BadRequestError: 잘못된 엔티티 UUID (Malformed entity id)
            NotFoundError: 알 수 없는 엔티티 유형 (Unknown entity kind)
        """
        try:
            target_entity_id: UUID = UUID(data.target_entity_id)
        except ValueError:
            raise BadRequestError("잘못된 엔티티 ID입니다 (Invalid target entity id)")

        # 유형 검증 — Reject kinds the registry does not know
        content_service.get_repository(data.target_entity_kind)

        now: datetime = datetime.now()
        return await admin_notification_repository.create(
            db,
            {
                "target_entity_id": target_entity_id,
                "target_entity_kind": data.target_entity_kind,
                "role": data.role,
                "description": data.description,
                "date": data.date or now.strftime("%Y-%m-%d"),
                "time": data.time or now.strftime("%H:%M:%S"),
                "state": PENDING_STATE_OPEN,
            },
        )

    # --- 결정 (Decisions) ---

    async def approve(
        self,
        db: AsyncSession,
        pending_id: UUID,
    ) -> DeliveredNotification:
        """제출 건을 승인합니다.

        Approve a submission: set the content status to approved, delete the
        pending record, and deliver an unread "Approved" notification to the
        pending record's role.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            pending_id: 대기 알림 UUID (Pending record UUID)

        Returns:
            DeliveredNotification: 생성된 전달 알림 (Emitted notification)

        Raises:
            NotFoundError: 대기 알림 또는 대상 콘텐츠가 없음 (Pending record or target missing)
            PersistenceError: 저장 실패 (Store failure)
        """
        pending: PendingNotification = await self.get_pending(db, pending_id)
        role: str = pending.role
        description: str = pending.description

        try:
            await content_service.set_status(
                db, pending.target_entity_kind, pending.target_entity_id, STATUS_APPROVED
            )
            await admin_notification_repository.delete(db, pending.id)
            notification: DeliveredNotification = await notification_repository.create_notification(
                db,
                heading=HEADING_APPROVED,
                description=f"{description} has been successfully approved.",
                role=role,
            )
        except SQLAlchemyError as exc:
            logger.error("Approval of %s failed: %s", pending_id, exc)
            raise PersistenceError() from exc

        logger.info("Approved pending notification %s for role %s", pending_id, role)
        return notification

    async def disapprove(
        self,
        db: AsyncSession,
        pending_id: UUID,
    ) -> PendingNotification:
        """반려 1단계 — 콘텐츠를 반려 상태로 바꾸고 사유 입력을 기다립니다.

        First phase of a disapproval: set the content status to rejected and
        move the pending record to "awaiting_remark". Nothing is delivered
        until the remark is submitted.

        Raises:
            NotFoundError: 대기 알림 또는 대상 콘텐츠가 없음 (Pending record or target missing)
            PersistenceError: 저장 실패 (Store failure)
        """
        pending: PendingNotification = await self.get_pending(db, pending_id)

        try:
            await content_service.set_status(
                db, pending.target_entity_kind, pending.target_entity_id, STATUS_REJECTED
            )
            pending.state = PENDING_STATE_AWAITING_REMARK
            await db.flush()
            await db.refresh(pending)
        except SQLAlchemyError as exc:
            logger.error("Disapproval of %s failed: %s", pending_id, exc)
            raise PersistenceError() from exc

        logger.info("Disapproved pending notification %s, awaiting remark", pending_id)
        return pending

    async def submit_remark(
        self,
        db: AsyncSession,
        pending_id: UUID,
        remark: str,
    ) -> tuple[PendingNotification, DeliveredNotification]:
        """반려 2단계 — 사유를 저장하고 "Rejected" 알림을 전달합니다.

        Second phase of a disapproval: store the remark, mark the record
        rejected (it is retained, not deleted) and deliver a "Rejected"
        notification whose description carries the remark.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            pending_id: 대기 알림 UUID (Pending record UUID)
            remark: 반려 사유 (Rejection remark)

        Returns:
            tuple: (갱신된 대기 알림, 전달 알림) (Updated pending record, emitted notification)

        Raises:
            InvalidStateError: 반려 1단계 없이 호출되었거나 레코드가 사라짐
                               (No preceding disapprove, or the record no longer exists)
            PersistenceError: 저장 실패 (Store failure)
        """
        pending: PendingNotification | None = await admin_notification_repository.get_by_id(db, pending_id)
        if pending is None:
            raise InvalidStateError("반려 대상이 더 이상 존재하지 않습니다 (Pending notification no longer exists)")
        if pending.state != PENDING_STATE_AWAITING_REMARK:
            raise InvalidStateError(
                f"반려 처리 후에만 사유를 입력할 수 있습니다 (Remark requires a prior disapproval; state is {pending.state})"
            )

        try:
            pending.remark = remark
            pending.state = PENDING_STATE_REJECTED
            await db.flush()
            await db.refresh(pending)
            notification: DeliveredNotification = await notification_repository.create_notification(
                db,
                heading=HEADING_REJECTED,
                description=f"{pending.description} has been rejected. Remark: {remark}",
                role=pending.role,
            )
        except SQLAlchemyError as exc:
            logger.error("Remark submission for %s failed: %s", pending_id, exc)
            raise PersistenceError() from exc

        logger.info("Rejected pending notification %s for role %s", pending_id, pending.role)
        return pending, notification

    # --- 단일 단계 작업 (Single-step operations for the dashboard) ---

    async def update_remark(
        self,
        db: AsyncSession,
        pending_id: UUID,
        remark: str,
    ) -> PendingNotification:
        """반려된 콘텐츠의 대기 알림에 사유를 기록합니다 (알림 전달 없음).

        Attach a remark and mark the record rejected, for dashboards that
        drive the workflow one REST call at a time (`PUT /edit_<kind>` with
        status 0 first). Leaves the record in the same state as
        `submit_remark` but delivers nothing.

        Raises:
            NotFoundError: 대기 알림이 없음 (Pending record not found)
            InvalidStateError: 대상 콘텐츠가 반려 상태가 아님 (Target content is not rejected)
        """
        pending: PendingNotification = await self.get_pending(db, pending_id)

        repository = content_service.get_repository(pending.target_entity_kind)
        entity = await repository.get_by_id(db, pending.target_entity_id)
        if entity is None or entity.status != STATUS_REJECTED:
            raise InvalidStateError(
                "반려된 콘텐츠에만 사유를 입력할 수 있습니다 (Remark requires the content to be rejected first)"
            )

        try:
            pending.remark = remark
            pending.state = PENDING_STATE_REJECTED
            await db.flush()
            await db.refresh(pending)
        except SQLAlchemyError as exc:
            logger.error("Remark update for %s failed: %s", pending_id, exc)
            raise PersistenceError() from exc
        return pending

    async def delete_pending(
        self,
        db: AsyncSession,
        pending_id: UUID,
    ) -> None:
        """대기 알림을 삭제합니다.

        Raises:
            NotFoundError: 대기 알림이 없음 (Pending record not found)
        """
        deleted: bool = await admin_notification_repository.delete(db, pending_id)
        if not deleted:
            raise NotFoundError("승인 대기 알림을 찾을 수 없습니다 (Pending notification not found)")

    @staticmethod
    def build_response(pending: PendingNotification) -> dict:
        """대기 알림 ORM 객체를 응답 딕셔너리로 변환합니다."""
        return {
            "id": str(pending.id),
            "target_entity_id": str(pending.target_entity_id),
            "target_entity_kind": pending.target_entity_kind,
            "role": pending.role,
            "description": pending.description,
            "date": pending.date,
            "time": pending.time,
            "remark": pending.remark,
            "state": pending.state,
        }


# 싱글턴 인스턴스 — Singleton instance
approval_service: ApprovalService = ApprovalService()
