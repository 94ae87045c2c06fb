"""알림 관련 SQLAlchemy ORM 모델 정의.

Notification SQLAlchemy ORM model definitions.
Implements the two tiers of the approval-notification workflow: pending
decision records raised on content submission, and role-addressed delivered
notifications produced once a decision is made.

Tables:
    - admin_notifications: 승인 대기 알림 (Pending decisions, one per submitted entity)
    - notifications: 역할별 전달 알림 (Role-scoped, read-tracked delivered notifications)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from portal.database import Base

# 승인 대기 레코드 상태 — Pending record states
PENDING_STATE_OPEN = "open"
PENDING_STATE_AWAITING_REMARK = "awaiting_remark"
PENDING_STATE_REJECTED = "rejected"
PENDING_STATES = (PENDING_STATE_OPEN, PENDING_STATE_AWAITING_REMARK, PENDING_STATE_REJECTED)


class PendingNotification(Base):
    """승인 대기 알림 모델 — 관리자의 승인/반려 결정을 기다리는 제출 건.

    Pending notification model — A submitted entity awaiting an approve or
    disapprove decision. Uses a polymorphic reference pattern
    (target_entity_kind + target_entity_id) to reach the entity whose
    status the decision governs.

    State machine (state 필드 값):
        - "open": 결정 대기 중 (Decision outstanding)
        - "awaiting_remark": 반려됨, 사유 입력 대기 (Disapproved, remark not yet submitted)
        - "rejected": 반려 사유까지 입력 완료 (Rejection delivered, record retained)

    Approval deletes the record instead of moving it to a terminal state.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        target_entity_id: 대상 엔티티 ID (Entity whose status is decided)
        target_entity_kind: 대상 엔티티 유형 (Registry key of the entity collection)
        role: 결과 알림 수신 역할 (Role the delivered notification will address)
        description: 제출 건 요약 (Human-readable summary)
        date: 제출 일자 YYYY-MM-DD (Submission date)
        time: 제출 시각 HH:MM:SS (Submission time)
        remark: 반려 사유 (Rejection remark, NULL unless disapproved)
        state: 결정 상태 (Decision state, see above)
    """

    __tablename__ = "admin_notifications"

    # 고유 식별자 — Unique identifier (UUID v4, auto-generated, immutable)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 대상 엔티티 ID — Referenced entity UUID (no FK: collection varies by kind)
    target_entity_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    # 대상 엔티티 유형 — Entity collection key (generaladminaddyear | newsupdate)
    target_entity_kind: Mapped[str] = mapped_column(String(50), nullable=False)
    # 수신 역할 — Recipient role copied onto the delivered notification
    role: Mapped[str] = mapped_column(String(100), nullable=False)
    # 제출 건 요약 — Summary shown in the admin table
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    # 제출 일자/시각 — Stored as separate plain strings
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    time: Mapped[str] = mapped_column(String(8), nullable=False)
    # 반려 사유 — Only set on disapproval
    remark: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    # 결정 상태 — open → awaiting_remark → rejected
    state: Mapped[str] = mapped_column(String(20), default=PENDING_STATE_OPEN, nullable=False, index=True)


class DeliveredNotification(Base):
    """전달 알림 모델 — 특정 역할에게 전달되는 읽음 추적 알림.

    Delivered notification model — Role-addressed message shown to end users
    after a decision is resolved. Only `readed` and existence change after
    creation; heading, description, role and created_at are immutable.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        heading: 결과 제목 (Short outcome label, e.g. "Approved")
        description: 결과 상세 (Outcome detail, includes the remark when rejected)
        role: 수신 역할 (Exact-match recipient filter)
        readed: 읽음 여부 (Read flag, serialized as 0/1 on the wire)
        avatar: 표시 이미지 (Optional display image reference)
        created_at: 생성 일시 UTC (Creation timestamp, recency sort key)
    """

    __tablename__ = "notifications"

    # 알림 고유 식별자 — Notification unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    heading: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(2000), nullable=False)
    # 수신 역할 — Visible only to clients whose role equals this value
    role: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    # 읽음 여부 — False=미읽음, True=읽음 (Unread by default)
    readed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # 생성 일시 — Notification creation timestamp (UTC, immutable)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
