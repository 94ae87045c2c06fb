"""알림 Pydantic 요청/응답 스키마 정의.

Notification request/response schemas for both tiers of the
approval-notification workflow. The wire format keeps `readed` as an
integer flag (0/1) rather than a native boolean.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# === 전달 알림 (Delivered notification) 스키마 ===

class NotificationCreate(BaseModel):
    """전달 알림 생성 요청 스키마.

    Delivered notification creation request schema.

    Attributes:
        heading: 결과 제목 (Outcome label)
        description: 결과 상세 (Outcome detail)
        role: 수신 역할 (Recipient role)
        readed: 읽음 플래그 0/1 (Read flag, defaults to 0)
        avatar: 표시 이미지 (Optional display image)
    """

    heading: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=2000)
    role: str = Field(..., min_length=1, max_length=100)
    readed: int = Field(0, ge=0, le=1)  # 0=미읽음, 1=읽음 (0 unread, 1 read)
    avatar: str | None = None


class NotificationReadUpdate(BaseModel):
    """읽음 처리 요청 스키마 — `{readed: 1}` 만 허용.

    Mark-read request body. Only the transition to read is accepted.
    """

    readed: int = Field(1, ge=1, le=1)


class NotificationResponse(BaseModel):
    """전달 알림 응답 스키마.

    Attributes:
        id: 알림 UUID (Notification unique identifier)
        heading: 결과 제목 (Outcome label)
        description: 결과 상세 (Outcome detail)
        role: 수신 역할 (Recipient role)
        readed: 읽음 플래그 0/1 (Read flag as integer)
        avatar: 표시 이미지 (Optional display image)
        created_at: 생성 일시 (Creation timestamp)
    """

    id: str  # 알림 UUID 문자열 (Notification UUID as string)
    heading: str
    description: str
    role: str
    readed: int  # 0=미읽음, 1=읽음 (Integer flag on the wire)
    avatar: str | None = None
    created_at: datetime  # 생성 일시 UTC (Creation timestamp)


class UnreadCountResponse(BaseModel):
    """역할별 미읽음 알림 수 응답 스키마."""

    role: str
    unread_count: int


# === 승인 대기 알림 (Pending notification) 스키마 ===

class PendingNotificationCreate(BaseModel):
    """승인 대기 알림 생성 요청 스키마 — 콘텐츠 제출 시 호출.

    Pending notification creation request, issued by the submission path.
    When date/time are omitted the server stamps the current clock.

    Attributes:
        target_entity_id: 대상 엔티티 UUID (Entity awaiting approval)
        target_entity_kind: 대상 엔티티 유형 (Entity collection key)
        role: 결과 수신 역할 (Role that receives the outcome)
        description: 제출 건 요약 (Submission summary)
        date: 제출 일자 YYYY-MM-DD (Optional submission date)
        time: 제출 시각 HH:MM:SS (Optional submission time)
    """

    target_entity_id: str
    target_entity_kind: str = Field(..., min_length=1, max_length=50)
    role: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    date: str | None = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str | None = Field(None, pattern=r"^\d{2}:\d{2}:\d{2}$")


class RemarkUpdate(BaseModel):
    """반려 사유 요청 스키마."""

    remark: str = Field(..., min_length=1, max_length=1000)


class PendingNotificationResponse(BaseModel):
    """승인 대기 알림 응답 스키마.

    Attributes:
        id: 대기 알림 UUID (Pending record identifier)
        target_entity_id: 대상 엔티티 UUID (Entity identifier)
        target_entity_kind: 대상 엔티티 유형 (Entity collection key)
        role: 결과 수신 역할 (Outcome recipient role)
        description: 제출 건 요약 (Submission summary)
        date: 제출 일자 (Submission date string)
        time: 제출 시각 (Submission time string)
        remark: 반려 사유 (Rejection remark, nullable)
        state: 결정 상태 (open | awaiting_remark | rejected)
    """

    id: str
    target_entity_id: str
    target_entity_kind: str
    role: str
    description: str
    date: str
    time: str
    remark: str | None = None
    state: str


class DecisionResponse(BaseModel):
    """승인/반려 처리 결과 응답 스키마.

    Result of a workflow step: the delivered notification it emitted
    (None for the first phase of a disapproval) and the pending record as
    it stands afterwards (None once approval deleted it).
    """

    message: str
    notification: NotificationResponse | None = None
    pending: PendingNotificationResponse | None = None
