"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions shared by every router.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message response schema for simple confirmations.
    Used for delete operations, status changes, and other actions
    that return a human-readable confirmation message.

    Attributes:
        message: 응답 메시지 (Response message string)
    """

    message: str  # 응답 메시지 (Human-readable confirmation message)


class CreatedResponse(BaseModel):
    """생성 응답 스키마 — 메시지와 생성된 ID.

    Creation response schema carrying the new record id.

    Attributes:
        message: 응답 메시지 (Response message string)
        id: 생성된 레코드 UUID (Created record UUID as string)
    """

    message: str
    id: str  # 생성된 레코드 UUID 문자열 (Created record UUID as string)
