"""콘텐츠 상태 변경 Pydantic 스키마.

Content status update schema for the `/edit_<kind>/<id>` routes.
"""

from pydantic import BaseModel, Field


class ContentStatusUpdate(BaseModel):
    """콘텐츠 상태 변경 요청 스키마.

    Attributes:
        status: 1=승인, 0=반려 (1 approves, 0 rejects)
    """

    status: int = Field(..., ge=0, le=1)


class ContentStatusResponse(BaseModel):
    """콘텐츠 상태 변경 응답 스키마."""

    message: str
    id: str
    kind: str
    status: str  # pending | approved | rejected
