"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error kinds the
approval workflow and delivery tracker surface to their callers.

Usage:
    from portal.utils.exceptions import NotFoundError, InvalidStateError
    raise NotFoundError("Notification not found")
    raise InvalidStateError("Remark requires a prior disapproval")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a pending notification, delivered notification or
    target entity does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when the request data is invalid beyond what Pydantic validation catches.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidStateError(HTTPException):
    """409 Conflict 예외 — 허용되지 않는 상태 전이 시 사용.

    Raised when a workflow step is invoked out of order
    (e.g. submitting a remark for a record that was never disapproved).

    Args:
        detail: 오류 메시지 (Error message, default: "Invalid state transition")
    """

    def __init__(self, detail: str = "Invalid state transition") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class PersistenceError(HTTPException):
    """500 Internal Server Error 예외 — 저장소 작업 실패 시 사용.

    Raised when a store read or write fails. The failed transaction is
    rolled back; callers are expected to report the failure, not retry.

    Args:
        detail: 오류 메시지 (Error message, default: "Database error")
    """

    def __init__(self, detail: str = "Database error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
