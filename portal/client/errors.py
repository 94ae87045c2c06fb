"""알림 클라이언트 예외 정의.

Notification client exceptions. Fetch failures never raise (the polling
session logs and skips them); failed user actions raise one of these so the
caller can show a failure notice.
"""


class NotificationClientError(Exception):
    """클라이언트 예외 베이스 — Base class for client-side failures."""


class NotificationActionError(NotificationClientError):
    """사용자 작업(읽음/삭제/승인/반려) 실패.

    A user-triggered mutation failed before changing anything on the server.
    """


class PartialFailureError(NotificationActionError):
    """일부 단계만 완료된 작업.

    The content status was changed but a later step (pending record removal,
    remark, or notification delivery) failed. Nothing is rolled back or retried.

    Attributes:
        completed_steps: 완료된 단계 목록 (Steps that succeeded, in order)
        failed_step: 실패한 단계 (Step that failed)
    """

    def __init__(self, message: str, completed_steps: list[str], failed_step: str) -> None:
        super().__init__(message)
        self.completed_steps: list[str] = completed_steps
        self.failed_step: str = failed_step


class RemarkStateError(NotificationClientError):
    """반려 선택 없이 사유를 제출함.

    A remark was submitted without a preceding disapproval selecting a record.
    """
