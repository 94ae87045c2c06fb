"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations.

Modules:
    notification: 승인 대기 알림 및 전달 알림 (Pending and delivered notifications)
    content: 승인 대상 콘텐츠 (Content collections gated by approval)
"""

from portal.models.notification import PendingNotification, DeliveredNotification
from portal.models.content import GeneralAdminYear, NewsUpdate

__all__ = [
    "PendingNotification", "DeliveredNotification",
    "GeneralAdminYear", "NewsUpdate",
]
