"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates every endpoint into a single router for
inclusion in the FastAPI application. Paths are mounted at the root to
match what the public site and admin dashboard already call.

Included routers:
    - notifications: 역할별 전달 알림 (Role-scoped delivered notifications)
    - admin_notifications: 승인 대기 알림 및 승인 워크플로우 (Pending decisions and the approval workflow)
    - content: 콘텐츠 승인 상태 변경 (Content status transitions)
"""

from fastapi import APIRouter

from portal.api.notifications import router as notifications_router
from portal.api.admin_notifications import router as admin_notifications_router
from portal.api.content import router as content_router

api_router: APIRouter = APIRouter()

api_router.include_router(notifications_router, tags=["Notifications"])
api_router.include_router(admin_notifications_router, tags=["Admin Notifications"])
api_router.include_router(content_router, tags=["Content"])
