"""알림 클라이언트 패키지 — 대시보드 측 알림 동기화와 승인 콘솔.

Notification client package — The client side of the workflow: the polling
session behind the header bell and the admin approval console.
"""

import httpx

from portal.config import settings


def create_http_client(base_url: str | None = None) -> httpx.AsyncClient:
    """백엔드 호출용 httpx 클라이언트 생성 — Build the shared async HTTP client."""
    return httpx.AsyncClient(
        base_url=base_url or settings.API_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
