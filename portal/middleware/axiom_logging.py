"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data for every API call and ships a structured
event to Axiom. When Axiom is not configured the same event is written to
the local logger instead, so failed approvals and mark-read calls always
leave a trace. Sensitive fields are masked before either sink sees them.
"""

import json
import logging
import re
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from axiom_py import Client as AxiomClient

from portal.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies and query params
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — 3초마다 호출되는 폴링 GET도 제외 (Poll GETs fire every 3s per session)
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}
_SKIP_SUCCESSFUL_GETS = {"/notification", "/admin-notifications"}


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def build_log_event(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    query_params: dict[str, Any] | None = None,
    path_params: dict[str, Any] | None = None,
    request_body: Any = None,
    error: str | None = None,
) -> dict[str, Any]:
    """로그 이벤트 구성 — Build the structured event for one request."""
    event: dict[str, Any] = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }
    if query_params:
        event["query_params"] = mask_sensitive(query_params)
    if path_params:
        event["path_params"] = path_params
    if request_body is not None:
        event["request_body"] = request_body
    if error:
        event["error"] = error[:500]
    return event


def should_log(method: str, path: str, status_code: int) -> bool:
    """성공한 폴링 조회는 기록하지 않습니다 — Skip health checks and successful poll reads."""
    if path in _SKIP_PATHS:
        return False
    if method == "GET" and path in _SKIP_SUCCESSFUL_GETS and status_code < 400:
        return False
    return True


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom(또는 로컬 로거)에 기록하는 미들웨어.

    Middleware that logs API requests and responses.
    Captures: method, path, query params, request body, status code, error detail.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path

        # Request body 읽기 — Read request body (only for methods with body)
        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    request_body = mask_sensitive(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    error_data = json.loads(resp_body)
                    error_detail = str(error_data.get("detail", error_data))
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            if should_log(method, path, status_code):
                event = build_log_event(
                    method=method,
                    path=path,
                    status_code=status_code,
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                    query_params=dict(request.query_params) if request.query_params else None,
                    path_params=dict(request.path_params) if request.path_params else None,
                    request_body=request_body,
                    error=error_detail,
                )
                self._emit(event)

        return response

    def _emit(self, event: dict[str, Any]) -> None:
        """이벤트 전송 — Ship to Axiom, or the local logger when Axiom is off or failing."""
        if self._client is not None:
            try:
                self._client.ingest_events(self._dataset, [event])
                return
            except Exception as exc:
                logger.warning("Axiom ingest failed: %s", exc)

        level = logging.WARNING if event["status_code"] >= 400 else logging.INFO
        logger.log(level, "%s %s -> %s", event["method"], event["path"], event["status_code"], extra={"event": event})
