"""콘텐츠 상태 라우터 — `PUT /edit_<kind>/<id>`.

Content status router. Each content collection keeps its own
`/edit_<kind>` path, so the kind is read from the path segment and resolved
through the content registry.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.database import commit_or_rollback, get_db
from portal.schemas.content import ContentStatusResponse, ContentStatusUpdate
from portal.services.content_service import content_service

router: APIRouter = APIRouter()


@router.put("/edit_{entity_kind}/{entity_id}", response_model=ContentStatusResponse)
async def update_content_status(
    entity_kind: str,
    entity_id: UUID,
    data: ContentStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """콘텐츠 승인 상태를 변경합니다 (`{status: 1|0}`).

    Args:
        entity_kind: 엔티티 유형 (Entity collection key)
        entity_id: 엔티티 UUID (Entity UUID)
        data: 상태 플래그 (1=approved, 0=rejected)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        dict: 변경 결과 (Resulting status)

    Raises:
        NotFoundError(404): 유형 또는 엔티티 없음 (Unknown kind or missing entity)
    """
    entity = await content_service.set_status_flag(db, entity_kind, entity_id, data.status)
    await commit_or_rollback(db)
    return {
        "message": "Status updated successfully",
        "id": str(entity.id),
        "kind": entity_kind,
        "status": entity.status,
    }
