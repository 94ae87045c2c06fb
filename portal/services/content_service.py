"""콘텐츠 서비스 — 승인 대상 콘텐츠의 상태 전이.

Content Service — Status transitions for content collections gated by
admin approval. The approval workflow is the only caller that moves an
entity out of "pending".
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from portal.models.content import STATUS_APPROVED, STATUS_REJECTED
from portal.repositories.base import BaseRepository
from portal.repositories.content_repository import content_repositories
from portal.utils.exceptions import NotFoundError

# 전송 플래그 → 상태 매핑 — Wire flag → status mapping ({status: 1|0})
STATUS_BY_FLAG: dict[int, str] = {1: STATUS_APPROVED, 0: STATUS_REJECTED}


class ContentService:
    """콘텐츠 상태 서비스."""

    def get_repository(self, kind: str) -> BaseRepository:
        """엔티티 유형에 해당하는 레포지토리를 반환합니다.

        Resolve the repository for an entity kind.

        Raises:
            NotFoundError: 알 수 없는 엔티티 유형 (Unknown entity kind)
        """
        repository: BaseRepository | None = content_repositories.get(kind)
        if repository is None:
            raise NotFoundError(f"알 수 없는 콘텐츠 유형입니다 (Unknown entity kind: {kind})")
        return repository

    async def set_status(
        self,
        db: AsyncSession,
        kind: str,
        entity_id: UUID,
        status: str,
    ) -> Any:
        """콘텐츠 상태를 변경합니다. 동시 변경 시 마지막 쓰기가 유지됩니다.

        Set the status of a target entity. Concurrent decisions on the same
        entity are not serialized; the last write wins.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            kind: 엔티티 유형 (Entity kind)
            entity_id: 엔티티 UUID (Entity UUID)
            status: 새 상태 (approved | rejected)

        Returns:
            변경된 엔티티 (The updated entity)

        Raises:
            NotFoundError: 유형 또는 엔티티가 없음 (Unknown kind or missing entity)
        """
        repository: BaseRepository = self.get_repository(kind)
        entity = await repository.update(db, entity_id, {"status": status})
        if entity is None:
            raise NotFoundError("콘텐츠를 찾을 수 없습니다 (Target entity not found)")
        return entity

    async def set_status_flag(
        self,
        db: AsyncSession,
        kind: str,
        entity_id: UUID,
        flag: int,
    ) -> Any:
        """전송 플래그(1/0)로 콘텐츠 상태를 변경합니다.

        Set the status from the wire flag used by `PUT /edit_<kind>/<id>`.
        """
        return await self.set_status(db, kind, entity_id, STATUS_BY_FLAG[flag])


# 싱글턴 인스턴스 — Singleton instance
content_service: ContentService = ContentService()
