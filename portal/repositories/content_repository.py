"""콘텐츠 레포지토리 — 승인 대상 콘텐츠 컬렉션별 레포지토리.

Content repositories — One generic repository per content collection that
can be the target of an approval decision, keyed by the entity kind used
in pending records and in the `/edit_<kind>/<id>` routes.
"""

from portal.models.content import GeneralAdminYear, NewsUpdate
from portal.repositories.base import BaseRepository

# 엔티티 유형 → 레포지토리 매핑 — Entity kind → repository registry
content_repositories: dict[str, BaseRepository] = {
    "generaladminaddyear": BaseRepository(GeneralAdminYear),
    "newsupdate": BaseRepository(NewsUpdate),
}
