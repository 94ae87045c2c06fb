"""콘텐츠 상태 변경 API 테스트.

Content status API tests — `PUT /edit_<kind>/<id>` with the 1/0 wire flag.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession


class TestUpdateContentStatus:
    """콘텐츠 승인 상태 변경 테스트."""

    async def test_approve_flag(self, client: AsyncClient, db: AsyncSession, year_entry):
        res = await client.put(f"/edit_generaladminaddyear/{year_entry.id}", json={"status": 1})
        assert res.status_code == 200
        assert res.json()["status"] == "approved"
        assert res.json()["kind"] == "generaladminaddyear"

        await db.refresh(year_entry)
        assert year_entry.status == "approved"

    async def test_reject_flag(self, client: AsyncClient, db: AsyncSession, news_item):
        res = await client.put(f"/edit_newsupdate/{news_item.id}", json={"status": 0})
        assert res.status_code == 200

        await db.refresh(news_item)
        assert news_item.status == "rejected"

    async def test_unknown_kind(self, client: AsyncClient, news_item):
        res = await client.put(f"/edit_marquee/{news_item.id}", json={"status": 1})
        assert res.status_code == 404

    async def test_missing_entity(self, client: AsyncClient):
        res = await client.put(f"/edit_newsupdate/{uuid.uuid4()}", json={"status": 1})
        assert res.status_code == 404

    async def test_flag_out_of_range(self, client: AsyncClient, news_item):
        """status는 0/1만 허용."""
        res = await client.put(f"/edit_newsupdate/{news_item.id}", json={"status": 2})
        assert res.status_code == 422
