"""
Unit Tests for the acted-by resolver and attendance summaries
"""
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock

from app.core.types import AdminActor, UserActor
from app.services.attendance_service import attendance_summary
from app.services.attribution import AttributionResolver, admin_summary


class TestEnrich:

    @pytest.mark.asyncio
    async def test_admin_resolves_without_database(self):
        db = AsyncMock()

        value = await AttributionResolver(db).enrich(AdminActor())

        assert value == {"_id": "admin", "fullName": "Admin"}
        db.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_user_resolves_to_name(self):
        db = AsyncMock()
        db.get.return_value = SimpleNamespace(id="u-1", full_name="Ravi Kumar")

        value = await AttributionResolver(db).enrich(UserActor("u-1"))

        assert value == {"_id": "u-1", "fullName": "Ravi Kumar"}

    @pytest.mark.asyncio
    async def test_deleted_user_degrades_to_raw_id(self):
        db = AsyncMock()
        db.get.return_value = None

        assert await AttributionResolver(db).enrich(UserActor("gone")) == "gone"

    @pytest.mark.asyncio
    async def test_none_stays_none(self):
        assert await AttributionResolver(AsyncMock()).enrich(None) is None


class TestEnrichMany:

    @pytest.mark.asyncio
    async def test_single_query_for_many_users(self):
        db = AsyncMock()
        db.execute.return_value = [
            SimpleNamespace(id="u-1", full_name="Ravi Kumar"),
            SimpleNamespace(id="u-2", full_name="Anita Das"),
        ]
        refs = [UserActor("u-1"), UserActor("u-2"), UserActor("u-1"), AdminActor(), None]

        resolved = await AttributionResolver(db).enrich_many(refs)

        assert db.execute.await_count == 1
        assert resolved[UserActor("u-1")] == {"_id": "u-1", "fullName": "Ravi Kumar"}
        assert resolved[UserActor("u-2")] == {"_id": "u-2", "fullName": "Anita Das"}
        assert resolved[AdminActor()] == admin_summary()
        assert None not in resolved

    @pytest.mark.asyncio
    async def test_admin_only_refs_skip_query(self):
        db = AsyncMock()

        resolved = await AttributionResolver(db).enrich_many([AdminActor(), AdminActor()])

        assert resolved == {AdminActor(): admin_summary()}
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_user_maps_to_raw_id(self):
        db = AsyncMock()
        db.execute.return_value = []

        resolved = await AttributionResolver(db).enrich_many([UserActor("gone")])

        assert resolved == {UserActor("gone"): "gone"}


class TestAttendanceSummary:

    def test_empty_history_is_zero_percent(self):
        assert attendance_summary(0, 0) == {"total": 0, "present": 0, "absent": 0, "percentage": 0}

    def test_percentage(self):
        assert attendance_summary(3, 1)["percentage"] == 75.0

    def test_percentage_rounded_to_two_places(self):
        summary = attendance_summary(1, 2)

        assert summary["total"] == 3
        assert summary["percentage"] == 33.33
