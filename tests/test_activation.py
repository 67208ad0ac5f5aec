"""
EasyBuild Content API - Single-Active Enforcement Tests
=========================================================

What:  Tests for enforce_single_active() and the service write paths that
       call it.

What we test:
    ✅ Siblings are deactivated, the written document is not
    ✅ Other collections are untouched
    ✅ Inactive writes leave the current active document alone
    ✅ Any sequence of active writes ends with exactly one active document
    ✅ A failed sibling update keeps the primary write and raises
"""

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from easybuild.exceptions import SiblingDeactivationError, StorageError
from easybuild.models.content import get_content_type
from easybuild.services.activation import enforce_single_active
from easybuild.services.content_service import ContentService


def make_doc(active=True, **fields):
    now = datetime.now(timezone.utc)
    return {"_id": ObjectId(), "isActive": active, "createdAt": now, "updatedAt": now, **fields}


def banner_payload(localized, name, active=True):
    return {
        "title": localized(name),
        "subtitle": localized(f"{name} subtitle"),
        "image": f"/uploads/{name}.jpg",
        "isActive": active,
    }


class TestEnforceSingleActive:
    """Tests for the enforcer on its own."""

    @pytest.mark.asyncio
    async def test_deactivates_siblings_and_keeps_written_document(self, fake_db):
        banners = fake_db["banners"]
        old_a, old_b, written = make_doc(), make_doc(), make_doc()
        banners.documents.extend([old_a, old_b, written])

        modified = await enforce_single_active(banners, written["_id"])

        assert modified == 2
        assert [d["_id"] for d in banners.active()] == [written["_id"]]

    @pytest.mark.asyncio
    async def test_sets_updated_at_on_deactivated_siblings(self, fake_db):
        banners = fake_db["banners"]
        old, written = make_doc(), make_doc()
        banners.documents.extend([old, written])
        stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)

        await enforce_single_active(banners, written["_id"], now=stamp)

        assert banners.documents[0]["updatedAt"] == stamp

    @pytest.mark.asyncio
    async def test_only_touches_its_own_collection(self, fake_db):
        banners, teams = fake_db["banners"], fake_db["teams"]
        team = make_doc()
        teams.documents.append(team)
        written = make_doc()
        banners.documents.extend([make_doc(), written])

        await enforce_single_active(banners, written["_id"])

        assert teams.active() == [team]

    @pytest.mark.asyncio
    async def test_is_idempotent(self, fake_db):
        banners = fake_db["banners"]
        written = make_doc()
        banners.documents.extend([make_doc(), written])

        await enforce_single_active(banners, written["_id"])
        modified = await enforce_single_active(banners, written["_id"])

        assert modified == 0
        assert len(banners.active()) == 1

    @pytest.mark.asyncio
    async def test_failure_raises_sibling_deactivation_error(self, fake_db):
        banners = fake_db["banners"]
        written = make_doc()
        banners.documents.extend([make_doc(), written])
        banners.fail_on.add("update_many")

        with pytest.raises(SiblingDeactivationError) as exc_info:
            await enforce_single_active(banners, written["_id"])

        exc = exc_info.value
        assert isinstance(exc, StorageError)
        assert exc.collection == "banners"
        assert exc.document_id == str(written["_id"])


class TestServiceWritePaths:
    """Single-active behavior through ContentService."""

    def setup_method(self):
        self.service = ContentService()
        self.banner = get_content_type("banner")

    @pytest.mark.asyncio
    async def test_sequence_of_writes_leaves_one_active(self, fake_db, localized):
        created = []
        for index in range(4):
            created.append(
                await self.service.create_document(
                    fake_db, self.banner, banner_payload(localized, f"banner-{index}")
                )
            )
        await self.service.update_document(
            fake_db, self.banner, str(created[1]["_id"]), {"isActive": True}
        )

        active = fake_db["banners"].active()
        assert [d["_id"] for d in active] == [created[1]["_id"]]

    @pytest.mark.asyncio
    async def test_inactive_create_keeps_current_active(self, fake_db, localized):
        current = await self.service.create_document(
            fake_db, self.banner, banner_payload(localized, "current")
        )
        await self.service.create_document(
            fake_db, self.banner, banner_payload(localized, "draft", active=False)
        )

        active = await self.service.get_active(fake_db, self.banner)
        assert active["_id"] == current["_id"]
        assert len(fake_db["banners"].documents) == 2

    @pytest.mark.asyncio
    async def test_inactive_update_does_not_reactivate_others(self, fake_db, localized):
        first = await self.service.create_document(
            fake_db, self.banner, banner_payload(localized, "first")
        )
        second = await self.service.create_document(
            fake_db, self.banner, banner_payload(localized, "second")
        )

        await self.service.update_document(
            fake_db, self.banner, str(second["_id"]), {"isActive": False}
        )

        assert fake_db["banners"].active() == []
        stored_first = await self.service.get_document(fake_db, self.banner, str(first["_id"]))
        assert stored_first["isActive"] is False

    @pytest.mark.asyncio
    async def test_failed_deactivation_keeps_primary_write(self, fake_db, localized):
        first = await self.service.create_document(
            fake_db, self.banner, banner_payload(localized, "first")
        )
        fake_db["banners"].fail_on.add("update_many")

        with pytest.raises(SiblingDeactivationError):
            await self.service.create_document(
                fake_db, self.banner, banner_payload(localized, "second")
            )

        documents = fake_db["banners"].documents
        assert len(documents) == 2
        assert all(d["isActive"] for d in documents)
        assert documents[0]["_id"] == first["_id"]

    @pytest.mark.asyncio
    async def test_catalog_types_allow_many_active(self, fake_db):
        social = get_content_type("social-media")
        for order, platform in enumerate(["Facebook", "Instagram"], start=1):
            await self.service.create_document(
                fake_db,
                social,
                {"platform": platform, "icon": platform.lower(), "url": "https://x", "order": order},
            )

        assert len(fake_db["socialmedias"].active()) == 2
