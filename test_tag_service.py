import pytest

from src.services.flashcard_service import FlashcardService
from src.services.tag_service import TagService


class TestTagService:
    """Tag CRUD against a real database"""

    @pytest.mark.asyncio
    async def test_create_and_list(self, db_session):
        spanish = await TagService.create(db_session, name="spanish")
        verbs = await TagService.create(db_session, name="verbs")

        tags = await TagService.get_all(db_session)

        assert [(t.id, t.name) for t in tags] == [(spanish.id, "spanish"), (verbs.id, "verbs")]

    @pytest.mark.asyncio
    async def test_names_are_not_unique(self, db_session):
        first = await TagService.create(db_session, name="dup")
        second = await TagService.create(db_session, name="dup")

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_update_name(self, db_session):
        tag = await TagService.create(db_session, name="old")

        updated = await TagService.update(db_session, tag.id, name="new")

        assert updated.id == tag.id
        assert updated.name == "new"
        assert (await TagService.get_by_id(db_session, tag.id)).name == "new"

    @pytest.mark.asyncio
    async def test_update_without_fields_returns_current(self, db_session):
        tag = await TagService.create(db_session, name="same")

        updated = await TagService.update(db_session, tag.id)

        assert updated.name == "same"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, db_session):
        assert await TagService.update(db_session, 77, name="x") is None
        assert await TagService.update(db_session, 77) is None

    @pytest.mark.asyncio
    async def test_delete_unlinks_flashcards(self, db_session):
        tag = await TagService.create(db_session, name="gone")
        other = await TagService.create(db_session, name="stays")
        flashcard = await FlashcardService.create(
            db_session, front="Q", back="A", tag_ids=[tag.id, other.id]
        )

        deleted = await TagService.delete(db_session, tag.id)

        assert deleted.id == tag.id
        assert deleted.name == "gone"
        assert await TagService.get_by_id(db_session, tag.id) is None

        refreshed = await FlashcardService.get_by_id(db_session, flashcard.id)
        assert [t.id for t in refreshed.tags] == [other.id]

    @pytest.mark.asyncio
    async def test_delete_missing_returns_none(self, db_session):
        assert await TagService.delete(db_session, 5) is None
