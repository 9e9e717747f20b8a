from datetime import datetime
from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, insert, or_
from sqlalchemy.orm import selectinload

from src.models.flashcard import Flashcard
from src.models.tag import flashcard_tags
from src.logs import debug_logger, log_function


def _unique_ids(tag_ids: Iterable[int]) -> List[int]:
    """Drop repeated tag ids, keeping first-seen order"""
    return list(dict.fromkeys(tag_ids))


def _flashcards_query():
    """Flashcards with their tags, newest first

    populate_existing makes a reused session pick up link changes made with
    Core statements instead of serving stale collections from the identity map.
    """
    return (
        select(Flashcard)
        .options(selectinload(Flashcard.tags))
        .order_by(Flashcard.created_at.desc(), Flashcard.id.desc())
        .execution_options(populate_existing=True)
    )


class FlashcardService:
    """CRUD and search operations service for Flashcard model"""

    @staticmethod
    async def _link_tags(
        db: AsyncSession,
        flashcard_id: int,
        tag_ids: Iterable[int]
    ) -> None:
        rows = [
            {"flashcard_id": flashcard_id, "tag_id": tag_id}
            for tag_id in _unique_ids(tag_ids)
        ]
        if rows:
            await db.execute(insert(flashcard_tags), rows)

    @staticmethod
    async def get_all(db: AsyncSession) -> List[Flashcard]:
        """Get all flashcards with tags, newest first"""
        result = await db.execute(_flashcards_query())
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        flashcard_id: int
    ) -> Optional[Flashcard]:
        """Get a flashcard with its tags by ID"""
        query = _flashcards_query().where(Flashcard.id == flashcard_id)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    async def search(
        db: AsyncSession,
        query: str = "",
        tag_ids: Optional[List[int]] = None
    ) -> List[Flashcard]:
        """Search flashcards by text and tags

        The text matches front or back case-insensitively. With tag_ids, only
        flashcards linked to at least one of the tags qualify; both filters
        must hold when both are given.
        """
        stmt = _flashcards_query()

        if tag_ids:
            ids_query = (
                select(flashcard_tags.c.flashcard_id)
                .where(flashcard_tags.c.tag_id.in_(tag_ids))
                .distinct()
            )
            result = await db.execute(ids_query)
            flashcard_ids = list(result.scalars().all())
            if not flashcard_ids:
                debug_logger.debug(f"No flashcards linked to tags {tag_ids}")
                return []
            stmt = stmt.where(Flashcard.id.in_(flashcard_ids))

        # Whitespace-only means no text filter; otherwise match the query as typed
        if query and query.strip():
            stmt = stmt.where(or_(
                Flashcard.front.icontains(query, autoescape=True),
                Flashcard.back.icontains(query, autoescape=True),
            ))

        result = await db.execute(stmt)
        flashcards = list(result.scalars().all())
        debug_logger.debug(f"Search q={query!r} tags={tag_ids} matched {len(flashcards)} flashcards")
        return flashcards

    @staticmethod
    @log_function()
    async def create(
        db: AsyncSession,
        front: str,
        back: str,
        tag_ids: Optional[List[int]] = None
    ) -> Flashcard:
        """Create a flashcard linked to the given tags"""
        flashcard = Flashcard(front=front, back=back)

        db.add(flashcard)
        await db.flush()  # Assigns the flashcard ID

        if tag_ids:
            await FlashcardService._link_tags(db, flashcard.id, tag_ids)

        await db.commit()
        debug_logger.info(f"Created flashcard {flashcard.id} with tags {tag_ids or []}")

        # Writes do not return joined rows, read the flashcard back with its tags
        return await FlashcardService.get_by_id(db, flashcard.id)

    @staticmethod
    @log_function()
    async def update(
        db: AsyncSession,
        flashcard_id: int,
        front: Optional[str] = None,
        back: Optional[str] = None,
        tag_ids: Optional[List[int]] = None
    ) -> Optional[Flashcard]:
        """Update a flashcard; tag_ids, when not None, replaces all its tags"""
        existing = await db.execute(select(Flashcard.id).where(Flashcard.id == flashcard_id))
        if existing.scalar() is None:
            debug_logger.warning(f"Flashcard {flashcard_id} not found for update")
            return None

        update_data = {"updated_at": datetime.now()}
        if front is not None:
            update_data["front"] = front
        if back is not None:
            update_data["back"] = back

        debug_logger.debug(f"Updating flashcard {flashcard_id}: {update_data}")
        stmt = update(Flashcard).where(Flashcard.id == flashcard_id).values(**update_data)
        await db.execute(stmt)

        if tag_ids is not None:
            debug_logger.debug(f"Replacing tags of flashcard {flashcard_id} with {tag_ids}")
            await db.execute(
                delete(flashcard_tags).where(flashcard_tags.c.flashcard_id == flashcard_id)
            )
            await FlashcardService._link_tags(db, flashcard_id, tag_ids)

        # Field update and tag replacement land in a single commit
        await db.commit()
        debug_logger.info(f"Flashcard {flashcard_id} updated")
        return await FlashcardService.get_by_id(db, flashcard_id)

    @staticmethod
    @log_function()
    async def delete(
        db: AsyncSession,
        flashcard_id: int
    ) -> Optional[Flashcard]:
        """Delete a flashcard, returning the removed record with its tags"""
        flashcard = await FlashcardService.get_by_id(db, flashcard_id)
        if not flashcard:
            debug_logger.warning(f"Flashcard {flashcard_id} not found for deletion")
            return None

        await db.execute(
            delete(flashcard_tags).where(flashcard_tags.c.flashcard_id == flashcard_id)
        )
        await db.execute(delete(Flashcard).where(Flashcard.id == flashcard_id))
        await db.commit()

        debug_logger.info(f"Deleted flashcard {flashcard_id}")
        return flashcard

    @staticmethod
    @log_function()
    async def delete_all(db: AsyncSession) -> List[Flashcard]:
        """Delete every flashcard, returning the removed records"""
        flashcards = await FlashcardService.get_all(db)

        await db.execute(delete(flashcard_tags))
        await db.execute(delete(Flashcard))
        await db.commit()

        debug_logger.info(f"Deleted all flashcards ({len(flashcards)})")
        return flashcards
