from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from src.models.tag import Tag, flashcard_tags
from src.logs import debug_logger, log_function


class TagService:
    """CRUD operations service for Tag model"""

    @staticmethod
    async def get_all(db: AsyncSession) -> List[Tag]:
        """Get all tags"""
        query = select(Tag).order_by(Tag.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(
        db: AsyncSession,
        tag_id: int
    ) -> Optional[Tag]:
        """Get a tag by ID"""
        query = select(Tag).where(Tag.id == tag_id).execution_options(populate_existing=True)
        result = await db.execute(query)
        return result.scalars().first()

    @staticmethod
    @log_function()
    async def create(
        db: AsyncSession,
        name: str
    ) -> Tag:
        """Create a new tag"""
        tag = Tag(name=name)

        db.add(tag)
        await db.commit()
        await db.refresh(tag)

        debug_logger.info(f"Created tag {tag.id} '{tag.name}'")
        return tag

    @staticmethod
    @log_function()
    async def update(
        db: AsyncSession,
        tag_id: int,
        name: Optional[str] = None
    ) -> Optional[Tag]:
        """Update a tag, None when it does not exist"""
        update_data = {}
        if name is not None:
            update_data["name"] = name

        if not update_data:
            return await TagService.get_by_id(db, tag_id)

        stmt = update(Tag).where(Tag.id == tag_id).values(**update_data)
        result = await db.execute(stmt)
        if result.rowcount == 0:
            debug_logger.warning(f"Tag {tag_id} not found for update")
            return None

        await db.commit()
        return await TagService.get_by_id(db, tag_id)

    @staticmethod
    @log_function()
    async def delete(
        db: AsyncSession,
        tag_id: int
    ) -> Optional[Tag]:
        """Delete a tag together with its flashcard links, returning the removed tag"""
        tag = await TagService.get_by_id(db, tag_id)
        if not tag:
            debug_logger.warning(f"Tag {tag_id} not found for deletion")
            return None

        # Links are removed here as well in case the store does not cascade
        await db.execute(delete(flashcard_tags).where(flashcard_tags.c.tag_id == tag_id))
        await db.execute(delete(Tag).where(Tag.id == tag_id))
        await db.commit()

        debug_logger.info(f"Deleted tag {tag_id}")
        return tag
