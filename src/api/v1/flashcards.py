from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_async_session
from src.schemas.flashcard import (
    FlashcardCreate,
    FlashcardResponse,
    FlashcardUpdate,
    FlashcardsDeleted,
)
from src.services.flashcard_service import FlashcardService
from src.core.exceptions import store_failure

NOT_FOUND = "Flashcard not found"

router = APIRouter(
    prefix="/flashcards",
    tags=["flashcards"],
)


@router.get("", response_model=List[FlashcardResponse])
async def get_flashcards(
    db: AsyncSession = Depends(get_async_session),
):
    """Get all flashcards, newest first"""
    try:
        return await FlashcardService.get_all(db=db)
    except SQLAlchemyError as e:
        raise store_failure("retrieve flashcards", e)


@router.get("/search", response_model=List[FlashcardResponse])
async def search_flashcards(
    q: str = Query("", description="Case-insensitive text to look for in front or back"),
    tags: Optional[List[int]] = Query(None, description="Tag IDs, any of which must be linked"),
    db: AsyncSession = Depends(get_async_session),
):
    """Search flashcards by text and tags"""
    try:
        return await FlashcardService.search(db=db, query=q, tag_ids=tags)
    except SQLAlchemyError as e:
        raise store_failure("search flashcards", e)


@router.get("/{flashcard_id}", response_model=FlashcardResponse)
async def get_flashcard(
    flashcard_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    """Get a flashcard by ID"""
    try:
        flashcard = await FlashcardService.get_by_id(db=db, flashcard_id=flashcard_id)
    except SQLAlchemyError as e:
        raise store_failure("retrieve flashcard", e)

    if not flashcard:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return flashcard


@router.post("", response_model=FlashcardResponse, status_code=status.HTTP_201_CREATED)
async def create_flashcard(
    flashcard_create: FlashcardCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """Create a flashcard, optionally linked to tags"""
    try:
        return await FlashcardService.create(
            db=db,
            front=flashcard_create.front,
            back=flashcard_create.back,
            tag_ids=flashcard_create.tag_ids,
        )
    except SQLAlchemyError as e:
        raise store_failure("create flashcard", e)


@router.put("/{flashcard_id}", response_model=FlashcardResponse)
async def update_flashcard(
    flashcard_id: int,
    flashcard_update: FlashcardUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """Update a flashcard; tagIds, when sent, replaces its tags"""
    try:
        flashcard = await FlashcardService.update(
            db=db,
            flashcard_id=flashcard_id,
            front=flashcard_update.front,
            back=flashcard_update.back,
            tag_ids=flashcard_update.tag_ids,
        )
    except SQLAlchemyError as e:
        raise store_failure("update flashcard", e)

    if not flashcard:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return flashcard


@router.delete("/{flashcard_id}", response_model=FlashcardResponse)
async def delete_flashcard(
    flashcard_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    """Delete a flashcard and return it"""
    try:
        flashcard = await FlashcardService.delete(db=db, flashcard_id=flashcard_id)
    except SQLAlchemyError as e:
        raise store_failure("delete flashcard", e)

    if not flashcard:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return flashcard


@router.delete("", response_model=FlashcardsDeleted)
async def delete_all_flashcards(
    db: AsyncSession = Depends(get_async_session),
):
    """Delete every flashcard"""
    try:
        deleted = await FlashcardService.delete_all(db=db)
    except SQLAlchemyError as e:
        raise store_failure("delete all flashcards", e)

    return FlashcardsDeleted(
        message=f"Deleted {len(deleted)} flashcards successfully",
        count=len(deleted),
    )
