from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_async_session
from src.schemas.tag import TagCreate, TagResponse, TagUpdate
from src.services.tag_service import TagService
from src.core.exceptions import store_failure

NOT_FOUND = "Tag not found"

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
)


@router.get("", response_model=List[TagResponse])
async def get_tags(
    db: AsyncSession = Depends(get_async_session),
):
    """Get all tags"""
    try:
        return await TagService.get_all(db=db)
    except SQLAlchemyError as e:
        raise store_failure("retrieve tags", e)


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    """Get a tag by ID"""
    try:
        tag = await TagService.get_by_id(db=db, tag_id=tag_id)
    except SQLAlchemyError as e:
        raise store_failure("retrieve tag", e)

    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return tag


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_create: TagCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """Create a tag"""
    try:
        return await TagService.create(db=db, name=tag_create.name)
    except SQLAlchemyError as e:
        raise store_failure("create tag", e)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: int,
    tag_update: TagUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """Rename a tag"""
    try:
        tag = await TagService.update(db=db, tag_id=tag_id, name=tag_update.name)
    except SQLAlchemyError as e:
        raise store_failure("update tag", e)

    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return tag


@router.delete("/{tag_id}", response_model=TagResponse)
async def delete_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    """Delete a tag and its flashcard links"""
    try:
        tag = await TagService.delete(db=db, tag_id=tag_id)
    except SQLAlchemyError as e:
        raise store_failure("delete tag", e)

    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return tag
