from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from src.schemas.tag import TagResponse


class FlashcardBase(BaseModel):
    """Base schema for flashcard data"""
    front: str = Field(..., min_length=1, description="Question side")
    back: str = Field(..., min_length=1, description="Answer side")


class FlashcardCreate(FlashcardBase):
    """Schema for flashcard creation"""
    tag_ids: List[int] = Field(default_factory=list, alias="tagIds")

    class Config:
        populate_by_name = True


class FlashcardUpdate(BaseModel):
    """Schema for flashcard update

    tag_ids left out (or null) keeps the current tags, a list replaces them.
    """
    front: Optional[str] = Field(None, min_length=1)
    back: Optional[str] = Field(None, min_length=1)
    tag_ids: Optional[List[int]] = Field(None, alias="tagIds")

    class Config:
        populate_by_name = True


class FlashcardResponse(FlashcardBase):
    """Schema for flashcard response, tags flattened"""
    id: int
    created_at: datetime
    updated_at: datetime
    tags: List[TagResponse] = []

    class Config:
        from_attributes = True


class FlashcardsDeleted(BaseModel):
    """Schema for the delete-all summary"""
    message: str
    count: int
