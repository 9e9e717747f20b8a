from typing import Optional
from pydantic import BaseModel, Field


class TagBase(BaseModel):
    """Base tag schema"""
    name: str = Field(..., min_length=1, description="Tag name")


class TagCreate(TagBase):
    """Schema for tag creation"""


class TagUpdate(BaseModel):
    """Schema for tag update"""
    name: Optional[str] = Field(None, min_length=1, description="Tag name")


class TagResponse(TagBase):
    """Schema for tag response"""
    id: int = Field(..., description="Unique tag identifier")

    class Config:
        from_attributes = True
