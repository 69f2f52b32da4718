from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CategoryDto(BaseModel):
    """Category record as sent by clients on create and update"""
    category_id: int = Field(0, description="Unique identifier; assigned by the store on create")
    name: str = Field(..., min_length=1, max_length=100, description="Name of the category")
    description: Optional[str] = Field(None, description="Description or details about the category")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class CategoryResponseDto(BaseModel):
    category_id: int = Field(..., description="Unique identifier for the category")
    name: str = Field(..., description="Name of the category")
    description: Optional[str] = Field(None, description="Description or details about the category")
    created_at: Optional[datetime] = Field(None, description="When the category was created")
    updated_at: Optional[datetime] = Field(None, description="When the category was last updated")

    class Config:
        from_attributes = True
