from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class MovieCreate(BaseModel):
    title: str = Field(..., min_length=1)

class MovieResponseModel(BaseModel):
    id: UUID
    title: str


class ReviewCreateModel(BaseModel):
    reviewer: str = Field(..., min_length=1)
    # null and values outside the int column are rejected by the ledger
    rating: Optional[int] = Field(...)

class ReviewItemResponseModel(BaseModel):
    movie_id: UUID
    reviewer: str
    rating: int
    created_at: datetime

class ReviewResponseModel(BaseModel):
    movie_id: UUID
    created_at: datetime
    review_id: UUID
    reviewer: str
    rating: int
