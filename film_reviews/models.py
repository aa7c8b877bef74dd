from datetime import datetime, timezone
from uuid import UUID
from pydantic import BaseModel, field_validator


def as_utc(value: datetime) -> datetime:
    # the driver hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Movie(BaseModel):
    id: UUID
    title: str


class ReviewEntry(BaseModel):
    """One row of a movie's review log, as listed newest first."""
    movie_id: UUID
    reviewer: str
    rating: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class Review(ReviewEntry):
    """A recorded review, including the tie-break id of its clustering key."""
    review_id: UUID
