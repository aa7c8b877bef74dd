"""Append-only review log, one partition per movie.

Rows are keyed by (movie_id, created_at, review_id). Both clustering values
are generated here at write time, so concurrent writers never coordinate and
never overwrite each other: two reviews stamped in the same millisecond
still differ by review_id. Reads come back in the table's clustering order,
newest first, with no sort applied in Python.

There is no check that movie_id belongs to a registered movie.
"""
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import UUID

from .errors import StorageError, ValidationError, STORAGE_FAILURES
from .logger import setup_logger
from .models import Review, ReviewEntry

logger = setup_logger(__name__)

SELECT_REVIEWS = "SELECT movie_id, reviewer, rating, created_at FROM movie_reviews WHERE movie_id = ?"
INSERT_REVIEW = ("INSERT INTO movie_reviews (movie_id, created_at, review_id, reviewer, rating) "
                 "VALUES (?, ?, ?, ?, ?)")

# bounds of the 32-bit rating column
INT_MIN, INT_MAX = -2**31, 2**31 - 1


def utc_now() -> datetime:
    """Current UTC time at the storage engine's millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class ReviewLedger:

    def __init__(self, session,
                 clock: Callable[[], datetime] = utc_now,
                 new_id: Callable[[], UUID] = uuid.uuid4):
        self.session = session
        self.clock = clock
        self.new_id = new_id
        self._select = session.prepare(SELECT_REVIEWS)
        self._insert = session.prepare(INSERT_REVIEW)

    def list_reviews(self, movie_id: UUID) -> List[ReviewEntry]:
        """All reviews of one movie, newest first. Unknown ids give []."""
        try:
            rows = self.session.execute(self._select, (movie_id,))
        except STORAGE_FAILURES as e:
            raise StorageError("Failed to fetch reviews") from e
        return [ReviewEntry(**row) for row in rows]

    def record_review(self, movie_id: UUID, reviewer: str, rating: Optional[int]) -> Review:
        if not isinstance(reviewer, str) or not reviewer.strip():
            raise ValidationError('The fields "reviewer" and "rating" are required')
        if rating is None:
            raise ValidationError('The fields "reviewer" and "rating" are required')
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValidationError('The field "rating" must be an integer')
        if not INT_MIN <= rating <= INT_MAX:
            raise ValidationError(f'The field "rating" must be between {INT_MIN} and {INT_MAX}')

        review = Review(
            movie_id=movie_id,
            created_at=self.clock(),
            review_id=self.new_id(),
            reviewer=reviewer,
            rating=rating,
        )
        try:
            self.session.execute(self._insert, (
                review.movie_id, review.created_at, review.review_id, review.reviewer, review.rating,
            ))
        except STORAGE_FAILURES as e:
            raise StorageError("Failed to submit review") from e

        logger.info("Review recorded", extra={
            "movie_id": str(review.movie_id),
            "review_id": str(review.review_id),
        })
        return review
