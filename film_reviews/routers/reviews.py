from typing import List
from uuid import UUID
from fastapi import APIRouter, status, HTTPException, Depends
from ..dependencies import get_ledger
from ..errors import StorageError
from ..ledger import ReviewLedger
from ..logger import setup_logger
from ..schemas import ReviewCreateModel, ReviewItemResponseModel, ReviewResponseModel

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/movies/{movie_id}/reviews", tags=["reviews"])


@router.get("", response_model=List[ReviewItemResponseModel], status_code=status.HTTP_200_OK)
def list_reviews(movie_id: UUID, ledger: ReviewLedger = Depends(get_ledger)):
    """Reviews of one movie, newest first. The movie's title is not included."""
    try:
        return ledger.list_reviews(movie_id)
    except StorageError as e:
        logger.exception("Error fetching reviews", extra={"movie_id": str(movie_id)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("", response_model=ReviewResponseModel, status_code=status.HTTP_201_CREATED)
def record_review(movie_id: UUID, review: ReviewCreateModel, ledger: ReviewLedger = Depends(get_ledger)):
    # No retry: every attempt records a new review
    try:
        return ledger.record_review(movie_id, review.reviewer, review.rating)
    except StorageError as e:
        logger.exception("Error submitting review", extra={"movie_id": str(movie_id)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
