from typing import List
from fastapi import APIRouter, HTTPException, Depends, status
from ..catalog import CatalogStore
from ..dependencies import get_catalog
from ..errors import StorageError
from ..logger import setup_logger
from ..schemas import MovieCreate, MovieResponseModel

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.get("", response_model=List[MovieResponseModel])
def list_movies(catalog: CatalogStore = Depends(get_catalog)):
    """Every registered movie, in no particular order."""
    try:
        return catalog.list_movies()
    except StorageError as e:
        logger.exception("Error fetching movies")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("", response_model=MovieResponseModel, status_code=status.HTTP_201_CREATED)
def register_movie(movie: MovieCreate, catalog: CatalogStore = Depends(get_catalog)):
    try:
        return catalog.register_movie(movie.title)
    except StorageError as e:
        logger.exception("Error adding movie")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
