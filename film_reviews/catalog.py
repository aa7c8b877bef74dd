import uuid
from typing import List

from .errors import StorageError, ValidationError, STORAGE_FAILURES
from .logger import setup_logger
from .models import Movie

logger = setup_logger(__name__)

SELECT_MOVIES = "SELECT id, title FROM movies"
INSERT_MOVIE = "INSERT INTO movies (id, title) VALUES (?, ?)"


class CatalogStore:
    """Movie id -> title table. Knows nothing about reviews."""

    def __init__(self, session):
        self.session = session
        self._insert = session.prepare(INSERT_MOVIE)

    def list_movies(self) -> List[Movie]:
        try:
            rows = self.session.execute(SELECT_MOVIES)
        except STORAGE_FAILURES as e:
            raise StorageError("Failed to fetch movies") from e
        return [Movie(**row) for row in rows]

    def register_movie(self, title: str) -> Movie:
        if not isinstance(title, str) or not title.strip():
            raise ValidationError('The field "title" is required')

        movie = Movie(id=uuid.uuid4(), title=title)
        try:
            self.session.execute(self._insert, (movie.id, movie.title))
        except STORAGE_FAILURES as e:
            raise StorageError("Failed to add movie") from e

        logger.info("Movie registered", extra={"movie_id": str(movie.id)})
        return movie
