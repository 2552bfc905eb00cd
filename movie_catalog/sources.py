"""Lookup capabilities used by the exporter.

The exporter only needs to read cover images and studios; these interfaces
let it run against the database or against canned test data.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from movie_catalog.models import MovieImages, Studio


class MovieImageSource(ABC):
    """Fetches cover images by movie id. Returns None when there is no image."""

    @abstractmethod
    def get_front_image(self, movie_id: int) -> Optional[bytes]:
        pass

    @abstractmethod
    def get_back_image(self, movie_id: int) -> Optional[bytes]:
        pass


class StudioSource(ABC):
    """Fetches studios by id. Returns None when the studio does not exist."""

    @abstractmethod
    def find(self, studio_id: int) -> Optional[Studio]:
        pass


class SqlMovieImageSource(MovieImageSource):
    def __init__(self, db: Session):
        self.db = db

    def _get_image(self, column, movie_id: int) -> Optional[bytes]:
        return self.db.execute(
            select(column).where(MovieImages.movie_id == movie_id)
        ).scalar_one_or_none()

    def get_front_image(self, movie_id: int) -> Optional[bytes]:
        return self._get_image(MovieImages.front_image, movie_id)

    def get_back_image(self, movie_id: int) -> Optional[bytes]:
        return self._get_image(MovieImages.back_image, movie_id)


class SqlStudioSource(StudioSource):
    def __init__(self, db: Session):
        self.db = db

    def find(self, studio_id: int) -> Optional[Studio]:
        return self.db.get(Studio, studio_id)
