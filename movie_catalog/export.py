import base64
import json
import logging
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.orm import Session

from movie_catalog.exceptions import MovieExportError
from movie_catalog.models import Movie
from movie_catalog.schemas import MovieJSON, format_json_time
from movie_catalog.sources import (
    MovieImageSource,
    SqlMovieImageSource,
    SqlStudioSource,
    StudioSource,
)

logger = logging.getLogger(__name__)


def encode_image(data: bytes | None) -> str:
    if not data:
        return ""
    return base64.b64encode(data).decode("ascii")


def to_json(
    image_source: MovieImageSource, studio_source: StudioSource, movie: Movie
) -> MovieJSON:
    """Build the export document for `movie`.

    The studio is resolved first, then the front image, then the back image.
    The first lookup that raises aborts the conversion with a
    `MovieExportError` chained to the original exception. A lookup that finds
    nothing is not an error: the matching field is left empty.
    """
    studio_name = ""
    if movie.studio_id is not None:
        try:
            studio = studio_source.find(movie.studio_id)
        except Exception as err:
            raise MovieExportError(f"error getting movie studio: {err}") from err
        if studio is None:
            logger.debug("Movie %s references missing studio %s", movie.id, movie.studio_id)
        elif studio.name:
            studio_name = studio.name

    try:
        front_image = image_source.get_front_image(movie.id)
    except Exception as err:
        raise MovieExportError(f"error getting movie front image: {err}") from err

    try:
        back_image = image_source.get_back_image(movie.id)
    except Exception as err:
        raise MovieExportError(f"error getting movie back image: {err}") from err

    return MovieJSON(
        name=movie.name or "",
        aliases=movie.aliases or "",
        date=movie.date or "",
        rating=movie.rating if movie.rating is not None else 0,
        duration=movie.duration if movie.duration is not None else 0,
        director=movie.director or "",
        synopsis=movie.synopsis or "",
        url=movie.url or "",
        studio=studio_name,
        front_image=encode_image(front_image),
        back_image=encode_image(back_image),
        created_at=format_json_time(movie.created_at),
        updated_at=format_json_time(movie.updated_at),
    )


def movie_export_path(output_dir: str | Path, movie_id: int) -> Path:
    return Path(output_dir) / "movies" / f"{movie_id}.json"


def write_movie_json(path: Path, document: MovieJSON) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(document.to_dict(), handle, indent=2, ensure_ascii=False)
        handle.write("\n")


def export_movies(db: Session, output_dir: str | Path) -> int:
    image_source = SqlMovieImageSource(db)
    studio_source = SqlStudioSource(db)
    movies = db.execute(select(Movie).order_by(Movie.id)).scalars().all()
    logger.info("Exporting %s movies to %s", len(movies), output_dir)
    written = 0
    for movie in movies:
        try:
            document = to_json(image_source, studio_source, movie)
        except MovieExportError:
            logger.exception("Failed to export movie %s", movie.id)
            raise
        write_movie_json(movie_export_path(output_dir, movie.id), document)
        written += 1
    return written
