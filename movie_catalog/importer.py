"""Store export documents back into the catalog."""

from datetime import datetime, timezone
import enum
import json
import logging
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from movie_catalog.exceptions import MovieImportError
from movie_catalog.models import Movie, Studio
from movie_catalog.schemas import MovieJSON, parse_json_time
from movie_catalog.services import (
    decode_image,
    find_studio_by_name,
    none_if_empty,
    set_movie_images,
)

logger = logging.getLogger(__name__)


class MissingRefBehaviour(str, enum.Enum):
    FAIL = "fail"
    IGNORE = "ignore"
    CREATE = "create"


def _parse_time(text: str, field: str) -> datetime:
    if not text:
        return datetime.now(timezone.utc)
    try:
        value = parse_json_time(text)
    except ValueError as err:
        raise MovieImportError(f"invalid {field}: {text}") from err
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value


def _resolve_studio(
    db: Session, name: str, missing_studio: MissingRefBehaviour
) -> int | None:
    if not name:
        return None
    studio = find_studio_by_name(db, name)
    if studio is not None:
        return studio.id
    if missing_studio == MissingRefBehaviour.FAIL:
        raise MovieImportError(f"movie studio '{name}' not found")
    if missing_studio == MissingRefBehaviour.IGNORE:
        return None
    studio = Studio(name=name)
    db.add(studio)
    db.flush()
    logger.info("Created studio %s", name)
    return studio.id


def import_movie(
    db: Session,
    document: MovieJSON,
    missing_studio: MissingRefBehaviour = MissingRefBehaviour.FAIL,
) -> Movie:
    if not document.name:
        raise MovieImportError("movie name must be set")

    front_image = decode_image(document.front_image, "front_image")
    back_image = decode_image(document.back_image, "back_image")
    created_at = _parse_time(document.created_at, "created_at")
    updated_at = _parse_time(document.updated_at, "updated_at")
    studio_id = _resolve_studio(db, document.studio, missing_studio)

    movie = Movie(
        name=document.name,
        aliases=none_if_empty(document.aliases),
        date=none_if_empty(document.date),
        rating=none_if_empty(document.rating),
        duration=none_if_empty(document.duration),
        director=none_if_empty(document.director),
        synopsis=none_if_empty(document.synopsis),
        url=none_if_empty(document.url),
        studio_id=studio_id,
        created_at=created_at,
        updated_at=updated_at,
    )
    try:
        db.add(movie)
        set_movie_images(db, movie, front_image, back_image)
        db.commit()
    except (SQLAlchemyError, OverflowError) as err:
        db.rollback()
        raise MovieImportError(f"cannot store movie '{document.name}': {err}") from err
    db.refresh(movie)
    return movie


def load_movie_json(path: Path) -> MovieJSON:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return MovieJSON.model_validate(json.load(handle))
    except (OSError, json.JSONDecodeError, ValidationError) as err:
        raise MovieImportError(f"cannot read {path}: {err}") from err


def import_directory(
    db: Session,
    input_dir: str | Path,
    missing_studio: MissingRefBehaviour = MissingRefBehaviour.FAIL,
) -> tuple[int, int]:
    imported = 0
    failed = 0
    for path in sorted((Path(input_dir) / "movies").glob("*.json")):
        try:
            import_movie(db, load_movie_json(path), missing_studio)
        except MovieImportError as err:
            db.rollback()
            logger.error("Skipping %s: %s", path.name, err)
            failed += 1
            continue
        imported += 1
    return imported, failed
