import base64
import binascii

from sqlalchemy import select
from sqlalchemy.orm import Session

from movie_catalog.exceptions import MovieImportError
from movie_catalog.models import Movie, MovieImages, Studio
from movie_catalog.schemas import MovieCreate


def none_if_empty(value):
    if value == "" or value == 0:
        return None
    return value


def decode_image(value: str | None, field: str) -> bytes | None:
    if not value:
        return None
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as err:
        raise MovieImportError(f"invalid {field}: {err}") from err


def find_studio_by_name(session: Session, name: str) -> Studio | None:
    return (
        session.execute(select(Studio).where(Studio.name == name).limit(1))
        .scalars()
        .first()
    )


def set_movie_images(
    session: Session, movie: Movie, front_image: bytes | None, back_image: bytes | None
) -> None:
    if front_image is None and back_image is None:
        if movie.images is not None:
            movie.images = None
        return
    if movie.images is None:
        movie.images = MovieImages(front_image=front_image, back_image=back_image)
    else:
        movie.images.front_image = front_image
        movie.images.back_image = back_image
    session.add(movie)


def create_movie(session: Session, payload: MovieCreate) -> Movie:
    front_image = decode_image(payload.front_image, "front_image")
    back_image = decode_image(payload.back_image, "back_image")
    movie = Movie(**payload.model_dump(exclude={"front_image", "back_image"}))
    session.add(movie)
    set_movie_images(session, movie, front_image, back_image)
    session.commit()
    session.refresh(movie)
    return movie
