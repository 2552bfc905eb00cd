from contextlib import asynccontextmanager
import logging
import os
from typing import List

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import Depends, FastAPI, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from movie_catalog.db import SessionLocal, engine
from movie_catalog.exceptions import MovieExportError, MovieImportError
from movie_catalog.export import export_movies, to_json
from movie_catalog.importer import MissingRefBehaviour, import_movie
from movie_catalog.models import Base, Movie, Studio
from movie_catalog.schemas import (
    MovieCreate,
    MovieJSON,
    MovieResponse,
    StudioCreate,
    StudioResponse,
)
from movie_catalog.services import create_movie
from movie_catalog.sources import SqlMovieImageSource, SqlStudioSource

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()
EXPORT_DIR = os.getenv("EXPORT_DIR", "./export")
EXPORT_INTERVAL_HOURS = float(os.getenv("EXPORT_INTERVAL_HOURS", "24"))
EXPORT_SCHEDULE_ENABLED = os.getenv("EXPORT_SCHEDULE_ENABLED", "false").lower() == "true"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_scheduled_export() -> None:
    db = SessionLocal()
    try:
        export_movies(db, EXPORT_DIR)
    except MovieExportError:
        logger.error("Scheduled export aborted.")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    if EXPORT_SCHEDULE_ENABLED:
        scheduler.add_job(
            run_scheduled_export,
            "interval",
            hours=EXPORT_INTERVAL_HOURS,
            id="movie_export",
            replace_existing=True,
        )
        scheduler.start()
    yield
    if scheduler.running:
        scheduler.shutdown()


app = FastAPI(lifespan=lifespan)


@app.get("/api/studios", response_model=List[StudioResponse])
def list_studios(db: Session = Depends(get_db)):
    return db.execute(select(Studio).order_by(Studio.name)).scalars().all()


@app.post("/api/studios", response_model=StudioResponse)
def create_studio(payload: StudioCreate, db: Session = Depends(get_db)):
    studio = Studio(**payload.model_dump())
    db.add(studio)
    db.commit()
    db.refresh(studio)
    return studio


@app.get("/api/movies", response_model=List[MovieResponse])
def list_movies(db: Session = Depends(get_db)):
    return db.execute(select(Movie).order_by(Movie.name)).scalars().all()


@app.post("/api/movies", response_model=MovieResponse)
def create_movie_endpoint(payload: MovieCreate, db: Session = Depends(get_db)):
    try:
        return create_movie(db, payload)
    except MovieImportError as err:
        raise HTTPException(status_code=400, detail=err.message)


@app.delete("/api/movies/{movie_id}")
def delete_movie(movie_id: int, db: Session = Depends(get_db)):
    movie = db.get(Movie, movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    db.delete(movie)
    db.commit()
    return {"deleted": movie_id}


@app.get("/api/movies/{movie_id}/export")
def export_movie(movie_id: int, db: Session = Depends(get_db)):
    movie = db.get(Movie, movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    try:
        document = to_json(SqlMovieImageSource(db), SqlStudioSource(db), movie)
    except MovieExportError as err:
        logger.error("Export of movie %s failed: %s", movie_id, err)
        raise HTTPException(status_code=502, detail=err.message)
    return document.to_dict()


@app.post("/api/movies/import", response_model=MovieResponse)
def import_movie_endpoint(
    payload: MovieJSON,
    missing_studio: MissingRefBehaviour = MissingRefBehaviour.FAIL,
    db: Session = Depends(get_db),
):
    try:
        return import_movie(db, payload, missing_studio)
    except MovieImportError as err:
        db.rollback()
        raise HTTPException(status_code=400, detail=err.message)
