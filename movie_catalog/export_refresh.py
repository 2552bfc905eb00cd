import argparse
import logging
import os
import time

from movie_catalog.db import SessionLocal, engine
from movie_catalog.export import export_movies
from movie_catalog.models import Base

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

EXPORT_DIR = os.getenv("EXPORT_DIR", "./export")


def export_once(output_dir: str) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        logger.info("Starting movie export.")
        written = export_movies(db, output_dir)
        logger.info("Movie export done. Wrote %s files.", written)
        return written
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Export every movie in the catalog database to JSON files."
    )
    parser.add_argument(
        "--output-dir",
        default=EXPORT_DIR,
        help="Directory the movies/ folder is written into.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single export and exit.",
    )
    parser.add_argument(
        "--interval-hours",
        type=float,
        default=24.0,
        help="Loop exports every N hours when not running --once.",
    )
    args = parser.parse_args()

    if args.once:
        written = export_once(args.output_dir)
        print(f"Movie export completed. Wrote {written} movies to {args.output_dir}.")
        return

    interval_seconds = max(args.interval_hours, 0.25) * 3600
    while True:
        written = export_once(args.output_dir)
        print(f"Movie export completed. Wrote {written} movies to {args.output_dir}.")
        time.sleep(interval_seconds)


if __name__ == "__main__":
    main()
