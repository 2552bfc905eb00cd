import argparse
import logging

from movie_catalog.db import SessionLocal, engine
from movie_catalog.importer import MissingRefBehaviour, import_directory
from movie_catalog.models import Base

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Import exported movie JSON files into the catalog database."
    )
    parser.add_argument(
        "--input-dir", required=True, help="Directory holding the movies/ folder"
    )
    parser.add_argument(
        "--missing-studio",
        choices=[behaviour.value for behaviour in MissingRefBehaviour],
        default=MissingRefBehaviour.FAIL.value,
        help="What to do when a movie names a studio that does not exist",
    )
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        logger.info("Importing movies from %s", args.input_dir)
        imported, failed = import_directory(
            db, args.input_dir, MissingRefBehaviour(args.missing_studio)
        )
        logger.info("Movie import done. Imported %s, failed %s.", imported, failed)
    finally:
        db.close()


if __name__ == "__main__":
    main()
