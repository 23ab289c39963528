"""Create (or recreate) the ``kv_items`` table on DATABASE_URL."""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers KVItem on Base.metadata

logger = logging.getLogger(__name__)


def create_all(drop_first: bool = False) -> None:
    engine = get_engine()
    if drop_first:
        logger.warning("Dropping key-value tables on %s", engine.url.render_as_string(hide_password=True))
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Create the servicedesk SQL schema")
    ap.add_argument("--drop", action="store_true", help="drop existing tables first (destroys data)")
    args = ap.parse_args(argv)
    try:
        create_all(drop_first=args.drop)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Database tables created successfully.")


if __name__ == "__main__":
    main()
