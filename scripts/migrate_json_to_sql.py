"""One-off migration script: JSON file store -> SQL store (DATABASE_URL)."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Make the servicedesk package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from servicedesk.core.config import get_settings
from servicedesk.core.log import configure_logging
from servicedesk.db.create_tables import create_all
from servicedesk.repositories.json_storage import JsonFileStore
from servicedesk.repositories.sql_storage import SQLStore

logger = logging.getLogger("migrate_json_to_sql")


def migrate(data_file: str | Path) -> int:
    """Copy every key of the JSON store into the SQL store; returns the key count."""
    path = Path(data_file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    source = JsonFileStore(path)
    create_all()
    target = SQLStore()
    copied = 0
    for key in source.keys():
        value = source.get_item(key)
        if value is None:
            continue
        target.set_item(key, value)
        copied += 1
        logger.info("Copied %s", key)
    return copied


def main() -> None:
    ap = argparse.ArgumentParser(description="Copy the JSON file store into the SQL store")
    ap.add_argument("--data-file", default=None, help="JSON store (default: DATA_FILE setting)")
    args = ap.parse_args()
    configure_logging()
    copied = migrate(args.data_file or get_settings().data_file)
    print(f"Migrated {copied} key(s) to the SQL store.")


if __name__ == "__main__":
    main()
