#!/usr/bin/env python3
"""
Add a category and, optionally, services under it to the configured store.

Usage:
  python scripts/seed_catalog.py --category "Hair" [--service "Haircut:Classic cut"] ...
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from servicedesk.core.log import configure_logging
from servicedesk.services.catalog_service import CatalogService, ServiceForm
from servicedesk.services.category_service import CategoryService


def parse_service(value: str) -> tuple[str, str]:
    title, sep, description = value.partition(":")
    if not sep or not title.strip() or not description.strip():
        raise argparse.ArgumentTypeError("use TITLE:DESCRIPTION")
    return title.strip(), description.strip()


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Seed categories and services")
    ap.add_argument("--category", required=True, help="Category name (reused if it already exists)")
    ap.add_argument("--service", action="append", type=parse_service, default=[], help="TITLE:DESCRIPTION")
    args = ap.parse_args(argv)

    configure_logging()
    categories = CategoryService()
    name = args.category.strip()
    category = next((c for c in categories.list_categories() if c.name == name), None)
    if category is None:
        category = categories.add_category(name)
        print(f"OK: category added ({category.id}) {category.name}")
    else:
        print(f"OK: using existing category ({category.id}) {category.name}")

    catalog = CatalogService()
    for title, description in args.service:
        service = catalog.add_service(ServiceForm(title=title, description=description, category_id=str(category.id)))
        print(f"  Service {service.id}: {service.title}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
