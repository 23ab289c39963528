from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the servicedesk package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from servicedesk.core import config as core_config  # noqa: E402
from servicedesk.core.rate_limiter import reset_limits  # noqa: E402
from servicedesk.db import models  # noqa: E402
from servicedesk.db import session as db_session  # noqa: E402
from servicedesk.repositories import get_store, reset_store  # noqa: E402

USER = {
    "X-User-Id": "user_1",
    "X-User-Email": "ann@example.com",
    "X-User-First-Name": "Ann",
    "X-User-Last-Name": "Lee",
}
OTHER_USER = {"X-User-Id": "user_2", "X-User-Email": "bob@example.com", "X-User-Username": "bob"}


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    reset_store()
    reset_limits()


@pytest.fixture()
def store_env(tmp_path, monkeypatch):
    """JSON file store under tmp_path with fresh settings/store caches."""
    monkeypatch.setenv("STORAGE_BACKEND", "json")
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "data.json"))
    monkeypatch.delenv("ADMIN_EMAILS", raising=False)
    monkeypatch.delenv("IDENTITY_HEADER_PREFIX", raising=False)
    _reset_caches()
    yield get_store()
    _reset_caches()


@pytest.fixture()
def sql_env(tmp_path, monkeypatch):
    """Temporary SQLite database behind the SQL store, fully torn down afterwards."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _reset_caches()
    db_session.reset_engine()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield get_store()

    models.Base.metadata.drop_all(bind=engine)
    db_session.reset_engine()
    _reset_caches()
