from __future__ import annotations

import pytest

from servicedesk.domain.records import UNKNOWN_CATEGORY
from servicedesk.services.category_service import (
    CategoryNotFoundError,
    CategoryService,
    InvalidCategoryNameError,
)


def test_add_list_rename_delete(store_env):
    svc = CategoryService(store_env)
    hair = svc.add_category("  Hair  ")
    nails = svc.add_category("Nails")

    assert hair.name == "Hair"
    assert hair.id != nails.id
    assert [c.name for c in svc.list_categories()] == ["Hair", "Nails"]

    svc.rename_category(hair.id, "Hair & Beard")
    assert svc.get(hair.id).name == "Hair & Beard"

    removed = svc.delete_category(nails.id)
    assert removed.name == "Nails"
    assert [c.id for c in svc.list_categories()] == [hair.id]


def test_blank_names_leave_store_untouched(store_env):
    svc = CategoryService(store_env)
    with pytest.raises(InvalidCategoryNameError):
        svc.add_category("   ")
    assert svc.list_categories() == []

    cat = svc.add_category("Spa")
    with pytest.raises(InvalidCategoryNameError):
        svc.rename_category(cat.id, "")
    assert svc.get(cat.id).name == "Spa"


def test_unknown_ids(store_env):
    svc = CategoryService(store_env)
    with pytest.raises(CategoryNotFoundError):
        svc.rename_category(42, "x")
    with pytest.raises(CategoryNotFoundError):
        svc.delete_category(42)


def test_ids_are_unique_even_within_one_millisecond(store_env, monkeypatch):
    import servicedesk.domain.records as records

    monkeypatch.setattr(records, "now_ms", lambda: 1_700_000_000_000)
    svc = CategoryService(store_env)
    ids = [svc.add_category(name).id for name in ("a", "b", "c")]
    assert ids == [1_700_000_000_000, 1_700_000_000_001, 1_700_000_000_002]


def test_name_of_missing_category(store_env):
    svc = CategoryService(store_env)
    assert svc.name_of(123) == UNKNOWN_CATEGORY
    assert svc.name_of(None) == UNKNOWN_CATEGORY


def test_corrupt_data_file_keeps_other_collections(store_env, tmp_path):
    svc = CategoryService(store_env)
    svc.add_category("Hair")
    store_env.set_item("services", '[{"id": "9", "title": "Cut"}]')
    data_file = tmp_path / "data.json"
    data_file.write_text("{" + data_file.read_text(encoding="utf-8"), encoding="utf-8")

    with pytest.raises(OSError):
        svc.add_category("Nails")
    assert "Cut" in data_file.read_text(encoding="utf-8")
