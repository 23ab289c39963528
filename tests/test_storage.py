"""
Smoke tests for the key-value store backends and the collection helpers.
"""
from __future__ import annotations

import json

import pytest

from servicedesk.repositories import read_collection, write_collection
from servicedesk.repositories.json_storage import CorruptStoreError, JsonFileStore
from servicedesk.repositories.sql_storage import SQLStore


def test_json_store_persists_between_instances(store_env, tmp_path):
    store_env.set_item("greeting", "hello")
    again = JsonFileStore(tmp_path / "data.json")
    assert again.get_item("greeting") == "hello"
    assert again.keys() == ["greeting"]

    again.remove_item("greeting")
    assert store_env.get_item("greeting") is None


def test_json_store_missing_file_reads_empty(tmp_path):
    store = JsonFileStore(tmp_path / "nope" / "data.json")
    assert store.get_item("services") is None
    assert read_collection(store, "services") == []


def test_json_store_file_holds_string_values(store_env, tmp_path):
    write_collection(store_env, "serviceCategories", [{"id": 1, "name": "Hair"}])
    raw = json.loads((tmp_path / "data.json").read_text(encoding="utf-8"))
    assert json.loads(raw["serviceCategories"]) == [{"id": 1, "name": "Hair"}]


def test_read_collection_tolerates_bad_json(store_env):
    store_env.set_item("bookingHistory", "{not json")
    assert read_collection(store_env, "bookingHistory") == []

    store_env.set_item("bookingHistory", json.dumps({"date": "2025-01-01"}))
    assert read_collection(store_env, "bookingHistory") == []


def test_collection_roundtrip_keeps_non_ascii(store_env):
    write_collection(store_env, "serviceCategories", [{"id": 7, "name": "Café"}])
    assert "Café" in store_env.get_item("serviceCategories")
    assert read_collection(store_env, "serviceCategories") == [{"id": 7, "name": "Café"}]


def test_clear_drops_everything(store_env):
    store_env.set_item("a", "1")
    store_env.set_item("b", "2")
    store_env.clear()
    assert store_env.keys() == []


def test_sql_store_crud(sql_env):
    assert isinstance(sql_env, SQLStore)
    assert sql_env.get_item("services") is None
    sql_env.set_item("services", "[]")
    sql_env.set_item("services", '[{"id": "1"}]')
    assert read_collection(sql_env, "services") == [{"id": "1"}]
    sql_env.set_item("bookingHistory", "[]")
    assert sql_env.keys() == ["bookingHistory", "services"]
    sql_env.remove_item("services")
    assert sql_env.get_item("services") is None
    sql_env.clear()
    assert sql_env.keys() == []


def test_json_store_refuses_to_overwrite_corrupt_file(store_env, tmp_path):
    write_collection(store_env, "serviceCategories", [{"id": 1, "name": "Hair"}])
    write_collection(store_env, "services", [{"id": "2", "title": "Cut"}])
    data_file = tmp_path / "data.json"
    data_file.write_text(data_file.read_text(encoding="utf-8")[:-3], encoding="utf-8")
    before = data_file.read_bytes()

    assert store_env.get_item("services") is None
    with pytest.raises(CorruptStoreError):
        store_env.set_item("bookingHistory", "[]")
    with pytest.raises(CorruptStoreError):
        store_env.remove_item("services")
    assert data_file.read_bytes() == before
