import os

import pytest

from eburger.config import set_config_for_test
from eburger.data.backends.json_backend import JsonFilePersistence
from eburger.data.backends.memory_backend import MemoryPersistence
from eburger.data.util import get_persistence
from eburger.errors import PersistenceError


@pytest.fixture(autouse=True)
def test_config(tmp_path):
    set_config_for_test(data_dir=str(tmp_path / "store"), persistence_backend="json")


def test_missing_key_loads_none(tmp_path):
    """Absence of a key means 'use defaults'."""
    backend = JsonFilePersistence(tmp_path)
    assert backend.load("eburger_products") is None


def test_save_then_load(tmp_path):
    backend = JsonFilePersistence(tmp_path / "nested")
    backend.save("eburger_orders", '{"a": 1}')
    assert backend.load("eburger_orders") == '{"a": 1}'
    assert (tmp_path / "nested" / "eburger_orders.json").exists()


def test_save_replaces_whole_blob(tmp_path):
    backend = JsonFilePersistence(tmp_path)
    backend.save("k", "first")
    backend.save("k", "second")
    assert backend.load("k") == "second"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["k.json"]


def test_failed_save_raises_and_keeps_previous(tmp_path, monkeypatch):
    """A failed write is surfaced and the previous blob stays readable."""
    backend = JsonFilePersistence(tmp_path)
    backend.save("k", "kept")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(PersistenceError):
        backend.save("k", "lost")
    monkeypatch.undo()

    assert backend.load("k") == "kept"
    assert [p.name for p in tmp_path.iterdir()] == ["k.json"]


def test_invalid_key_rejected(tmp_path):
    backend = JsonFilePersistence(tmp_path)
    with pytest.raises(PersistenceError):
        backend.save("../escape", "x")


def test_default_dir_from_config(tmp_path):
    backend = JsonFilePersistence()
    assert backend.data_dir == tmp_path / "store"


def test_memory_backend():
    backend = MemoryPersistence({"k": "v"})
    assert backend.load("k") == "v"
    assert backend.load("other") is None
    backend.save("other", "w")
    assert backend.load("other") == "w"


def test_factory_kinds(tmp_path):
    assert isinstance(get_persistence(), JsonFilePersistence)
    assert isinstance(get_persistence("memory"), MemoryPersistence)
    with pytest.raises(ValueError):
        get_persistence("sqlite")
