"""
Tests for bankroll persistence.
"""

import pytest

from tablejack.blackjack.bankroll import MemoryBankrollStore, SQLiteBankrollStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    if request.param == "memory":
        store = MemoryBankrollStore()
    else:
        store = SQLiteBankrollStore()
    yield store
    store.close()


def test_load_defaults_when_empty(store):
    assert store.load() == 100.0
    assert store.load(default=250.0) == 250.0


def test_save_then_load(store):
    store.save(87.5)
    assert store.load() == 87.5

    store.save(120)
    assert store.load() == 120.0


def test_bankroll_key_is_fixed(store):
    store.save(42)
    assert store.get("bankroll") == "42"


@pytest.mark.parametrize(
    "raw", ["not json", '"a string"', "true", "null", "NaN", "Infinity", "-Infinity"]
)
def test_unusable_stored_value_falls_back_to_default(raw):
    store = MemoryBankrollStore({"bankroll": raw})
    assert store.load(default=100.0) == 100.0


def test_sqlite_file_survives_reopen(tmp_path):
    db_path = str(tmp_path / "bankroll.db")

    first = SQLiteBankrollStore(db_path)
    first.save(133.5)
    first.close()

    second = SQLiteBankrollStore(db_path)
    try:
        assert second.load() == 133.5
    finally:
        second.close()
