import hashlib

import pytest

from pysuals.cache import CacheManager, CacheStats


@pytest.fixture
def manager(tmp_path):
    return CacheManager(tmp_path / "cache")


def _cache_files(directory):
    return sorted(p for p in directory.iterdir() if p.suffix == ".cache")


def test_creates_cache_dir(tmp_path):
    target = tmp_path / "nested" / "cache"
    CacheManager(target)
    assert target.is_dir()


def test_store_and_get(manager):
    manager.store_output("a.pys", b"out", "abc123")
    assert manager.get_output("a.pys") == b"out"
    assert manager.get_hash("a.pys") == "abc123"


def test_default_hash_is_output_digest(manager):
    manager.store_output("a.pys", b"out")
    assert manager.get_hash("a.pys") == hashlib.sha256(b"out").hexdigest()


def test_missing_entry(manager):
    assert manager.get_hash("none.pys") is None
    assert manager.get_output("none.pys") is None


def test_hits_and_misses_counted(manager):
    manager.store_output("a.pys", b"out")
    manager.get_output("a.pys")
    manager.get_output("a.pys")
    manager.get_output("b.pys")
    stats = manager.stats
    assert (stats.hits, stats.misses) == (2, 1)


def test_index_persists(tmp_path):
    first = CacheManager(tmp_path / "cache")
    first.store_output("a.pys", b"\x00\xffdata", "h")
    second = CacheManager(tmp_path / "cache")
    assert second.get_output("a.pys") == b"\x00\xffdata"
    assert second.get_hash("a.pys") == "h"


def test_corrupt_index_is_ignored(tmp_path):
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    (cache_dir / "index.json").write_text("not json")
    manager = CacheManager(cache_dir)
    assert manager.index == {}


def test_update_stats_and_disk_usage(manager):
    manager.store_output("a.pys", b"12345")
    manager.store_output("b.pys", b"67")
    manager.update_stats()
    assert manager.disk_usage() == len(b"12345") + len(b"67")
    assert manager.stats.file_count == 2


def test_clean_removes_old_entries(manager):
    manager.store_output("old.pys", b"old")
    manager.store_output("new.pys", b"new")
    manager.index[next(p for p in manager.index if p.name == "old.pys")].timestamp = 0
    manager.clean()
    assert manager.get_output("old.pys") is None
    assert manager.get_output("new.pys") == b"new"
    assert len(_cache_files(manager.cache_dir)) == 1
    assert CacheManager(manager.cache_dir).get_hash("old.pys") is None


def test_clear_all(manager):
    manager.store_output("a.pys", b"a")
    manager.store_output("b.pys", b"b")
    manager.clear_all()
    assert manager.index == {}
    assert _cache_files(manager.cache_dir) == []
    assert manager.stats == CacheStats()