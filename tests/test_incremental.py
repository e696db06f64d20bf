import hashlib

import pytest

from pysuals.incremental import IncrementalCompiler


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "app.pys"
    path.write_text("component App")
    return path


@pytest.fixture
def compiler(tmp_path):
    return IncrementalCompiler(tmp_path / "cache")


def test_new_input_needs_rebuild(compiler, source):
    assert compiler.needs_rebuild(source) is True


def test_stored_output_keyed_by_input_digest(compiler, source):
    compiler.needs_rebuild(source)
    compiler.store_output(source, b"js")
    expected = hashlib.sha256(source.read_bytes()).hexdigest()
    assert compiler.cache_manager.get_hash(source) == expected
    assert compiler.needs_rebuild(source) is False


def test_changed_input_needs_rebuild_with_fresh_compiler(tmp_path, source):
    first = IncrementalCompiler(tmp_path / "cache")
    first.needs_rebuild(source)
    first.store_output(source, b"js")
    source.write_text("component Changed")
    second = IncrementalCompiler(tmp_path / "cache")
    assert second.needs_rebuild(source) is True


def test_unchanged_input_persists_across_compilers(tmp_path, source):
    first = IncrementalCompiler(tmp_path / "cache")
    first.needs_rebuild(source)
    first.store_output(source, b"js")
    second = IncrementalCompiler(tmp_path / "cache")
    assert second.needs_rebuild(source) is False
    assert second.cached_output(source) == b"js"


def test_cached_output_missing(compiler, source):
    assert compiler.cached_output(source) is None
    assert compiler.cache_stats().misses == 1


def test_clean_cache_keeps_recent_and_clears_digests(compiler, source):
    compiler.needs_rebuild(source)
    compiler.store_output(source, b"js")
    compiler.clean_cache()
    assert compiler.file_hashes == {}
    assert compiler.cached_output(source) == b"js"
    stats = compiler.cache_stats()
    assert stats.file_count == 1
    assert stats.size_bytes == len(b"js")