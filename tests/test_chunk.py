from pathlib import Path

from pysuals.bundler.chunk import MAX_CHUNK_SIZE, ChunkManager
from pysuals.bundler.graph import DependencyGraph


def _graph(tmp_path: Path, body_a: str, body_b: str):
    b = tmp_path / "b.js"
    b.write_text(body_b, encoding="utf-8")
    a = tmp_path / "a.js"
    a.write_text(f'import {{ x }} from "{b}";\n{body_a}', encoding="utf-8")
    graph = DependencyGraph()
    graph.build(a)
    return graph, a, b


def test_small_graph_gives_one_entry_chunk(tmp_path):
    graph, a, b = _graph(tmp_path, "const a = 1;", "const b = 2;")
    manager = ChunkManager()
    manager.split(graph)

    assert len(manager.chunks) == 1
    chunk = manager.chunks[0]
    assert chunk.name == "main"
    assert chunk.is_entry
    assert chunk.modules == [b, a]
    expected = (
        f"// {b}\n{b.read_text(encoding='utf-8')}\n\n"
        f"// {a}\n{a.read_text(encoding='utf-8')}\n\n"
    )
    assert chunk.code == expected


def test_large_chunk_is_halved(tmp_path):
    big = "x" * (MAX_CHUNK_SIZE + 1)
    graph, a, b = _graph(tmp_path, big, "const b = 2;")
    manager = ChunkManager()
    manager.split(graph)

    assert [c.name for c in manager.chunks] == ["main.1", "main.2"]
    assert [c.modules for c in manager.chunks] == [[b], [a]]
    assert not any(c.is_entry for c in manager.chunks)


def test_large_single_module_is_not_split(tmp_path):
    entry = tmp_path / "only.js"
    entry.write_text("y" * (MAX_CHUNK_SIZE + 10), encoding="utf-8")
    graph = DependencyGraph()
    graph.build(entry)
    manager = ChunkManager()
    manager.split(graph)

    assert len(manager.chunks) == 1
    assert manager.chunks[0].is_entry


def test_write_all_entry_chunk(tmp_path):
    graph, _, _ = _graph(tmp_path, "const a = 1;", "const b = 2;")
    manager = ChunkManager()
    manager.split(graph)
    out = tmp_path / "out" / "nested"
    manager.write_all(out)

    assert (out / "main.js").read_text(encoding="utf-8") == manager.chunks[0].code


def test_write_all_split_chunks(tmp_path):
    graph, _, _ = _graph(tmp_path, "z" * (MAX_CHUNK_SIZE + 1), "const b = 2;")
    manager = ChunkManager()
    manager.split(graph)
    out = tmp_path / "dist"
    manager.write_all(out)

    assert sorted(p.name for p in out.iterdir()) == ["chunk_main.1.js", "chunk_main.2.js"]