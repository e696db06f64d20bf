from pathlib import Path

import pytest

from pysuals.bundler.graph import DependencyGraph, extract_imports


def _write(path: Path, imports: list[Path], body: str = "") -> Path:
    lines = [f'import {{ x }} from "{dep}";' for dep in imports]
    lines.append(body)
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def test_extract_imports_both_quote_styles():
    content = "import a from \"./x.js\";\nimport { b } from './y.js';\n"
    assert extract_imports(content) == [Path("./x.js"), Path("./y.js")]


def test_extract_imports_ignores_bare_imports():
    assert extract_imports('import "side.js";\nconst a = 1;') == []


def test_build_and_topological_order(tmp_path):
    c = _write(tmp_path / "c.js", [], "const c = 3;")
    b = _write(tmp_path / "b.js", [c], "const b = 2;")
    a = _write(tmp_path / "a.js", [b, c], "const a = 1;")

    graph = DependencyGraph()
    graph.build(a)

    assert [node.path for node in graph.topological_sort()] == [c, b, a]
    assert len(graph.nodes()) == 3


def test_get_node_returns_content_and_deps(tmp_path):
    b = _write(tmp_path / "b.js", [], "const b = 2;")
    a = _write(tmp_path / "a.js", [b], "const a = 1;")

    graph = DependencyGraph()
    graph.build(a)

    node = graph.get_node(a)
    assert node.deps == [b]
    assert node.content == a.read_text(encoding="utf-8")
    assert graph.get_node(tmp_path / "missing.js") is None


def test_cycle_terminates(tmp_path):
    a = tmp_path / "a.js"
    b = tmp_path / "b.js"
    _write(a, [b])
    _write(b, [a])

    graph = DependencyGraph()
    graph.build(a)

    assert [node.path for node in graph.topological_sort()] == [b, a]


def test_missing_dependency_raises(tmp_path):
    a = _write(tmp_path / "a.js", [tmp_path / "nope.js"])
    graph = DependencyGraph()
    with pytest.raises(FileNotFoundError):
        graph.build(a)


def test_missing_entry_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        DependencyGraph().build(tmp_path / "absent.js")