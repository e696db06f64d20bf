"""Module dependency graph built by following import statements."""

from __future__ import annotations

import os
import re
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, os.PathLike]

_IMPORT_RE = re.compile(r"""import\s+.*\s+from\s+["']([^"']+)["']""")


@dataclass
class Node:
    path: Path
    content: str
    deps: list[Path] = field(default_factory=list)


def extract_imports(content: str) -> list[Path]:
    """Return the module paths named by ``import ... from "path"`` statements."""
    return [Path(match.group(1)) for match in _IMPORT_RE.finditer(content)]


class DependencyGraph:
    """Modules reachable from one or more entry points, keyed by path."""

    def __init__(self) -> None:
        self._nodes: dict[Path, Node] = {}
        self.roots: list[Path] = []

    def build(self, entry: PathLike) -> None:
        """Read ``entry`` and every module it imports, directly or not.

        Import paths are taken as written; a missing file raises ``OSError``.
        """
        entry_path = Path(entry)
        self.roots.append(entry_path)
        self._add_node(entry_path)

        queue = deque([entry_path])
        while queue:
            path = queue.popleft()
            for dep in self._nodes[path].deps:
                if dep not in self._nodes:
                    self._add_node(dep)
                    queue.append(dep)

    def _add_node(self, path: Path) -> None:
        content = path.read_text(encoding="utf-8")
        self._nodes[path] = Node(path=path, content=content, deps=extract_imports(content))

    def get_node(self, path: PathLike) -> Optional[Node]:
        return self._nodes.get(Path(path))

    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def topological_sort(self) -> list[Node]:
        """Modules ordered so that each comes after the modules it imports."""
        visited: set[Path] = set()
        result: list[Node] = []

        def visit(path: Path) -> None:
            if path in visited:
                return
            visited.add(path)
            node = self._nodes.get(path)
            if node is None:
                return
            for dep in node.deps:
                visit(dep)
            result.append(node)

        for root in self.roots:
            visit(root)
        return result