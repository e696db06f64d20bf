"""Grouping of bundled modules into output chunks."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pysuals.bundler.graph import DependencyGraph

PathLike = Union[str, os.PathLike]

MAX_CHUNK_SIZE = 1024 * 100


@dataclass
class Chunk:
    name: str
    modules: list[Path] = field(default_factory=list)
    code: str = ""
    is_entry: bool = False

    @property
    def filename(self) -> str:
        return "main.js" if self.is_entry else f"chunk_{self.name}.js"


class ChunkManager:
    """Collects modules into chunks and writes them out."""

    def __init__(self) -> None:
        self.chunks: list[Chunk] = []

    def split(self, graph: DependencyGraph) -> None:
        """Concatenate the graph's modules in dependency order into an entry chunk.

        Chunks larger than the size limit that hold more than one module are
        then halved into two non-entry chunks listing the modules of each half.
        """
        entry = Chunk(name="main", is_entry=True)
        parts = []
        for node in graph.topological_sort():
            entry.modules.append(node.path)
            parts.append(f"// {node.path}\n{node.content}\n\n")
        entry.code = "".join(parts)
        self.chunks.append(entry)
        self._split_by_size()

    def _split_by_size(self) -> None:
        new_chunks: list[Chunk] = []
        for chunk in self.chunks:
            if len(chunk.code.encode("utf-8")) > MAX_CHUNK_SIZE and len(chunk.modules) > 1:
                half = len(chunk.modules) // 2
                new_chunks.append(Chunk(name=f"{chunk.name}.1", modules=chunk.modules[:half]))
                new_chunks.append(Chunk(name=f"{chunk.name}.2", modules=chunk.modules[half:]))
            else:
                new_chunks.append(chunk)
        self.chunks = new_chunks

    def write_all(self, output_dir: PathLike) -> None:
        """Write every chunk into ``output_dir``, creating it if needed."""
        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)
        for chunk in self.chunks:
            (directory / chunk.filename).write_bytes(chunk.code.encode("utf-8"))