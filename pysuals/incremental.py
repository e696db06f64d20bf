"""Decides which inputs need rebuilding and caches their outputs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from pysuals.cache import CacheManager, CacheStats
from pysuals.hashing import HashCalculator

PathLike = Union[str, os.PathLike]


@dataclass
class BuildArtifact:
    path: Path
    hash: str
    size: int
    modified: int


class IncrementalCompiler:
    """Compares input digests with cached ones to skip unchanged inputs."""

    def __init__(self, cache_dir: PathLike) -> None:
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.cache_manager = CacheManager(self.cache_dir)
        self.hash_calculator = HashCalculator()
        self.file_hashes: dict[Path, str] = {}
        self.last_build_time = 0

    def needs_rebuild(self, input_path: PathLike) -> bool:
        """True when the input's digest differs from the one in the cache."""
        path = Path(input_path)
        current = self.hash_calculator.hash_file(path)
        if current != self.cache_manager.get_hash(path):
            self.file_hashes[path] = current
            return True
        return False

    def cached_output(self, input_path: PathLike) -> Optional[bytes]:
        return self.cache_manager.get_output(input_path)

    def store_output(self, input_path: PathLike, output: bytes) -> None:
        """Cache ``output`` under the input digest seen by :meth:`needs_rebuild`."""
        path = Path(input_path)
        self.cache_manager.store_output(path, output, self.file_hashes.get(path))

    def clean_cache(self) -> None:
        self.cache_manager.clean()
        self.file_hashes.clear()

    def cache_stats(self) -> CacheStats:
        return self.cache_manager.stats