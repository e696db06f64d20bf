"""On-disk cache of build outputs keyed by input path."""

from __future__ import annotations

import base64
import dataclasses
import hashlib
import json
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, os.PathLike]

DEFAULT_CACHE_DIR = Path(".pysuals/cache")
MAX_AGE_SECONDS = 30 * 24 * 60 * 60
_INDEX_FILE = "index.json"


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    size_bytes: int = 0
    file_count: int = 0


@dataclass
class CacheEntry:
    hash: str
    output: bytes
    timestamp: int
    size: int

    def to_dict(self) -> dict:
        return {
            "hash": self.hash,
            "output": base64.b64encode(self.output).decode("ascii"),
            "timestamp": self.timestamp,
            "size": self.size,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CacheEntry:
        return cls(
            hash=data["hash"],
            output=base64.b64decode(data["output"]),
            timestamp=int(data["timestamp"]),
            size=int(data["size"]),
        )


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _now() -> int:
    return int(time.time())


class CacheManager:
    """Stores outputs in a cache directory together with a persistent index."""

    def __init__(self, cache_dir: PathLike = DEFAULT_CACHE_DIR) -> None:
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.index: dict[Path, CacheEntry] = {}
        self._stats = CacheStats()
        self._load_index()

    @property
    def stats(self) -> CacheStats:
        return dataclasses.replace(self._stats)

    def get_hash(self, path: PathLike) -> Optional[str]:
        entry = self.index.get(Path(path))
        return entry.hash if entry is not None else None

    def get_output(self, path: PathLike) -> Optional[bytes]:
        """Return the cached output for ``path``, counting a hit or a miss."""
        entry = self.index.get(Path(path))
        if entry is None:
            self._stats.misses += 1
            return None
        self._stats.hits += 1
        return entry.output

    def store_output(self, path: PathLike, output: bytes, hash: Optional[str] = None) -> None:
        """Cache ``output`` for ``path``; the hash defaults to the output's digest."""
        output = bytes(output)
        entry = CacheEntry(
            hash=hash if hash is not None else _sha256_hex(output),
            output=output,
            timestamp=_now(),
            size=len(output),
        )
        key = Path(path)
        self._cache_path(key).write_bytes(json.dumps(entry.to_dict()).encode("utf-8"))
        self.index[key] = entry
        self._save_index()

    def clean(self) -> None:
        """Drop entries older than thirty days and their cache files."""
        now = _now()
        kept: dict[Path, CacheEntry] = {}
        for path, entry in self.index.items():
            if now - entry.timestamp > MAX_AGE_SECONDS:
                self._remove_file(path)
            else:
                kept[path] = entry
        self.index = kept
        self._save_index()
        self.update_stats()

    def update_stats(self) -> None:
        self._stats.size_bytes = sum(entry.size for entry in self.index.values())
        self._stats.file_count = len(self.index)

    def clear_all(self) -> None:
        for path in self.index:
            self._remove_file(path)
        self.index.clear()
        self._save_index()
        self.update_stats()

    def disk_usage(self) -> int:
        """Total cached output size as of the last stats update."""
        return self._stats.size_bytes

    def _cache_path(self, path: Path) -> Path:
        return self.cache_dir / f"{_sha256_hex(str(path).encode('utf-8'))}.cache"

    def _remove_file(self, path: Path) -> None:
        try:
            self._cache_path(path).unlink()
        except OSError:
            pass

    def _load_index(self) -> None:
        try:
            raw = json.loads((self.cache_dir / _INDEX_FILE).read_text(encoding="utf-8"))
            self.index = {Path(key): CacheEntry.from_dict(value) for key, value in raw.items()}
        except (OSError, ValueError, KeyError, TypeError, AttributeError):
            pass

    def _save_index(self) -> None:
        data = {str(path): entry.to_dict() for path, entry in self.index.items()}
        (self.cache_dir / _INDEX_FILE).write_text(json.dumps(data), encoding="utf-8")