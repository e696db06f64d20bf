"""Content hashing for incremental builds."""

from __future__ import annotations

import hashlib
import json
import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional, Union

PathLike = Union[str, os.PathLike]


class HashCalculator:
    """Computes SHA-256 hex digests, caching file digests by path."""

    def __init__(self) -> None:
        self.file_hashes: dict[str, str] = {}

    def hash_file(self, path: PathLike) -> str:
        """Digest a file's content; an unreadable file hashes as empty.

        The result is cached per path, so later changes to the file are not seen.
        """
        key = os.fspath(path)
        cached = self.file_hashes.get(key)
        if cached is not None:
            return cached
        try:
            with open(key, "rb") as handle:
                content = handle.read()
        except OSError:
            content = b""
        digest = self.hash_bytes(content)
        self.file_hashes[key] = digest
        return digest

    def hash_bytes(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()

    def hash_string(self, text: str) -> str:
        return self.hash_bytes(text.encode("utf-8"))

    def hash_ast(self, ast: str) -> str:
        return self.hash_string(ast)

    def combine_hashes(self, hashes: Iterable[str]) -> str:
        """Digest the concatenation of the given hash strings."""
        hasher = hashlib.sha256()
        for digest in hashes:
            hasher.update(digest.encode("utf-8"))
        return hasher.hexdigest()

    def hash_dependencies(self, paths: Iterable[PathLike]) -> str:
        """Combine the content digests of every readable file in ``paths``."""
        hashes = []
        for path in paths:
            try:
                with open(path, "rb") as handle:
                    hashes.append(self.hash_bytes(handle.read()))
            except OSError:
                continue
        return self.combine_hashes(hashes)

    def fast_hash(self, data: bytes) -> int:
        """A quick unsigned 64-bit hash; stable only within one process."""
        return hash(bytes(data)) & 0xFFFFFFFFFFFFFFFF

    def hash_config(self, config: Any) -> str:
        """Digest a JSON-compatible configuration, independent of key order."""
        text = json.dumps(config, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
        return self.hash_string(text)

    def verify_hash(self, data: bytes, expected: str) -> bool:
        return self.hash_bytes(data) == expected


@dataclass
class IncrementalHash:
    """Tracks a committed digest and a candidate digest of changing data."""

    last_hash: Optional[str] = None
    current_hash: Optional[str] = None

    def update(self, data: bytes, calculator: HashCalculator) -> bool:
        """Hash ``data`` as the candidate; True unless it equals the committed digest."""
        new_hash = calculator.hash_bytes(data)
        self.current_hash = new_hash
        return self.last_hash != new_hash

    def commit(self) -> None:
        self.last_hash = self.current_hash

    def rollback(self) -> None:
        self.current_hash = self.last_hash

    def has_changed(self) -> bool:
        return self.last_hash != self.current_hash