"""Compiler configuration and import-path scanning of source text."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class CompilerConfig:
    sourcemap: bool = True
    minify: bool = False
    target: str = "es2020"
    hmr: bool = False
    optimize: bool = True
    output_dir: Path = field(default_factory=lambda: Path("dist"))


def extract_import_path(line: str) -> Optional[str]:
    """Return the first quoted string on ``line``, double quotes tried first."""
    for quote in ('"', "'"):
        parts = line.split(quote)
        if len(parts) > 1:
            return parts[1]
    return None


def extract_dependencies(source: str) -> list[str]:
    """List the quoted paths of every ``import`` or ``from`` line in ``source``."""
    deps = []
    for line in source.splitlines():
        trimmed = line.strip()
        if trimmed.startswith(("import", "from")):
            path = extract_import_path(trimmed)
            if path is not None:
                deps.append(path)
    return deps