"""Version 3 source maps with base64 VLQ-encoded mappings."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from itertools import count
from typing import Optional

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_DEFAULT_SOURCE = "input.pys"


def encode_vlq(value: int) -> str:
    """Encode a signed integer as a base64 VLQ digit string."""
    val = ((-value) << 1) | 1 if value < 0 else value << 1
    digits = []
    while True:
        digit = val & 31
        val >>= 5
        if val:
            digit |= 32
        digits.append(_BASE64[digit])
        if not val:
            return "".join(digits)


def _lines(text: str) -> list[str]:
    """Split on newlines the way a line iterator does: no trailing empty line."""
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


@dataclass
class SourceMap:
    version: int = 3
    sources: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    mappings: str = ""
    sources_content: Optional[list[str]] = None

    def to_json(self) -> str:
        """Serialise to compact JSON using the standard field names."""
        return json.dumps(
            {
                "version": self.version,
                "sources": self.sources,
                "names": self.names,
                "mappings": self.mappings,
                "sourcesContent": self.sources_content,
            },
            separators=(",", ":"),
            ensure_ascii=False,
        )


@dataclass
class Mapping:
    generated_line: int
    generated_col: int
    source_line: int
    source_col: int
    source_idx: int
    name_idx: Optional[int] = None


class SourceMapGenerator:
    """Collects mappings, sources and names and renders them as a source map."""

    def __init__(self) -> None:
        self.mappings: list[Mapping] = []
        self.sources: list[str] = []
        self.names: list[str] = []
        self._source_index: dict[str, int] = {}
        self._name_index: dict[str, int] = {}

    def generate(self) -> str:
        source_map = SourceMap(
            version=3,
            sources=list(self.sources),
            names=list(self.names),
            mappings=self.encode_mappings(),
        )
        return source_map.to_json()

    def add_mapping(self, mapping: Mapping) -> None:
        self.mappings.append(mapping)

    def add_source(self, source: str) -> int:
        """Register a source file and return its index, reusing an existing one."""
        if source not in self._source_index:
            self._source_index[source] = len(self.sources)
            self.sources.append(source)
        return self._source_index[source]

    def add_name(self, name: str) -> int:
        """Register a symbol name and return its index, reusing an existing one."""
        if name not in self._name_index:
            self._name_index[name] = len(self.names)
            self.names.append(name)
        return self._name_index[name]

    def encode_mappings(self) -> str:
        """Encode mappings line by line from line 0, stopping at the first line without any."""
        by_line: dict[int, list[Mapping]] = {}
        for mapping in self.mappings:
            by_line.setdefault(mapping.generated_line, []).append(mapping)

        prev_source_idx = prev_source_line = prev_source_col = prev_name_idx = 0
        encoded_lines = []
        for line in count():
            line_mappings = by_line.get(line)
            if not line_mappings:
                break
            prev_gen_col = 0
            segments = []
            for mapping in line_mappings:
                parts = [
                    encode_vlq(mapping.generated_col - prev_gen_col),
                    encode_vlq(mapping.source_idx - prev_source_idx),
                    encode_vlq(mapping.source_line - prev_source_line),
                    encode_vlq(mapping.source_col - prev_source_col),
                ]
                if mapping.name_idx is not None:
                    parts.append(encode_vlq(mapping.name_idx - prev_name_idx))
                    prev_name_idx = mapping.name_idx
                segments.append("".join(parts))
                prev_gen_col = mapping.generated_col
                prev_source_idx = mapping.source_idx
                prev_source_line = mapping.source_line
                prev_source_col = mapping.source_col
            encoded_lines.append(",".join(segments))
        return ";".join(encoded_lines)


def generate_from_strings(source: str, output: str) -> str:
    """Map each output line to the source line with the same number, where one exists."""
    generator = SourceMapGenerator()
    source_idx = generator.add_source(_DEFAULT_SOURCE)
    line_total = min(len(_lines(source)), len(_lines(output)))
    for line in range(line_total):
        generator.add_mapping(
            Mapping(
                generated_line=line,
                generated_col=0,
                source_line=line,
                source_col=0,
                source_idx=source_idx,
            )
        )
    return generator.generate()