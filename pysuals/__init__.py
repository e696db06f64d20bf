"""Syntax tree, JavaScript and source-map output, incremental caching and bundling for .pys programs."""

__version__ = "0.1.0"