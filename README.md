# pysuals

Building blocks for compiling `.pys` component programs to browser JavaScript.
The package is a library with no dependencies outside the standard library.

## What is in it

- `pysuals.syntax`: the syntax tree as dataclasses. It covers `Program`, `Component`,
  `Function`, `Signal`, `Computed`, `Effect`, `Import`, `Export` and `CssBlock`. It also
  has the statements (`ExprStmt`, `ReturnStmt`, `IfStmt`, `ForStmt`, `WhileStmt`,
  `AssignStmt`, `VarStmt`, `BlockStmt`) and the expressions (`Literal`, `Ident`,
  `BinaryExpr`, `UnaryExpr`, `CallExpr`, `MemberExpr`, `ObjectExpr`, `ArrayExpr`,
  `TernaryExpr`, `LambdaExpr`, `TemplateExpr`, `AwaitExpr`, `SpreadExpr`).
  Helper functions: `is_constant`, `expr_type_name`, `stmt_is_empty` and
  `stmt_contains_return`. `Span` describes a source region.
- `pysuals.config`: `CompilerConfig` holds these options:
  - `sourcemap`, default `True`
  - `minify`, default `False`
  - `target`, default `"es2020"`
  - `hmr`, default `False`
  - `optimize`, default `True`
  - `output_dir`, default `dist`

  `extract_dependencies(source)` lists the quoted path on every line that starts with
  `import` or `from`.
- `pysuals.js`: `JSGenerator` renders a `Program` as an ES module. The module imports
  `@pysuals/runtime`, exports one function per component and per function, and mounts
  the first component on `#app`. `expr_to_string` renders a single expression.
- `pysuals.sourcemap`: version 3 source maps. It provides `SourceMapGenerator`, `Mapping`,
  `SourceMap`, the VLQ encoder `encode_vlq`, and `generate_from_strings(source, output)`.
  The last one maps each output line to the source line with the same number.
- `pysuals.hashing`: `HashCalculator` produces SHA-256 hex digests of bytes, strings,
  files, dependency lists and JSON configs. `IncrementalHash` tracks a committed digest
  and a candidate digest.
- `pysuals.cache`: `CacheManager` keeps build outputs in a cache directory, by default
  `.pysuals/cache`. Each entry is one `<sha256>.cache` file, and `index.json` holds the
  index. Hits and misses are counted in `CacheStats`. `clean()` drops entries older
  than thirty days.
- `pysuals.incremental`: `IncrementalCompiler` compares an input file's digest with the
  cached one to decide whether it needs rebuilding.
- `pysuals.bundler.graph`: `DependencyGraph` follows `import ... from "path"` statements
  from an entry file and orders the modules so that each comes after what it imports.
- `pysuals.bundler.chunk`: `ChunkManager` concatenates the ordered modules into a
  `main.js` chunk and writes chunks to a directory.

## Install

```
pip install .
```

## Example: JavaScript from a syntax tree

```python
from pysuals.syntax import Program, Component, Signal, Literal, LiteralKind, ReturnStmt
from pysuals.config import CompilerConfig
from pysuals.js import JSGenerator

program = Program(components=[
    Component(
        name="Counter",
        signals=[Signal(name="count", initial=Literal(LiteralKind.INTEGER, 0, "0"))],
        body=[ReturnStmt(Literal(LiteralKind.STRING, "hi", '"hi"'))],
    ),
])

print(JSGenerator(CompilerConfig()).generate(program))
```

## Example: source map

```python
from pysuals.sourcemap import generate_from_strings

print(generate_from_strings("a\nb\n", "x\ny\nz\n"))
# {"version":3,"sources":["input.pys"],"names":[],"mappings":"AAAA;AACA","sourcesContent":null}
```

## Example: incremental builds

```python
from pysuals.incremental import IncrementalCompiler

compiler = IncrementalCompiler(".pysuals/cache")
if compiler.needs_rebuild("app.pys"):
    compiler.store_output("app.pys", b"compiled output")
print(compiler.cached_output("app.pys"))
```

A `HashCalculator` remembers each file's digest once it has read it. As a result, one
`IncrementalCompiler` does not see later edits to a file it has already hashed.

## Example: bundling

```python
from pysuals.bundler.graph import DependencyGraph
from pysuals.bundler.chunk import ChunkManager

graph = DependencyGraph()
graph.build("src/main.js")   # import paths are read as written, relative to the working directory

chunks = ChunkManager()
chunks.split(graph)
chunks.write_all("dist")
```

Each module's text is preceded by a `// <path>` line. If the entry chunk is larger than
100 KiB and holds more than one module, it is halved into `chunk_main.1.js` and
`chunk_main.2.js`. These split chunks list their modules but carry no code.

## What it does not do

- There is no parser: `.pys` text cannot be read into a `Program`. Trees are built in
  Python.
- There is no checking of scopes, types or signal use, and no optimisation pass.
- Output covers JavaScript and source maps only. There is no HTML page or CSS output.
- No single call runs a whole compile, and there is no bundler driver or plugin system.
  The graph and chunk steps are called directly, as above.
- There is no command-line tool and no watch mode.

## Tests

```
pip install .[test]
pytest
```