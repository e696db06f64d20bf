[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pysuals"
version = "0.1.0"
description = "Building blocks for compiling .pys component programs: syntax tree, JavaScript output, source maps, incremental caching and module bundling"
requires-python = ">=3.10"
dependencies = []
keywords = ["frontend", "compiler", "javascript", "bundler", "signals", "sourcemap"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pysuals"]

[tool.pytest.ini_options]
addopts = "-ra"
