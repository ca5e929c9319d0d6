[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "phalanx"
version = "0.1.0"
description = "Index and shard metadata records, rendezvous shard placement, search aggregations and request/response messages for a distributed full-text search engine"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "search",
    "full-text",
    "index",
    "sharding",
    "aggregations",
    "rendezvous-hashing",
    "ndjson",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["phalanx"]

[tool.hatch.build.targets.sdist]
include = ["phalanx", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
