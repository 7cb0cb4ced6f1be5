[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treestore"
version = "0.1.0"
description = "Paged record storage engine for an embedded tree-structured document database"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "embedded", "tree", "document", "storage-engine", "pages", "records", "leb128"]
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
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["treestore"]

[tool.pytest.ini_options]
addopts = "-ra"
