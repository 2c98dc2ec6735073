[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vecentity"
version = "0.1.0"
description = "Entity models for a vector database client: schemas, columns, indexes, search parameters and row conversion"
requires-python = ">=3.10"
dependencies = []
keywords = ["vector database", "schema", "columns", "index", "similarity search"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vecentity"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
