[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "combinate"
version = "0.1.0"
description = "Parser combinators: sequencing, repetition, separated lists and scanning with committed-input error tracking"
requires-python = ">=3.10"
dependencies = []
keywords = ["parser", "combinator", "parsing", "grammar"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["combinate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
