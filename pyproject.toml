[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cdsmodel"
version = "0.1.0"
description = "Building blocks of a concurrency model checker: thread model, scheduler, wait records, an ordered hash set and a small printf engine"
requires-python = ">=3.10"
dependencies = []
keywords = ["model checking", "concurrency", "scheduler", "threads", "printf", "testing"]
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
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cdsmodel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
