[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hsmkit"
version = "0.1.0"
description = "A small hierarchical state machine engine with a bounded event queue, keypad signals and a button pattern-press detector"
requires-python = ">=3.10"
dependencies = []
keywords = ["state machine", "hsm", "hierarchical", "events", "buttons", "keypad"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hsmkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
