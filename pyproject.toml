[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "towerdefense"
version = "0.1.0"
description = "Game rules and state for a grid-based tower defense game: maps, path distances, turrets, stage play, widgets and a scoreboard."
requires-python = ">=3.10"
dependencies = []
keywords = ["tower defense", "game", "strategy", "pathfinding", "scoreboard"]
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
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["towerdefense"]

[tool.hatch.build.targets.sdist]
include = ["towerdefense", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
