[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wildungeon"
version = "0.1.0"
description = "Procedural dungeon generation, character stats and combat rules for a dungeon crawler"
requires-python = ">=3.10"
dependencies = []
keywords = ["dungeon", "procedural-generation", "roguelike", "game", "tilemap"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wildungeon = "wildungeon.layout:main"

[tool.hatch.build.targets.wheel]
packages = ["wildungeon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
