[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crystalmaze"
version = "0.1.0"
description = "A small tile-based puzzle game: collect every crystal, then reach the exit."
requires-python = ">=3.10"
keywords = ["game", "puzzle", "tile map", "xpm", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
crystalmaze = "crystalmaze.app:main"

[tool.hatch.build.targets.wheel]
packages = ["crystalmaze"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
