[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ambros"
version = "3.0.0"
description = "Keep a local database of shell commands with names, tags, categories and history"
requires-python = ">=3.11"
dependencies = []
keywords = ["shell", "history", "commands", "bookmarks", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ambros = "ambros.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ambros"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
