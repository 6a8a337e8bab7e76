[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "codetree"
version = "0.1.0"
description = "Scan a project directory and write a file tree, code statistics and source contents to one text report"
requires-python = ">=3.10"
dependencies = []
keywords = ["file tree", "code statistics", "project report", "line count", "framework detection"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Documentation",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
codetree = "codetree.tree:main"
codetree-legacy = "codetree.legacy:main"

[tool.hatch.build.targets.wheel]
packages = ["codetree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
