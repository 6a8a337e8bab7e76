# codetree

`codetree` scans a project directory and writes one text report,
`codetree.txt`, into that directory. The report holds:

- the detected project types (Rust, JavaScript/Node.js, Python, Java/Maven,
  Java/Gradle, .NET, Go, Ruby, PHP) and the build directories left out
  because of them
- detected frameworks, with the version read from `package.json` where there
  is one and `?` otherwise, grouped as frontend, backend, testing and other
- a tree of the directory, with directories listed before files and each
  group sorted by name
- statistics: file count, total lines split into code, comment and blank
  lines, total size, and files and lines per extension
- the contents of every listed file, numbered in tree order, except that
  files whose names suggest secrets (`secrets.json`, `settings.py`,
  `config.py` and similar) are shown as hidden

Version-control, editor and cache directories are always skipped, as are
lock files, common tool configuration files, `.env` and `README.md`. Files
that are not valid UTF-8 are listed with "(Unable to read file content)" in
place of their contents.

## Installation

```
pip install .
```

## Usage

Report on the current directory:

```
codetree
```

Report on another directory:

```
codetree path/to/project
```

A report from an earlier run is removed before the new one is written. The
project information and the statistics are printed to the terminal as well.
If a file system error stops the run, the command prints it and exits with
status 1.

`codetree-legacy` writes the same tree and file contents to `codetree.txt`,
with no project detection, statistics or hiding of sensitive files, and skips
a fixed list of directories (`node_modules`, `target`, `build`, `dist`,
`vendor` and others). It shows its progress while reading the files:

```
codetree-legacy path/to/project
```

## Use from Python

```python
from pathlib import Path

from codetree.project import ProjectDetector
from codetree.stats import format_size
from codetree.tree import generate_report

detector = ProjectDetector()
detector.detect(Path("."))
print(detector.format_info())
print(format_size(2048))  # 2.00 KB

text, stats, detector = generate_report(Path("."), "codetree")
print(stats.format())
```

`codetree.legacy.generate_report(root, script_name)` returns the plain
report text.

## What it does not do

The report is always written in full to `codetree.txt`; there is no option
to choose another output file, to add exclusions, or to read `.gitignore`.

## Running the tests

```
pip install ".[test]"
pytest
```