"""Generate a file tree, code statistics and source listing for a project directory."""

__version__ = "0.1.0"