"""pkgenv — infer a project's virtual environment from its marker files."""

__version__ = "0.1.0"
