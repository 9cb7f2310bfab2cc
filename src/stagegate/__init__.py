"""stagegate - pre-commit quality gate for staged changes."""

__version__ = "0.1.0"
