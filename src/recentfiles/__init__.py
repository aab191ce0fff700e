"""Recently touched source files across the latest commits of a Git repository."""

__version__ = "0.1.0"
