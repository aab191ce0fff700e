"""Commit and changed-file extraction."""

from recentfiles.extraction.commit import (
    ChangedFile,
    Commit,
    GitCommit,
    parse_commit_time,
)
from recentfiles.extraction.commit_source import get_commits

__all__ = [
    "Commit",
    "GitCommit",
    "ChangedFile",
    "get_commits",
    "parse_commit_time",
]
