"""Commits and the files they touched."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List

from recentfiles.cache import CommitMetadataCache
from recentfiles.exceptions import TimestampParseFailure
from recentfiles.git.provider import GitProvider
from recentfiles.git.token import OperationToken

COMMIT_TIME_NAMESPACE = "commit_time"

# RFC 1123 with a numeric zone, as rendered by git's %cD.
COMMIT_TIME_FORMAT = "%a, %d %b %Y %H:%M:%S %z"


class Commit(ABC):
    """A commit identified by its hash.

    Changed files and the commit timestamp are resolved on demand. Two
    commits are equal when their hashes are.
    """

    def __init__(self, commit_hash: str) -> None:
        self._hash = commit_hash

    @property
    def hash(self) -> str:
        return self._hash

    @abstractmethod
    def get_files(self, token: OperationToken) -> List["ChangedFile"]:
        """List files changed relative to this commit, in provider order.

        Args:
            token: Operation token bounding the lookup

        Returns:
            List of ChangedFile objects referencing this commit

        Raises:
            ExternalToolFailure: If the file list cannot be retrieved
        """
        pass

    @abstractmethod
    def commit_time(self, token: OperationToken) -> datetime:
        """Resolve the commit timestamp.

        Args:
            token: Operation token bounding the lookup

        Returns:
            Timezone-aware commit timestamp

        Raises:
            ExternalToolFailure: If the timestamp cannot be retrieved
            TimestampParseFailure: If the timestamp text is malformed
        """
        pass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self._hash == other._hash

    def __hash__(self) -> int:
        return hash(self._hash)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._hash!r})"


@dataclass(frozen=True)
class ChangedFile:
    """A file name and the commit it was found in.

    Attributes:
        name: Repository-relative path, the deduplication key
        commit: Commit that introduced the file (lookup only)
    """
    name: str
    commit: Commit


class GitCommit(Commit):
    """Commit backed by a git provider and a shared metadata cache."""

    def __init__(
        self, commit_hash: str, provider: GitProvider, cache: CommitMetadataCache
    ) -> None:
        """Initialize the commit.

        Args:
            commit_hash: Abbreviated or full commit hash
            provider: Provider answering file and timestamp lookups
            cache: Cache of raw timestamp output shared across commits
        """
        super().__init__(commit_hash)
        self.provider = provider
        self.cache = cache

    def get_files(self, token: OperationToken) -> List[ChangedFile]:
        output = self.provider.list_files(self.hash, token)
        return [ChangedFile(name=name, commit=self) for name in output.splitlines() if name]

    def commit_time(self, token: OperationToken) -> datetime:
        key = self.cache.key(COMMIT_TIME_NAMESPACE, self.hash)
        payload = self.cache.get_or_fetch(key, lambda: self.provider.commit_time(self.hash, token))
        return parse_commit_time(payload)


def parse_commit_time(payload: str) -> datetime:
    """Parse raw ``%cD`` output into a timezone-aware datetime.

    Exactly one trailing line terminator is trimmed before parsing.

    Args:
        payload: Raw git output, e.g. "Mon, 15 Jan 2024 10:30:00 +0100\\n"

    Returns:
        Parsed timestamp

    Raises:
        TimestampParseFailure: If the text does not match the expected format
    """
    text = payload
    if text.endswith("\r\n"):
        text = text[:-2]
    elif text.endswith("\n"):
        text = text[:-1]

    try:
        return datetime.strptime(text, COMMIT_TIME_FORMAT)
    except ValueError as e:
        raise TimestampParseFailure(payload, str(e)) from e
