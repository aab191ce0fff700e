"""Git access for the recent-files pipeline.

Three textual operations are all the pipeline needs from version control:
listing recent commit hashes, listing the files changed relative to a commit,
and fetching a commit's timestamp. ``GitProvider`` states that contract and
``GitCLIProvider`` runs the matching git commands through GitPython.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Union

import git
import structlog

from recentfiles.exceptions import ExternalToolFailure
from recentfiles.git.token import OperationToken

logger = structlog.get_logger(__name__)


class GitProvider(ABC):
    """Abstract base class for version-control providers.

    Every method returns the provider's raw text output; splitting and
    parsing happen in the callers.
    """

    @abstractmethod
    def list_commits(self, limit: int, token: OperationToken) -> str:
        """List the ``limit`` most recent abbreviated commit hashes, newest first.

        Args:
            limit: Number of commits to list
            token: Operation token bounding the call

        Returns:
            One hash per line

        Raises:
            ExternalToolFailure: If the provider cannot be invoked or fails
        """
        pass

    @abstractmethod
    def list_files(self, commit_hash: str, token: OperationToken) -> str:
        """List repository-relative paths changed relative to a commit.

        Args:
            commit_hash: Commit hash
            token: Operation token bounding the call

        Returns:
            One forward-slash separated path per line

        Raises:
            ExternalToolFailure: If the provider cannot be invoked or fails
        """
        pass

    @abstractmethod
    def commit_time(self, commit_hash: str, token: OperationToken) -> str:
        """Fetch a commit's timestamp in RFC 1123 format with numeric zone.

        Args:
            commit_hash: Commit hash
            token: Operation token bounding the call

        Returns:
            Raw timestamp text, trailing newline included

        Raises:
            ExternalToolFailure: If the provider cannot be invoked or fails
        """
        pass


class GitCLIProvider(GitProvider):
    """Runs git commands in a working tree through GitPython's command wrapper.

    Example:
        >>> provider = GitCLIProvider(Path("/path/to/repo"))
        >>> token = OperationToken.with_timeout(5.0)
        >>> provider.list_commits(10, token).splitlines()
        ['abc123d', 'def456a', ...]
    """

    def __init__(self, repo_path: Union[str, Path]) -> None:
        """Initialize the provider.

        Args:
            repo_path: Path to the Git working tree the commands run in
        """
        self.repo_path = Path(repo_path)
        self._git = git.Git(str(self.repo_path))

    def list_commits(self, limit: int, token: OperationToken) -> str:
        return self._run(token, "log", f"-{limit}", "--pretty=format:%h")

    def list_files(self, commit_hash: str, token: OperationToken) -> str:
        return self._run(token, "diff", "--name-only", commit_hash)

    def commit_time(self, commit_hash: str, token: OperationToken) -> str:
        # Raw stdout: the trailing newline is trimmed by the timestamp parser.
        return self._run(
            token, "show", "-s", "--format=%cD", commit_hash, strip_newline_in_stdout=False
        )

    def _run(self, token: OperationToken, subcommand: str, *args: str, **kwargs: Any) -> str:
        """Execute a git subcommand bounded by the token's deadline.

        Args:
            token: Operation token; an expired or cancelled token fails without spawning
            subcommand: Git subcommand (e.g. "log")
            *args: Subcommand arguments
            **kwargs: Extra GitPython execute options

        Returns:
            Command stdout

        Raises:
            ExternalToolFailure: If the token is unusable or the command fails
        """
        cmd: List[str] = ["git", subcommand, *args]

        reason = token.reason()
        if reason is not None:
            logger.error("git_command_skipped", command=" ".join(cmd), reason=reason)
            raise ExternalToolFailure(cmd, reason=reason)

        if not self.repo_path.is_dir():
            logger.error("git_working_tree_missing", command=" ".join(cmd), cwd=str(self.repo_path))
            raise ExternalToolFailure(cmd, reason=f"cannot run: {self.repo_path} does not exist")

        logger.debug("git_command", command=" ".join(cmd), cwd=str(self.repo_path))

        try:
            output = getattr(self._git, subcommand)(
                *args, kill_after_timeout=token.remaining(), **kwargs
            )
        except git.exc.GitCommandNotFound as e:
            logger.error("git_command_not_found", command=" ".join(cmd), error=str(e))
            raise ExternalToolFailure(cmd, reason=f"could not be started: {e}") from e
        except git.exc.CommandError as e:
            stderr = _clean_stderr(e.stderr)
            logger.error(
                "git_command_failed", command=" ".join(cmd), status=e.status, stderr=stderr
            )
            returncode = e.status if isinstance(e.status, int) else None
            raise ExternalToolFailure(cmd, returncode, stderr) from e

        return output


def _clean_stderr(stderr: Any) -> str:
    # GitPython renders stderr as "\n  stderr: '...'".
    text = str(stderr or "").strip()
    if text.startswith("stderr:"):
        text = text[len("stderr:"):].strip()
    return text.strip("'").strip()

