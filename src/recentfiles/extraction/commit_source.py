"""Listing the most recent commits of a repository."""

from typing import List

import structlog

from recentfiles.cache import CommitMetadataCache
from recentfiles.extraction.commit import Commit, GitCommit
from recentfiles.git.provider import GitProvider
from recentfiles.git.token import OperationToken
from recentfiles.models import Options

logger = structlog.get_logger(__name__)

DEFAULT_COMMIT_LIMIT = 1


def get_commits(
    provider: GitProvider,
    options: Options,
    token: OperationToken,
    cache: CommitMetadataCache,
) -> List[Commit]:
    """List recent commits, newest first.

    Args:
        provider: Git provider to query
        options: Run options; a commit limit of 0 means the default of 1
        token: Operation token bounding the call
        cache: Metadata cache handed to every returned commit

    Returns:
        List of commits in provider order

    Raises:
        ExternalToolFailure: If the commits cannot be listed
    """
    limit = options.commit_limit or DEFAULT_COMMIT_LIMIT

    output = provider.list_commits(limit, token)
    commits: List[Commit] = [
        GitCommit(commit_hash, provider, cache)
        for commit_hash in output.split("\n")
        if commit_hash
    ]

    logger.debug("commits_listed", limit=limit, count=len(commits))
    return commits
