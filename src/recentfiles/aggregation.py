"""First-seen-wins aggregation of changed files across commits."""

from typing import Callable, List, Set

import structlog

from recentfiles.cache import CommitMetadataCache
from recentfiles.extraction.commit import ChangedFile, Commit
from recentfiles.filters import FilterChain
from recentfiles.git.provider import GitProvider
from recentfiles.git.token import OperationToken
from recentfiles.models import Options

logger = structlog.get_logger(__name__)

CommitSource = Callable[
    [GitProvider, Options, OperationToken, CommitMetadataCache], List[Commit]
]


def aggregate(
    commits: List[Commit], filter_chain: FilterChain, token: OperationToken
) -> List[ChangedFile]:
    """Collect the distinct files touched by ``commits`` that pass ``filter_chain``.

    Commits are walked in the given order (newest first) and files in the
    order each commit lists them. The first occurrence of a name decides its
    fate for the whole run: later copies are skipped without being filtered
    again, even when the first copy was rejected.

    Args:
        commits: Commits in traversal order
        filter_chain: Predicates a file must satisfy
        token: Operation token bounding every file lookup

    Returns:
        Admitted files in first-occurrence order

    Raises:
        ExternalToolFailure: If any commit's files cannot be listed; no partial
            result is returned
    """
    files: List[ChangedFile] = []
    seen: Set[str] = set()

    for commit in commits:
        for file in commit.get_files(token):
            if file.name in seen:
                continue
            seen.add(file.name)

            if filter_chain.admits(file):
                files.append(file)

    logger.info(
        "aggregation_complete",
        commits=len(commits),
        distinct_files=len(seen),
        admitted=len(files),
    )
    return files


def collect_recent_files(
    get_commits_fn: CommitSource,
    provider: GitProvider,
    options: Options,
    token: OperationToken,
    cache: CommitMetadataCache,
    filter_chain: FilterChain,
) -> List[ChangedFile]:
    """List recent commits with ``get_commits_fn`` and aggregate their files.

    Args:
        get_commits_fn: Commit source, normally ``recentfiles.extraction.get_commits``
        provider: Git provider
        options: Run options
        token: Operation token shared by every git call
        cache: Metadata cache handed to the commits
        filter_chain: Predicates a file must satisfy

    Returns:
        Admitted files in first-occurrence order
    """
    commits = get_commits_fn(provider, options, token, cache)
    return aggregate(commits, filter_chain, token)
