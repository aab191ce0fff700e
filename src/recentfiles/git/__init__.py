"""Version-control access: the git provider and the per-run operation token."""

from recentfiles.git.provider import GitCLIProvider, GitProvider
from recentfiles.git.token import OperationToken

__all__ = [
    "GitProvider",
    "GitCLIProvider",
    "OperationToken",
]
