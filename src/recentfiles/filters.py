"""Name-based file filters.

A filter chain is an ordered list of pure predicates over a changed file. A
file is admitted only when every predicate accepts it; evaluation stops at the
first rejection, so order affects only how much work is done, never the result.
"""

from typing import Callable, Iterable, List, Optional

from recentfiles.extraction.commit import ChangedFile
from recentfiles.models import FilterConfig

Predicate = Callable[[ChangedFile], bool]


def has_extension(extension: str) -> Predicate:
    """Admit only files whose extension equals ``extension`` (e.g. ".go")."""

    def predicate(file: ChangedFile) -> bool:
        return _extension(file.name) == extension

    predicate.__name__ = f"has_extension({extension!r})"
    return predicate


def lacks_marker(marker: str) -> Predicate:
    """Reject files whose name contains ``marker`` anywhere."""

    def predicate(file: ChangedFile) -> bool:
        return marker not in file.name

    predicate.__name__ = f"lacks_marker({marker!r})"
    return predicate


def _extension(name: str) -> str:
    # Suffix from the last dot of the final path element; ".go" is its own extension.
    base = name.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot != -1 else ""


class FilterChain:
    """Conjunction of file predicates."""

    def __init__(self, predicates: Optional[Iterable[Predicate]] = None) -> None:
        self._predicates: List[Predicate] = list(predicates or [])

    @property
    def predicates(self) -> List[Predicate]:
        return list(self._predicates)

    def admits(self, file: ChangedFile) -> bool:
        """Check whether every predicate accepts the file.

        Args:
            file: Changed file to check

        Returns:
            True if the file should be reported
        """
        return all(predicate(file) for predicate in self._predicates)

    def append(self, predicate: Predicate) -> "FilterChain":
        """Return a new chain with ``predicate`` evaluated after the existing ones."""
        return FilterChain(self._predicates + [predicate])

    def without(self, predicate: Predicate) -> "FilterChain":
        """Return a new chain lacking ``predicate``."""
        return FilterChain(p for p in self._predicates if p is not predicate)

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        names = ", ".join(getattr(p, "__name__", repr(p)) for p in self._predicates)
        return f"FilterChain([{names}])"


def default_filter_chain(
    config: Optional[FilterConfig] = None,
    include_generated: bool = False,
    include_mocks: bool = False,
    include_tests: bool = False,
) -> FilterChain:
    """Build the built-in chain: source extension, then generated, mock and test exclusions.

    Args:
        config: Filter rules; defaults to Go sources
        include_generated: Skip the generated-protocol exclusion
        include_mocks: Skip the mock-directory exclusion
        include_tests: Skip the test-file exclusion

    Returns:
        FilterChain
    """
    config = config or FilterConfig()

    chain = FilterChain([has_extension(config.source_extension)])
    if not include_generated:
        chain = chain.append(lacks_marker(config.generated_marker))
    if not include_mocks:
        chain = chain.append(lacks_marker(config.mock_marker))
    if not include_tests:
        chain = chain.append(lacks_marker(config.test_marker))
    return chain
