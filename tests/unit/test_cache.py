"""Tests for the commit metadata cache."""

import pytest
from structlog.testing import capture_logs

from recentfiles.cache import CommitMetadataCache
from recentfiles.exceptions import ExternalToolFailure


def test_cache_initialization(cache):
    """Test a new cache is empty."""
    assert len(cache) == 0
    assert cache.hits == 0
    assert cache.misses == 0


def test_key_generation():
    """Test keys combine namespace and hash."""
    assert CommitMetadataCache.key("commit_time", "abc123d") == "commit_time-abc123d"
    assert CommitMetadataCache.key("commit_time", "a") != CommitMetadataCache.key("files", "a")


def test_get_or_fetch_fetches_once(cache):
    """Test that a populated key is served without fetching again."""
    calls = []

    def fetch():
        calls.append(1)
        return "Mon, 15 Jan 2024 10:30:00 +0100\n"

    first = cache.get_or_fetch("commit_time-a", fetch)
    second = cache.get_or_fetch("commit_time-a", fetch)

    assert first == second
    assert len(calls) == 1
    assert cache.misses == 1
    assert cache.hits == 1
    assert "commit_time-a" in cache


def test_write_once(cache):
    """Test a later fetch result never replaces a stored payload."""
    cache.get_or_fetch("k", lambda: "first")

    assert cache.get_or_fetch("k", lambda: "second") == "first"


def test_failed_fetch_leaves_key_empty(cache):
    """Test that errors propagate and nothing is stored."""

    def fetch():
        raise ExternalToolFailure(["git", "show"], 128, "fatal: bad object")

    with pytest.raises(ExternalToolFailure):
        cache.get_or_fetch("k", fetch)

    assert "k" not in cache
    assert cache.get_or_fetch("k", lambda: "ok") == "ok"


def test_get(cache):
    """Test plain lookups count hits and misses."""
    assert cache.get("k") is None
    cache.get_or_fetch("k", lambda: "payload")
    assert cache.get("k") == "payload"

    assert cache.hits == 1
    assert cache.misses == 2


def test_cache_stats(cache):
    """Test cache statistics calculation."""
    cache.get_or_fetch("a", lambda: "1")  # miss
    cache.get_or_fetch("a", lambda: "1")  # hit
    cache.get_or_fetch("a", lambda: "1")  # hit
    cache.get_or_fetch("b", lambda: "2")  # miss

    stats = cache.get_stats()

    assert stats["hits"] == 2
    assert stats["misses"] == 2
    assert stats["hit_rate"] == "50.0%"
    assert stats["entries"] == 2


def test_empty_stats(cache):
    """Test stats with no activity."""
    stats = cache.get_stats()

    assert stats["hit_rate"] == "0.0%"
    assert stats["entries"] == 0


def test_hit_logged_once(cache):
    """Test a cache hit is logged under the lock, misses are not."""
    with capture_logs() as logs:
        cache.get_or_fetch("commit_time-a", lambda: "payload")
        cache.get_or_fetch("commit_time-a", lambda: "payload")

    assert [entry["event"] for entry in logs] == ["cache_hit"]
    assert logs[0]["key"] == "commit_time-a"
