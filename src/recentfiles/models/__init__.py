"""Configuration models for recent-files runs."""

from recentfiles.models.config import FilterConfig, Options, Settings

__all__ = [
    "Options",
    "FilterConfig",
    "Settings",
]
