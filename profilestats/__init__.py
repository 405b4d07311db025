"""Profile stats aggregation: fetch, project, cache and render badges."""

from .badge import render_badge
from .cache import CACHE_TTL, SnapshotCache
from .config import Config
from .errors import (
    CacheMissError,
    ProfileStatsError,
    UnknownPlatformError,
    UnsupportedPlatformError,
    UpstreamError,
    ValidationError,
)
from .fetcher import PlatformFetcher
from .markdown import render_markdown
from .platforms import PLATFORMS, PlatformDescriptor
from .projector import project
from .records import StatRecord, StatsSnapshot

__version__ = "1.0.0"

__all__ = [
    "CACHE_TTL",
    "CacheMissError",
    "Config",
    "PLATFORMS",
    "PlatformDescriptor",
    "PlatformFetcher",
    "ProfileStatsError",
    "SnapshotCache",
    "StatRecord",
    "StatsSnapshot",
    "UnknownPlatformError",
    "UnsupportedPlatformError",
    "UpstreamError",
    "ValidationError",
    "project",
    "render_badge",
    "render_markdown",
]
