"""Concrete infrastructure implementations and shared helpers."""

from .badge_store import JsonBadgeStore
from .filesystem import LocalFileSystem
from .notifier import LoggingTierChangeNotifier
from .sources import JsonCandidateSource, JsonMetricsSource

__all__ = [
    "JsonBadgeStore",
    "JsonCandidateSource",
    "JsonMetricsSource",
    "LocalFileSystem",
    "LoggingTierChangeNotifier",
]
