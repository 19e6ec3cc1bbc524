"""Exports for test fakes."""

from .badges import InMemoryBadgeStore, RecordingNotifier
from .filesystem import InMemoryFileSystem
from .sources import InMemoryCandidateSource, InMemoryMetricsSource

__all__ = [
    "InMemoryBadgeStore",
    "InMemoryCandidateSource",
    "InMemoryFileSystem",
    "InMemoryMetricsSource",
    "RecordingNotifier",
]
