"""JSON-file data sources for candidates and provider metrics.

Usage example:
    from pathlib import Path

    from provider_matching.infrastructure.filesystem import LocalFileSystem
    from provider_matching.infrastructure.sources import JsonCandidateSource

    candidates = JsonCandidateSource(Path("data/candidates.json"), LocalFileSystem())
    pool = candidates.list_candidates()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import override

from ..domain.models import CandidateProfile
from ..domain.tiers import ProviderMetrics
from ..exceptions import InputFileNotFoundError
from ..protocols import CandidateSource, FileSystem, MetricsSource
from .io.validation import parse_candidates, parse_metrics_file


@dataclass
class JsonCandidateSource(CandidateSource):
    """Candidate pool read from a JSON array or ``{"candidates": [...]}`` document."""

    path: Path
    fs: FileSystem

    @override
    def list_candidates(self) -> list[CandidateProfile]:
        if not self.fs.exists(self.path):
            raise InputFileNotFoundError("Candidates", str(self.path))
        return parse_candidates(self.fs.read_json(self.path))


@dataclass
class JsonMetricsSource(MetricsSource):
    """Provider metrics read once from a ``{"providers": [...]}`` document."""

    path: Path
    fs: FileSystem
    _snapshots: dict[str, ProviderMetrics] | None = field(default=None, repr=False)

    def all_metrics(self) -> dict[str, ProviderMetrics]:
        if self._snapshots is None:
            if not self.fs.exists(self.path):
                raise InputFileNotFoundError("Metrics", str(self.path))
            self._snapshots = parse_metrics_file(self.fs.read_json(self.path))
        return dict(self._snapshots)

    @override
    def get_metrics(self, provider_id: str) -> ProviderMetrics | None:
        return self.all_metrics().get(provider_id)
