"""Candidate and metrics source fakes for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import override

from provider_matching.domain.models import CandidateProfile
from provider_matching.domain.tiers import ProviderMetrics
from provider_matching.protocols import CandidateSource, MetricsSource


@dataclass
class InMemoryCandidateSource(CandidateSource):
    """Candidate source returning a fixed pool."""

    candidates: list[CandidateProfile] = field(default_factory=list)

    @override
    def list_candidates(self) -> list[CandidateProfile]:
        return list(self.candidates)


@dataclass
class InMemoryMetricsSource(MetricsSource):
    """Metrics source returning fixed snapshots."""

    snapshots: dict[str, ProviderMetrics] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    @override
    def get_metrics(self, provider_id: str) -> ProviderMetrics | None:
        self.calls.append(provider_id)
        return self.snapshots.get(provider_id)
