"""Pytest fixtures for testing."""

from __future__ import annotations

import pytest

from provider_matching.domain.models import CandidateProfile, MatchQuery
from provider_matching.domain.tiers import ProviderMetrics
from tests.fakes import InMemoryBadgeStore, InMemoryFileSystem, RecordingNotifier


@pytest.fixture
def in_memory_fs() -> InMemoryFileSystem:
    """Provide an in-memory filesystem for tests."""
    return InMemoryFileSystem()


@pytest.fixture
def badge_store() -> InMemoryBadgeStore:
    """Provide an empty in-memory badge store for tests."""
    return InMemoryBadgeStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Provide a notifier that records tier changes."""
    return RecordingNotifier()


@pytest.fixture
def strong_candidate() -> CandidateProfile:
    """A verified Dubai real-estate specialist with strong metrics."""
    return CandidateProfile(
        id="prov-strong",
        display_name="Layla Haddad",
        specializations=frozenset({"real_estate", "contracts"}),
        languages=frozenset({"en", "ar"}),
        region="dubai",
        consultation_fee=400,
        response_time_hours=10,
        average_rating=4.9,
        total_reviews=120,
        completed_cases=200,
        success_rate=95,
        verification_level="professional",
        years_experience=12,
        current_cases=2,
        max_concurrent_cases=10,
    )


@pytest.fixture
def rental_query() -> MatchQuery:
    """A rental agreement request in Dubai with an English speaker and a budget."""
    return MatchQuery(
        service_type="rental_agreement",
        region="dubai",
        languages=("en",),
        budget_min=200,
        budget_max=600,
    )


@pytest.fixture
def silver_metrics() -> ProviderMetrics:
    """Metrics that satisfy silver but not gold."""
    return ProviderMetrics(
        total_consultations=12,
        average_rating=4.2,
        total_reviews=6,
        years_experience=2,
        completed_cases=8,
        success_rate=75,
        response_time_hours=20,
        verification_level="basic",
    )
