"""Tier qualification from lifetime performance metrics.

The tier of a provider is a pure function of one metrics snapshot: tiers are
checked from highest to lowest and the first one whose requirements all hold
wins. The lowest tier is the fallback, so every snapshot resolves to a tier.

Usage example:
    from provider_matching.domain.tiers import ProviderMetrics, calculate_tier_progress

    progress = calculate_tier_progress(
        ProviderMetrics(
            total_consultations=12,
            average_rating=4.2,
            total_reviews=6,
            years_experience=2,
            completed_cases=8,
            success_rate=75,
            response_time_hours=20,
            verification_level="basic",
        )
    )
    assert progress.current_tier == "silver"
    assert progress.next_tier == "gold"
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from ..exceptions import UnknownTierError
from .models import DEFAULT_RESPONSE_HOURS
from .profiles import DEFAULT_TIERS, TierDefinition, TierRequirements, verification_rank
from .rounding import round_half_up

METRIC_NAMES = (
    "consultations",
    "rating",
    "reviews",
    "experience",
    "cases",
    "success_rate",
    "response_time",
    "verification",
)


@dataclass(frozen=True)
class ProviderMetrics:
    """Snapshot of one provider's lifetime performance."""

    total_consultations: int = 0
    average_rating: float = 0.0
    total_reviews: int = 0
    years_experience: float = 0.0
    completed_cases: int = 0
    success_rate: float = 0.0
    response_time_hours: float = DEFAULT_RESPONSE_HOURS
    verification_level: str = "none"


@dataclass(frozen=True)
class MetricProgress:
    """Current value, required value and pass/fail for one tier criterion."""

    current: float | str
    required: float | str
    met: bool


@dataclass(frozen=True)
class TierProgress:
    """Current tier plus progress toward the next one."""

    current_tier: str
    next_tier: str | None
    progress: MappingProxyType[str, MetricProgress]
    overall_progress: int
    tier_benefits: tuple[str, ...]


def _check_requirements(
    metrics: ProviderMetrics, req: TierRequirements
) -> dict[str, MetricProgress]:
    return {
        "consultations": MetricProgress(
            metrics.total_consultations,
            req.min_consultations,
            metrics.total_consultations >= req.min_consultations,
        ),
        "rating": MetricProgress(
            metrics.average_rating, req.min_rating, metrics.average_rating >= req.min_rating
        ),
        "reviews": MetricProgress(
            metrics.total_reviews, req.min_reviews, metrics.total_reviews >= req.min_reviews
        ),
        "experience": MetricProgress(
            metrics.years_experience,
            req.min_years_experience,
            metrics.years_experience >= req.min_years_experience,
        ),
        "cases": MetricProgress(
            metrics.completed_cases,
            req.min_completed_cases,
            metrics.completed_cases >= req.min_completed_cases,
        ),
        "success_rate": MetricProgress(
            metrics.success_rate,
            req.min_success_rate,
            metrics.success_rate >= req.min_success_rate,
        ),
        "response_time": MetricProgress(
            metrics.response_time_hours,
            req.max_response_hours,
            metrics.response_time_hours <= req.max_response_hours,
        ),
        "verification": MetricProgress(
            metrics.verification_level,
            req.min_verification_level,
            verification_rank(metrics.verification_level)
            >= verification_rank(req.min_verification_level),
        ),
    }


def meets_requirements(metrics: ProviderMetrics, req: TierRequirements) -> bool:
    """Return True when all eight criteria hold for the given requirements."""
    return all(entry.met for entry in _check_requirements(metrics, req).values())


def get_tier_definition(
    tier: str, tiers: tuple[TierDefinition, ...] | None = None
) -> TierDefinition:
    table = tiers if tiers is not None else DEFAULT_TIERS
    for definition in table:
        if definition.tier == tier:
            return definition
    raise UnknownTierError(tier, tuple(definition.tier for definition in table))


def tier_rank(tier: str, tiers: tuple[TierDefinition, ...] | None = None) -> int:
    """Return the ordinal of a tier (0 for the lowest)."""
    table = tiers if tiers is not None else DEFAULT_TIERS
    return table.index(get_tier_definition(tier, table))


def calculate_tier(
    metrics: ProviderMetrics, tiers: tuple[TierDefinition, ...] | None = None
) -> str:
    """Return the highest tier whose requirements the metrics fully satisfy."""
    table = tiers if tiers is not None else DEFAULT_TIERS
    for definition in reversed(table):
        if meets_requirements(metrics, definition.requirements):
            return definition.tier
    return table[0].tier


def next_tier(tier: str, tiers: tuple[TierDefinition, ...] | None = None) -> str | None:
    """Return the tier above ``tier``, or None at the ceiling."""
    table = tiers if tiers is not None else DEFAULT_TIERS
    index = tier_rank(tier, table)
    if index < len(table) - 1:
        return table[index + 1].tier
    return None


def calculate_tier_progress(
    metrics: ProviderMetrics, tiers: tuple[TierDefinition, ...] | None = None
) -> TierProgress:
    """Resolve the current tier and report progress toward the next tier.

    Overall progress is the unweighted share of the eight criteria already met,
    rounded half up to a whole percentage. At the ceiling tier every criterion
    is reported as met against the ceiling's own thresholds.
    """
    table = tiers if tiers is not None else DEFAULT_TIERS
    current = calculate_tier(metrics, table)
    upcoming = next_tier(current, table)

    if upcoming is None:
        ceiling = get_tier_definition(current, table).requirements
        checks = {
            name: MetricProgress(entry.current, entry.required, True)
            for name, entry in _check_requirements(metrics, ceiling).items()
        }
        overall = 100
    else:
        checks = _check_requirements(metrics, get_tier_definition(upcoming, table).requirements)
        met_count = sum(1 for entry in checks.values() if entry.met)
        overall = int(round_half_up(met_count / len(checks) * 100))

    return TierProgress(
        current_tier=current,
        next_tier=upcoming,
        progress=MappingProxyType(checks),
        overall_progress=overall,
        tier_benefits=get_tier_definition(current, table).benefits,
    )


def all_tier_info(tiers: tuple[TierDefinition, ...] | None = None) -> tuple[TierDefinition, ...]:
    """Return every tier with display config, requirements and benefits, lowest first."""
    return tiers if tiers is not None else DEFAULT_TIERS
