"""Weighted aggregation of dimension scores into a single match score.

Usage example:
    from provider_matching.domain.aggregation import calculate_match_score
    from provider_matching.domain.models import CandidateProfile, MatchQuery

    result = calculate_match_score(CandidateProfile(id="p1"), MatchQuery())
    assert result.compatibility_level in {"excellent", "good", "fair", "low"}
"""

from __future__ import annotations

from collections.abc import Iterable

from .dimensions import (
    score_availability,
    score_budget,
    score_experience,
    score_language,
    score_location,
    score_performance,
    score_response_time,
    score_specialization,
)
from .models import CandidateProfile, CompatibilityLevel, MatchQuery, MatchResult, ScoreBreakdown
from .profiles import DEFAULT_WEIGHTS, MatchingProfile
from .rounding import round_half_up

VERIFIED_BONUS = 1.05
FEATURED_BONUS = 1.03
MAX_REASONS = 5

EXCELLENT_THRESHOLD = 80.0
GOOD_THRESHOLD = 60.0
FAIR_THRESHOLD = 40.0

# Reasons containing these markers are neutral placeholders, not selling points
NEUTRAL_REASON_MARKERS = ("No ", "not specified")


def compatibility_level(score: float) -> CompatibilityLevel:
    """Band a final score into a compatibility level."""
    if score >= EXCELLENT_THRESHOLD:
        return "excellent"
    if score >= GOOD_THRESHOLD:
        return "good"
    if score >= FAIR_THRESHOLD:
        return "fair"
    return "low"


def apply_bonuses(score: float, candidate: CandidateProfile, query: MatchQuery) -> float:
    """Apply the multiplicative verified and featured bonuses, in that order."""
    if query.prefer_verified and candidate.verification_level.strip().lower() not in ("", "none"):
        score *= VERIFIED_BONUS
    if query.prefer_featured and candidate.featured:
        score *= FEATURED_BONUS
    return score


def collect_reasons(reason_groups: Iterable[tuple[str, ...]]) -> tuple[str, ...]:
    """Flatten reasons, drop neutral placeholders and duplicates, keep the first few."""
    kept: list[str] = []
    for reasons in reason_groups:
        for reason in reasons:
            if any(marker in reason for marker in NEUTRAL_REASON_MARKERS):
                continue
            if reason in kept:
                continue
            kept.append(reason)
    return tuple(kept[:MAX_REASONS])


def calculate_match_score(
    candidate: CandidateProfile,
    query: MatchQuery,
    profile: MatchingProfile | None = None,
) -> MatchResult:
    """Score one candidate against one query across all eight dimensions."""
    weights = profile.weights if profile is not None else DEFAULT_WEIGHTS

    specialization = score_specialization(candidate, query, profile=profile)
    location = score_location(candidate, query, profile=profile)
    language = score_language(candidate, query)
    budget = score_budget(candidate, query)
    response_time = score_response_time(candidate, query)
    performance = score_performance(candidate)
    availability = score_availability(candidate)
    experience = score_experience(candidate, query)

    weighted = (
        specialization.score * weights.specialization
        + location.score * weights.location
        + language.score * weights.language
        + budget.score * weights.budget
        + response_time.score * weights.response_time
        + performance.score * weights.performance
        + availability.score * weights.availability
        + experience.score * weights.experience
    ) / 100

    # Unavailable candidates are excluded outright, whatever else they offer
    final_score = apply_bonuses(weighted, candidate, query) if candidate.is_available else 0.0
    total_score = round_half_up(final_score, 2)

    return MatchResult(
        candidate_id=candidate.id,
        total_score=total_score,
        breakdown=ScoreBreakdown(
            specialization=int(round_half_up(specialization.score)),
            location=int(round_half_up(location.score)),
            language=int(round_half_up(language.score)),
            budget=int(round_half_up(budget.score)),
            response_time=int(round_half_up(response_time.score)),
            performance=int(round_half_up(performance.score)),
            availability=int(round_half_up(availability.score)),
            experience=int(round_half_up(experience.score)),
        ),
        reasons=collect_reasons(
            (
                specialization.reasons,
                performance.reasons,
                availability.reasons,
                budget.reasons,
                location.reasons,
                language.reasons,
            )
        ),
        # Banded on the reported two-decimal score so the level always agrees with it
        compatibility_level=compatibility_level(total_score),
    )
