"""Per-dimension scoring rules for candidate matching.

Every scorer is a pure function of one candidate and one query and returns a
``DimensionScore`` in [0, 100]. A missing query field never fails; it yields
the neutral score documented on each scorer together with a reason carrying a
neutral marker ("No ... specified" / "No specific ... required"), which the
aggregator filters out of the headline reasons.

Usage example:
    from provider_matching.domain.dimensions import score_location
    from provider_matching.domain.models import CandidateProfile, MatchQuery

    result = score_location(CandidateProfile(id="p1", region="dubai"), MatchQuery(region="dubai"))
    assert result.score == 100
"""

from __future__ import annotations

from .models import CandidateProfile, DimensionScore, MatchQuery
from .profiles import (
    DEFAULT_REGION_ADJACENCY,
    DEFAULT_SERVICE_TYPE_SPECIALIZATIONS,
    MatchingProfile,
)
from .rounding import format_number, round_half_up

NEUTRAL_SPECIALIZATION_SCORE = 50.0
NEUTRAL_LOCATION_SCORE = 80.0
NEUTRAL_LANGUAGE_SCORE = 80.0
NEUTRAL_BUDGET_SCORE = 80.0
DEFAULT_PREFERRED_RESPONSE_HOURS = 24.0

URGENCY_FACTORS = {
    "express": 0.25,
    "urgent": 0.5,
    "standard": 1.0,
}

# Minimum recommended years of experience per case complexity
COMPLEXITY_MIN_YEARS = {
    "complex": 10.0,
    "moderate": 5.0,
    "simple": 2.0,
}
DEFAULT_MIN_YEARS = 2.0
DEFAULT_MAX_CAPACITY = 10


def required_specializations(
    query: MatchQuery, profile: MatchingProfile | None = None
) -> tuple[str, ...]:
    """Return the ordered, de-duplicated specialization tags a query asks for."""
    mapping = (
        profile.service_type_specializations
        if profile is not None
        else DEFAULT_SERVICE_TYPE_SPECIALIZATIONS
    )
    required: list[str] = []
    if query.service_type:
        required.extend(mapping.get(query.service_type, ()))
    if query.specialization:
        required.append(query.specialization)
    return tuple(dict.fromkeys(required))


def score_specialization(
    candidate: CandidateProfile,
    query: MatchQuery,
    profile: MatchingProfile | None = None,
) -> DimensionScore:
    """Score the overlap between required and offered specializations."""
    required = required_specializations(query, profile=profile)
    if not required:
        return DimensionScore(
            NEUTRAL_SPECIALIZATION_SCORE, ("No specific specialization required",)
        )

    matched = [spec for spec in required if spec in candidate.specializations]
    ratio = len(matched) / len(required)

    if ratio == 1:
        return DimensionScore(100.0, (f"Perfect match: {', '.join(matched)}",))
    if ratio >= 0.5:
        return DimensionScore(70 + ratio * 30, (f"Partial match: {', '.join(matched)}",))
    if ratio > 0:
        return DimensionScore(40 + ratio * 30, (f"Some expertise in: {', '.join(matched)}",))
    return DimensionScore(10.0, ("No direct specialization match",))


def score_location(
    candidate: CandidateProfile,
    query: MatchQuery,
    profile: MatchingProfile | None = None,
) -> DimensionScore:
    """Score region proximity: exact, adjacent or elsewhere."""
    if not query.region or not query.region.strip():
        return DimensionScore(NEUTRAL_LOCATION_SCORE, ("No location preference specified",))

    wanted = query.region.strip().lower()
    actual = candidate.region.strip().lower()
    if actual == wanted:
        return DimensionScore(100.0, (f"Located in {query.region}",))

    adjacency = profile.region_adjacency if profile is not None else DEFAULT_REGION_ADJACENCY
    if actual and actual in adjacency.get(wanted, frozenset()):
        return DimensionScore(60.0, (f"Located in nearby {candidate.region}",))

    return DimensionScore(
        30.0, (f"Located in {candidate.region or 'unknown'}, different region",)
    )


def score_language(candidate: CandidateProfile, query: MatchQuery) -> DimensionScore:
    """Score how many of the requested languages the candidate speaks."""
    requested = [lang for lang in query.languages if lang.strip()]
    if not requested:
        return DimensionScore(NEUTRAL_LANGUAGE_SCORE, ("No language preference specified",))

    spoken = {lang.strip().lower() for lang in candidate.languages}
    matched = [lang for lang in requested if lang.strip().lower() in spoken]
    label = ", ".join(matched).upper()

    if len(matched) == len(requested):
        return DimensionScore(100.0, (f"Speaks all requested languages: {label}",))
    if matched:
        return DimensionScore(50 + (len(matched) / len(requested)) * 50, (f"Speaks: {label}",))
    return DimensionScore(20.0, ("No language match",))


def score_budget(candidate: CandidateProfile, query: MatchQuery) -> DimensionScore:
    """Score fee alignment with the query's budget range.

    A zero or missing bound counts as unspecified; a missing maximum is unbounded.
    """
    if not query.budget_min and not query.budget_max:
        return DimensionScore(NEUTRAL_BUDGET_SCORE, ("No budget preference specified",))

    fee = candidate.consultation_fee or candidate.hourly_rate or 0.0
    budget_min = query.budget_min or 0.0
    budget_max = query.budget_max or None
    fee_text = format_number(fee)

    if fee < budget_min:
        return DimensionScore(90.0, (f"Fee {fee_text} below minimum budget - great value",))

    if budget_max is None or fee <= budget_max:
        midpoint = (budget_min + (budget_min * 2 if budget_max is None else budget_max)) / 2
        if midpoint <= 0:
            return DimensionScore(NEUTRAL_BUDGET_SCORE, ("No budget preference specified",))
        distance = abs(fee - midpoint) / midpoint
        return DimensionScore(
            max(100 - distance * 20, 80.0), (f"Fee {fee_text} within budget range",)
        )

    if budget_max <= 0:
        return DimensionScore(NEUTRAL_BUDGET_SCORE, ("No budget preference specified",))
    over_ratio = (fee - budget_max) / budget_max
    return DimensionScore(
        max(0.0, 60 - over_ratio * 100),
        (f"Fee {fee_text} above budget (max: {format_number(budget_max)})",),
    )


def score_response_time(candidate: CandidateProfile, query: MatchQuery) -> DimensionScore:
    """Score typical response time against the urgency-adjusted target."""
    preferred = query.preferred_response_hours
    if not preferred or preferred <= 0:
        preferred = DEFAULT_PREFERRED_RESPONSE_HOURS
    target = preferred * URGENCY_FACTORS.get(query.urgency, 1.0)
    hours = candidate.response_time_hours
    hours_text = format_number(hours)

    if hours <= target:
        return DimensionScore(100.0, (f"Responds within {hours_text} hours",))
    return DimensionScore(
        max(20.0, (target / hours) * 100), (f"Response time: {hours_text} hours",)
    )


def score_performance(candidate: CandidateProfile) -> DimensionScore:
    """Score rating (50 pts), success rate (30 pts) and review volume confidence (20 pts)."""
    rating = candidate.average_rating
    reviews = candidate.total_reviews
    rating_component = (min(max(rating, 0.0), 5.0) / 5) * 50
    success_component = (min(max(candidate.success_rate, 0.0), 100.0) / 100) * 30
    review_confidence = min(20.0, (max(reviews, 0) / 50) * 20)

    reasons: list[str] = []
    rating_text = format_number(rating)
    if rating >= 4.5 and reviews >= 20:
        reasons.append(f"Top-rated: {rating_text}★ ({reviews} reviews)")
    elif rating >= 4.0:
        reasons.append(f"Highly rated: {rating_text}★")
    elif reviews > 0:
        reasons.append(f"{rating_text}★ rating from {reviews} reviews")
    else:
        reasons.append("New to the platform")

    if candidate.success_rate >= 90:
        reasons.append(f"{format_number(candidate.success_rate)}% success rate")

    return DimensionScore(rating_component + success_component + review_confidence, tuple(reasons))


def score_availability(candidate: CandidateProfile) -> DimensionScore:
    """Score whether the candidate can take on the case right now."""
    if not candidate.is_available:
        return DimensionScore(0.0, ("Currently unavailable",))
    if not candidate.accepting_new_clients:
        return DimensionScore(20.0, ("Not accepting new clients",))

    max_capacity = candidate.max_concurrent_cases
    if max_capacity <= 0:
        max_capacity = DEFAULT_MAX_CAPACITY
    capacity_ratio = 1 - max(candidate.current_cases, 0) / max_capacity

    if capacity_ratio <= 0.1:
        return DimensionScore(40.0, ("Near capacity",))
    if capacity_ratio >= 0.7:
        return DimensionScore(100.0, ("Plenty of availability",))
    percent = int(round_half_up(capacity_ratio * 100))
    return DimensionScore(50 + capacity_ratio * 50, (f"{percent}% capacity available",))


def score_experience(candidate: CandidateProfile, query: MatchQuery) -> DimensionScore:
    """Score years of practice against the complexity-dependent recommendation."""
    years = max(candidate.years_experience, 0.0)
    min_years = (
        COMPLEXITY_MIN_YEARS.get(query.case_complexity, DEFAULT_MIN_YEARS)
        if query.case_complexity
        else DEFAULT_MIN_YEARS
    )
    years_text = format_number(years)

    if years >= min_years * 2:
        return DimensionScore(100.0, (f"Highly experienced: {years_text} years",))
    if years >= min_years:
        return DimensionScore(80.0, (f"{years_text} years experience",))
    if years >= min_years / 2:
        return DimensionScore(50.0, (f"{years_text} years experience (below recommended)",))
    return DimensionScore(30.0, (f"Limited experience: {years_text} years",))
