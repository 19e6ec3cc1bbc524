"""Value objects for candidate matching.

Usage example:
    from provider_matching.domain.models import CandidateProfile, MatchQuery

    candidate = CandidateProfile(
        id="prov-1",
        specializations=frozenset({"real_estate", "contracts"}),
        languages=frozenset({"en", "ar"}),
        region="dubai",
        consultation_fee=500,
    )
    query = MatchQuery(service_type="rental_agreement", region="dubai", languages=("en",))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..exceptions import CandidateIdentifierError

Urgency = Literal["standard", "urgent", "express"]
CaseComplexity = Literal["simple", "moderate", "complex"]
CompatibilityLevel = Literal["excellent", "good", "fair", "low"]

DEFAULT_RESULT_LIMIT = 10
DEFAULT_RESPONSE_HOURS = 48.0
DEFAULT_MAX_CONCURRENT_CASES = 10


@dataclass(frozen=True)
class CandidateProfile:
    """Read-only snapshot of a provider eligible for matching."""

    id: str
    specializations: frozenset[str] = field(default_factory=frozenset)
    languages: frozenset[str] = field(default_factory=frozenset)
    region: str = ""
    consultation_fee: float = 0.0
    hourly_rate: float = 0.0
    response_time_hours: float = DEFAULT_RESPONSE_HOURS
    average_rating: float = 0.0
    total_reviews: int = 0
    completed_cases: int = 0
    success_rate: float = 0.0
    verification_level: str = "none"
    is_available: bool = True
    accepting_new_clients: bool = True
    featured: bool = False
    years_experience: float = 0.0
    current_cases: int = 0
    max_concurrent_cases: int = DEFAULT_MAX_CONCURRENT_CASES
    display_name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise CandidateIdentifierError()


@dataclass(frozen=True)
class MatchQuery:
    """A client's matching preferences. Every field except ``limit`` is optional."""

    service_type: str | None = None
    specialization: str | None = None
    region: str | None = None
    languages: tuple[str, ...] = ()
    budget_min: float | None = None
    budget_max: float | None = None
    urgency: Urgency = "standard"
    preferred_response_hours: float | None = None
    case_complexity: CaseComplexity | None = None
    prefer_verified: bool = False
    prefer_featured: bool = False
    limit: int = DEFAULT_RESULT_LIMIT


@dataclass(frozen=True)
class DimensionScore:
    """Single-criterion score in [0, 100] with explanatory reasons."""

    score: float
    reasons: tuple[str, ...]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Rounded per-dimension scores for one match."""

    specialization: int
    location: int
    language: int
    budget: int
    response_time: int
    performance: int
    availability: int
    experience: int

    def as_dict(self) -> dict[str, int]:
        return {
            "specialization": self.specialization,
            "location": self.location,
            "language": self.language,
            "budget": self.budget,
            "response_time": self.response_time,
            "performance": self.performance,
            "availability": self.availability,
            "experience": self.experience,
        }


@dataclass(frozen=True)
class MatchResult:
    """Aggregate score for one candidate against one query."""

    candidate_id: str
    total_score: float
    breakdown: ScoreBreakdown
    reasons: tuple[str, ...]
    compatibility_level: CompatibilityLevel


@dataclass(frozen=True)
class MatchExplanation:
    """Display-ready summary of a match."""

    title: str
    description: str
    highlights: tuple[str, ...]
