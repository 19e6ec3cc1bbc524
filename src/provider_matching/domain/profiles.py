"""Domain model for matching weights, tier tables and lookup tables.

All tables are plain data. Scoring and tier logic stay generic over their
contents. A ``MatchingProfile`` runs ``validate_matching_profile`` when it is
constructed, so an invalid weight or tier table never reaches the engines.

Usage example:
    from provider_matching.domain.profiles import DEFAULT_PROFILE

    assert DEFAULT_PROFILE.weights.total == 100
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..exceptions import TierTableError, WeightTableError

VERIFICATION_LEVELS = ("none", "basic", "identity", "professional", "enhanced")


def verification_rank(level: str | None) -> int:
    """Return the ordinal of a verification level; unknown levels rank as ``none``."""
    text = (level or "none").strip().lower()
    if text not in VERIFICATION_LEVELS:
        return 0
    return VERIFICATION_LEVELS.index(text)


@dataclass(frozen=True)
class DimensionWeights:
    """Per-dimension weights for the aggregate score (must total 100)."""

    specialization: float
    performance: float
    availability: float
    budget: float
    location: float
    language: float
    response_time: float
    experience: float

    @property
    def total(self) -> float:
        return (
            self.specialization
            + self.performance
            + self.availability
            + self.budget
            + self.location
            + self.language
            + self.response_time
            + self.experience
        )


@dataclass(frozen=True)
class TierRequirements:
    """Thresholds a provider must meet to hold a tier."""

    min_consultations: int
    min_rating: float
    min_reviews: int
    min_years_experience: float
    min_completed_cases: int
    min_success_rate: float
    max_response_hours: float
    min_verification_level: str


@dataclass(frozen=True)
class TierDisplay:
    """Presentation metadata for a tier badge."""

    name: str
    name_ar: str
    icon: str
    color: str
    bg_color: str
    border_color: str


@dataclass(frozen=True)
class TierDefinition:
    """One tier in the ordered tier table."""

    tier: str
    requirements: TierRequirements
    display: TierDisplay
    benefits: tuple[str, ...]


@dataclass(frozen=True)
class MatchingProfile:
    """A complete set of tables used by the matching and tier engines."""

    name: str
    weights: DimensionWeights
    service_type_specializations: MappingProxyType[str, tuple[str, ...]]
    region_adjacency: MappingProxyType[str, frozenset[str]]
    tiers: tuple[TierDefinition, ...]  # lowest to highest

    def __post_init__(self) -> None:
        validate_matching_profile(self)

    def tier_names(self) -> tuple[str, ...]:
        return tuple(definition.tier for definition in self.tiers)


def build_region_adjacency(
    neighbours: Mapping[str, Iterable[str]],
) -> MappingProxyType[str, frozenset[str]]:
    """Build a symmetric adjacency table from a (possibly one-sided) neighbour list."""
    table: dict[str, set[str]] = {}
    for region, adjacent in neighbours.items():
        key = region.strip().lower()
        for other in adjacent:
            other_key = other.strip().lower()
            if not key or not other_key or key == other_key:
                continue
            table.setdefault(key, set()).add(other_key)
            table.setdefault(other_key, set()).add(key)
    return MappingProxyType({region: frozenset(values) for region, values in table.items()})


DEFAULT_WEIGHTS = DimensionWeights(
    specialization=25,
    performance=20,
    availability=15,
    budget=15,
    location=10,
    language=8,
    response_time=5,
    experience=2,
)

# Service type hint -> specialization tags a provider should carry
DEFAULT_SERVICE_TYPE_SPECIALIZATIONS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "rental_agreement": ("real_estate", "contracts"),
        "sale_agreement": ("real_estate", "contracts"),
        "employment_contract": ("employment", "contracts"),
        "nda": ("corporate", "contracts", "intellectual_property"),
        "service_agreement": ("corporate", "contracts"),
        "partnership_agreement": ("corporate", "contracts"),
        "power_of_attorney": ("civil", "family"),
        "will": ("family", "civil"),
        "divorce_agreement": ("family",),
        "child_custody": ("family",),
        "commercial_lease": ("real_estate", "corporate", "contracts"),
        "construction_contract": ("real_estate", "contracts"),
        "investment_agreement": ("corporate", "banking"),
        "franchise_agreement": ("corporate", "intellectual_property"),
        "ip_license": ("intellectual_property", "contracts"),
        "trademark_registration": ("intellectual_property",),
    }
)

DEFAULT_REGION_ADJACENCY = build_region_adjacency(
    {
        "dubai": ("sharjah", "abu_dhabi", "ajman"),
        "abu_dhabi": ("dubai", "al_ain"),
        "sharjah": ("dubai", "ajman", "ras_al_khaimah", "umm_al_quwain"),
        "ajman": ("sharjah", "dubai"),
        "ras_al_khaimah": ("sharjah", "fujairah", "umm_al_quwain"),
        "fujairah": ("ras_al_khaimah", "sharjah"),
        "umm_al_quwain": ("sharjah", "ras_al_khaimah", "ajman"),
    }
)

DEFAULT_TIERS: tuple[TierDefinition, ...] = (
    TierDefinition(
        tier="bronze",
        requirements=TierRequirements(
            min_consultations=0,
            min_rating=0.0,
            min_reviews=0,
            min_years_experience=0,
            min_completed_cases=0,
            min_success_rate=0.0,
            max_response_hours=48.0,
            min_verification_level="none",
        ),
        display=TierDisplay(
            name="Bronze",
            name_ar="برونزي",
            icon="award",
            color="#CD7F32",
            bg_color="#FDF5E6",
            border_color="#CD7F32",
        ),
        benefits=(
            "Basic profile listing",
            "Up to 5 active consultations",
            "Standard support",
        ),
    ),
    TierDefinition(
        tier="silver",
        requirements=TierRequirements(
            min_consultations=10,
            min_rating=4.0,
            min_reviews=5,
            min_years_experience=1,
            min_completed_cases=5,
            min_success_rate=70.0,
            max_response_hours=24.0,
            min_verification_level="basic",
        ),
        display=TierDisplay(
            name="Silver",
            name_ar="فضي",
            icon="star",
            color="#C0C0C0",
            bg_color="#F5F5F5",
            border_color="#C0C0C0",
        ),
        benefits=(
            "Highlighted profile badge",
            "Up to 15 active consultations",
            "Priority in search results",
            "Monthly performance report",
        ),
    ),
    TierDefinition(
        tier="gold",
        requirements=TierRequirements(
            min_consultations=50,
            min_rating=4.5,
            min_reviews=20,
            min_years_experience=3,
            min_completed_cases=30,
            min_success_rate=80.0,
            max_response_hours=12.0,
            min_verification_level="professional",
        ),
        display=TierDisplay(
            name="Gold",
            name_ar="ذهبي",
            icon="crown",
            color="#FFD700",
            bg_color="#FFFEF0",
            border_color="#FFD700",
        ),
        benefits=(
            "Gold badge on profile",
            "Up to 30 active consultations",
            'Featured in "Top Providers" section',
            "Weekly performance insights",
            "Priority customer support",
        ),
    ),
    TierDefinition(
        tier="platinum",
        requirements=TierRequirements(
            min_consultations=200,
            min_rating=4.8,
            min_reviews=75,
            min_years_experience=5,
            min_completed_cases=100,
            min_success_rate=90.0,
            max_response_hours=6.0,
            min_verification_level="enhanced",
        ),
        display=TierDisplay(
            name="Platinum",
            name_ar="بلاتيني",
            icon="diamond",
            color="#E5E4E2",
            bg_color="#F8F8FF",
            border_color="#A0A0A0",
        ),
        benefits=(
            "Platinum badge with special styling",
            "Unlimited active consultations",
            "Homepage featured listing",
            "Real-time analytics dashboard",
            "Dedicated account manager",
            "Priority placement in matching",
            "Exclusive webinar access",
        ),
    ),
)


def validate_weights(weights: DimensionWeights) -> None:
    """Raise ``WeightTableError`` unless every weight is non-negative and they total 100."""
    values = (
        weights.specialization,
        weights.performance,
        weights.availability,
        weights.budget,
        weights.location,
        weights.language,
        weights.response_time,
        weights.experience,
    )
    if any(value < 0 for value in values) or abs(weights.total - 100) > 1e-9:
        raise WeightTableError(weights.total)


def validate_tier_table(tiers: tuple[TierDefinition, ...]) -> None:
    """Raise ``TierTableError`` unless tiers are unique and monotonically stricter."""
    if not tiers:
        raise TierTableError("at least one tier is required")
    names = [definition.tier for definition in tiers]
    if len(set(names)) != len(names):
        raise TierTableError("tier names must be unique")

    for definition in tiers:
        if definition.requirements.min_verification_level not in VERIFICATION_LEVELS:
            raise TierTableError(
                f"{definition.tier}: unknown verification level "
                f"'{definition.requirements.min_verification_level}'"
            )

    for lower, higher in zip(tiers, tiers[1:]):
        low = lower.requirements
        high = higher.requirements
        pairs = {
            "min_consultations": (low.min_consultations, high.min_consultations),
            "min_rating": (low.min_rating, high.min_rating),
            "min_reviews": (low.min_reviews, high.min_reviews),
            "min_years_experience": (low.min_years_experience, high.min_years_experience),
            "min_completed_cases": (low.min_completed_cases, high.min_completed_cases),
            "min_success_rate": (low.min_success_rate, high.min_success_rate),
            # Lower response hours is stricter
            "max_response_hours": (high.max_response_hours, low.max_response_hours),
            "min_verification_level": (
                verification_rank(low.min_verification_level),
                verification_rank(high.min_verification_level),
            ),
        }
        for field_name, (looser, stricter) in pairs.items():
            if stricter < looser:
                raise TierTableError(
                    f"{higher.tier}.{field_name} is less strict than {lower.tier}.{field_name}"
                )


def validate_matching_profile(profile: MatchingProfile) -> None:
    """Validate all integrity rules for a profile; raise on the first violation."""
    validate_weights(profile.weights)
    validate_tier_table(profile.tiers)


DEFAULT_PROFILE = MatchingProfile(
    name="default",
    weights=DEFAULT_WEIGHTS,
    service_type_specializations=DEFAULT_SERVICE_TYPE_SPECIALIZATIONS,
    region_adjacency=DEFAULT_REGION_ADJACENCY,
    tiers=DEFAULT_TIERS,
)
