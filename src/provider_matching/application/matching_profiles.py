"""Loading and strict validation for matching profile files."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..domain.profiles import (
    DEFAULT_PROFILE,
    VERIFICATION_LEVELS,
    DimensionWeights,
    MatchingProfile,
    TierDefinition,
    TierDisplay,
    TierRequirements,
    build_region_adjacency,
)
from ..exceptions import (
    MatchingError,
    MatchingProfileFileNotFoundError,
    MatchingProfileValidationError,
)
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


class _WeightsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    specialization: float
    performance: float
    availability: float
    budget: float
    location: float
    language: float
    response_time: float
    experience: float

    @field_validator("*")
    @classmethod
    def _validate_non_negative(cls, value: float) -> float:
        if value < 0.0:
            raise ValueError
        return value


class _RequirementsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    min_consultations: int
    min_rating: float
    min_reviews: int
    min_years_experience: float
    min_completed_cases: int
    min_success_rate: float
    max_response_hours: float
    min_verification_level: str

    @field_validator("min_rating")
    @classmethod
    def _validate_rating(cls, value: float) -> float:
        if value < 0.0 or value > 5.0:
            raise ValueError
        return value

    @field_validator("min_success_rate")
    @classmethod
    def _validate_success_rate(cls, value: float) -> float:
        if value < 0.0 or value > 100.0:
            raise ValueError
        return value

    @field_validator("min_verification_level")
    @classmethod
    def _validate_verification_level(cls, value: str) -> str:
        text = value.strip().lower()
        if text not in VERIFICATION_LEVELS:
            raise ValueError
        return text


class _DisplayModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    name_ar: str
    icon: str
    color: str
    bg_color: str
    border_color: str


class _TierModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    tier: str
    requirements: _RequirementsModel
    display: _DisplayModel
    benefits: tuple[str, ...] = ()

    @field_validator("tier")
    @classmethod
    def _validate_tier(cls, value: str) -> str:
        text = value.strip().lower()
        if not text:
            raise ValueError
        return text


class _MatchingProfileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    name: str
    weights: _WeightsModel | None = None
    service_type_specializations: dict[str, tuple[str, ...]] | None = None
    region_adjacency: dict[str, tuple[str, ...]] | None = None
    tiers: tuple[_TierModel, ...] | None = None

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @model_validator(mode="after")
    def _validate_tiers(self) -> _MatchingProfileModel:
        if self.tiers is not None:
            names = [tier.tier for tier in self.tiers]
            if not names or len(set(names)) != len(names):
                raise ValueError
        return self


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def _to_domain_tier(model: _TierModel) -> TierDefinition:
    req = model.requirements
    return TierDefinition(
        tier=model.tier,
        requirements=TierRequirements(
            min_consultations=req.min_consultations,
            min_rating=req.min_rating,
            min_reviews=req.min_reviews,
            min_years_experience=req.min_years_experience,
            min_completed_cases=req.min_completed_cases,
            min_success_rate=req.min_success_rate,
            max_response_hours=req.max_response_hours,
            min_verification_level=req.min_verification_level,
        ),
        display=TierDisplay(
            name=model.display.name,
            name_ar=model.display.name_ar,
            icon=model.display.icon,
            color=model.display.color,
            bg_color=model.display.bg_color,
            border_color=model.display.border_color,
        ),
        benefits=model.benefits,
    )


def _to_domain_profile(model: _MatchingProfileModel) -> MatchingProfile:
    weights = DEFAULT_PROFILE.weights
    if model.weights is not None:
        weights = DimensionWeights(**model.weights.model_dump())

    service_types = DEFAULT_PROFILE.service_type_specializations
    if model.service_type_specializations is not None:
        service_types = MappingProxyType(
            {
                key.strip().lower(): tuple(tag.strip() for tag in tags if tag.strip())
                for key, tags in model.service_type_specializations.items()
            }
        )

    adjacency = DEFAULT_PROFILE.region_adjacency
    if model.region_adjacency is not None:
        adjacency = build_region_adjacency(model.region_adjacency)

    tiers = DEFAULT_PROFILE.tiers
    if model.tiers is not None:
        tiers = tuple(_to_domain_tier(tier) for tier in model.tiers)

    return MatchingProfile(
        name=model.name,
        weights=weights,
        service_type_specializations=service_types,
        region_adjacency=adjacency,
        tiers=tiers,
    )


def load_matching_profile(*, path: Path, fs: FileSystem) -> MatchingProfile:
    """Load a matching profile from JSON and check its tables before use.

    Sections left out of the file fall back to the built-in defaults. Weight
    and tier-table integrity errors surface as ``MatchingProfileValidationError``
    naming the file.
    """
    if not fs.exists(path):
        raise MatchingProfileFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _MatchingProfileModel.model_validate_json(payload)
    except ValidationError as exc:
        raise MatchingProfileValidationError(str(path), _format_validation_error(exc)) from exc

    try:
        return _to_domain_profile(model)
    except MatchingError as exc:
        raise MatchingProfileValidationError(str(path), str(exc)) from exc


def resolve_matching_profile(*, path: Path | None, fs: FileSystem) -> MatchingProfile:
    """Return the profile at ``path``, or the built-in default when unset."""
    if path is None:
        return DEFAULT_PROFILE
    return load_matching_profile(path=path, fs=fs)
