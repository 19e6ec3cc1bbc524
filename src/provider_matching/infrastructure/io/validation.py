"""Pydantic-based validation helpers for inbound IO payloads."""

from __future__ import annotations

from typing import TypedDict, cast

from pydantic import TypeAdapter, ValidationError

from ...domain.models import (
    DEFAULT_MAX_CONCURRENT_CASES,
    DEFAULT_RESPONSE_HOURS,
    DEFAULT_RESULT_LIMIT,
    CandidateProfile,
    CaseComplexity,
    MatchQuery,
    Urgency,
)
from ...domain.tiers import ProviderMetrics
from ...exceptions import CandidateIdentifierError
from ...io_contracts import BadgeRecordIO, BadgeStoreFileIO

URGENCIES: tuple[Urgency, ...] = ("standard", "urgent", "express")
COMPLEXITIES: tuple[CaseComplexity, ...] = ("simple", "moderate", "complex")


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class CandidateInput(TypedDict, total=False):
    id: str | None
    display_name: str | None
    specializations: list[str] | None
    languages: list[str] | None
    region: str | None
    consultation_fee: float | None
    hourly_rate: float | None
    response_time_hours: float | None
    average_rating: float | None
    total_reviews: int | None
    completed_cases: int | None
    success_rate: float | None
    verification_level: str | None
    is_available: bool | None
    accepting_new_clients: bool | None
    featured: bool | None
    years_experience: float | None
    current_cases: int | None
    max_concurrent_cases: int | None


class CandidateFileInput(TypedDict, total=False):
    candidates: list[object]


class QueryInput(TypedDict, total=False):
    service_type: str | None
    specialization: str | None
    region: str | None
    languages: list[str] | None
    budget_min: float | None
    budget_max: float | None
    urgency: str | None
    preferred_response_hours: float | None
    case_complexity: str | None
    prefer_verified: bool | None
    prefer_featured: bool | None
    limit: int | None


class MetricsInput(TypedDict, total=False):
    provider_id: str | None
    total_consultations: int | None
    average_rating: float | None
    total_reviews: int | None
    years_experience: float | None
    completed_cases: int | None
    success_rate: float | None
    response_time_hours: float | None
    verification_level: str | None


class MetricsFileInput(TypedDict, total=False):
    providers: list[object]


class BadgeInput(TypedDict, total=False):
    badge_id: str | None
    provider_id: str | None
    badge_type: str | None
    tier_level: str | None
    name: str | None
    name_ar: str | None
    icon: str | None
    color: str | None


class BadgeFileInput(TypedDict, total=False):
    badges: list[BadgeInput]


def validate_as[SchemaT](schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def validate_json_as[SchemaT](schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def _as_str(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _as_str_list(value: object) -> list[str]:
    if value is None:
        return []
    try:
        items = validate_as(list[object], value)
    except IncomingDataError:
        return []
    cleaned: list[str] = []
    for item in items:
        text = str(item).strip()
        if text:
            cleaned.append(text)
    return cleaned


def _or_default[ValueT](value: ValueT | None, default: ValueT) -> ValueT:
    return default if value is None else value


def _candidate_records(payload: object) -> list[object]:
    if isinstance(payload, list):
        return validate_as(list[object], payload)
    return validate_as(CandidateFileInput, payload).get("candidates", [])


def _metrics_records(payload: object) -> list[object]:
    if isinstance(payload, list):
        return validate_as(list[object], payload)
    return validate_as(MetricsFileInput, payload).get("providers", [])


def parse_candidate(payload: object) -> CandidateProfile:
    record = validate_as(CandidateInput, payload)
    candidate_id = _as_str(record.get("id"))
    if not candidate_id:
        raise CandidateIdentifierError()
    return CandidateProfile(
        id=candidate_id,
        display_name=_as_str(record.get("display_name")),
        specializations=frozenset(_as_str_list(record.get("specializations"))),
        languages=frozenset(_as_str_list(record.get("languages"))),
        region=_as_str(record.get("region")),
        consultation_fee=_or_default(record.get("consultation_fee"), 0.0),
        hourly_rate=_or_default(record.get("hourly_rate"), 0.0),
        response_time_hours=_or_default(
            record.get("response_time_hours"), DEFAULT_RESPONSE_HOURS
        ),
        average_rating=_or_default(record.get("average_rating"), 0.0),
        total_reviews=_or_default(record.get("total_reviews"), 0),
        completed_cases=_or_default(record.get("completed_cases"), 0),
        success_rate=_or_default(record.get("success_rate"), 0.0),
        verification_level=_as_str(record.get("verification_level")) or "none",
        is_available=_or_default(record.get("is_available"), True),
        accepting_new_clients=_or_default(record.get("accepting_new_clients"), True),
        featured=_or_default(record.get("featured"), False),
        years_experience=_or_default(record.get("years_experience"), 0.0),
        current_cases=_or_default(record.get("current_cases"), 0),
        max_concurrent_cases=_or_default(
            record.get("max_concurrent_cases"), DEFAULT_MAX_CONCURRENT_CASES
        ),
    )


def parse_candidates(payload: object) -> list[CandidateProfile]:
    return [parse_candidate(item) for item in _candidate_records(payload)]


def parse_match_query(payload: object, *, default_limit: int = DEFAULT_RESULT_LIMIT) -> MatchQuery:
    record = validate_as(QueryInput, payload)

    urgency = _as_str(record.get("urgency")) or "standard"
    if urgency not in URGENCIES:
        raise IncomingDataError(f"Unknown urgency '{urgency}'. Expected one of {URGENCIES}.")
    complexity = _as_str(record.get("case_complexity")) or None
    if complexity is not None and complexity not in COMPLEXITIES:
        raise IncomingDataError(
            f"Unknown case complexity '{complexity}'. Expected one of {COMPLEXITIES}."
        )

    return MatchQuery(
        service_type=_as_str(record.get("service_type")) or None,
        specialization=_as_str(record.get("specialization")) or None,
        region=_as_str(record.get("region")) or None,
        languages=tuple(_as_str_list(record.get("languages"))),
        budget_min=record.get("budget_min"),
        budget_max=record.get("budget_max"),
        urgency=cast(Urgency, urgency),
        preferred_response_hours=record.get("preferred_response_hours"),
        case_complexity=cast(CaseComplexity | None, complexity),
        prefer_verified=_or_default(record.get("prefer_verified"), False),
        prefer_featured=_or_default(record.get("prefer_featured"), False),
        limit=_or_default(record.get("limit"), default_limit),
    )


def parse_provider_metrics(payload: object) -> tuple[str, ProviderMetrics]:
    record = validate_as(MetricsInput, payload)
    provider_id = _as_str(record.get("provider_id"))
    if not provider_id:
        raise IncomingDataError("Provider metrics record is missing provider_id.")
    return provider_id, ProviderMetrics(
        total_consultations=_or_default(record.get("total_consultations"), 0),
        average_rating=_or_default(record.get("average_rating"), 0.0),
        total_reviews=_or_default(record.get("total_reviews"), 0),
        years_experience=_or_default(record.get("years_experience"), 0.0),
        completed_cases=_or_default(record.get("completed_cases"), 0),
        success_rate=_or_default(record.get("success_rate"), 0.0),
        response_time_hours=_or_default(
            record.get("response_time_hours"), DEFAULT_RESPONSE_HOURS
        ),
        verification_level=_as_str(record.get("verification_level")) or "none",
    )


def parse_metrics_file(payload: object) -> dict[str, ProviderMetrics]:
    """Parse a metrics document into snapshots keyed by provider id (last entry wins)."""
    snapshots: dict[str, ProviderMetrics] = {}
    for item in _metrics_records(payload):
        provider_id, metrics = parse_provider_metrics(item)
        snapshots[provider_id] = metrics
    return snapshots


def parse_badge_store_file(payload: object) -> BadgeStoreFileIO:
    file_payload = validate_as(BadgeFileInput, payload)
    badges: list[BadgeRecordIO] = []
    for badge in file_payload.get("badges", []):
        badges.append(
            {
                "badge_id": _as_str(badge.get("badge_id")),
                "provider_id": _as_str(badge.get("provider_id")),
                "badge_type": _as_str(badge.get("badge_type")),
                "tier_level": _as_str(badge.get("tier_level")),
                "name": _as_str(badge.get("name")),
                "name_ar": _as_str(badge.get("name_ar")),
                "icon": _as_str(badge.get("icon")),
                "color": _as_str(badge.get("color")),
            }
        )
    return {"badges": badges}
