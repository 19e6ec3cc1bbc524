"""Tests for inbound payload validation."""

import pytest

from provider_matching.domain.models import DEFAULT_RESPONSE_HOURS
from provider_matching.exceptions import CandidateIdentifierError
from provider_matching.infrastructure.io.validation import (
    IncomingDataError,
    parse_badge_store_file,
    parse_candidate,
    parse_candidates,
    parse_match_query,
    parse_metrics_file,
    parse_provider_metrics,
)


class TestParseCandidate:
    def test_defaults_fill_missing_fields(self) -> None:
        candidate = parse_candidate({"id": " prov-1 "})

        assert candidate.id == "prov-1"
        assert candidate.specializations == frozenset()
        assert candidate.response_time_hours == DEFAULT_RESPONSE_HOURS
        assert candidate.max_concurrent_cases == 10
        assert candidate.verification_level == "none"
        assert candidate.is_available
        assert candidate.accepting_new_clients
        assert not candidate.featured

    def test_lists_are_cleaned(self) -> None:
        candidate = parse_candidate(
            {"id": "prov-1", "specializations": ["family", " ", "family"], "languages": ["ar"]}
        )

        assert candidate.specializations == frozenset({"family"})
        assert candidate.languages == frozenset({"ar"})

    def test_null_values_use_defaults(self) -> None:
        candidate = parse_candidate({"id": "prov-1", "is_available": None, "region": None})

        assert candidate.is_available
        assert candidate.region == ""

    @pytest.mark.parametrize("payload", [{}, {"id": ""}, {"id": "   "}])
    def test_missing_identifier(self, payload: dict[str, object]) -> None:
        with pytest.raises(CandidateIdentifierError):
            parse_candidate(payload)

    def test_wrong_type_is_rejected(self) -> None:
        with pytest.raises(IncomingDataError):
            parse_candidate({"id": "prov-1", "average_rating": "excellent"})

    def test_pool_accepts_array_or_wrapper(self) -> None:
        assert [c.id for c in parse_candidates([{"id": "a"}])] == ["a"]
        assert [c.id for c in parse_candidates({"candidates": [{"id": "b"}]})] == ["b"]
        assert parse_candidates({}) == []


class TestParseMatchQuery:
    def test_blank_strings_become_unset(self) -> None:
        query = parse_match_query({"service_type": " ", "region": "", "languages": ["en", ""]})

        assert query.service_type is None
        assert query.region is None
        assert query.languages == ("en",)
        assert query.urgency == "standard"
        assert query.case_complexity is None
        assert query.limit == 10

    def test_default_limit_is_configurable(self) -> None:
        assert parse_match_query({}, default_limit=3).limit == 3
        assert parse_match_query({"limit": 7}, default_limit=3).limit == 7

    def test_full_query(self) -> None:
        query = parse_match_query(
            {
                "specialization": "family",
                "budget_min": 100,
                "budget_max": 500,
                "urgency": "express",
                "preferred_response_hours": 6,
                "case_complexity": "complex",
                "prefer_verified": True,
            }
        )

        assert query.specialization == "family"
        assert query.budget_min == 100
        assert query.budget_max == 500
        assert query.urgency == "express"
        assert query.preferred_response_hours == 6
        assert query.case_complexity == "complex"
        assert query.prefer_verified
        assert not query.prefer_featured

    def test_unknown_urgency(self) -> None:
        with pytest.raises(IncomingDataError, match="urgency"):
            parse_match_query({"urgency": "asap"})

    def test_unknown_complexity(self) -> None:
        with pytest.raises(IncomingDataError, match="complexity"):
            parse_match_query({"case_complexity": "epic"})


class TestParseMetrics:
    def test_single_record(self) -> None:
        provider_id, metrics = parse_provider_metrics(
            {"provider_id": "prov-1", "total_consultations": 3, "verification_level": " basic "}
        )

        assert provider_id == "prov-1"
        assert metrics.total_consultations == 3
        assert metrics.verification_level == "basic"
        assert metrics.response_time_hours == DEFAULT_RESPONSE_HOURS

    def test_missing_provider_id(self) -> None:
        with pytest.raises(IncomingDataError, match="provider_id"):
            parse_provider_metrics({"total_consultations": 3})

    def test_file_last_entry_wins(self) -> None:
        snapshots = parse_metrics_file(
            {
                "providers": [
                    {"provider_id": "prov-1", "total_reviews": 1},
                    {"provider_id": "prov-2"},
                    {"provider_id": "prov-1", "total_reviews": 9},
                ]
            }
        )

        assert list(snapshots) == ["prov-1", "prov-2"]
        assert snapshots["prov-1"].total_reviews == 9


def test_parse_badge_store_file_fills_missing_text() -> None:
    parsed = parse_badge_store_file(
        {"badges": [{"badge_id": "b1", "provider_id": "prov-1", "tier_level": "gold"}]}
    )

    assert parsed["badges"][0]["badge_id"] == "b1"
    assert parsed["badges"][0]["badge_type"] == ""
    assert parsed["badges"][0]["name"] == ""


def test_parse_badge_store_file_rejects_non_list() -> None:
    with pytest.raises(IncomingDataError):
        parse_badge_store_file({"badges": "nope"})
