"""Tests for ranking a candidate pool."""

from dataclasses import replace

from provider_matching.domain.models import CandidateProfile, MatchQuery
from provider_matching.domain.ranking import rank_candidates, score_pool


def _pool() -> list[CandidateProfile]:
    return [
        CandidateProfile(id="twin-a", average_rating=4.0, total_reviews=10),
        CandidateProfile(id="star", average_rating=5.0, total_reviews=60, success_rate=95),
        CandidateProfile(id="away", average_rating=5.0, is_available=False),
        CandidateProfile(id="twin-b", average_rating=4.0, total_reviews=10),
        CandidateProfile(id="newcomer"),
    ]


def test_ranks_best_first_and_drops_unavailable() -> None:
    ranked = rank_candidates(_pool(), MatchQuery())

    assert [result.candidate_id for result in ranked] == ["star", "twin-a", "twin-b", "newcomer"]


def test_ties_keep_input_order() -> None:
    pool = _pool()
    swapped = [pool[3], pool[1], pool[2], pool[0], pool[4]]

    ranked = rank_candidates(swapped, MatchQuery())

    assert [result.candidate_id for result in ranked][1:3] == ["twin-b", "twin-a"]


def test_limit_truncates() -> None:
    ranked = rank_candidates(_pool(), MatchQuery(limit=2))
    assert [result.candidate_id for result in ranked] == ["star", "twin-a"]


def test_explicit_limit_overrides_query_limit() -> None:
    ranked = rank_candidates(_pool(), MatchQuery(limit=2), limit=1)
    assert len(ranked) == 1


def test_non_positive_limit_returns_nothing() -> None:
    assert rank_candidates(_pool(), MatchQuery(limit=0)) == []
    assert rank_candidates(_pool(), MatchQuery(), limit=-3) == []


def test_empty_pool_returns_nothing() -> None:
    assert rank_candidates([], MatchQuery()) == []


def test_result_scores_are_non_increasing() -> None:
    ranked = rank_candidates(_pool(), MatchQuery(region="dubai", languages=("en",)))
    scores = [result.total_score for result in ranked]
    assert scores == sorted(scores, reverse=True)


def test_thread_pool_gives_same_ranking_as_inline() -> None:
    pool = [
        replace(candidate, id=f"{candidate.id}-{index}")
        for index in range(10)
        for candidate in _pool()
    ]
    query = MatchQuery(limit=50)

    inline = rank_candidates(pool, query)
    threaded = rank_candidates(pool, query, max_workers=4)

    assert [result.candidate_id for result in threaded] == [
        result.candidate_id for result in inline
    ]


def test_score_pool_preserves_input_order() -> None:
    pool = _pool()
    results = score_pool(pool, MatchQuery(), max_workers=3)
    assert [result.candidate_id for result in results] == [candidate.id for candidate in pool]
