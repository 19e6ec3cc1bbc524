"""Rank a candidate pool against one query.

Scoring is pure and may be fanned out over a thread pool. ``Executor.map``
yields results in input order, so the stable sort that follows the join keeps
tied candidates in their original order whether or not a pool was used.

Usage example:
    from provider_matching.domain.models import CandidateProfile, MatchQuery
    from provider_matching.domain.ranking import rank_candidates

    ranked = rank_candidates(
        [CandidateProfile(id="a"), CandidateProfile(id="b", is_available=False)],
        MatchQuery(limit=5),
    )
    assert [result.candidate_id for result in ranked] == ["a"]
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from .aggregation import calculate_match_score
from .models import CandidateProfile, MatchQuery, MatchResult
from .profiles import MatchingProfile


def score_pool(
    candidates: Sequence[CandidateProfile],
    query: MatchQuery,
    profile: MatchingProfile | None = None,
    max_workers: int | None = None,
) -> list[MatchResult]:
    """Score every candidate, preserving input order."""
    score = partial(calculate_match_score, query=query, profile=profile)
    if max_workers is None or max_workers <= 1 or len(candidates) <= 1:
        return [score(candidate) for candidate in candidates]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(score, candidates))


def rank_candidates(
    candidates: Sequence[CandidateProfile],
    query: MatchQuery,
    limit: int | None = None,
    profile: MatchingProfile | None = None,
    max_workers: int | None = None,
) -> list[MatchResult]:
    """Score, filter, stable-sort and truncate a candidate pool.

    Args:
        candidates: Candidate snapshots in their original order.
        query: The client's matching preferences.
        limit: Maximum number of results; defaults to ``query.limit``.
        profile: Optional tables overriding the built-in weights and lookups.
        max_workers: Thread pool size for scoring; ``None`` or 1 scores inline.

    Returns:
        Results with a positive score, best first, at most ``limit`` long.
    """
    effective_limit = query.limit if limit is None else limit
    if effective_limit <= 0:
        return []

    results = score_pool(candidates, query, profile=profile, max_workers=max_workers)
    kept = [result for result in results if result.total_score > 0]
    # sorted() is stable: equal scores keep input order
    ranked = sorted(kept, key=lambda result: result.total_score, reverse=True)
    return ranked[:effective_limit]
