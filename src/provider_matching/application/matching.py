"""Match a candidate pool against one query and write the ranked report.

Usage example:
    from pathlib import Path

    from provider_matching.application.matching import run_match
    from provider_matching.config import MatchingConfig
    from provider_matching.domain.profiles import DEFAULT_PROFILE
    from provider_matching.infrastructure import LocalFileSystem

    outcome = run_match(
        candidates_path=Path("data/candidates.json"),
        query_path=Path("data/query.json"),
        out_path=Path("data/processed/matches.csv"),
        config=MatchingConfig(),
        profile=DEFAULT_PROFILE,
        fs=LocalFileSystem(),
    )
    print(outcome.results[0].candidate_id)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path

import pandas as pd

from ..config import MatchingConfig
from ..domain.explanation import build_match_explanation
from ..domain.models import CandidateProfile, MatchExplanation, MatchQuery, MatchResult
from ..domain.profiles import MatchingProfile
from ..domain.ranking import rank_candidates
from ..exceptions import InputFileNotFoundError
from ..infrastructure.io.validation import parse_match_query
from ..infrastructure.sources import JsonCandidateSource
from ..io_contracts import MatchRowIO
from ..observability import get_logger
from ..protocols import CandidateSource, FileSystem
from ..schemas import MATCH_REPORT_COLUMNS, validate_columns


@dataclass(frozen=True)
class MatchOutcome:
    """Ranked results, their explanations and where the report was written."""

    query: MatchQuery
    pool_size: int
    results: tuple[MatchResult, ...]
    explanations: tuple[MatchExplanation, ...]
    out_path: Path


def build_match_rows(
    results: Sequence[MatchResult],
    explanations: Sequence[MatchExplanation],
    candidates: Sequence[CandidateProfile],
) -> list[MatchRowIO]:
    names = {candidate.id: candidate.display_name for candidate in candidates}
    rows: list[MatchRowIO] = []
    for rank, (result, explanation) in enumerate(zip(results, explanations, strict=True), 1):
        breakdown = result.breakdown
        rows.append(
            {
                "rank": rank,
                "candidate_id": result.candidate_id,
                "display_name": names.get(result.candidate_id, ""),
                "total_score": result.total_score,
                "compatibility_level": result.compatibility_level,
                "specialization": breakdown.specialization,
                "location": breakdown.location,
                "language": breakdown.language,
                "budget": breakdown.budget,
                "response_time": breakdown.response_time,
                "performance": breakdown.performance,
                "availability": breakdown.availability,
                "experience": breakdown.experience,
                "title": explanation.title,
                "description": explanation.description,
                "highlights": "|".join(explanation.highlights),
                "reasons": "|".join(result.reasons),
            }
        )
    return rows


def match_pool(
    candidates: Sequence[CandidateProfile],
    query: MatchQuery,
    *,
    profile: MatchingProfile,
    locale: str,
    max_workers: int = 1,
) -> tuple[tuple[MatchResult, ...], tuple[MatchExplanation, ...]]:
    """Rank the pool and explain each returned result."""
    results = tuple(
        rank_candidates(candidates, query, profile=profile, max_workers=max_workers)
    )
    explanations = tuple(build_match_explanation(result, locale) for result in results)
    return results, explanations


def run_match(
    *,
    candidates_path: Path,
    query_path: Path,
    out_path: Path,
    config: MatchingConfig,
    profile: MatchingProfile,
    fs: FileSystem,
    source: CandidateSource | None = None,
    limit: int | None = None,
    locale: str | None = None,
) -> MatchOutcome:
    """Read the pool and query, rank, explain and write the match report.

    Args:
        candidates_path: JSON file with the candidate pool.
        query_path: JSON file with the match query.
        out_path: CSV report destination.
        config: Matching configuration (load at entry point).
        profile: Validated matching profile.
        fs: Filesystem for reading inputs and writing the report.
        source: Optional candidate source; defaults to reading ``candidates_path``.
        limit: Optional override of the query's result limit.
        locale: Optional override of the configured explanation locale.

    Returns:
        MatchOutcome with ranked results and the report path.
    """
    logger = get_logger("provider_matching.matching")

    if not fs.exists(query_path):
        raise InputFileNotFoundError("Query", str(query_path))
    query = parse_match_query(fs.read_json(query_path), default_limit=config.default_result_limit)
    if limit is not None:
        query = replace(query, limit=limit)

    source = source or JsonCandidateSource(candidates_path, fs)
    candidates = source.list_candidates()
    logger.info("Matching: %s candidates, limit %s", len(candidates), query.limit)

    results, explanations = match_pool(
        candidates,
        query,
        profile=profile,
        locale=locale or config.default_locale,
        max_workers=config.max_workers,
    )

    df = pd.DataFrame(
        build_match_rows(results, explanations, candidates), columns=list(MATCH_REPORT_COLUMNS)
    )
    validate_columns(list(df.columns), frozenset(MATCH_REPORT_COLUMNS), "Match report")
    fs.write_csv(df, out_path)
    logger.info("Matches: %s written to %s", len(results), out_path)

    return MatchOutcome(
        query=query,
        pool_size=len(candidates),
        results=results,
        explanations=explanations,
        out_path=out_path,
    )
