"""Column definitions for the report files the engine writes.

These fix the column order of each CSV report so downstream consumers can
rely on it.
"""

from __future__ import annotations

# Ranked match report: one row per returned candidate
MATCH_REPORT_COLUMNS = (
    "rank",
    "candidate_id",
    "display_name",
    "total_score",
    "compatibility_level",  # excellent | good | fair | low
    "specialization",
    "location",
    "language",
    "budget",
    "response_time",
    "performance",
    "availability",
    "experience",
    "title",
    "description",
    "highlights",  # pipe-separated
    "reasons",  # pipe-separated
)

# Tier progress report: one row per provider
TIER_REPORT_COLUMNS = (
    "provider_id",
    "current_tier",
    "next_tier",  # empty at the ceiling tier
    "overall_progress",
    "unmet_criteria",  # pipe-separated criterion names
    "badge_action",  # create | update | none | skipped
    "upgraded",
)


def validate_columns(df_columns: list[str], required: frozenset[str], report_name: str) -> None:
    """Validate that DataFrame has required columns.

    Args:
        df_columns: List of column names from DataFrame.
        required: Set of required column names.
        report_name: Name of report for error messages.

    Raises:
        ValueError: If required columns are missing.
    """
    missing = required - set(df_columns)
    if missing:
        raise ValueError(f"{report_name}: Missing required columns: {sorted(missing)}")
