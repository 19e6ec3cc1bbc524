"""Tier progress reporting and batch badge synchronisation.

Usage example:
    from pathlib import Path

    from provider_matching.application.tier_report import run_tier_report
    from provider_matching.config import MatchingConfig
    from provider_matching.domain.profiles import DEFAULT_PROFILE
    from provider_matching.infrastructure import LocalFileSystem

    outcome = run_tier_report(
        metrics_path=Path("data/metrics.json"),
        out_path=Path("data/processed/tiers.csv"),
        config=MatchingConfig(),
        profile=DEFAULT_PROFILE,
        fs=LocalFileSystem(),
    )
    print(outcome.tier_counts)
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..config import MatchingConfig
from ..domain.profiles import MatchingProfile
from ..domain.tiers import ProviderMetrics, TierProgress, calculate_tier_progress
from ..infrastructure.sources import JsonMetricsSource
from ..io_contracts import TierProgressRowIO
from ..observability import get_logger
from ..protocols import FileSystem
from ..schemas import TIER_REPORT_COLUMNS, validate_columns
from .badge_sync import BadgeSynchronizer, BadgeSyncResult


@dataclass(frozen=True)
class TierReportOutcome:
    """Per-provider progress, optional badge sync results and the report path."""

    progress: Mapping[str, TierProgress]
    sync_results: tuple[BadgeSyncResult, ...]
    tier_counts: Mapping[str, int]
    out_path: Path


def _unmet(progress: TierProgress) -> str:
    return "|".join(name for name, entry in progress.progress.items() if not entry.met)


def build_tier_rows(
    progress: Mapping[str, TierProgress],
    sync_results: Mapping[str, BadgeSyncResult],
) -> list[TierProgressRowIO]:
    rows: list[TierProgressRowIO] = []
    for provider_id, entry in progress.items():
        synced = sync_results.get(provider_id)
        rows.append(
            {
                "provider_id": provider_id,
                "current_tier": entry.current_tier,
                "next_tier": entry.next_tier or "",
                "overall_progress": entry.overall_progress,
                "unmet_criteria": _unmet(entry),
                "badge_action": synced.decision.action if synced else "skipped",
                "upgraded": synced.decision.upgraded if synced else False,
            }
        )
    return rows


def run_tier_report(
    *,
    metrics_path: Path,
    out_path: Path,
    config: MatchingConfig,
    profile: MatchingProfile,
    fs: FileSystem,
    synchronizer: BadgeSynchronizer | None = None,
) -> TierReportOutcome:
    """Compute tier progress for every provider and write the tier report.

    When a synchroniser is given, each provider's badge is reconciled with the
    computed tier as well; otherwise the badge columns read ``skipped``.
    """
    logger = get_logger("provider_matching.tier_report")

    snapshots: dict[str, ProviderMetrics] = JsonMetricsSource(metrics_path, fs).all_metrics()
    logger.info("Tier report: %s providers", len(snapshots))

    sync_results: tuple[BadgeSyncResult, ...] = ()
    if synchronizer is not None:
        sync_results = tuple(
            synchronizer.synchronize_many(snapshots, max_workers=config.max_workers)
        )
        progress = {result.provider_id: result.progress for result in sync_results}
    else:
        progress = {
            provider_id: calculate_tier_progress(metrics, profile.tiers)
            for provider_id, metrics in snapshots.items()
        }

    by_provider = {result.provider_id: result for result in sync_results}
    df = pd.DataFrame(build_tier_rows(progress, by_provider), columns=list(TIER_REPORT_COLUMNS))
    validate_columns(list(df.columns), frozenset(TIER_REPORT_COLUMNS), "Tier report")
    fs.write_csv(df, out_path)
    logger.info("Tier report written to %s", out_path)

    counts = Counter(entry.current_tier for entry in progress.values())
    return TierReportOutcome(
        progress=progress,
        sync_results=sync_results,
        tier_counts={tier: counts.get(tier, 0) for tier in profile.tier_names()},
        out_path=out_path,
    )
