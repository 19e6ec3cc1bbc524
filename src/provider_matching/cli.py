"""CLI for the provider matching engine.

Commands:
- match: Rank a candidate pool against one query and write the match report
- tier-progress: Compute tier and progress toward the next tier for each provider
- sync-badges: Compute tiers and reconcile them with the persisted tier badges
- tiers: Show the tier table with requirements and benefits
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.table import Table

from . import __version__
from .application.badge_sync import BadgeSynchronizer
from .application.matching import MatchOutcome, run_match
from .application.matching_profiles import resolve_matching_profile
from .application.tier_report import TierReportOutcome, run_tier_report
from .config import MatchingConfig
from .config_file import load_matching_config_file
from .domain.explanation import resolve_locale
from .domain.profiles import MatchingProfile
from .domain.tiers import all_tier_info
from .protocols import BadgeStore, FileSystem, TierChangeNotifier


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: MatchingConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem
    badge_store: BadgeStore
    notifier: TierChangeNotifier | None


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: MatchingConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self, *, config: MatchingConfig | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the provider-matching entry point.")


DEFAULT_CANDIDATES_IN = Path("data/candidates.json")
DEFAULT_QUERY_IN = Path("data/query.json")
DEFAULT_METRICS_IN = Path("data/metrics.json")
DEFAULT_MATCHES_OUT = Path("data/processed/matches.csv")
DEFAULT_TIERS_OUT = Path("data/processed/tier_progress.csv")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _load_profile(config: MatchingConfig, fs: FileSystem) -> MatchingProfile:
    path = Path(config.matching_profile_path) if config.matching_profile_path else None
    return resolve_matching_profile(path=path, fs=fs)


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"provider-matching {__version__}")
        raise typer.Exit()


def _print_tier_summary(outcome: TierReportOutcome) -> None:
    for tier, count in outcome.tier_counts.items():
        rprint(f"  {tier}: {count:,}")


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Provider matching engine: rank candidates for a request and qualify provider tiers",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                help="TOML config file (schema_version = 1, [matching] section)",
            ),
        ] = None,
        show_version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = show_version
        config = MatchingConfig.from_env()
        if config_path is not None:
            fs = deps_builder(config=config).fs
            config = config.with_file_overrides(load_matching_config_file(path=config_path, fs=fs))
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def match(
        ctx: typer.Context,
        candidates_path: Annotated[
            Path,
            typer.Option(
                "--candidates",
                "-c",
                help="JSON file with the candidate pool",
            ),
        ] = DEFAULT_CANDIDATES_IN,
        query_path: Annotated[
            Path,
            typer.Option(
                "--query",
                "-q",
                help="JSON file with the match query",
            ),
        ] = DEFAULT_QUERY_IN,
        out_path: Annotated[
            Path,
            typer.Option(
                "--output",
                "-o",
                help="Output path for the ranked match report",
            ),
        ] = DEFAULT_MATCHES_OUT,
        limit: Annotated[
            int | None,
            typer.Option(
                "--limit",
                "-n",
                help="Override the query's result limit",
            ),
        ] = None,
        locale: Annotated[
            str | None,
            typer.Option(
                "--locale",
                "-l",
                help="Explanation language (en or ar)",
            ),
        ] = None,
        profile_path: Annotated[
            str | None,
            typer.Option(
                "--profile",
                "-p",
                help="Matching profile JSON (weights, tiers, service types, regions)",
            ),
        ] = None,
    ) -> None:
        """Match: rank candidates against a query and explain each result."""
        state = _get_context(ctx)
        config = state.config
        if locale is not None or profile_path is not None:
            config = config.with_overrides(
                default_locale=locale,
                matching_profile_path=profile_path,
            )
        deps = state.build_dependencies(config=config)
        profile = _load_profile(config, deps.fs)

        outcome: MatchOutcome = run_match(
            candidates_path=candidates_path,
            query_path=query_path,
            out_path=out_path,
            config=config,
            profile=profile,
            fs=deps.fs,
            limit=limit,
        )
        rprint(f"[green]✓ Match complete:[/green] {outcome.out_path}")
        rprint(f"  {outcome.pool_size:,} candidates → {len(outcome.results):,} matches")
        for rank, (result, explanation) in enumerate(
            zip(outcome.results, outcome.explanations, strict=True), 1
        ):
            rprint(
                f"  {rank}. {result.candidate_id} {result.total_score:g} "
                f"({result.compatibility_level}) {explanation.title}"
            )

    @app.command(name="tier-progress")
    def tier_progress(
        ctx: typer.Context,
        metrics_path: Annotated[
            Path,
            typer.Option(
                "--metrics",
                "-m",
                help="JSON file with provider metrics snapshots",
            ),
        ] = DEFAULT_METRICS_IN,
        out_path: Annotated[
            Path,
            typer.Option(
                "--output",
                "-o",
                help="Output path for the tier progress report",
            ),
        ] = DEFAULT_TIERS_OUT,
        profile_path: Annotated[
            str | None,
            typer.Option(
                "--profile",
                "-p",
                help="Matching profile JSON (weights, tiers, service types, regions)",
            ),
        ] = None,
    ) -> None:
        """Tier progress: compute each provider's tier and progress toward the next."""
        state = _get_context(ctx)
        config = state.config
        if profile_path is not None:
            config = config.with_overrides(matching_profile_path=profile_path)
        deps = state.build_dependencies(config=config)
        profile = _load_profile(config, deps.fs)

        outcome = run_tier_report(
            metrics_path=metrics_path,
            out_path=out_path,
            config=config,
            profile=profile,
            fs=deps.fs,
        )
        rprint(f"[green]✓ Tier progress complete:[/green] {outcome.out_path}")
        _print_tier_summary(outcome)

    @app.command(name="sync-badges")
    def sync_badges(
        ctx: typer.Context,
        metrics_path: Annotated[
            Path,
            typer.Option(
                "--metrics",
                "-m",
                help="JSON file with provider metrics snapshots",
            ),
        ] = DEFAULT_METRICS_IN,
        out_path: Annotated[
            Path,
            typer.Option(
                "--output",
                "-o",
                help="Output path for the tier progress report",
            ),
        ] = DEFAULT_TIERS_OUT,
        badge_store_path: Annotated[
            str | None,
            typer.Option(
                "--badge-store",
                "-b",
                help="JSON badge store (default: data/badges.json)",
            ),
        ] = None,
        profile_path: Annotated[
            str | None,
            typer.Option(
                "--profile",
                "-p",
                help="Matching profile JSON (weights, tiers, service types, regions)",
            ),
        ] = None,
    ) -> None:
        """Sync badges: recompute tiers and create or update each provider's tier badge."""
        state = _get_context(ctx)
        config = state.config
        if badge_store_path is not None or profile_path is not None:
            config = config.with_overrides(
                badge_store_path=badge_store_path,
                matching_profile_path=profile_path,
            )
        deps = state.build_dependencies(config=config)
        profile = _load_profile(config, deps.fs)
        synchronizer = BadgeSynchronizer(
            store=deps.badge_store,
            notifier=deps.notifier,
            tiers=profile.tiers,
        )

        outcome = run_tier_report(
            metrics_path=metrics_path,
            out_path=out_path,
            config=config,
            profile=profile,
            fs=deps.fs,
            synchronizer=synchronizer,
        )
        created = sum(1 for result in outcome.sync_results if result.decision.action == "create")
        updated = sum(1 for result in outcome.sync_results if result.decision.action == "update")
        upgraded = sum(1 for result in outcome.sync_results if result.decision.upgraded)
        rprint(f"[green]✓ Badge sync complete:[/green] {outcome.out_path}")
        rprint(f"  {created:,} created, {updated:,} updated ({upgraded:,} upgrades)")
        _print_tier_summary(outcome)

    @app.command()
    def tiers(
        ctx: typer.Context,
        locale: Annotated[
            str | None,
            typer.Option(
                "--locale",
                "-l",
                help="Tier name language (en or ar)",
            ),
        ] = None,
        profile_path: Annotated[
            str | None,
            typer.Option(
                "--profile",
                "-p",
                help="Matching profile JSON (weights, tiers, service types, regions)",
            ),
        ] = None,
    ) -> None:
        """Tiers: show every tier with its requirements and benefits."""
        state = _get_context(ctx)
        config = state.config
        if profile_path is not None:
            config = config.with_overrides(matching_profile_path=profile_path)
        deps = state.build_dependencies(config=config)
        profile = _load_profile(config, deps.fs)
        lang = resolve_locale(locale or config.default_locale)

        table = Table(title=f"Tiers ({profile.name})")
        for column in ("Tier", "Name", "Requirements", "Benefits"):
            table.add_column(column)
        for definition in all_tier_info(profile.tiers):
            req = definition.requirements
            display_name = definition.display.name_ar if lang == "ar" else definition.display.name
            table.add_row(
                definition.tier,
                display_name,
                (
                    f"consultations ≥ {req.min_consultations}, rating ≥ {req.min_rating:g}, "
                    f"reviews ≥ {req.min_reviews}, experience ≥ {req.min_years_experience:g}y, "
                    f"cases ≥ {req.min_completed_cases}, "
                    f"success ≥ {req.min_success_rate:g}%, "
                    f"response ≤ {req.max_response_hours:g}h, "
                    f"verification ≥ {req.min_verification_level}"
                ),
                "\n".join(definition.benefits),
            )
        rprint(table)

    return app
