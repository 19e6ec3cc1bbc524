"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from pathlib import Path

from .cli import CliDependencies, create_app
from .config import MatchingConfig
from .infrastructure import JsonBadgeStore, LocalFileSystem, LoggingTierChangeNotifier


def build_cli_dependencies(*, config: MatchingConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Matching configuration (used for badge store wiring).
    """
    fs = LocalFileSystem()
    return CliDependencies(
        fs=fs,
        badge_store=JsonBadgeStore(Path(config.badge_store_path), fs),
        notifier=LoggingTierChangeNotifier(),
    )


app = create_app(build_cli_dependencies)
