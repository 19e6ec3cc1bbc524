"""Centralised, injectable configuration for the provider matching engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import MatchingConfigFile
from .domain.explanation import DEFAULT_LOCALE, SUPPORTED_LOCALES


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class LocaleEnvVarError(ValueError):
    """Raised when an environment variable must name a supported locale."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be one of: en, ar.")


@dataclass(frozen=True)
class MatchingConfig:
    """Immutable configuration object for matching and tier commands.

    Load from environment with `MatchingConfig.from_env()` or construct directly for testing.
    """

    # Matching
    default_result_limit: int = 10
    default_locale: str = "en"
    matching_profile_path: str = ""  # empty: built-in tables
    max_workers: int = 1

    # Tier badges
    badge_store_path: str = "data/badges.json"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            MatchingConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            default_result_limit=_parse_positive_int(
                os.getenv("MATCH_RESULT_LIMIT", ""), env_name="MATCH_RESULT_LIMIT", default=10
            ),
            default_locale=_parse_locale(os.getenv("MATCH_LOCALE", ""), env_name="MATCH_LOCALE"),
            matching_profile_path=os.getenv("MATCHING_PROFILE", "").strip(),
            max_workers=_parse_positive_int(
                os.getenv("MATCH_MAX_WORKERS", ""), env_name="MATCH_MAX_WORKERS", default=1
            ),
            badge_store_path=os.getenv("BADGE_STORE_PATH", "data/badges.json").strip()
            or "data/badges.json",
        )

    def with_overrides(
        self,
        *,
        default_result_limit: int | None = None,
        default_locale: str | None = None,
        matching_profile_path: str | None = None,
        max_workers: int | None = None,
        badge_store_path: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            default_result_limit=self.default_result_limit
            if default_result_limit is None
            else default_result_limit,
            default_locale=self.default_locale
            if default_locale is None
            else default_locale.strip().lower(),
            matching_profile_path=self.matching_profile_path
            if matching_profile_path is None
            else matching_profile_path.strip(),
            max_workers=self.max_workers if max_workers is None else max_workers,
            badge_store_path=self.badge_store_path
            if badge_store_path is None
            else badge_store_path.strip(),
        )

    def with_file_overrides(self, file_config: MatchingConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            default_result_limit=self.default_result_limit
            if file_config.default_result_limit is None
            else file_config.default_result_limit,
            default_locale=self.default_locale
            if file_config.default_locale is None
            else file_config.default_locale,
            matching_profile_path=self.matching_profile_path
            if file_config.matching_profile_path is None
            else file_config.matching_profile_path,
            max_workers=self.max_workers
            if file_config.max_workers is None
            else file_config.max_workers,
            badge_store_path=self.badge_store_path
            if file_config.badge_store_path is None
            else file_config.badge_store_path,
        )


def _parse_positive_int(value: str, *, env_name: str, default: int) -> int:
    """Parse a positive integer from an environment variable, with a default when unset."""
    text = value.strip()
    if not text:
        return default
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_locale(value: str, *, env_name: str) -> str:
    """Parse an optional locale code; unset means English."""
    text = value.strip().lower()
    if not text:
        return DEFAULT_LOCALE
    if text not in SUPPORTED_LOCALES:
        raise LocaleEnvVarError(env_name)
    return text
