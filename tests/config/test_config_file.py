"""Tests for config-file schema parsing and fail-fast validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from provider_matching.config_file import load_matching_config_file
from provider_matching.domain.explanation import SUPPORTED_LOCALES
from provider_matching.exceptions import (
    ConfigFileNotFoundError,
    ConfigFileParseError,
    ConfigFileValidationError,
)
from tests.fakes import InMemoryFileSystem

CONFIG_PATH = Path("config/matching.toml")


def _write(fs: InMemoryFileSystem, content: str) -> None:
    fs.write_text(content, CONFIG_PATH)


def test_load_matching_config_file_parses_valid_toml() -> None:
    fs = InMemoryFileSystem()
    _write(
        fs,
        """
schema_version = 1

[matching]
default_result_limit = 20
default_locale = " AR "
matching_profile_path = "data/reference/profile.json"
max_workers = 4
badge_store_path = " var/badges.json "
""".strip(),
    )

    parsed = load_matching_config_file(path=CONFIG_PATH, fs=fs)

    assert parsed.default_result_limit == 20
    assert parsed.default_locale == "ar"
    assert parsed.matching_profile_path == "data/reference/profile.json"
    assert parsed.max_workers == 4
    assert parsed.badge_store_path == "var/badges.json"


def test_empty_matching_section_leaves_everything_unset() -> None:
    fs = InMemoryFileSystem()
    _write(fs, "schema_version = 1\n\n[matching]\n")

    parsed = load_matching_config_file(path=CONFIG_PATH, fs=fs)

    assert parsed.default_result_limit is None
    assert parsed.default_locale is None
    assert parsed.badge_store_path is None


def test_load_matching_config_file_fails_when_file_missing() -> None:
    fs = InMemoryFileSystem()

    with pytest.raises(ConfigFileNotFoundError):
        load_matching_config_file(path=Path("missing.toml"), fs=fs)


def test_load_matching_config_file_fails_for_invalid_toml() -> None:
    fs = InMemoryFileSystem()
    _write(fs, "schema_version = \n[matching")

    with pytest.raises(ConfigFileParseError):
        load_matching_config_file(path=CONFIG_PATH, fs=fs)


@pytest.mark.parametrize(
    ("content", "location"),
    [
        ("schema_version = 2\n[matching]\n", "schema_version"),
        ("schema_version = 1\n", "matching"),
        ("schema_version = 1\n[matching]\nunknown = 1\n", "matching.unknown"),
        ("schema_version = 1\n[matching]\ndefault_locale = 'fr'\n", "matching.default_locale"),
        ("schema_version = 1\n[matching]\nmax_workers = 0\n", "matching.max_workers"),
        (
            "schema_version = 1\n[matching]\nmatching_profile_path = ' '\n",
            "matching.matching_profile_path",
        ),
    ],
)
def test_load_matching_config_file_fails_fast_on_schema_errors(
    content: str, location: str
) -> None:
    fs = InMemoryFileSystem()
    _write(fs, content)

    with pytest.raises(ConfigFileValidationError, match=location):
        load_matching_config_file(path=CONFIG_PATH, fs=fs)


@pytest.mark.parametrize("locale", SUPPORTED_LOCALES)
def test_load_matching_config_file_accepts_every_explained_locale(locale: str) -> None:
    fs = InMemoryFileSystem()
    _write(fs, f"schema_version = 1\n[matching]\ndefault_locale = '{locale}'\n")

    parsed = load_matching_config_file(path=CONFIG_PATH, fs=fs)

    assert parsed.default_locale == locale
