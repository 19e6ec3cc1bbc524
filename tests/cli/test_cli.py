"""Tests for CLI wiring and overrides."""

import re
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from provider_matching import cli
from provider_matching.cli import CliDependencies
from provider_matching.config import MatchingConfig
from provider_matching.domain.profiles import DEFAULT_WEIGHTS
from provider_matching.exceptions import InputFileNotFoundError
from tests.fakes import InMemoryBadgeStore, InMemoryFileSystem, RecordingNotifier

runner = CliRunner()
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

CANDIDATES = [
    {
        "id": "prov-strong",
        "display_name": "Layla Haddad",
        "specializations": ["real_estate"],
        "languages": ["en", "ar"],
        "region": "dubai",
        "consultation_fee": 400,
        "average_rating": 4.9,
        "total_reviews": 120,
        "verification_level": "professional",
    },
    {"id": "prov-other", "specializations": ["family"], "region": "ajman"},
]
QUERY = {"service_type": "rental_agreement", "region": "dubai", "languages": ["en"]}
METRICS = {
    "providers": [
        {
            "provider_id": "prov-silver",
            "total_consultations": 12,
            "average_rating": 4.2,
            "total_reviews": 6,
            "years_experience": 2,
            "completed_cases": 8,
            "success_rate": 75,
            "response_time_hours": 20,
            "verification_level": "basic",
        },
        {"provider_id": "prov-new"},
    ]
}


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


def _fake_dependencies() -> CliDependencies:
    return CliDependencies(
        fs=InMemoryFileSystem(),
        badge_store=InMemoryBadgeStore(),
        notifier=RecordingNotifier(),
    )


def _build_app_with_dependencies(
    deps: CliDependencies, captured: dict[str, MatchingConfig] | None = None
) -> typer.Typer:
    def build_with_shared_deps(*, config: MatchingConfig) -> CliDependencies:
        if captured is not None:
            captured["config"] = config
        return deps

    return cli.create_app(build_with_shared_deps)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_from_env(cls: type[MatchingConfig], dotenv_path: str | None = None) -> MatchingConfig:
        _ = (cls, dotenv_path)
        return MatchingConfig()

    monkeypatch.setattr(cli.MatchingConfig, "from_env", classmethod(fake_from_env))


@pytest.fixture
def deps() -> CliDependencies:
    return _fake_dependencies()


@pytest.fixture
def fs(deps: CliDependencies) -> InMemoryFileSystem:
    assert isinstance(deps.fs, InMemoryFileSystem)
    return deps.fs


def test_cli_version_option_prints_package_version(
    monkeypatch: pytest.MonkeyPatch, deps: CliDependencies
) -> None:
    monkeypatch.setattr(cli, "__version__", "9.9.9")

    result = runner.invoke(_build_app_with_dependencies(deps), ["--version"])

    assert result.exit_code == 0
    assert "9.9.9" in _strip_ansi(result.output)


def test_cli_match_writes_report(deps: CliDependencies, fs: InMemoryFileSystem) -> None:
    fs.write_json(CANDIDATES, cli.DEFAULT_CANDIDATES_IN)
    fs.write_json(QUERY, cli.DEFAULT_QUERY_IN)

    result = runner.invoke(_build_app_with_dependencies(deps), ["match", "--limit", "1"])

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "Match complete" in output
    assert "1. prov-strong" in output
    assert "prov-other" not in output
    df = fs.read_csv(cli.DEFAULT_MATCHES_OUT)
    assert df["candidate_id"].tolist() == ["prov-strong"]


def test_cli_match_locale_and_profile_overrides(
    deps: CliDependencies, fs: InMemoryFileSystem
) -> None:
    captured: dict[str, MatchingConfig] = {}
    fs.write_json(CANDIDATES, Path("in/candidates.json"))
    fs.write_json(QUERY, Path("in/query.json"))
    fs.write_json(
        {
            "schema_version": 1,
            "name": "custom",
            "weights": {
                "specialization": DEFAULT_WEIGHTS.specialization,
                "performance": DEFAULT_WEIGHTS.performance,
                "availability": DEFAULT_WEIGHTS.availability,
                "budget": DEFAULT_WEIGHTS.budget,
                "location": DEFAULT_WEIGHTS.location,
                "language": DEFAULT_WEIGHTS.language,
                "response_time": DEFAULT_WEIGHTS.response_time,
                "experience": DEFAULT_WEIGHTS.experience,
            },
        },
        Path("in/profile.json"),
    )

    result = runner.invoke(
        _build_app_with_dependencies(deps, captured),
        [
            "match",
            "-c",
            "in/candidates.json",
            "-q",
            "in/query.json",
            "-o",
            "out/matches.csv",
            "--locale",
            "ar",
            "--profile",
            "in/profile.json",
        ],
    )

    assert result.exit_code == 0, result.output
    assert captured["config"].default_locale == "ar"
    assert captured["config"].matching_profile_path == "in/profile.json"
    df = fs.read_csv(Path("out/matches.csv"))
    assert df.loc[0, "title"].startswith("توافق")


def test_cli_match_missing_query_raises(deps: CliDependencies, fs: InMemoryFileSystem) -> None:
    fs.write_json(CANDIDATES, cli.DEFAULT_CANDIDATES_IN)

    result = runner.invoke(_build_app_with_dependencies(deps), ["match"])

    assert result.exit_code != 0
    assert isinstance(result.exception, InputFileNotFoundError)


def test_cli_tier_progress(deps: CliDependencies, fs: InMemoryFileSystem) -> None:
    fs.write_json(METRICS, cli.DEFAULT_METRICS_IN)

    result = runner.invoke(_build_app_with_dependencies(deps), ["tier-progress"])

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "Tier progress complete" in output
    assert "silver: 1" in output
    assert "bronze: 1" in output
    df = fs.read_csv(cli.DEFAULT_TIERS_OUT)
    assert df["badge_action"].tolist() == ["skipped", "skipped"]
    assert isinstance(deps.badge_store, InMemoryBadgeStore)
    assert deps.badge_store.writes == []


def test_cli_sync_badges(deps: CliDependencies, fs: InMemoryFileSystem) -> None:
    captured: dict[str, MatchingConfig] = {}
    fs.write_json(METRICS, cli.DEFAULT_METRICS_IN)
    assert isinstance(deps.badge_store, InMemoryBadgeStore)
    deps.badge_store.seed("prov-silver", "bronze")

    result = runner.invoke(
        _build_app_with_dependencies(deps, captured),
        ["sync-badges", "--badge-store", "var/badges.json"],
    )

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "Badge sync complete" in output
    assert "1 created, 1 updated (1 upgrades)" in output
    assert captured["config"].badge_store_path == "var/badges.json"
    assert isinstance(deps.notifier, RecordingNotifier)
    assert ("prov-silver", "silver", True) in deps.notifier.events


def test_cli_tiers_lists_tier_table(deps: CliDependencies) -> None:
    result = runner.invoke(_build_app_with_dependencies(deps), ["tiers"])

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "Tiers (default)" in output
    for tier in ("bronze", "silver", "gold", "platinum"):
        assert tier in output


def test_cli_global_config_file_overrides_env(
    deps: CliDependencies, fs: InMemoryFileSystem
) -> None:
    captured: dict[str, MatchingConfig] = {}
    fs.write_text(
        """
schema_version = 1
[matching]
default_result_limit = 1
default_locale = "ar"
""".strip(),
        Path("config/matching.toml"),
    )
    fs.write_json(CANDIDATES, cli.DEFAULT_CANDIDATES_IN)
    fs.write_json(QUERY, cli.DEFAULT_QUERY_IN)

    result = runner.invoke(
        _build_app_with_dependencies(deps, captured),
        ["--config", "config/matching.toml", "match"],
    )

    assert result.exit_code == 0, result.output
    assert captured["config"].default_result_limit == 1
    assert captured["config"].default_locale == "ar"
    assert fs.read_csv(cli.DEFAULT_MATCHES_OUT)["candidate_id"].tolist() == ["prov-strong"]
