"""Tests for the JSON-file badge store."""

import threading
from pathlib import Path

import pytest

from provider_matching.domain.badges import build_badge_request
from provider_matching.exceptions import BadgeNotFoundError
from provider_matching.infrastructure import JsonBadgeStore, LocalFileSystem
from tests.fakes import InMemoryFileSystem


@pytest.fixture
def store(tmp_path: Path) -> JsonBadgeStore:
    return JsonBadgeStore(tmp_path / "badges.json", LocalFileSystem())


def test_missing_file_means_no_badges(store: JsonBadgeStore) -> None:
    assert store.list_badges() == []
    assert store.get_tier_badge("prov-1") is None


def test_create_then_get(store: JsonBadgeStore) -> None:
    badge_id = store.create_badge(build_badge_request("prov-1", "silver"))

    badge = store.get_tier_badge("prov-1")

    assert badge is not None
    assert badge.badge_id == badge_id
    assert badge.tier_level == "silver"
    assert badge.name == "Silver Tier"
    assert badge.name_ar == "مستوى فضي"
    assert badge.badge_type == "tier"


def test_update_replaces_only_the_target(store: JsonBadgeStore) -> None:
    first = store.create_badge(build_badge_request("prov-1", "bronze"))
    store.create_badge(build_badge_request("prov-2", "gold"))

    store.update_badge(first, build_badge_request("prov-1", "silver"))

    tiers = {badge.provider_id: badge.tier_level for badge in store.list_badges()}
    assert tiers == {"prov-1": "silver", "prov-2": "gold"}


def test_update_unknown_badge_raises(store: JsonBadgeStore) -> None:
    with pytest.raises(BadgeNotFoundError, match="ghost"):
        store.update_badge("ghost", build_badge_request("prov-1", "gold"))


def test_non_tier_badges_are_ignored() -> None:
    fs = InMemoryFileSystem()
    path = Path("badges.json")
    fs.write_json(
        {
            "badges": [
                {"badge_id": "b1", "provider_id": "prov-1", "badge_type": "featured"},
            ]
        },
        path,
    )
    store = JsonBadgeStore(path, fs)

    assert store.get_tier_badge("prov-1") is None
    assert len(store.list_badges()) == 1


def test_concurrent_creates_are_all_persisted(store: JsonBadgeStore) -> None:
    threads = [
        threading.Thread(
            target=store.create_badge, args=(build_badge_request(f"prov-{index}", "bronze"),)
        )
        for index in range(10)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store.list_badges()) == 10
