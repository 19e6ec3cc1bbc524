"""JSON-file badge store.

Usage example:
    from pathlib import Path

    from provider_matching.infrastructure.badge_store import JsonBadgeStore
    from provider_matching.infrastructure.filesystem import LocalFileSystem

    store = JsonBadgeStore(Path("data/badges.json"), LocalFileSystem())
    badge = store.get_tier_badge("prov-1")
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import override

from ..domain.badges import TIER_BADGE_TYPE, BadgeRecord, BadgeRequest
from ..exceptions import BadgeNotFoundError
from ..io_contracts import BadgeRecordIO
from ..protocols import BadgeStore, FileSystem
from .io.validation import parse_badge_store_file


def _to_record(entry: BadgeRecordIO) -> BadgeRecord:
    return BadgeRecord(
        badge_id=entry["badge_id"],
        provider_id=entry["provider_id"],
        tier_level=entry["tier_level"],
        name=entry["name"],
        name_ar=entry["name_ar"],
        icon=entry["icon"],
        color=entry["color"],
        badge_type=entry["badge_type"],
    )


def _to_entry(badge_id: str, request: BadgeRequest) -> BadgeRecordIO:
    return {
        "badge_id": badge_id,
        "provider_id": request.provider_id,
        "badge_type": request.badge_type,
        "tier_level": request.tier_level,
        "name": request.name,
        "name_ar": request.name_ar,
        "icon": request.icon,
        "color": request.color,
    }


@dataclass
class JsonBadgeStore(BadgeStore):
    """Badge store persisted as a single JSON document.

    Every write rewrites the whole file. A store-wide lock keeps concurrent
    writers in one process from losing each other's updates.
    """

    path: Path
    fs: FileSystem
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def _load(self) -> list[BadgeRecordIO]:
        if not self.fs.exists(self.path):
            return []
        return parse_badge_store_file(self.fs.read_json(self.path))["badges"]

    def _save(self, badges: list[BadgeRecordIO]) -> None:
        self.fs.write_json({"badges": badges}, self.path)

    def list_badges(self) -> list[BadgeRecord]:
        with self._lock:
            return [_to_record(entry) for entry in self._load()]

    @override
    def get_tier_badge(self, provider_id: str) -> BadgeRecord | None:
        with self._lock:
            for entry in self._load():
                if entry["provider_id"] == provider_id and entry["badge_type"] == TIER_BADGE_TYPE:
                    return _to_record(entry)
        return None

    @override
    def create_badge(self, request: BadgeRequest) -> str:
        badge_id = uuid.uuid4().hex
        with self._lock:
            badges = self._load()
            badges.append(_to_entry(badge_id, request))
            self._save(badges)
        return badge_id

    @override
    def update_badge(self, badge_id: str, request: BadgeRequest) -> None:
        with self._lock:
            badges = self._load()
            if not any(entry["badge_id"] == badge_id for entry in badges):
                raise BadgeNotFoundError(badge_id)
            self._save(
                [
                    _to_entry(badge_id, request) if entry["badge_id"] == badge_id else entry
                    for entry in badges
                ]
            )
