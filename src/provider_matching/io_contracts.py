"""Boundary-neutral IO contracts for infrastructure validation.

Usage example:
    from provider_matching.io_contracts import BadgeRecordIO

    badge: BadgeRecordIO = {
        "badge_id": "b9c3f0",
        "provider_id": "prov-1",
        "badge_type": "tier",
        "tier_level": "gold",
        "name": "Gold Tier",
        "name_ar": "مستوى ذهبي",
        "icon": "award",
        "color": "#FFD700",
    }
"""

from __future__ import annotations

from typing import TypedDict


class BadgeRecordIO(TypedDict):
    """Persisted badge shape in the JSON badge store."""

    badge_id: str
    provider_id: str
    badge_type: str
    tier_level: str
    name: str
    name_ar: str
    icon: str
    color: str


class BadgeStoreFileIO(TypedDict):
    """Top-level JSON badge store document."""

    badges: list[BadgeRecordIO]


class MatchRowIO(TypedDict):
    """One ranked match as written to the match report."""

    rank: int
    candidate_id: str
    display_name: str
    total_score: float
    compatibility_level: str
    specialization: int
    location: int
    language: int
    budget: int
    response_time: int
    performance: int
    availability: int
    experience: int
    title: str
    description: str
    highlights: str
    reasons: str


class TierProgressRowIO(TypedDict):
    """One provider's tier progress as written to the tier report."""

    provider_id: str
    current_tier: str
    next_tier: str
    overall_progress: int
    unmet_criteria: str
    badge_action: str
    upgraded: bool
