"""Pure reconciliation of a computed tier against a persisted tier badge.

Usage example:
    from provider_matching.domain.badges import plan_badge_update

    decision = plan_badge_update("prov-1", "gold", existing=None)
    assert decision.action == "create"
    assert decision.request is not None and decision.request.name == "Gold Tier"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .profiles import DEFAULT_TIERS, TierDefinition
from .tiers import get_tier_definition, tier_rank

TIER_BADGE_TYPE = "tier"

BadgeAction = Literal["create", "update", "none"]


@dataclass(frozen=True)
class BadgeRecord:
    """A persisted tier badge as reported by the badge store."""

    badge_id: str
    provider_id: str
    tier_level: str
    name: str = ""
    name_ar: str = ""
    icon: str = ""
    color: str = ""
    badge_type: str = TIER_BADGE_TYPE


@dataclass(frozen=True)
class BadgeRequest:
    """Values to write for a tier badge."""

    provider_id: str
    name: str
    name_ar: str
    icon: str
    color: str
    tier_level: str
    badge_type: str = TIER_BADGE_TYPE


@dataclass(frozen=True)
class BadgeDecision:
    """What the badge store should do, and whether it counts as an upgrade."""

    action: BadgeAction
    provider_id: str
    new_tier: str
    previous_tier: str | None
    upgraded: bool
    badge_id: str | None = None
    request: BadgeRequest | None = None


def build_badge_request(
    provider_id: str, tier: str, tiers: tuple[TierDefinition, ...] | None = None
) -> BadgeRequest:
    display = get_tier_definition(tier, tiers).display
    return BadgeRequest(
        provider_id=provider_id,
        name=f"{display.name} Tier",
        name_ar=f"مستوى {display.name_ar}",
        icon=display.icon,
        color=display.color,
        tier_level=tier,
    )


def is_upgrade(
    previous_tier: str | None, new_tier: str, tiers: tuple[TierDefinition, ...] | None = None
) -> bool:
    """True only when the tier strictly increased; a first award is not an upgrade."""
    table = tiers if tiers is not None else DEFAULT_TIERS
    if previous_tier is None or previous_tier not in {definition.tier for definition in table}:
        return False
    return tier_rank(new_tier, tiers) > tier_rank(previous_tier, tiers)


def plan_badge_update(
    provider_id: str,
    new_tier: str,
    existing: BadgeRecord | None,
    tiers: tuple[TierDefinition, ...] | None = None,
) -> BadgeDecision:
    """Decide whether the tier badge must be created, updated or left alone."""
    if existing is None:
        return BadgeDecision(
            action="create",
            provider_id=provider_id,
            new_tier=new_tier,
            previous_tier=None,
            upgraded=False,
            request=build_badge_request(provider_id, new_tier, tiers),
        )

    if existing.tier_level == new_tier:
        return BadgeDecision(
            action="none",
            provider_id=provider_id,
            new_tier=new_tier,
            previous_tier=existing.tier_level,
            upgraded=False,
            badge_id=existing.badge_id,
        )

    return BadgeDecision(
        action="update",
        provider_id=provider_id,
        new_tier=new_tier,
        previous_tier=existing.tier_level,
        upgraded=is_upgrade(existing.tier_level, new_tier, tiers),
        badge_id=existing.badge_id,
        request=build_badge_request(provider_id, new_tier, tiers),
    )
