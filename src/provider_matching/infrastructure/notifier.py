"""Tier change notifier that records changes in the application log."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger
from typing import override

from ..observability import get_logger
from ..protocols import TierChangeNotifier


@dataclass
class LoggingTierChangeNotifier(TierChangeNotifier):
    """Log one line per tier change.

    First awards and upgrades are logged at info level; any other change
    (a downgrade, or a replaced unknown tier) at warning level.
    """

    logger: Logger = field(default_factory=lambda: get_logger("provider_matching.notifications"))

    @override
    def tier_changed(
        self,
        provider_id: str,
        new_tier: str,
        *,
        upgraded: bool,
        previous_tier: str | None = None,
    ) -> None:
        if previous_tier is None:
            self.logger.info("Provider %s awarded %s tier", provider_id, new_tier)
        elif upgraded:
            self.logger.info(
                "Provider %s upgraded from %s to %s tier", provider_id, previous_tier, new_tier
            )
        else:
            self.logger.warning(
                "Provider %s tier changed from %s to %s", provider_id, previous_tier, new_tier
            )
