"""Protocol definitions for dependency injection.

These protocols define the collaborator boundaries the engine depends on,
enabling isolated unit testing with in-memory implementations.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import pandas as pd

    from .domain.badges import BadgeRecord, BadgeRequest
    from .domain.models import CandidateProfile
    from .domain.tiers import ProviderMetrics


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading inputs and writing reports."""

    def read_json(self, path: Path) -> object:
        """Read a JSON document (object or array)."""
        ...

    def write_json(self, data: Mapping[str, object] | Sequence[object], path: Path) -> None:
        """Write JSON file."""
        ...

    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        """Write DataFrame to CSV file."""
        ...

    def read_text(self, path: Path) -> str:
        """Read text file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...


@runtime_checkable
class CandidateSource(Protocol):
    """Data-access collaborator that supplies candidate snapshots."""

    def list_candidates(self) -> list[CandidateProfile]:
        """Return the candidate pool for a matching request."""
        ...


@runtime_checkable
class MetricsSource(Protocol):
    """Data-access collaborator that supplies provider metrics snapshots."""

    def get_metrics(self, provider_id: str) -> ProviderMetrics | None:
        """Return the metrics snapshot for a provider, or None if unknown."""
        ...


@runtime_checkable
class BadgeStore(Protocol):
    """Persistence collaborator for tier badges keyed by provider id and badge type."""

    def get_tier_badge(self, provider_id: str) -> BadgeRecord | None:
        """Return the active tier badge for a provider, if any."""
        ...

    def create_badge(self, request: BadgeRequest) -> str:
        """Create a badge and return its identifier."""
        ...

    def update_badge(self, badge_id: str, request: BadgeRequest) -> None:
        """Overwrite an existing badge's values."""
        ...


@runtime_checkable
class TierChangeNotifier(Protocol):
    """Notification collaborator told only about tier changes, never raw scores."""

    def tier_changed(
        self,
        provider_id: str,
        new_tier: str,
        *,
        upgraded: bool,
        previous_tier: str | None = None,
    ) -> None:
        """Inform the notification layer that a provider's tier changed.

        `previous_tier` is None when the provider had no badge before.
        """
        ...
