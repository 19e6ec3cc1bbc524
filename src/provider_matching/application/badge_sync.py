"""Synchronise computed tiers with the persisted tier badges.

Tier computation is pure and safe to run in parallel across providers. The
read-modify-write against the badge store is serialised per provider id, so
two concurrent recomputations for the same provider cannot interleave their
reads and writes.

Usage example:
    from provider_matching.application.badge_sync import BadgeSynchronizer
    from provider_matching.domain.tiers import ProviderMetrics

    synchronizer = BadgeSynchronizer(store=my_store, notifier=my_notifier)
    result = synchronizer.synchronize("prov-1", ProviderMetrics(total_consultations=12))
    print(result.decision.action, result.progress.current_tier)
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass, field

from ..domain.badges import BadgeDecision, plan_badge_update
from ..domain.profiles import TierDefinition
from ..domain.tiers import ProviderMetrics, TierProgress, calculate_tier_progress
from ..observability import get_logger
from ..protocols import BadgeStore, MetricsSource, TierChangeNotifier


@dataclass(frozen=True)
class BadgeSyncResult:
    """Outcome of one provider's tier recomputation."""

    provider_id: str
    progress: TierProgress
    decision: BadgeDecision
    badge_id: str | None


@dataclass
class _LockEntry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


@dataclass
class ProviderLocks:
    """Per-provider locks, kept only while some thread holds or waits on them."""

    _entries: dict[str, _LockEntry] = field(default_factory=dict)
    _guard: threading.Lock = field(default_factory=threading.Lock)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, provider_id: str) -> Iterator[None]:
        """Hold the provider's lock; the entry is dropped when the last holder leaves."""
        with self._guard:
            entry = self._entries.setdefault(provider_id, _LockEntry())
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[provider_id]


class BadgeSynchronizer:
    """Reconcile computed tiers with the badge store and notify on changes."""

    def __init__(
        self,
        store: BadgeStore,
        notifier: TierChangeNotifier | None = None,
        tiers: tuple[TierDefinition, ...] | None = None,
        locks: ProviderLocks | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._tiers = tiers
        self._locks = locks if locks is not None else ProviderLocks()
        self._logger = get_logger("provider_matching.badge_sync")

    def synchronize(self, provider_id: str, metrics: ProviderMetrics) -> BadgeSyncResult:
        """Compute the tier for ``metrics`` and create or update the badge if needed."""
        progress = calculate_tier_progress(metrics, self._tiers)

        with self._locks.hold(provider_id):
            existing = self._store.get_tier_badge(provider_id)
            decision = plan_badge_update(
                provider_id, progress.current_tier, existing, tiers=self._tiers
            )
            badge_id = decision.badge_id
            if decision.action == "create" and decision.request is not None:
                badge_id = self._store.create_badge(decision.request)
                self._logger.info(
                    "Created %s tier badge for provider %s", decision.new_tier, provider_id
                )
            elif (
                decision.action == "update"
                and decision.request is not None
                and decision.badge_id is not None
            ):
                self._store.update_badge(decision.badge_id, decision.request)
                self._logger.info(
                    "Updated tier badge for provider %s: %s -> %s",
                    provider_id,
                    decision.previous_tier,
                    decision.new_tier,
                )

        if decision.action != "none" and self._notifier is not None:
            self._notifier.tier_changed(
                provider_id,
                decision.new_tier,
                upgraded=decision.upgraded,
                previous_tier=decision.previous_tier,
            )

        return BadgeSyncResult(
            provider_id=provider_id,
            progress=progress,
            decision=decision,
            badge_id=badge_id,
        )

    def recalculate(self, provider_id: str, source: MetricsSource) -> BadgeSyncResult | None:
        """Fetch metrics for one provider and synchronise; None when the provider is unknown."""
        metrics = source.get_metrics(provider_id)
        if metrics is None:
            self._logger.info("No metrics for provider %s; skipping tier sync", provider_id)
            return None
        return self.synchronize(provider_id, metrics)

    def synchronize_many(
        self,
        snapshots: Mapping[str, ProviderMetrics],
        max_workers: int | None = None,
    ) -> list[BadgeSyncResult]:
        """Synchronise many providers, optionally in parallel; results follow input order."""
        items = list(snapshots.items())
        if max_workers is None or max_workers <= 1 or len(items) <= 1:
            results = [self.synchronize(provider_id, metrics) for provider_id, metrics in items]
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                results = list(pool.map(lambda item: self.synchronize(*item), items))

        changed = sum(1 for result in results if result.decision.action != "none")
        self._logger.info("Tier sync: %s providers, %s badge changes", len(results), changed)
        return results
