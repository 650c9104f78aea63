# backend/modules/tax/services/rule_cache.py

"""
Time-bounded, process-local snapshot of the active tax rules.

The cache is a recomputable copy of the rule store. A failed fetch never
reaches the caller: the last good snapshot (or an empty rule set) is served
instead and the next load tries the store again.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple
import logging
import time

from ..schemas import TaxRule
from .rule_store import TaxRuleStore

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CachedRuleSet:
    rules: Tuple[TaxRule, ...]
    fetched_at: float
    ttl_seconds: float

    def is_fresh(self, now: float) -> bool:
        return now - self.fetched_at < self.ttl_seconds


@dataclass(frozen=True)
class RuleLoadResult:
    """Outcome of one rule store fetch"""
    rules: Tuple[TaxRule, ...] = field(default_factory=tuple)
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def sort_rules(rules: Sequence[TaxRule]) -> Tuple[TaxRule, ...]:
    """Fix evaluation order: type, then rate, then id"""
    return tuple(sorted(rules, key=lambda r: (r.type.value, r.rate, r.id)))


class TaxRuleCache:
    """Holds the rule snapshot shared by every tax calculation in the process"""

    def __init__(
        self,
        store: TaxRuleStore,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.store = store
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: Optional[CachedRuleSet] = None

    @property
    def snapshot(self) -> Optional[CachedRuleSet]:
        return self._snapshot

    def is_fresh(self) -> bool:
        return self._snapshot is not None and self._snapshot.is_fresh(self._clock())

    async def load(self) -> Tuple[TaxRule, ...]:
        """Return the current rules, refreshing from the store when stale"""
        snapshot = self._snapshot
        if snapshot is not None and snapshot.is_fresh(self._clock()):
            return snapshot.rules

        result = await self.fetch()

        if not result.ok:
            if snapshot is not None:
                logger.error(
                    f"Failed to load tax rules, serving {len(snapshot.rules)} "
                    f"cached rules: {result.error}"
                )
                return snapshot.rules
            logger.error(f"Failed to load tax rules, no cached rules available: {result.error}")
            return ()

        self._snapshot = CachedRuleSet(
            rules=result.rules,
            fetched_at=self._clock(),
            ttl_seconds=self.ttl_seconds,
        )
        logger.info(f"Loaded {len(result.rules)} active tax rules")
        return self._snapshot.rules

    async def fetch(self) -> RuleLoadResult:
        """Read the store once; failures are returned, not raised"""
        try:
            rules = sort_rules(await self.store.list_active_rules())
        except Exception as e:
            return RuleLoadResult(error=e)
        return RuleLoadResult(rules=rules)

    def clear(self) -> None:
        """Force the next load() to go to the store"""
        self._snapshot = None
        logger.debug("Tax rule cache cleared")
