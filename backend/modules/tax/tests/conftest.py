# backend/modules/tax/tests/conftest.py

import pytest

from modules.tax.services import InMemoryTaxRuleStore, TaxRuleCache, TaxEngine


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rule_store():
    return InMemoryTaxRuleStore()


@pytest.fixture
def rule_cache(rule_store, clock):
    return TaxRuleCache(rule_store, ttl_seconds=300, clock=clock)


@pytest.fixture
def tax_engine(rule_cache):
    return TaxEngine(rule_cache)
