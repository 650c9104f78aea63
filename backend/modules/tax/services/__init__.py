# backend/modules/tax/services/__init__.py

from .rule_store import (
    TaxRuleStore,
    InMemoryTaxRuleStore,
    SQLAlchemyTaxRuleStore,
    rule_from_record,
    rules_from_records,
)
from .rule_cache import TaxRuleCache, CachedRuleSet, RuleLoadResult
from .applicability import (
    rule_applies,
    filter_applicable_rules,
    matches_region,
    matches_location,
    matched_items,
)
from .tax_calculator import calculate_line_item, round_money
from .tax_aggregator import aggregate
from .tax_validator import TaxValidator
from .tax_engine import TaxEngine, build_tax_engine

__all__ = [
    # Rule store
    "TaxRuleStore",
    "InMemoryTaxRuleStore",
    "SQLAlchemyTaxRuleStore",
    "rule_from_record",
    "rules_from_records",
    # Cache
    "TaxRuleCache",
    "CachedRuleSet",
    "RuleLoadResult",
    # Calculation
    "rule_applies",
    "filter_applicable_rules",
    "matches_region",
    "matches_location",
    "matched_items",
    "calculate_line_item",
    "round_money",
    "aggregate",
    "TaxValidator",
    # Facade
    "TaxEngine",
    "build_tax_engine",
]
