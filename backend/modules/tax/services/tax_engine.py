# backend/modules/tax/services/tax_engine.py

from typing import Optional
from decimal import Decimal
import logging

from core.config import Settings, get_settings
from ..enums import TaxRuleType
from ..schemas import (
    TaxCalculationInput, TaxCalculationResult, TaxValidationReport,
    LocationRuleSummary, LocationTaxSummary
)
from .applicability import filter_applicable_rules, matches_location
from .rule_cache import TaxRuleCache
from .rule_store import TaxRuleStore
from .tax_aggregator import aggregate, zero_tax_result
from .tax_validator import TaxValidator

logger = logging.getLogger(__name__)


class TaxEngine:
    """
    Checkout-facing tax engine.

    One instance is built per process and shared by reference; it owns the
    rule cache. calculate() always returns a result: when rules cannot be
    loaded it degrades to zero tax rather than failing the checkout.
    Callers that must block on bad input call validate() first.
    """

    def __init__(self, rule_cache: TaxRuleCache, validator: Optional[TaxValidator] = None):
        self.rule_cache = rule_cache
        self.validator = validator or TaxValidator()

    async def calculate(self, calculation_input: TaxCalculationInput) -> TaxCalculationResult:
        """Compute the tax breakdown and grand total for an order"""
        if calculation_input.requester_id:
            logger.debug(f"Calculating tax for requester {calculation_input.requester_id}")

        rules = await self.rule_cache.load()

        try:
            result = aggregate(rules, calculation_input)
        except Exception:
            logger.exception("Tax calculation failed, falling back to zero tax")
            return zero_tax_result(calculation_input)

        logger.debug(
            f"Applied {len(result.line_items)} tax lines, total tax {result.total_tax}"
        )
        return result

    async def validate(self, calculation_input: TaxCalculationInput) -> TaxValidationReport:
        """Report blocking errors and configuration warnings for an order"""
        rules = await self.rule_cache.load()
        applicable_rules = filter_applicable_rules(rules, calculation_input)
        return self.validator.build_report(calculation_input, applicable_rules)

    async def summarize_for_location(
        self, state: Optional[str], city: Optional[str] = None
    ) -> LocationTaxSummary:
        """
        Rules that could apply at a location before a cart exists.

        Amount thresholds are ignored, and fixed amounts are left out of the
        estimated rate since they cannot be expressed as one.
        """
        rules = await self.rule_cache.load()
        location_rules = [
            rule for rule in rules
            if rule.active and matches_location(rule, state, city)
        ]

        estimated_total_rate = sum(
            (rule.rate for rule in location_rules if rule.type != TaxRuleType.FIXED_AMOUNT),
            Decimal("0"),
        )

        return LocationTaxSummary(
            state=state,
            city=city,
            applicable_rules=[
                LocationRuleSummary(
                    name=rule.name,
                    type=rule.type,
                    rate=rule.rate,
                    min_order_amount=rule.min_order_amount,
                    max_order_amount=rule.max_order_amount,
                )
                for rule in location_rules
            ],
            estimated_total_rate=estimated_total_rate,
        )

    def clear_cache(self) -> None:
        """Invalidate cached rules after they are edited"""
        self.rule_cache.clear()


def build_tax_engine(store: TaxRuleStore, settings: Optional[Settings] = None) -> TaxEngine:
    """Create an engine with cache TTL and validator threshold from settings"""
    settings = settings or get_settings()
    return TaxEngine(
        rule_cache=TaxRuleCache(store, ttl_seconds=settings.TAX_RULE_CACHE_TTL_SECONDS),
        validator=TaxValidator(
            combined_rate_warning_threshold=settings.TAX_COMBINED_RATE_WARNING_THRESHOLD
        ),
    )
