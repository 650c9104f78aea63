# backend/modules/tax/services/applicability.py

from typing import Iterable, List, Optional

from ..schemas import TaxRule, TaxCalculationInput, TaxCartItem, TaxDestination


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _tokens(values: Iterable[str]) -> List[str]:
    return [token for token in (_normalize(v) for v in values) if token]


def matches_location(rule: TaxRule, state: Optional[str], city: Optional[str] = None) -> bool:
    """Region check against state and city only; empty regions are universal"""
    if not rule.is_region_restricted:
        return True

    state = _normalize(state)
    city = _normalize(city)
    return any(
        token in state or (city and token in city)
        for token in _tokens(rule.applicable_regions)
    )


def matches_region(rule: TaxRule, destination: TaxDestination) -> bool:
    """Substring match on state or city, prefix match on postal code"""
    if not rule.is_region_restricted:
        return True

    if matches_location(rule, destination.state, destination.city):
        return True

    postal_code = _normalize(destination.postal_code)
    return bool(postal_code) and any(
        postal_code.startswith(token) for token in _tokens(rule.applicable_regions)
    )


def item_matches_categories(rule: TaxRule, item: TaxCartItem) -> bool:
    category = _normalize(item.category)
    return any(token in category for token in _tokens(rule.applicable_categories))


def matched_items(rule: TaxRule, items: Iterable[TaxCartItem]) -> List[TaxCartItem]:
    """Items a rule charges against; all items when the rule has no categories"""
    items = list(items)
    if not rule.is_category_restricted:
        return items
    return [item for item in items if item_matches_categories(rule, item)]


def rule_applies(rule: TaxRule, calculation_input: TaxCalculationInput) -> bool:
    if not rule.active:
        return False

    subtotal = calculation_input.subtotal
    if rule.min_order_amount is not None and subtotal < rule.min_order_amount:
        return False
    if rule.max_order_amount is not None and subtotal > rule.max_order_amount:
        return False

    if not matches_region(rule, calculation_input.destination):
        return False

    if rule.is_category_restricted and not matched_items(rule, calculation_input.items):
        return False

    return True


def filter_applicable_rules(
    rules: Iterable[TaxRule], calculation_input: TaxCalculationInput
) -> List[TaxRule]:
    """Keep the rules relevant to this input, preserving their order"""
    return [rule for rule in rules if rule_applies(rule, calculation_input)]
