# backend/modules/tax/services/tax_calculator.py

from typing import Optional
from decimal import Decimal, ROUND_HALF_UP

from ..enums import TaxRuleType, TaxBasis
from ..schemas import TaxRule, TaxCalculationInput, TaxLineItem
from .applicability import matched_items

CENT = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_line_item(
    rule: TaxRule, calculation_input: TaxCalculationInput
) -> Optional[TaxLineItem]:
    """
    Compute the rounded tax for one applicable rule.

    Percentage rules charge against the subtotal, or against the matched
    items' total when an items rule is restricted to categories. Fixed
    amount rules charge their rate once, however many items match.

    Returns None when the rounded amount is zero.
    """
    items = matched_items(rule, calculation_input.items)
    restricted = rule.is_category_restricted

    if rule.type == TaxRuleType.PERCENTAGE_OF_ITEMS and restricted:
        basis_amount = sum((item.line_total for item in items), Decimal("0"))
        raw_amount = basis_amount * rule.rate / 100
        basis = TaxBasis.ITEMS
    elif rule.type == TaxRuleType.FIXED_AMOUNT:
        raw_amount = rule.rate
        basis = TaxBasis.ITEMS if restricted else TaxBasis.SUBTOTAL
    else:
        raw_amount = calculation_input.subtotal * rule.rate / 100
        basis = TaxBasis.SUBTOTAL

    amount = round_money(raw_amount)
    if amount == 0:
        return None

    return TaxLineItem(
        rule_id=rule.id,
        name=rule.name,
        type=rule.type,
        rate=rule.rate,
        amount=amount,
        basis=basis,
        matched_item_ids=[item.id for item in items],
    )
