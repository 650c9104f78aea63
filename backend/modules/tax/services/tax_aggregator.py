# backend/modules/tax/services/tax_aggregator.py

from typing import Iterable
from decimal import Decimal

from ..schemas import (
    TaxRule, TaxCalculationInput, TaxCalculationResult, AppliedRuleSummary
)
from .applicability import filter_applicable_rules
from .tax_calculator import calculate_line_item, round_money


def aggregate(
    rules: Iterable[TaxRule], calculation_input: TaxCalculationInput
) -> TaxCalculationResult:
    """Sum per-rule amounts, in rule order, into a calculation result"""
    applicable_rules = filter_applicable_rules(rules, calculation_input)

    line_items = []
    for rule in applicable_rules:
        line_item = calculate_line_item(rule, calculation_input)
        if line_item is not None:
            line_items.append(line_item)

    total_tax = round_money(
        sum((line.amount for line in line_items), Decimal("0"))
    )

    return TaxCalculationResult(
        subtotal=calculation_input.subtotal,
        total_tax=total_tax,
        grand_total=calculation_input.subtotal + total_tax + calculation_input.shipping_fee,
        line_items=line_items,
        applied_rules=[
            AppliedRuleSummary(id=rule.id, name=rule.name, type=rule.type, rate=rule.rate)
            for rule in applicable_rules
        ],
    )


def zero_tax_result(calculation_input: TaxCalculationInput) -> TaxCalculationResult:
    return TaxCalculationResult(
        subtotal=calculation_input.subtotal,
        total_tax=Decimal("0.00"),
        grand_total=calculation_input.subtotal + calculation_input.shipping_fee,
    )
