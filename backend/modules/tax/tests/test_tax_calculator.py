# backend/modules/tax/tests/test_tax_calculator.py

import pytest
from decimal import Decimal

from modules.tax.enums import TaxRuleType, TaxBasis
from modules.tax.services import calculate_line_item, aggregate, round_money
from .factories import (
    TaxRuleFactory,
    TaxCartItemFactory,
    TaxCalculationInputFactory,
)


class TestRoundMoney:

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (Decimal("0.005"), Decimal("0.01")),
            (Decimal("0.004"), Decimal("0.00")),
            (Decimal("2.675"), Decimal("2.68")),
            (Decimal("180"), Decimal("180.00")),
        ],
    )
    def test_rounds_half_up_to_cents(self, amount, expected):
        assert round_money(amount) == expected


class TestCalculateLineItem:

    def test_percentage_of_subtotal(self):
        rule = TaxRuleFactory(rate=Decimal("18"))
        calculation_input = TaxCalculationInputFactory(subtotal=Decimal("1000.00"))

        line = calculate_line_item(rule, calculation_input)

        assert line.amount == Decimal("180.00")
        assert line.basis == TaxBasis.SUBTOTAL
        assert line.rule_id == rule.id
        assert line.matched_item_ids == [item.id for item in calculation_input.items]

    def test_percentage_of_subtotal_ignores_category_basis(self):
        rule = TaxRuleFactory(rate=Decimal("10"), applicable_categories=["Books"])
        calculation_input = TaxCalculationInputFactory(
            subtotal=Decimal("300.00"),
            items=[
                TaxCartItemFactory(id="b", category="Books", unit_price=Decimal("100.00")),
                TaxCartItemFactory(id="t", category="Toys", unit_price=Decimal("200.00")),
            ],
        )

        line = calculate_line_item(rule, calculation_input)

        assert line.amount == Decimal("30.00")
        assert line.basis == TaxBasis.SUBTOTAL
        assert line.matched_item_ids == ["b"]

    def test_percentage_of_items_uses_matched_total(self):
        rule = TaxRuleFactory(
            type=TaxRuleType.PERCENTAGE_OF_ITEMS,
            rate=Decimal("3"),
            applicable_categories=["Sweets"],
        )
        calculation_input = TaxCalculationInputFactory(
            subtotal=Decimal("700.00"),
            items=[
                TaxCartItemFactory(id="s", category="Sweets", unit_price=Decimal("200.00"), quantity=2),
                TaxCartItemFactory(id="n", category="Namkeen", unit_price=Decimal("300.00")),
            ],
        )

        line = calculate_line_item(rule, calculation_input)

        assert line.amount == Decimal("12.00")
        assert line.basis == TaxBasis.ITEMS
        assert line.matched_item_ids == ["s"]

    def test_unrestricted_percentage_of_items_uses_subtotal(self):
        rule = TaxRuleFactory(type=TaxRuleType.PERCENTAGE_OF_ITEMS, rate=Decimal("5"))

        line = calculate_line_item(rule, TaxCalculationInputFactory(subtotal=Decimal("250.00")))

        assert line.amount == Decimal("12.50")
        assert line.basis == TaxBasis.SUBTOTAL

    def test_fixed_amount_is_flat_regardless_of_matches(self):
        rule = TaxRuleFactory(
            type=TaxRuleType.FIXED_AMOUNT,
            rate=Decimal("25"),
            applicable_categories=["Glass"],
        )
        calculation_input = TaxCalculationInputFactory(
            items=[
                TaxCartItemFactory(category="Glassware", quantity=4),
                TaxCartItemFactory(category="Glass Decor", quantity=2),
            ],
        )

        line = calculate_line_item(rule, calculation_input)

        assert line.amount == Decimal("25.00")
        assert line.basis == TaxBasis.ITEMS
        assert len(line.matched_item_ids) == 2

    def test_unrestricted_fixed_amount_uses_subtotal_basis(self):
        rule = TaxRuleFactory(type=TaxRuleType.FIXED_AMOUNT, rate=Decimal("40"))

        line = calculate_line_item(rule, TaxCalculationInputFactory())

        assert line.basis == TaxBasis.SUBTOTAL

    def test_amount_rounded_at_computation(self):
        rule = TaxRuleFactory(rate=Decimal("7.5"))

        line = calculate_line_item(rule, TaxCalculationInputFactory(subtotal=Decimal("10.07")))

        # 10.07 * 7.5% = 0.75525
        assert line.amount == Decimal("0.76")

    def test_zero_amount_returns_none(self):
        rule = TaxRuleFactory(rate=Decimal("0.1"))

        assert calculate_line_item(rule, TaxCalculationInputFactory(subtotal=Decimal("4.00"))) is None


class TestAggregate:

    def test_empty_rules(self):
        calculation_input = TaxCalculationInputFactory(
            subtotal=Decimal("120.00"), shipping_fee=Decimal("15.00")
        )

        result = aggregate([], calculation_input)

        assert result.total_tax == Decimal("0")
        assert result.grand_total == Decimal("135.00")
        assert result.line_items == []
        assert result.applied_rules == []

    def test_totals_sum_per_rule_rounded_amounts(self):
        # Each rule yields 0.005 -> 0.01; summing before rounding would give 0.01 total
        rules = [
            TaxRuleFactory(id="a", rate=Decimal("0.5")),
            TaxRuleFactory(id="b", rate=Decimal("0.5")),
        ]
        calculation_input = TaxCalculationInputFactory(
            subtotal=Decimal("1.00"), shipping_fee=Decimal("0")
        )

        result = aggregate(rules, calculation_input)

        assert [line.amount for line in result.line_items] == [Decimal("0.01"), Decimal("0.01")]
        assert result.total_tax == Decimal("0.02")
        assert result.grand_total == Decimal("1.02")

    def test_zero_lines_are_dropped_but_rule_is_listed(self):
        rules = [
            TaxRuleFactory(id="tiny", rate=Decimal("0.01")),
            TaxRuleFactory(id="gst", rate=Decimal("18")),
        ]
        calculation_input = TaxCalculationInputFactory(
            subtotal=Decimal("10.00"), shipping_fee=Decimal("0")
        )

        result = aggregate(rules, calculation_input)

        assert [line.rule_id for line in result.line_items] == ["gst"]
        assert [rule.id for rule in result.applied_rules] == ["tiny", "gst"]
        assert result.total_tax == Decimal("1.80")

    def test_shipping_fee_is_never_taxed(self):
        rules = [TaxRuleFactory(rate=Decimal("10"))]
        calculation_input = TaxCalculationInputFactory(
            subtotal=Decimal("100.00"), shipping_fee=Decimal("1000.00")
        )

        result = aggregate(rules, calculation_input)

        assert result.total_tax == Decimal("10.00")
        assert result.grand_total == Decimal("1110.00")
