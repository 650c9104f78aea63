# backend/modules/tax/services/tax_validator.py

from typing import Iterable, List, Optional, Tuple
from collections import defaultdict
from decimal import Decimal

from ..enums import TaxRuleType, TaxClass
from ..schemas import TaxRule, TaxCalculationInput, TaxValidationReport

DEFAULT_COMBINED_RATE_WARNING_THRESHOLD = Decimal("50")


class TaxValidator:
    """Checks checkout input and the resolved rule set; never blocks by itself"""

    def __init__(self, combined_rate_warning_threshold=DEFAULT_COMBINED_RATE_WARNING_THRESHOLD):
        self.combined_rate_warning_threshold = Decimal(str(combined_rate_warning_threshold))

    def validate_input(
        self, calculation_input: TaxCalculationInput
    ) -> Tuple[List[str], List[str]]:
        errors = []
        warnings = []

        if calculation_input.subtotal < 0:
            errors.append("Subtotal cannot be negative")

        if calculation_input.shipping_fee < 0:
            errors.append("Shipping fee cannot be negative")

        if not calculation_input.items:
            errors.append("At least one item is required")

        for item in calculation_input.items:
            if item.unit_price < 0:
                errors.append(f"Item {item.name} has negative price")
            if item.quantity <= 0:
                errors.append(f"Item {item.name} has invalid quantity")

        destination = calculation_input.destination
        if not (destination.state or "").strip():
            errors.append("Shipping state is required for tax calculation")

        if not (destination.postal_code or "").strip():
            warnings.append(
                "Postal code not provided - some location-specific taxes may not apply"
            )

        return errors, warnings

    def validate_rule_set(self, rules: Iterable[TaxRule]) -> List[str]:
        """Advisory checks over the rules resolved for one input"""
        rules = list(rules)
        warnings = []

        broad_subtotal_rules = [
            rule for rule in rules
            if rule.type == TaxRuleType.PERCENTAGE_OF_SUBTOTAL
            and not rule.is_region_restricted
            and not rule.is_category_restricted
        ]
        if len(broad_subtotal_rules) > 1:
            names = ", ".join(rule.name for rule in broad_subtotal_rules)
            warnings.append(
                f"Multiple unrestricted subtotal tax rules applicable ({names}) "
                f"- please review tax configuration"
            )

        regional_by_class = defaultdict(list)
        for rule in rules:
            if rule.is_region_restricted and rule.tax_class != TaxClass.GENERAL:
                regional_by_class[rule.tax_class].append(rule)

        for tax_class, class_rules in regional_by_class.items():
            if len(class_rules) > 1:
                warnings.append(
                    f"Multiple {tax_class.value} regional tax rules applicable "
                    f"- please review tax configuration"
                )

        combined_rate = sum((rule.rate for rule in rules), Decimal("0"))
        if combined_rate > self.combined_rate_warning_threshold:
            warnings.append(
                f"Combined tax rate {combined_rate} exceeds "
                f"{self.combined_rate_warning_threshold} - please verify tax configuration"
            )

        return warnings

    def build_report(
        self,
        calculation_input: TaxCalculationInput,
        applicable_rules: Optional[Iterable[TaxRule]] = None,
    ) -> TaxValidationReport:
        errors, warnings = self.validate_input(calculation_input)
        warnings.extend(self.validate_rule_set(applicable_rules or []))

        return TaxValidationReport(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )
