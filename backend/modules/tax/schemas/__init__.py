# backend/modules/tax/schemas/__init__.py

from .tax_schemas import (
    # Rules
    TaxRule,
    # Calculation input
    TaxCartItem,
    TaxDestination,
    TaxCalculationInput,
    # Calculation output
    TaxLineItem,
    AppliedRuleSummary,
    TaxCalculationResult,
    TaxValidationReport,
    # Location summary
    LocationRuleSummary,
    LocationTaxSummary,
)

__all__ = [
    "TaxRule",
    "TaxCartItem",
    "TaxDestination",
    "TaxCalculationInput",
    "TaxLineItem",
    "AppliedRuleSummary",
    "TaxCalculationResult",
    "TaxValidationReport",
    "LocationRuleSummary",
    "LocationTaxSummary",
]
