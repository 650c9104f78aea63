# backend/modules/tax/schemas/tax_schemas.py

from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Optional
from decimal import Decimal

from ..enums import TaxRuleType, TaxClass, TaxBasis


# Rule Schemas
class TaxRule(BaseModel):
    """A tax rule as read from the rule store"""

    id: str
    name: str = Field(..., min_length=1)
    type: TaxRuleType
    tax_class: TaxClass = TaxClass.GENERAL

    # Percent (0-100) for percentage types, absolute amount for fixed_amount
    rate: Decimal = Field(..., ge=0)

    min_order_amount: Optional[Decimal] = Field(None, ge=0)
    max_order_amount: Optional[Decimal] = Field(None, ge=0)

    applicable_regions: List[str] = Field(default_factory=list)
    applicable_categories: List[str] = Field(default_factory=list)
    active: bool = True

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_rule(self):
        if (
            self.min_order_amount is not None
            and self.max_order_amount is not None
            and self.min_order_amount > self.max_order_amount
        ):
            raise ValueError("min_order_amount must not exceed max_order_amount")
        if self.type != TaxRuleType.FIXED_AMOUNT and self.rate > 100:
            raise ValueError("percentage rate must be between 0 and 100")
        return self

    @property
    def is_region_restricted(self) -> bool:
        return len(self.applicable_regions) > 0

    @property
    def is_category_restricted(self) -> bool:
        return len(self.applicable_categories) > 0


# Calculation Input Schemas
class TaxCartItem(BaseModel):
    """One cart line; values are checked by the validator, not here"""

    id: str
    name: str
    unit_price: Decimal
    quantity: int
    category: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class TaxDestination(BaseModel):
    """Shipping destination used for region matching"""

    state: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None


class TaxCalculationInput(BaseModel):
    """Checkout snapshot handed to the tax engine"""

    subtotal: Decimal
    shipping_fee: Decimal = Decimal("0")
    items: List[TaxCartItem] = Field(default_factory=list)
    destination: TaxDestination = Field(default_factory=TaxDestination)
    requester_id: Optional[str] = None


# Calculation Output Schemas
class TaxLineItem(BaseModel):
    rule_id: str
    name: str
    type: TaxRuleType
    rate: Decimal
    amount: Decimal
    basis: TaxBasis
    matched_item_ids: List[str] = Field(default_factory=list)


class AppliedRuleSummary(BaseModel):
    id: str
    name: str
    type: TaxRuleType
    rate: Decimal


class TaxCalculationResult(BaseModel):
    subtotal: Decimal
    total_tax: Decimal
    grand_total: Decimal
    line_items: List[TaxLineItem] = Field(default_factory=list)
    applied_rules: List[AppliedRuleSummary] = Field(default_factory=list)


class TaxValidationReport(BaseModel):
    """Advisory outcome; valid=False means the caller should block checkout"""

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


# Location Summary Schemas
class LocationRuleSummary(BaseModel):
    name: str
    type: TaxRuleType
    rate: Decimal
    min_order_amount: Optional[Decimal] = None
    max_order_amount: Optional[Decimal] = None


class LocationTaxSummary(BaseModel):
    state: Optional[str] = None
    city: Optional[str] = None
    applicable_rules: List[LocationRuleSummary] = Field(default_factory=list)
    estimated_total_rate: Decimal = Decimal("0")
