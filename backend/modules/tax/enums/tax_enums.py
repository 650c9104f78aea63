from enum import Enum


class TaxRuleType(str, Enum):
    """How a rule's rate turns into an amount."""
    PERCENTAGE_OF_SUBTOTAL = "percentage_of_subtotal"
    PERCENTAGE_OF_ITEMS = "percentage_of_items"
    FIXED_AMOUNT = "fixed_amount"


class TaxClass(str, Enum):
    """Conceptual class of a rule, used to spot overlapping configuration."""
    GST = "gst"
    STATE = "state"
    CITY = "city"
    GENERAL = "general"


class TaxBasis(str, Enum):
    SUBTOTAL = "subtotal"
    ITEMS = "items"


class StoreRuleCode(str, Enum):
    """Rule type codes as written by the admin tool into the rule store."""
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"
    GST = "GST"
    STATE_TAX = "STATE_TAX"
    CITY_TAX = "CITY_TAX"
