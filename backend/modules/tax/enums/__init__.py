from .tax_enums import TaxRuleType, TaxClass, TaxBasis, StoreRuleCode

__all__ = ["TaxRuleType", "TaxClass", "TaxBasis", "StoreRuleCode"]
