# backend/modules/tax/exceptions.py

"""
Custom exceptions for the tax module.
"""

from typing import Optional


class TaxEngineException(Exception):
    """Base exception for the tax module"""
    def __init__(self, message: str, code: str = "TAX_ENGINE_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code


class TaxRuleStoreError(TaxEngineException):
    """The rule store could not be read"""
    def __init__(self, message: str):
        super().__init__(message=message, code="TAX_RULE_STORE_UNAVAILABLE")


class TaxRuleMappingError(TaxEngineException):
    """A rule store record could not be turned into a TaxRule"""
    def __init__(self, message: str, record_id: Optional[str] = None):
        super().__init__(message=message, code="TAX_RULE_INVALID")
        self.record_id = record_id
