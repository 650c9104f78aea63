# backend/modules/tax/models/__init__.py

from .tax_models import TaxConfiguration

__all__ = ["TaxConfiguration"]
