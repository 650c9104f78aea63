# backend/modules/tax/__init__.py

"""
Tax Module

Checkout tax computation: cached rule loading, applicability matching,
per-rule calculation and advisory validation.
"""

from .services import TaxEngine, build_tax_engine
from .dependencies import get_tax_engine, install_tax_engine

__version__ = "1.0.0"
__all__ = ["TaxEngine", "build_tax_engine", "get_tax_engine", "install_tax_engine"]
