# backend/modules/tax/tests/__init__.py

"""
Test suite for the checkout tax engine

This package contains tests for:
- Rule store record mapping and adapters
- Rule cache freshness and failure fallback
- Applicability matching, per-rule calculation and aggregation
- Validation and the engine facade
"""
