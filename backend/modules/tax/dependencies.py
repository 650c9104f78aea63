# backend/modules/tax/dependencies.py

"""
Wiring of the process-wide tax engine into FastAPI applications.

Checkout routes declare ``engine: TaxEngine = Depends(get_tax_engine)``;
admin tooling that edits rules calls ``engine.clear_cache()`` afterwards.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status

from core.config import Settings, get_settings
from core.database import get_session_factory
from .services import SQLAlchemyTaxRuleStore, TaxEngine, build_tax_engine


def create_default_tax_engine(settings: Optional[Settings] = None) -> TaxEngine:
    """Engine reading rules from the configured database"""
    store = SQLAlchemyTaxRuleStore(get_session_factory())
    return build_tax_engine(store, settings or get_settings())


def install_tax_engine(app: FastAPI, engine: Optional[TaxEngine] = None) -> TaxEngine:
    engine = engine or create_default_tax_engine()
    app.state.tax_engine = engine
    return engine


def get_tax_engine(request: Request) -> TaxEngine:
    engine = getattr(request.app.state, "tax_engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Tax engine is not configured",
        )
    return engine
