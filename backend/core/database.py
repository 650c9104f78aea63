# backend/core/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings


def build_engine(database_url: str, echo: bool = False):
    engine_kwargs = {
        "echo": echo,
        "pool_pre_ping": True,
    }

    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in {"sqlite://", "sqlite:///:memory:"}:
            engine_kwargs["poolclass"] = StaticPool

    return create_engine(database_url, **engine_kwargs)


def build_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


Base = declarative_base()

_engine = None
_session_factory = None


def get_session_factory():
    """Lazily create the process-wide session factory from settings"""
    global _engine, _session_factory
    if _session_factory is None:
        settings = get_settings()
        _engine = build_engine(settings.DATABASE_URL, echo=settings.LOG_SQL_QUERIES)
        _session_factory = build_session_factory(_engine)
    return _session_factory

