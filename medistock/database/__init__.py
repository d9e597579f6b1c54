from medistock.database.base import Base
from medistock.database.engine import build_engine, engine, init_storage
from medistock.database.session import SessionLocal, build_session_factory

__all__ = [
    "Base",
    "SessionLocal",
    "build_engine",
    "build_session_factory",
    "engine",
    "init_storage",
]
