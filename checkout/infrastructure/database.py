import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from checkout.core.config import settings

logger = logging.getLogger(__name__)


def engine_options(cfg) -> dict:
    """Keyword arguments for create_engine derived from the settings."""
    return {
        "pool_size": cfg.DB_POOL_SIZE,
        "pool_pre_ping": True,  # drop dead connections instead of failing the request
        "connect_args": {"sslmode": "require"} if cfg.ssl_required else {},
    }


engine = create_engine(settings.DATABASE_URL, **engine_options(settings))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
Base = declarative_base()


def ensure_schema():
    """
    Make sure gen_random_uuid() and the orders table exist.
    Safe to run on every boot; raises if the database is unreachable.
    """
    # Register the model on Base.metadata
    from checkout.domain import models  # noqa: F401

    with engine.begin() as conn:
        conn.execute(text("create extension if not exists pgcrypto"))
        Base.metadata.create_all(bind=conn)
    logger.info("✅ Schema ready (orders)")


def dispose_engine():
    engine.dispose()
    logger.info("Connection pool closed")
