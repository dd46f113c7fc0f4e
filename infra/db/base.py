# infra/db/base.py
from __future__ import annotations
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def default_db_url() -> str:
    return f"sqlite:///{default_db_path().as_posix()}"


def create_session_factory(db_url: str | None = None, *, create_schema: bool = True) -> sessionmaker:
    """
    Engine + session factory for the collaborator store. Defaults to the SQLite
    file under the user data dir; pass "sqlite://" for an in-memory database.
    """
    url = db_url or default_db_url()
    logger.info("Using collaborator database at: %s", url)
    engine = create_engine(url, echo=False, future=True)
    if create_schema:
        # Import registers the ORM classes on Base.metadata.
        import infra.db.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


__all__ = ["Base", "default_db_url", "create_session_factory"]
