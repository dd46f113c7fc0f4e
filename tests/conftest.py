# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from infra.db.base import Base
import infra.db.models  # noqa: F401
from infra.services import build_service_graph


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Keep developer machine settings out of the tests.
    for name in (
        "WFE_ADVISORY_ENABLED",
        "WFE_ADVISORY_MODEL",
        "WFE_ADVISORY_TIMEOUT_SECONDS",
        "WFE_ADVISORY_MAX_TOKENS",
        "WFE_DEFAULT_WEEKS_AHEAD",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WFE_DATA_DIR", str(tmp_path / "wfe-data"))


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    return build_service_graph(session).as_dict()
