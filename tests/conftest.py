import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["ENCRYPTION_KEY"] = "aLxM0wHk0w0oVx3G9iYfn7lr5J2v3xH5cM8D6lQ1t2Q="
os.environ["ENVIRONMENT"] = "test"

from chat_summarizer import models  # noqa: E402,F401
from chat_summarizer.db.base import Base  # noqa: E402
from chat_summarizer.db.session import SessionLocal, engine  # noqa: E402
from chat_summarizer.main import create_app  # noqa: E402
from chat_summarizer.services.parsing.types import Message  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    path = Path("test.db")
    if path.exists():
        path.unlink()


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def sample_messages() -> list[Message]:
    return [
        Message(date="12/5/23", time="9:05", sender="Alice", message="hello there"),
        Message(date="12/5/23", time="9:06", sender="Bob", message="hi!\nhow are you?"),
    ]
