import json

import httpx
import pytest
from fastapi.testclient import TestClient

from odyssey_reader.core.config import Settings
from odyssey_reader.db.database import init_db, make_engine, make_session_factory
from odyssey_reader.main import create_app
from odyssey_reader.services.preferences import PreferenceStore

API_KEY = "sk-ant-test-key"


def words(prefix: str, n: int) -> str:
    return " ".join(f"{prefix}{i}" for i in range(1, n + 1))


class FakeAnthropic:
    """
    Faux endpoint Messages : file de réponses (status, body) ou exceptions.
    Sans réponse programmée -> succès avec un bloc texte.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list = []

    def queue(self, *items):
        self.responses.extend(items)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0) if self.responses else (200, {"content": [{"type": "text", "text": "Commentary"}]})
        if isinstance(item, Exception):
            raise item
        status, body = item
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_api():
    return FakeAnthropic()


@pytest.fixture
def source_path(tmp_path):
    # livre 1 : 850 mots -> 3 pages (400, 400, 50) ; livre 2 : 10 mots -> 1 page
    path = tmp_path / "source.json"
    path.write_text(
        json.dumps([
            {"book": 1, "text": words("a", 850)},
            {"book": 2, "text": words("b", 10)},
        ]),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def settings(tmp_path, source_path):
    """
    Settings isolés : base SQLite temporaire, source de test.
    """
    return Settings(
        APP_ENV="test",
        APP_NAME="ODYSSEY READER API (tests)",
        DATABASE_URL=f"sqlite:///{tmp_path / 'prefs.db'}",
        SOURCE_PATH=str(source_path),
        CORS_ORIGINS="http://localhost",
        WORDS_PER_PAGE=400,
        DEFAULT_MAX_API_CALLS=50,
    )


@pytest.fixture
def store(settings):
    engine = make_engine(settings.DATABASE_URL)
    init_db(engine)
    yield PreferenceStore(make_session_factory(engine))
    engine.dispose()


@pytest.fixture
def test_client(settings, fake_api):
    app = create_app(settings, http_client=fake_api.client())
    with TestClient(app) as client:
        yield client


@pytest.fixture
def keyed_client(test_client):
    r = test_client.put("/v1/settings/api-key", json={"key": API_KEY})
    assert r.status_code == 200, r.text
    return test_client
