import json

from fastapi.testclient import TestClient

from ads_ai_service.main import create_app
from ads_ai_service.services.errors import UpstreamContentUnusable

BRIEF = {
    "productName": "Garrafa Térmica 1L",
    "country": "Brasil",
    "language": "pt-BR",
    "productValue": 89.9,
    "productCurrency": "BRL",
}


class DummyClient:
    def __init__(self, payload=None, text="", error=None):
        self.payload = payload if payload is not None else {}
        self.text = text
        self.error = error
        self.calls = []

    def complete_json(self, prompt):
        self.calls.append(prompt)
        if self.error:
            raise self.error
        return self.payload

    def complete_text(self, prompt):
        self.calls.append(prompt)
        if self.error:
            raise self.error
        return self.text


def _client(settings, dummy):
    return TestClient(create_app(settings, client=dummy))


def test_ai_fill_returns_normalized_assets_as_text(settings):
    dummy = DummyClient(payload={"titles": ["A"], "descriptions": []})

    response = _client(settings, dummy).post("/api/ai-fill", json={"etapa1": BRIEF, "limits": None})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    body = json.loads(response.text)
    assert body["titles"] == ["A"] + [""] * 14
    assert body["descriptions"] == [""] * 4
    assert body["sitelinks"] == [{"text": "", "desc1": "", "desc2": ""}] * 4
    assert body["highlights"] == [""] * 8


def test_ai_fill_missing_product_name(settings):
    dummy = DummyClient()

    response = _client(settings, dummy).post("/api/ai-fill", json={"brief": {"country": "Brasil"}})

    assert response.status_code == 400
    assert response.json()["code"] == "MISSING_REQUIRED_FIELD"
    assert response.json()["details"] == {"field": "productName"}
    assert dummy.calls == []


def test_ai_fill_unusable_content(settings):
    dummy = DummyClient(error=UpstreamContentUnusable("No JSON object found."))

    response = _client(settings, dummy).post("/api/ai-fill", json={"brief": BRIEF})

    assert response.status_code == 502
    assert response.json()["code"] == "UPSTREAM_CONTENT_UNUSABLE"


def test_ai_fill_without_credential_is_unavailable(settings):
    settings.OPENAI_API_KEY = None

    response = TestClient(create_app(settings)).post("/api/ai-fill", json={"brief": BRIEF})

    assert response.status_code == 503
    assert response.json()["code"] == "UPSTREAM_UNAVAILABLE"


def test_ai_variant_truncates_text(settings):
    dummy = DummyClient(text="Garrafa que mantém sua bebida gelada por 24 horas")

    response = _client(settings, dummy).post(
        "/api/ai-variant", json={"brief": BRIEF, "kind": "title", "index": 2}
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Garrafa que mantém sua bebida gelada por 24 horas"[:30]


def test_ai_variant_rejects_unknown_kind(settings):
    dummy = DummyClient()

    response = _client(settings, dummy).post(
        "/api/ai-variant", json={"brief": BRIEF, "kind": "headline", "index": 0}
    )

    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_INPUT"
    assert dummy.calls == []


def test_health_reports_configuration_without_secret(settings):
    response = _client(settings, DummyClient()).get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "upstreamConfigured": True,
        "modelJson": "gpt-json-test",
        "modelText": "gpt-text-test",
        "corsEnabled": False,
    }
    assert "sk-test-secret" not in response.text


def test_health_head(settings):
    assert _client(settings, DummyClient()).head("/health").status_code == 200


def test_cors_allows_configured_origin(settings):
    settings.CORS_ORIGINS = ("https://ads.example.com",)

    response = _client(settings, DummyClient()).options(
        "/api/ai-fill",
        headers={
            "Origin": "https://ads.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://ads.example.com"


def test_cors_rejects_unknown_origin(settings):
    settings.CORS_ORIGINS = ("https://ads.example.com",)

    response = _client(settings, DummyClient()).get(
        "/health", headers={"Origin": "https://evil.example.com"}
    )

    assert "access-control-allow-origin" not in response.headers


def test_static_files_are_served_next_to_api(settings, tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>Ads</h1>", encoding="utf-8")
    settings.STATIC_DIR = str(public)
    client = _client(settings, DummyClient())

    assert client.get("/").text == "<h1>Ads</h1>"
    assert client.get("/health").status_code == 200


def test_ai_fill_survives_lone_surrogate_in_reply(settings):
    dummy = DummyClient(payload=json.loads('{"titles":["ab\\ud800cd"]}'))

    response = _client(settings, dummy).post("/api/ai-fill", json={"brief": BRIEF})

    assert response.status_code == 200
    assert json.loads(response.text)["titles"][0] == "ab?cd"


def test_ai_variant_survives_lone_surrogate_in_reply(settings):
    dummy = DummyClient(text="Oferta\ud800 especial")

    response = _client(settings, dummy).post(
        "/api/ai-variant", json={"brief": BRIEF, "kind": "highlight", "index": 0}
    )

    assert response.status_code == 200
    assert response.text == "Oferta? especial"
