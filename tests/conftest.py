import pytest

from ads_ai_service.config import Settings


@pytest.fixture
def settings(tmp_path):
    value = Settings()
    value.OPENAI_API_KEY = "sk-test-secret"
    value.OPENAI_BASE_URL = "https://llm.example.test/v1/"
    value.OPENAI_MODEL_JSON = "gpt-json-test"
    value.OPENAI_MODEL_TEXT = "gpt-text-test"
    value.LLM_TEMPERATURE_JSON = 0.3
    value.LLM_TEMPERATURE_TEXT = 0.5
    value.UPSTREAM_TIMEOUT_SEC = None
    value.CORS_ORIGINS = ()
    value.STATIC_DIR = str(tmp_path / "no-static")
    value.LOG_LEVEL = "info"
    return value
