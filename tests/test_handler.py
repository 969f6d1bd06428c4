"""
Request handling: validation order, response mapping and the Lambda adapter.
The model is replaced by a recording fake; no network.
"""
import json
import sys
import os

os.environ["ANTHROPIC_API_KEY"] = "test-key"

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'lexmx-proxy'))

import pytest

import handler
from prompt import SWOT_PREFIX
from settings import Settings

CONFIGURED = Settings(api_key="test-key")
UNCONFIGURED = Settings(api_key=None)


class FakeModel:
    """Records prompts; echoes them back or raises the given error."""

    def __init__(self, error: Exception | None = None):
        self.prompts = []
        self.error = error

    def generate(self, prompt_text: str) -> str:
        self.prompts.append(prompt_text)
        if self.error is not None:
            raise self.error
        return prompt_text


def _post(body, settings=CONFIGURED, model=None):
    model = model or FakeModel()
    status, payload = handler.handle("POST", body, settings, model.generate)
    return status, payload, model


def test_echo_round_trip():
    status, payload, model = _post(json.dumps({"query": "Responde x"}))

    assert status == 200
    assert set(payload) == {"result"}
    assert "Responde a la siguiente pregunta de forma concisa: Responde x" in payload["result"]
    assert len(model.prompts) == 1


def test_swot_scenario_uses_context():
    body = {"query": SWOT_PREFIX, "context": "Caso Z"}
    status, payload, model = _post(body)

    assert status == 200
    assert "Caso Z" in model.prompts[0]
    assert SWOT_PREFIX not in model.prompts[0]


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD", "post", ""])
def test_non_post_is_405(method):
    model = FakeModel()
    status, payload = handler.handle(method, {"query": "hola"}, CONFIGURED, model.generate)

    assert status == 405
    assert payload == {"error": "Method Not Allowed"}
    assert model.prompts == []


@pytest.mark.parametrize(
    "body",
    [None, "", "{}", {}, {"query": ""}, {"query": None}, {"context": "solo contexto"}, b'{"query": ""}'],
)
def test_missing_query_is_400(body):
    status, payload, model = _post(body)

    assert status == 400
    assert payload == {"error": "Query is required"}
    assert model.prompts == []


@pytest.mark.parametrize("method", ["POST", "GET"])
@pytest.mark.parametrize("body", [{"query": "hola"}, None, "not json"])
def test_missing_api_key_is_500_before_anything_else(method, body):
    model = FakeModel()
    status, payload = handler.handle(method, body, UNCONFIGURED, model.generate)

    assert status == 500
    assert payload == {"error": "Server configuration error: API Key is missing."}
    assert model.prompts == []


def test_blank_api_key_counts_as_missing():
    status, payload = handler.handle("POST", {"query": "hola"}, Settings(api_key=""), None)
    assert status == 500
    assert payload["error"] == "Server configuration error: API Key is missing."


def test_model_failure_is_500_without_retry():
    model = FakeModel(error=RuntimeError("quota exceeded"))
    status, payload, _ = _post({"query": "hola"}, model=model)

    assert status == 500
    assert payload == {"error": "Failed to process AI request.", "details": "quota exceeded"}
    assert len(model.prompts) == 1


def test_failure_without_message_omits_details():
    model = FakeModel(error=RuntimeError())
    status, payload, _ = _post({"query": "hola"}, model=model)

    assert status == 500
    assert payload == {"error": "Failed to process AI request."}


@pytest.mark.parametrize("body", ["{not json", "[1, 2]", {"query": 42}, {"query": "hola", "context": ["x"]}])
def test_malformed_payload_is_500(body):
    status, payload, model = _post(body)

    assert status == 500
    assert payload["error"] == "Failed to process AI request."
    assert "result" not in payload
    assert model.prompts == []


def test_accepts_bytes_and_dict_bodies():
    for body in (b'{"query": "hola"}', {"query": "hola"}):
        status, payload, _ = _post(body)
        assert status == 200
        assert payload["result"].endswith("hola")


# ---------------------------------------------------------------------------
# Lambda adapter
# ---------------------------------------------------------------------------

def _event(method, body=None, version=2):
    if version == 2:
        return {"requestContext": {"http": {"method": method}}, "rawPath": "/", "body": body}
    return {"httpMethod": method, "path": "/", "body": body}


@pytest.fixture
def fake_model(monkeypatch):
    model = FakeModel()
    monkeypatch.setattr(handler, "SETTINGS", CONFIGURED)
    monkeypatch.setattr(handler, "MODEL_CLIENT", model)
    return model


def test_lambda_success_response_shape(fake_model):
    response = handler.lambda_handler(_event("POST", json.dumps({"query": "¿Qué es un amparo?"})), None)

    assert response["statusCode"] == 200
    assert response["headers"]["Content-Type"] == "application/json"
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    body = json.loads(response["body"])
    assert body["result"].endswith("¿Qué es un amparo?")
    assert "¿Qué es un amparo?" in response["body"]


def test_lambda_accepts_rest_api_events(fake_model):
    response = handler.lambda_handler(_event("POST", json.dumps({"query": "hola"}), version=1), None)
    assert response["statusCode"] == 200


def test_lambda_options_is_not_allowed(fake_model):
    response = handler.lambda_handler(_event("OPTIONS"), None)

    assert response["statusCode"] == 405
    assert json.loads(response["body"]) == {"error": "Method Not Allowed"}
    assert response["headers"]["Access-Control-Allow-Methods"] == "POST"
    assert fake_model.prompts == []


def test_lambda_without_api_key(monkeypatch):
    monkeypatch.setattr(handler, "SETTINGS", UNCONFIGURED)
    monkeypatch.setattr(handler, "MODEL_CLIENT", None)

    response = handler.lambda_handler(_event("POST", json.dumps({"query": "hola"})), None)

    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": "Server configuration error: API Key is missing."}


def test_lambda_event_without_method(fake_model):
    response = handler.lambda_handler({"body": json.dumps({"query": "hola"})}, None)
    assert response["statusCode"] == 405
