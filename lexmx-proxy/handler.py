"""
lexmx-proxy Lambda handler.
Receives a legal question (plus optional case context), picks a prompt
template, asks the model and returns the generated text as JSON.
"""
import json
import logging
from typing import Any, Callable

import ai_client
import prompt
from settings import Settings

logger = logging.getLogger()

SETTINGS = Settings.from_env()
_level = logging.getLevelName(SETTINGS.log_level)
logger.setLevel(_level if isinstance(_level, int) else logging.INFO)

# Built once per container; None when the key is missing so the handler can answer with a 500.
MODEL_CLIENT = ai_client.ModelClient.from_settings(SETTINGS) if SETTINGS.api_key else None

CONFIG_ERROR       = "Server configuration error: API Key is missing."
METHOD_NOT_ALLOWED = "Method Not Allowed"
QUERY_REQUIRED     = "Query is required"
PROCESSING_ERROR   = "Failed to process AI request."


def _cors_headers() -> dict:
    return {
        "Access-Control-Allow-Origin":  "*",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "POST",
    }


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {**_cors_headers(), "Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def _parse_payload(body: Any) -> tuple[str, str]:
    """
    Extract (query, context) from the request body.
    Raises on undecodable JSON, a non-object body or non-string fields.
    """
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        body = json.loads(body) if body.strip() else {}
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise TypeError(f"Request body must be a JSON object, got {type(body).__name__}")

    query = body.get("query") or ""
    context = body.get("context") or ""
    if not isinstance(query, str):
        raise TypeError(f"'query' must be a string, got {type(query).__name__}")
    if not isinstance(context, str):
        raise TypeError(f"'context' must be a string, got {type(context).__name__}")
    return query, context


def handle(
    method: str,
    body: Any,
    settings: Settings,
    generate: Callable[[str], str] | None,
) -> tuple[int, dict]:
    """
    Process one request and return (status_code, json_body).
    Every failure is mapped to a JSON error body; nothing propagates.
    """
    try:
        if not settings.api_key:
            logger.error("API key missing | rejecting request")
            return 500, {"error": CONFIG_ERROR}

        if method != "POST":
            logger.warning("Method not allowed | method=%s", method)
            return 405, {"error": METHOD_NOT_ALLOWED}

        query, context = _parse_payload(body)
        if not query:
            logger.warning("Missing query")
            return 400, {"error": QUERY_REQUIRED}

        kind = prompt.classify_query(query)
        prompt_text = prompt.build_prompt(kind, query, context)
        logger.info(
            "Prompt built | kind=%s | query_chars=%d | context_chars=%d",
            kind.value, len(query), len(context),
        )

        text = generate(prompt_text)

        logger.info("AI request complete | kind=%s", kind.value)
        return 200, {"result": text}

    except Exception as e:
        logger.exception("AI request failed | error=%s", str(e))
        error_body = {"error": PROCESSING_ERROR}
        if str(e):
            error_body["details"] = str(e)
        return 500, error_body


def _request_method(event: dict) -> str:
    # HTTP API / Function URL (payload v2) first, then REST API (v1)
    method = event.get("requestContext", {}).get("http", {}).get("method")
    return method or event.get("httpMethod", "")


def lambda_handler(event, context):
    method = _request_method(event)
    logger.info("Request received | method=%s", method)

    status_code, body = handle(
        method=method,
        body=event.get("body"),
        settings=SETTINGS,
        generate=MODEL_CLIENT.generate if MODEL_CLIENT else None,
    )
    return _response(status_code, body)
