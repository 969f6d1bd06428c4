"""
Runtime configuration, read once from the Lambda environment.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_MODEL       = "claude-haiku-4-5-20251001"
DEFAULT_MAX_TOKENS  = 2048
DEFAULT_TEMPERATURE = 0.3
DEFAULT_LOG_LEVEL   = "INFO"


def _parse_number(environ: Mapping[str, str], name: str, cast, default):
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Invalid config value, using default | var=%s | value=%s | default=%s", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    api_key:     str | None = field(default=None, repr=False)
    model:       str = DEFAULT_MODEL
    max_tokens:  int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    log_level:   str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.
        Never raises: a missing API key is reported per request by the handler.
        """
        if environ is None:
            environ = os.environ

        api_key = environ.get("ANTHROPIC_API_KEY", "").strip() or None
        if api_key is None:
            logger.warning("ANTHROPIC_API_KEY is not set; every request will fail with a configuration error")

        return cls(
            api_key=api_key,
            model=environ.get("LEXMX_MODEL", "").strip() or DEFAULT_MODEL,
            max_tokens=_parse_number(environ, "LEXMX_MAX_TOKENS", int, DEFAULT_MAX_TOKENS),
            temperature=_parse_number(environ, "LEXMX_TEMPERATURE", float, DEFAULT_TEMPERATURE),
            log_level=environ.get("LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL,
        )
