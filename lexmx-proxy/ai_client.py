import logging

import anthropic

from settings import Settings

logger = logging.getLogger(__name__)


class EmptyCompletionError(ValueError):
    """The model answered without any text content."""


class ModelClient:
    """
    Thin wrapper over the Anthropic Messages API.
    One SDK client per instance; build it once per Lambda container.
    """

    def __init__(self, api_key: str, model: str, max_tokens: int, temperature: float):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        # A provider failure is final for the request: no SDK-level retries.
        self._client = anthropic.Anthropic(api_key=api_key, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelClient":
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
        )

    def generate(self, prompt: str) -> str:
        """
        Send a single prompt and return the completion text.
        Raises on provider errors and on empty completions; never retries.
        """
        logger.debug("Prompt sent to model: %s", prompt)

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[
                    {"role": "user", "content": prompt}
                ],
            )
        except anthropic.APIError as e:
            logger.error("Model call failed | model=%s | error=%s", self.model, str(e))
            raise

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            logger.error("Model returned no text | model=%s | stop_reason=%s", self.model, response.stop_reason)
            raise EmptyCompletionError("Model returned an empty response.")

        logger.debug("Raw model response: %s", text)
        logger.info(
            "Completion received | model=%s | chars=%d | stop_reason=%s",
            self.model,
            len(text),
            response.stop_reason,
        )
        return text
