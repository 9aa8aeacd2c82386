"""
Gemini client.

Wraps the ``google-genai`` SDK behind a single `generate()` method.
The credential and model come from an `AIConfig` passed in at
construction and the SDK is never left to look up its own key.  The
SDK client is created on the first call, so a missing key surfaces as
a failed call rather than a failed start-up.

Anything with a ``generate(prompt) -> str`` method can be used in its
place by the pipeline, which is how the tests avoid the network.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from google import genai

from ..config.schema import AIConfig
from ..errors import AIServiceError


logger = logging.getLogger(__name__)


class GeminiClient:
    """Send prompts to a Gemini model and return the response text."""

    def __init__(self, config: AIConfig) -> None:
        self.config = config
        self._client: Optional[Any] = None

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    def generate(self, prompt: str) -> str:
        """Perform one generation call.

        Raises
        ------
        AIServiceError
            If the SDK raises (network, authentication, quota, missing
            key) or the response carries no text.  Not retried.
        """
        if not self.config.api_key:
            logger.error("Error processing trade with AI: no API key configured")
            raise AIServiceError(
                f"No API key configured for the AI service (set {self.config.api_key_env})"
            )
        logger.debug("Calling model %s (%d prompt chars)", self.config.model, len(prompt))
        try:
            response = self._get_client().models.generate_content(
                model=self.config.model,
                contents=prompt,
            )
            text = response.text
        except Exception as exc:
            logger.error("Error processing trade with AI: %s", exc)
            raise AIServiceError(f"AI service call failed: {exc}") from exc

        if not text:
            logger.error("Error processing trade with AI: empty response")
            raise AIServiceError("AI service returned an empty response")
        return text
