from __future__ import annotations

from typing import Optional

from google import genai
from google.genai import types

from ..config import get_config
from ..errors import ExternalServiceError
from ..logging import get_logger

EMPTY_RESPONSE_FALLBACK = "A delicious gourmet burger."
ERROR_FALLBACK = "A tasty burger made with fresh ingredients."

PROMPT_TEMPLATE = (
    'Write a short, mouth-watering, 1-sentence description for a burger named "{name}". \n'
    "Key ingredients/vibe: {hint}. \n"
    "Keep it under 20 words. Make it sound premium and delicious."
)


class DescriptionAssist:
    """Drafts product descriptions with Gemini. Never raises to its caller."""

    def __init__(self, client: Optional[genai.Client] = None) -> None:
        self.config = get_config()
        self.logger = get_logger(__name__)
        self._client = client

    def get_client(self) -> genai.Client:
        """Returns a Gemini client built from AppConfig values.

        Raises:
            ExternalServiceError: If no API key is configured.
        """
        if self._client is not None:
            return self._client
        if not self.config.gemini_api_key:
            raise ExternalServiceError("Missing Gemini API key.")
        self.logger.info(f"Instantiating Gemini client for model: {self.config.gemini_model}")
        self._client = genai.Client(
            api_key=self.config.gemini_api_key,
            http_options=types.HttpOptions(timeout=int(self.config.description_timeout_s * 1000)),
        )
        return self._client

    def _request(self, prompt: str) -> str:
        try:
            response = self.get_client().models.generate_content(
                model=self.config.gemini_model,
                contents=prompt,
            )
            return (response.text or "").strip()
        except ExternalServiceError:
            raise
        except Exception as e:
            raise ExternalServiceError(f"Gemini request failed: {e}") from e

    def generate(self, name: str, category_or_ingredients: str) -> str:
        """Return a one-sentence description, or a fixed fallback on any failure."""
        prompt = PROMPT_TEMPLATE.format(name=name, hint=category_or_ingredients or "Burger")
        try:
            text = self._request(prompt)
        except ExternalServiceError as e:
            self.logger.warning(f"Description generation failed, using fallback: {e}")
            return ERROR_FALLBACK
        return text or EMPTY_RESPONSE_FALLBACK


def get_description_assist() -> DescriptionAssist:
    """Returns a new DescriptionAssist instance using the latest config."""
    return DescriptionAssist()
