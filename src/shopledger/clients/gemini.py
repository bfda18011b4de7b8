"""Gemini text-generation client."""

import logging
import os
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from shopledger.domain.errors import InvalidResponseError, ServiceUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-1.5-flash"
DEFAULT_TEMPERATURE = 0.7


class GeminiClient:
    """Client that sends one prompt per call to a Gemini model."""

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL_NAME,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.temperature = temperature

    def generate(self, prompt: str, system_instruction: str) -> str:
        """Send the prompt and return the generated text.

        Raises:
            ServiceUnavailableError: If the API key is missing or the call fails
            InvalidResponseError: If the response carries no text
        """
        if not self.api_key:
            raise ServiceUnavailableError("No Gemini API key configured")

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=system_instruction,
            generation_config={"temperature": self.temperature},
        )
        try:
            response = model.generate_content(prompt)
        except google_exceptions.GoogleAPIError as e:
            logger.warning("Gemini request failed: %s", e)
            raise ServiceUnavailableError(f"Gemini request failed: {e}")

        try:
            return response.text
        except ValueError as e:
            # Raised when the candidate was blocked or has no text parts
            logger.warning("Gemini returned no text: %s", e)
            raise InvalidResponseError(f"Gemini returned no text: {e}")


def create_gemini_client(
    api_key: Optional[str] = None, model_name: Optional[str] = None
) -> GeminiClient:
    """Create a Gemini client.

    Args:
        api_key: API key. If None, checks GEMINI_API_KEY, then API_KEY
        model_name: Model name. If None, checks SHOPLEDGER_GEMINI_MODEL, then
            uses the default model

    Returns:
        GeminiClient instance
    """
    if api_key is None:
        api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY", "")
    if model_name is None:
        model_name = os.environ.get("SHOPLEDGER_GEMINI_MODEL", DEFAULT_MODEL_NAME)
    return GeminiClient(api_key=api_key, model_name=model_name)
