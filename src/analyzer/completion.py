"""
Chat-completion client for CV scoring using OpenAI.
"""

from typing import Optional

from loguru import logger
from openai import AsyncOpenAI, OpenAIError

from shared.config import Settings, get_settings

from .errors import CompletionError


class CompletionClient:
    """Sends a single-message prompt to the configured chat model."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Get or create OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key.get_secret_value(),
                timeout=self.settings.openai_timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def complete(self, prompt: str, json_output: bool = False) -> str:
        """
        Send the prompt as one user message and return the first choice's text.

        Args:
            prompt: Full instruction text
            json_output: Ask the API for a JSON object response

        Raises:
            CompletionError: upstream failure or empty response
        """
        kwargs = {}
        if json_output:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[{"role": "user", "content": prompt}],
                **kwargs,
            )
        except OpenAIError as e:
            logger.error(f"Completion request failed: {e}")
            raise CompletionError(str(e)) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise CompletionError("Empty response from LLM")

        logger.debug(f"Completion received ({len(content)} chars)")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
