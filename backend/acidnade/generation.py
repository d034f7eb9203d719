"""Generation client - Gemini via google-generativeai"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import google.generativeai as genai

from acidnade.config import Settings, settings
from acidnade.errors import ConfigurationError, GenerationError

logger = logging.getLogger(__name__)

@dataclass
class RetryPolicy:
    """Bounded attempts with exponential backoff; one attempt by default"""
    max_attempts: int = 1
    backoff_seconds: float = 0.5
    multiplier: float = 2.0

    def delay(self, attempt: int) -> float:
        """Sleep before the given (1-based) retry attempt"""
        return self.backoff_seconds * (self.multiplier ** (attempt - 1))

    @classmethod
    def from_settings(cls, config: Settings) -> "RetryPolicy":
        return cls(max_attempts=max(1, config.llm_max_attempts),
                   backoff_seconds=config.llm_backoff_seconds)

class Generator:
    """Text-in, text-out generation interface"""

    async def generate(self, prompt: str) -> str:
        raise NotImplementedError

class GeminiGenerator(Generator):

    def __init__(self, config: Optional[Settings] = None, retry: Optional[RetryPolicy] = None):
        config = config or settings
        if not config.api_key:
            raise ConfigurationError("Missing API_KEY for the generative API")

        genai.configure(api_key=config.api_key)
        self.model = genai.GenerativeModel(
            config.llm_model,
            generation_config={
                "temperature": config.llm_temperature,
                "top_p": config.llm_top_p,
                "top_k": config.llm_top_k,
                "max_output_tokens": config.llm_max_output_tokens,
            },
        )
        self.retry = retry or RetryPolicy.from_settings(config)

    async def _generate_once(self, prompt: str) -> str:
        response = await self.model.generate_content_async(prompt)
        try:
            text = response.text
        except ValueError as e:
            # Blocked or candidate-less responses have no text accessor
            raise GenerationError(f"No text in response: {e}", kind="empty") from e
        if not text or not text.strip():
            raise GenerationError("Empty response text", kind="empty")
        return text.strip()

    async def generate(self, prompt: str) -> str:
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.retry.max_attempts + 1):
            if attempt > 1:
                await asyncio.sleep(self.retry.delay(attempt - 1))
            try:
                return await self._generate_once(prompt)
            except asyncio.TimeoutError as e:
                last_error = GenerationError(str(e) or "Generation timed out", kind="timeout", cause=e)
            except GenerationError as e:
                last_error = e
            except Exception as e:
                last_error = GenerationError(str(e), kind="upstream", cause=e)
            logger.warning("Generation attempt %d/%d failed: %s",
                           attempt, self.retry.max_attempts, last_error)

        error = last_error if isinstance(last_error, GenerationError) else GenerationError("Generation failed")
        error.attempts = self.retry.max_attempts
        raise error
