"""Google Gemini completion provider using the google-genai SDK."""

from __future__ import annotations

from google import genai
from google.genai import types

from research_assistant.exceptions import GenerationError
from research_assistant.observability.logger import get_logger

logger = get_logger("gemini")


class GeminiProvider:
    def __init__(self, api_key: str, model: str = "gemini-2.0-flash") -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> str:
        try:
            config = types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            )
            if system:
                config.system_instruction = system

            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
            return response.text or ""
        except Exception as e:
            raise GenerationError(f"Gemini generation failed: {e}") from e
