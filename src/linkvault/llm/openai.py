"""OpenAI-compatible LLM provider (OpenAI itself, or OpenRouter via base_url)."""

from typing import Optional

import openai

from ..exceptions import LLMError
from .base import LLMProvider

_DEFAULT_MAX_OUTPUT = 2_048


class OpenAIProvider(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: Optional[str] = None,
    ):
        self._client = openai.OpenAI(api_key=api_key, base_url=base_url)
        self._model = model

    @property
    def max_input_tokens(self) -> int:
        if "gpt-3.5" in self._model:
            return 14_000
        return 120_000

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=max_output_tokens or _DEFAULT_MAX_OUTPUT,
            )
        except openai.APIError as e:
            raise LLMError(f"OpenAI API error: {e}") from e
        return response.choices[0].message.content or ""
