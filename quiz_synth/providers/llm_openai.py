from __future__ import annotations

import os

from quiz_synth.providers.base import LLMProvider, completion


class OpenAIProvider(LLMProvider):
    def __init__(self, model: str = "gpt-4o-mini"):
        import openai
        self.client = openai.AsyncOpenAI(
            api_key=os.environ.get("OPENAI_API_KEY", ""),
        )
        self.model = model

    async def run(self, messages: list[dict], temperature: float = 0.7) -> dict:
        resp = await self.client.chat.completions.create(
            model=self.model,
            temperature=temperature,
            messages=messages,
        )
        return completion(resp.choices[0].message.content)

    def name(self) -> str:
        return f"openai/{self.model}"
