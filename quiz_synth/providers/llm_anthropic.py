from __future__ import annotations

import os

from quiz_synth.providers.base import LLMProvider, completion


class AnthropicProvider(LLMProvider):
    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        import anthropic
        self.client = anthropic.AsyncAnthropic(
            api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
        )
        self.model = model

    async def run(self, messages: list[dict], temperature: float = 0.7) -> dict:
        # Anthropic takes the system prompt outside the message list
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
        kwargs = {"system": system} if system else {}
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=4096,
            temperature=temperature,
            messages=[m for m in messages if m["role"] != "system"],
            **kwargs,
        )
        if not message.content:
            return completion(None, error="empty response")
        return completion(message.content[0].text)

    def name(self) -> str:
        return f"anthropic/{self.model}"
