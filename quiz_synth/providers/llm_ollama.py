from __future__ import annotations

import logging
import time

import httpx

from quiz_synth.providers.base import LLMProvider

log = logging.getLogger("quiz_synth.llm")


class OllamaProvider(LLMProvider):
    def __init__(self, base_url: str = "http://localhost:11434", model: str = "qwen3:8b",
                 timeout: float = 120.0):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    async def run(self, messages: list[dict], temperature: float = 0.7) -> dict:
        log.debug("── PROMPT (%s) ──\n%s", self.model, messages[-1]["content"])
        t0 = time.monotonic()
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(
                f"{self.base_url}/api/chat",
                json={
                    "model": self.model,
                    "messages": messages,
                    "stream": False,
                    "think": False,
                    "options": {"temperature": temperature},
                },
            )
            resp.raise_for_status()
            data = resp.json()
        elapsed = time.monotonic() - t0
        tokens = data.get("eval_count", "?")
        log.info("Ollama response (%.1fs, %s tokens)", elapsed, tokens)
        return {"output": data.get("message"), "error": data.get("error")}

    def name(self) -> str:
        return f"ollama/{self.model}"
