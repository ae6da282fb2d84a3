from __future__ import annotations

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """A chat-completion backend.

    ``run`` takes role-tagged messages (``{"role": ..., "content": ...}``) and
    returns ``{"output": {"role": "assistant", "content": str}, "error": None}``.
    A provider may report a service-side failure in ``error`` instead of
    raising; callers must check it before trusting ``output``.
    """

    @abstractmethod
    async def run(self, messages: list[dict], temperature: float = 0.7) -> dict:
        ...

    @abstractmethod
    def name(self) -> str:
        ...


def completion(content: str | None, error: str | None = None) -> dict:
    return {"output": {"role": "assistant", "content": content}, "error": error}
