"""Abstract base class for LLM backends."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Sequence


class BaseLLM(ABC):
    """Common interface for mock and real LLM backends.

    Input is the user's command plus a context block describing the user and
    the current scene. Output is the model's raw reply text, which may embed a
    JSON payload.

    Keeps its own (user, assistant) history with time-based expiry; callers
    that own their conversation can pass it explicitly instead.
    """

    def __init__(self, config: dict):
        self._config = config
        self._max_history = config.get("llm_max_history", 10)
        self._history_ttl = config.get("llm_history_ttl", 300)
        self._history: list[tuple[str, str, float]] = []  # (user, assistant, timestamp)

    def _expire_history(self) -> None:
        """Remove history entries older than TTL."""
        if self._history_ttl <= 0:
            return
        cutoff = time.monotonic() - self._history_ttl
        self._history = [(u, a, t) for u, a, t in self._history if t > cutoff]

    def _get_messages(
        self, text: str, history: Sequence[tuple[str, str]] | None = None
    ) -> list[dict]:
        """Build a messages array including history and the new user message."""
        if history is None:
            self._expire_history()
            pairs = [(u, a) for u, a, _ts in self._history]
        else:
            pairs = list(history)[-self._max_history:]
        messages = []
        for user_msg, assistant_msg in pairs:
            messages.append({"role": "user", "content": user_msg})
            messages.append({"role": "assistant", "content": assistant_msg})
        messages.append({"role": "user", "content": text})
        return messages

    def _record_exchange(self, user: str, assistant: str) -> None:
        """Record a user/assistant exchange in history, trimming to max."""
        self._history.append((user, assistant, time.monotonic()))
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

    def clear_history(self) -> None:
        """Clear all conversation history."""
        self._history.clear()

    @abstractmethod
    def complete(
        self,
        prompt: str,
        context_block: str,
        temperature: float | None = None,
        history: Sequence[tuple[str, str]] | None = None,
    ) -> str:
        """Send a lighting request to the model and return its raw reply.

        Args:
            prompt: The user's command text.
            context_block: User/scene context prepended to the request.
            temperature: Sampling temperature; backend default when None.
            history: Prior (user, assistant) turns; internal history when None.

        Returns:
            The reply text. May contain a fenced or bare JSON object.

        Raises:
            Any transport or API error. Callers decide how to degrade.
        """
        ...

    def close(self) -> None:
        """Clean up resources. Override if needed."""
        pass
