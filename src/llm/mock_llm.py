"""Mock LLM backend for local development.

Returns a configurable canned reply, ignoring the actual request.
"""

from __future__ import annotations

import logging
from typing import Sequence

from llm.base import BaseLLM

log = logging.getLogger(__name__)

DEFAULT_MOCK_RESPONSE = (
    "Here's a cozy amber glow for you.\n"
    "```json\n"
    '{"intent": "lighting_command", "responseText": "Here\'s a cozy amber glow for you.", '
    '"patternName": "Cozy Amber", '
    '"commands": [{"zone": "All Zones", "effect": 2, "effectName": "Breathe", '
    '"colors": [[255, 179, 71], [255, 216, 155]]}], '
    '"previewColors": [[255, 179, 71], [255, 216, 155]]}\n'
    "```"
)


class MockLLM(BaseLLM):
    """Fake LLM that returns a fixed reply for development."""

    def __init__(self, config: dict):
        super().__init__(config)
        self._response = config.get("llm_mock_response") or DEFAULT_MOCK_RESPONSE

    def complete(
        self,
        prompt: str,
        context_block: str,
        temperature: float | None = None,
        history: Sequence[tuple[str, str]] | None = None,
    ) -> str:
        """Return the configured canned reply, ignoring input."""
        log.info("Mock LLM called with: %r", prompt)
        response = self._response
        if history is None:
            self._record_exchange(prompt, response)
        return response
