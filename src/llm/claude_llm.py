"""Claude LLM backend using the Anthropic API."""

from __future__ import annotations

import logging
import time
from typing import Sequence

from llm.base import BaseLLM

log = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are Lumen, a lighting designer for addressable LED lighting on a home.\n"
    "Turn the user's request into a lighting scene. Reply with one short, warm "
    "sentence for the user, followed by a JSON object in a ```json block.\n\n"
    "## JSON schema\n"
    "{\n"
    '  "intent": "lighting_command" | "navigation" | "question_answer" | "guided_creation",\n'
    '  "responseText": string,\n'
    '  "commands": [{"zone": string, "effect": int (WLED effect id), '
    '"effectName": string, "colors": [[r, g, b], ...] (max 3), '
    '"brightness": 0-255, "speed": 0-255, "intensity": 0-255}],\n'
    '  "patternName": string,\n'
    '  "previewColors": [[r, g, b], ...],\n'
    '  "clarificationOptions": [string] (max 3, only when unsure),\n'
    '  "navigationTarget": string,\n'
    '  "saveAsFavorite": bool,\n'
    '  "confidence": 0.0-1.0\n'
    "}\n\n"
    "## Guidelines\n"
    "- Only include parameters the user asked for or that the scene needs; "
    "leave the rest out and the app will fill sensible defaults.\n"
    "- Honor the COMMAND INTENT CLASSIFICATION block when present.\n"
    "- Never reuse a pattern listed under RECENTLY SUGGESTED.\n"
    "- Never use anything listed under AVOID THESE.\n"
    "- For plain questions, answer briefly and omit the JSON block."
)


class ClaudeLLM(BaseLLM):
    """LLM backend that calls the Anthropic Claude API."""

    def __init__(self, config: dict):
        super().__init__(config)

        api_key = config.get("anthropic_api_key")
        if not api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY is required for claude LLM mode. "
                "Set it in .env or as an environment variable."
            )

        import anthropic

        self._timeout = config.get("llm_timeout", 30.0)
        self._client = anthropic.Anthropic(
            api_key=api_key, timeout=self._timeout, max_retries=0
        )
        self._model = config.get("llm_model", "claude-sonnet-4-5-20250929")
        self._max_tokens = config.get("llm_max_tokens", 1024)
        self._temperature = config.get("llm_temperature", 0.7)
        self._system_prompt = config.get("llm_system_prompt") or DEFAULT_SYSTEM_PROMPT

    def complete(
        self,
        prompt: str,
        context_block: str,
        temperature: float | None = None,
        history: Sequence[tuple[str, str]] | None = None,
    ) -> str:
        """Send the request to Claude and return the raw reply text."""
        t0 = time.monotonic()
        user_content = f"{context_block}\n\n{prompt}" if context_block else prompt
        try:
            message = self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature if temperature is None else temperature,
                system=[{
                    "type": "text",
                    "text": self._system_prompt,
                    "cache_control": {"type": "ephemeral"},
                }],
                messages=self._get_messages(user_content, history),
            )
        except Exception as exc:
            log.warning("Claude API error after %dms: %s",
                        int((time.monotonic() - t0) * 1000), exc)
            raise

        reply = "".join(
            block.text for block in message.content if block.type == "text"
        )
        log.info(
            "Claude replied in %dms (%d in / %d out tokens)",
            int((time.monotonic() - t0) * 1000),
            message.usage.input_tokens,
            message.usage.output_tokens,
        )
        if history is None:
            self._record_exchange(prompt, reply)
        return reply
