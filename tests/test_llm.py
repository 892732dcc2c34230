"""Tests for the LLM abstraction layer."""

import os
import sys
import time
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add src to path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from llm import get_llm
from llm.mock_llm import DEFAULT_MOCK_RESPONSE, MockLLM


def _make_claude(config=None):
    """Create a ClaudeLLM with a mocked Anthropic client."""
    from llm.claude_llm import ClaudeLLM

    cfg = {"anthropic_api_key": "test-key"}
    cfg.update(config or {})
    with patch("anthropic.Anthropic") as mock_cls:
        llm = ClaudeLLM(cfg)
    return llm, mock_cls


def _text_message(text, input_tokens=10, output_tokens=5):
    block = MagicMock()
    block.type = "text"
    block.text = text
    message = MagicMock()
    message.content = [block]
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.stop_reason = "end_turn"
    return message


def test_mock_llm_default_response():
    """MockLLM should return the default canned scene."""
    llm = MockLLM({})
    assert llm.complete("make it cozy", "") == DEFAULT_MOCK_RESPONSE


def test_mock_llm_custom_response():
    """MockLLM should return a custom response when configured."""
    llm = MockLLM({"llm_mock_response": "Custom response here."})
    assert llm.complete("anything", "CONTEXT") == "Custom response here."


def test_mock_default_response_has_json_block():
    assert "```json" in DEFAULT_MOCK_RESPONSE
    assert '"patternName": "Cozy Amber"' in DEFAULT_MOCK_RESPONSE


def test_factory_returns_mock():
    """get_llm() should return MockLLM when mode is 'mock'."""
    assert isinstance(get_llm({"llm_mode": "mock"}), MockLLM)


def test_factory_returns_mock_when_unset():
    assert isinstance(get_llm({}), MockLLM)


def test_mock_llm_close():
    """close() should not raise."""
    MockLLM({}).close()


def test_claude_llm_requires_api_key():
    """ClaudeLLM should raise ValueError when API key is missing."""
    from llm.claude_llm import ClaudeLLM

    with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
        ClaudeLLM({"anthropic_api_key": ""})


def test_claude_client_uses_timeout_without_retries():
    _llm, mock_cls = _make_claude({"llm_timeout": 12.5})
    kwargs = mock_cls.call_args.kwargs
    assert kwargs["timeout"] == 12.5
    assert kwargs["max_retries"] == 0


def test_claude_complete_sends_context():
    llm, _ = _make_claude()
    llm._client.messages.create.return_value = _text_message("Here you go.")

    reply = llm.complete("make it spooky", "CONTEXT: test", temperature=0.2)

    assert reply == "Here you go."
    kwargs = llm._client.messages.create.call_args.kwargs
    assert kwargs["temperature"] == 0.2
    assert kwargs["messages"][-1]["content"] == "CONTEXT: test\n\nmake it spooky"
    assert kwargs["system"][0]["cache_control"] == {"type": "ephemeral"}
    assert kwargs["model"] == "claude-sonnet-4-5-20250929"
    assert llm._history[-1][:2] == ("make it spooky", "Here you go.")


def test_claude_complete_reraises_api_errors():
    llm, _ = _make_claude()
    llm._client.messages.create.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        llm.complete("hello", "")
    assert llm._history == []


def test_claude_explicit_history_is_not_recorded():
    llm, _ = _make_claude()
    llm._client.messages.create.return_value = _text_message("ok")

    llm.complete("second", "", history=[("first", "reply")])

    messages = llm._client.messages.create.call_args.kwargs["messages"]
    assert messages[0] == {"role": "user", "content": "first"}
    assert messages[1] == {"role": "assistant", "content": "reply"}
    assert llm._history == []


def test_history_records_exchanges():
    """complete() should record exchanges when no history is passed."""
    llm = MockLLM({})
    llm.complete("first question", "")
    llm.complete("second question", "")

    assert len(llm._history) == 2
    assert llm._history[0][0] == "first question"
    assert llm._history[1][0] == "second question"


def test_history_trims_at_max():
    """History should be trimmed when it exceeds max_history."""
    llm = MockLLM({"llm_max_history": 3})
    for i in range(5):
        llm.complete(f"question {i}", "")

    assert len(llm._history) == 3
    assert llm._history[0][0] == "question 2"
    assert llm._history[2][0] == "question 4"


def test_history_ttl_expiry():
    """Expired history entries should be removed."""
    llm = MockLLM({"llm_history_ttl": 1})
    llm.complete("old question", "")

    user, assistant, _ts = llm._history[0]
    llm._history[0] = (user, assistant, time.monotonic() - 2)

    messages = llm._get_messages("new question")
    assert len(messages) == 1
    assert messages[0]["content"] == "new question"


def test_clear_history():
    llm = MockLLM({})
    llm.complete("hello", "")
    llm.complete("world", "")
    llm.clear_history()
    assert len(llm._history) == 0


@pytest.mark.skipif(
    not os.getenv("ANTHROPIC_API_KEY"),
    reason="ANTHROPIC_API_KEY not set",
)
def test_claude_llm_integration():
    """ClaudeLLM should return a non-empty reply from the real API."""
    from llm.claude_llm import ClaudeLLM

    llm = ClaudeLLM({"anthropic_api_key": os.getenv("ANTHROPIC_API_KEY")})
    result = llm.complete("Make the lights cozy.", "CONTEXT:\n- Time: evening")
    assert isinstance(result, str)
    assert len(result) > 0
