"""Tests for per-session state: suggestion ring buffer and result publishing."""

import sys
import threading
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from intent.classifier import classify
from intent.models import CommandResult, RoutedCommand, Tier
from intent.session import Session, SuggestionHistory


def _routed(text):
    return RoutedCommand(
        text=text,
        classification=classify(text),
        result=CommandResult(response_text=text, tier=Tier.LOCAL),
    )


# --- SuggestionHistory ---


def test_history_evicts_oldest():
    history = SuggestionHistory(3)
    for name in ["A", "B", "C", "D"]:
        history.add(name)
    assert history.recent() == ["B", "C", "D"]
    assert len(history) == 3


def test_history_moves_repeat_to_end():
    history = SuggestionHistory(3)
    for name in ["A", "B", "A"]:
        history.add(name)
    assert history.recent() == ["B", "A"]


def test_history_ignores_blank():
    history = SuggestionHistory(3)
    history.add(None)
    history.add("  ")
    assert history.recent() == []


def test_history_clear():
    history = SuggestionHistory(3)
    history.add("A")
    history.clear()
    assert len(history) == 0


def test_history_concurrent_adds_stay_bounded():
    history = SuggestionHistory(5)

    def worker(prefix):
        for i in range(50):
            history.add(f"{prefix}-{i}")

    threads = [threading.Thread(target=worker, args=(p,)) for p in "abcd"]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(history) == 5


# --- Session ---


def test_sequence_numbers_increase():
    session = Session()
    assert session.next_seq() < session.next_seq()


def test_newer_result_wins():
    session = Session()
    old_seq = session.next_seq()
    new_seq = session.next_seq()

    assert session.publish(new_seq, _routed("newer"))
    assert not session.publish(old_seq, _routed("older"))
    assert session.latest.text == "newer"


def test_latest_none_before_publish():
    assert Session().latest is None


def test_turns_are_bounded():
    session = Session(max_turns=2)
    for i in range(3):
        session.record_turn(f"u{i}", f"a{i}")
    assert session.turns == [("u1", "a1"), ("u2", "a2")]


def test_sessions_are_independent():
    a = Session()
    b = Session()
    a.suggestions.add("Aurora")
    assert b.suggestions.recent() == []
