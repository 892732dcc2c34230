"""Tests for the command-line entry point."""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import main
from defaults.engine import DefaultsEngine
from defaults.models import DefaultsContext, UserProfile
from intent.models import (
    Classification,
    ClassificationResult,
    CommandResult,
    Intent,
    RoutedCommand,
    SolidColor,
    Tier,
)
from utils.phrases import FALLBACK_MESSAGE, STARTER_SUGGESTIONS


def _classification(kind=Classification.NEW_SCENE):
    return ClassificationResult(kind, 0.0, 0.6)


def _config(tmp_path):
    return {
        "log_level": "INFO",
        "log_dir": str(tmp_path / "logs"),
        "llm_mode": "mock",
        "history_db_path": str(tmp_path / "history.db"),
        "user_id": "test",
        "suggestion_history_size": 10,
    }


def test_format_fallback():
    result = CommandResult(FALLBACK_MESSAGE, Tier.LOCAL, clarification_options=STARTER_SUGGESTIONS)
    routed = RoutedCommand("??", _classification(Classification.AMBIGUOUS), result, fell_back=True)

    text = main.format_routed(routed)
    assert text.splitlines()[0] == FALLBACK_MESSAGE
    assert f"  - {STARTER_SUGGESTIONS[0]}" in text
    assert text.endswith("[ambiguous, fallback]")


def test_format_enriched():
    intent = Intent(SolidColor((255, 0, 0), "red"), 0.92, "red")
    result = CommandResult("Setting lights to Red.", Tier.LOCAL, intent=intent,
                           preview_colors=[(255, 0, 0)])
    ctx = DefaultsContext(profile=UserProfile())
    enriched = DefaultsEngine().resolve(intent, result, "red", context=ctx)
    routed = RoutedCommand("red", _classification(), result, enriched=enriched)

    text = main.format_routed(routed)
    assert "palette Custom [#FF0000] (user_specified)" in text
    assert "effect  Solid #0 (system_default)" in text
    assert "speed   - (system_default)" in text
    assert "zone    All Zones (system_default)" in text
    assert text.endswith("[new_scene, local]")


def test_run_analysis_without_history(capsys):
    assert main.run_analysis({}) == 1
    assert "No history database" in capsys.readouterr().out


def test_run_analysis_not_enough_data(tmp_path, capsys):
    assert main.run_analysis(_config(tmp_path)) == 0
    assert "Not enough" in capsys.readouterr().out


def test_repl_quits(monkeypatch, capsys):
    inputs = iter(["", "turn off", "quit"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(inputs))
    router = MagicMock()
    router.route.return_value = RoutedCommand(
        "turn off", _classification(), CommandResult("Turning your lights off.", Tier.LOCAL),
    )

    main.run_repl({}, router, MagicMock())

    router.route.assert_called_once()
    assert "Turning your lights off." in capsys.readouterr().out


def test_single_command(tmp_path, capsys):
    router = MagicMock()
    router.route.return_value = RoutedCommand(
        "turn on", _classification(), CommandResult("Turning your lights on.", Tier.LOCAL),
    )
    with patch.object(main, "load_config", return_value=_config(tmp_path)), \
            patch.object(main, "setup_logging"), \
            patch.object(main, "get_router", return_value=router) as get_router:
        main.main(["turn", "on"])

    assert router.route.call_args[0] == ("turn on",)
    assert get_router.call_args.kwargs["bias_tracker"] is not None
    router.close.assert_called_once()
    assert "Turning your lights on." in capsys.readouterr().out


def test_analyze_flag_exits(tmp_path):
    with patch.object(main, "load_config", return_value=_config(tmp_path)), \
            patch.object(main, "setup_logging"):
        with pytest.raises(SystemExit) as excinfo:
            main.main(["--analyze"])
    assert excinfo.value.code == 0
