"""Tests for environment-driven configuration."""

import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import config as config_module
from config import load_config
from defaults.models import UserProfile


def _load(monkeypatch, tmp_path, **env):
    # Isolated environment and an absent .env file
    monkeypatch.setattr(os, "environ", dict(os.environ))
    monkeypatch.setattr(config_module, "ENV_FILE", tmp_path / ".env")
    for key in list(env):
        monkeypatch.setenv(key, env[key])
    return load_config()


def test_defaults(monkeypatch, tmp_path):
    for key in ("LUMEN_LLM_MODE", "LUMEN_QUIET_HOURS_START", "LUMEN_VIBE_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    cfg = _load(monkeypatch, tmp_path)
    assert cfg["llm_mode"] == "mock"
    assert cfg["llm_timeout"] == 30.0
    assert cfg["quiet_hours_start"] is None
    assert cfg["vibe_level"] is None
    assert cfg["suggestion_history_size"] == 10


def test_env_overrides(monkeypatch, tmp_path):
    cfg = _load(
        monkeypatch, tmp_path,
        LUMEN_LLM_MODE="claude",
        LUMEN_QUIET_HOURS_START="22:30",
        LUMEN_QUIET_HOURS_END="06:00",
        LUMEN_VIBE_LEVEL="0.8",
        LUMEN_HOA_COMPLIANCE="true",
        LUMEN_INTERESTS="Chiefs, gardening ,",
        LUMEN_EFFECT_STYLES="twinkle,breathe",
    )
    assert cfg["llm_mode"] == "claude"
    assert cfg["quiet_hours_start"] == 22 * 60 + 30
    assert cfg["quiet_hours_end"] == 360
    assert cfg["vibe_level"] == 0.8
    assert cfg["hoa_compliance"] is True
    assert cfg["interests"] == ["Chiefs", "gardening"]
    assert cfg["preferred_effect_styles"] == ["twinkle", "breathe"]


def test_malformed_values_are_ignored(monkeypatch, tmp_path):
    cfg = _load(monkeypatch, tmp_path, LUMEN_QUIET_HOURS_START="late", LUMEN_VIBE_LEVEL="lots")
    assert cfg["quiet_hours_start"] is None
    assert cfg["vibe_level"] is None


def test_env_file_does_not_override_environment(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nLUMEN_USER_ID=from-file\nLUMEN_LOCATION='Omaha'\n")
    monkeypatch.setattr(os, "environ", dict(os.environ))
    monkeypatch.setattr(config_module, "ENV_FILE", env_file)
    monkeypatch.setenv("LUMEN_USER_ID", "from-env")
    monkeypatch.delenv("LUMEN_LOCATION", raising=False)

    cfg = load_config()
    assert cfg["user_id"] == "from-env"
    assert cfg["location"] == "Omaha"


def test_profile_from_config(monkeypatch, tmp_path):
    cfg = _load(monkeypatch, tmp_path, LUMEN_HOA_COMPLIANCE="true", LUMEN_EFFECT_STYLES="twinkle")
    profile = UserProfile.from_config(cfg)
    assert profile.hoa_compliance is True
    assert profile.preferred_effect_styles == ("twinkle",)
