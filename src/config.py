"""Configuration management for Lumen."""

import os
from pathlib import Path

# Project root is one level up from src/
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"


def _list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _minutes(value: str):
    """Convert "HH:MM" to minutes from midnight; None when unset or malformed."""
    if not value:
        return None
    try:
        hours, minutes = value.split(":", 1)
        return int(hours) * 60 + int(minutes)
    except ValueError:
        return None


def _float_or_none(value: str):
    try:
        return float(value) if value else None
    except ValueError:
        return None


def load_config() -> dict:
    """Load configuration from environment variables and .env file."""
    # Load .env file if it exists (don't override existing env vars)
    if ENV_FILE.exists():
        with open(ENV_FILE) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                key, _, value = line.partition("=")
                key, value = key.strip(), value.strip().strip("\"'")
                if key not in os.environ:
                    os.environ[key] = value

    return {
        # Logging
        "log_level": os.getenv("LUMEN_LOG_LEVEL", "INFO"),
        "log_dir": os.getenv("LUMEN_LOG_DIR", str(PROJECT_ROOT / "logs")),

        # LLM backend: "mock" or "claude"
        "llm_mode": os.getenv("LUMEN_LLM_MODE", "mock"),
        "anthropic_api_key": os.getenv("ANTHROPIC_API_KEY", ""),
        "llm_model": os.getenv("LUMEN_LLM_MODEL", "claude-sonnet-4-5-20250929"),
        "llm_max_tokens": int(os.getenv("LUMEN_LLM_MAX_TOKENS", "1024")),
        "llm_timeout": float(os.getenv("LUMEN_LLM_TIMEOUT", "30")),
        "llm_temperature": float(os.getenv("LUMEN_LLM_TEMPERATURE", "0.7")),
        "llm_max_history": int(os.getenv("LUMEN_LLM_MAX_HISTORY", "10")),
        "llm_history_ttl": int(os.getenv("LUMEN_LLM_HISTORY_TTL", "300")),

        # Storage
        "history_db_path": os.getenv("LUMEN_HISTORY_DB", str(PROJECT_ROOT / "data" / "history.db")),
        "user_id": os.getenv("LUMEN_USER_ID", "default"),
        "presets_path": os.getenv("LUMEN_PRESETS_PATH", str(PROJECT_ROOT / "presets.json")),
        "habit_analysis_days": int(os.getenv("LUMEN_HABIT_ANALYSIS_DAYS", "30")),

        # Session
        "suggestion_history_size": int(os.getenv("LUMEN_SUGGESTION_HISTORY", "10")),

        # Location and sun times ("HH:MM", local)
        "location": os.getenv("LUMEN_LOCATION", ""),
        "sunrise": os.getenv("LUMEN_SUNRISE", "06:30"),
        "sunset": os.getenv("LUMEN_SUNSET", "18:30"),

        # User profile
        "interests": _list(os.getenv("LUMEN_INTERESTS", "")),
        "dislikes": _list(os.getenv("LUMEN_DISLIKES", "")),
        "vibe_level": _float_or_none(os.getenv("LUMEN_VIBE_LEVEL", "")),
        "quiet_hours_start": _minutes(os.getenv("LUMEN_QUIET_HOURS_START", "")),
        "quiet_hours_end": _minutes(os.getenv("LUMEN_QUIET_HOURS_END", "")),
        "hoa_compliance": os.getenv("LUMEN_HOA_COMPLIANCE", "false").lower() == "true",
        "preferred_effect_styles": _list(os.getenv("LUMEN_EFFECT_STYLES", "")),
    }
