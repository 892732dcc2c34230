"""Defaults resolution: fills colours, effect, brightness, speed and zone."""

from defaults.engine import DefaultsEngine, EnrichmentFailure
from defaults.models import UserProfile
from utils.sky import darkness_for


def get_engine(config: dict, bias_tracker=None) -> DefaultsEngine:
    """Factory: an engine using the configured profile and sun times."""
    return DefaultsEngine(
        bias_tracker=bias_tracker,
        profile=UserProfile.from_config(config),
        darkness_at=darkness_for(config),
    )
