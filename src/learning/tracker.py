"""Learn brightness and effect biases from how users adjust suggestions.

Adjustments are logged as usage events. ``analyze_and_save_habits`` mines the
recent ones into habits, and the read side turns the saved habits into a
brightness multiplier and effect preference weights for the defaults engine.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field

import numpy as np

from learning.models import (
    HABIT_BRIGHTNESS_BIAS,
    HABIT_EFFECT_PREFERENCE,
    SOURCE_ACCEPTED,
    SOURCE_ADJUSTED,
    Habit,
    UsageEvent,
)

log = logging.getLogger("lumen.learning")

ANALYSIS_DAYS = 30
MIN_ADJUSTMENTS = 5
MIN_BUCKET_SAMPLES = 3
MIN_BIAS_DEVIATION = 0.05
NIGHT_DARKNESS = 0.6
MAX_PREFERRED_EFFECTS = 5
HABIT_READ_LIMIT = 20

_BUCKETS = (
    # label, darkness range, description suffix
    ("night", (NIGHT_DARKNESS, 1.0), "after dark"),
    ("day", (0.0, NIGHT_DARKNESS), "during day"),
)


@dataclass(frozen=True)
class HabitSnapshot:
    """Immutable view of the saved habits at one cache version."""

    version: int
    habits: tuple[Habit, ...] = field(default=())


def _to_255(value) -> int | None:
    try:
        return round(float(value) * 255)
    except (TypeError, ValueError):
        return None


class BiasTracker:
    """Per-user learned biases backed by a HistoryStore.

    Reads go through a versioned snapshot of the user's habits. A successful
    analysis bumps the version, so the next read reloads; readers holding the
    previous snapshot keep using it undisturbed.
    """

    def __init__(self, store, user_id: str, analysis_days: int = ANALYSIS_DAYS):
        self._store = store
        self._user_id = user_id
        self._analysis_days = analysis_days
        self._lock = threading.Lock()
        self._version = 0
        self._snapshot: HabitSnapshot | None = None

    @property
    def cache_version(self) -> int:
        return self._version

    # -- Recording ------------------------------------------------------------

    def record_adjustment(self, parameter: str, suggested, adjusted,
                          sky_darkness: float, hour: int) -> None:
        """Record that the user changed ``parameter`` after a suggestion.

        ``suggested``/``adjusted`` are 0-1 floats for brightness and speed,
        effect ids for effect.
        """
        event = UsageEvent(
            source=SOURCE_ADJUSTED,
            pattern_name=f"adjustment:{parameter}",
            brightness=_to_255(adjusted) if parameter == "brightness" else None,
            effect_id=adjusted if parameter == "effect" else None,
            speed=_to_255(adjusted) if parameter == "speed" else None,
            details={
                "parameter": parameter,
                "suggested": suggested,
                "adjusted": adjusted,
                "sky_darkness": sky_darkness,
                "hour": hour,
            },
        )
        try:
            self._store.log_event(self._user_id, event)
        except Exception:
            log.exception("Failed to record %s adjustment (non-fatal)", parameter)

    def record_accepted(self, brightness: float, effect_id: int,
                        sky_darkness: float, hour: int) -> None:
        event = UsageEvent(
            source=SOURCE_ACCEPTED,
            brightness=_to_255(brightness),
            effect_id=effect_id,
            details={"sky_darkness": sky_darkness, "hour": hour},
        )
        try:
            self._store.log_event(self._user_id, event)
        except Exception:
            log.exception("Failed to record accepted suggestion (non-fatal)")

    # -- Reading ----------------------------------------------------------------

    def get_brightness_bias(self, sky_darkness: float | None, hour: int) -> float:
        """Multiplier for context brightness; 1.0 when nothing was learned.

        Without a darkness reading, 18:00-05:59 counts as dark.
        """
        if sky_darkness is None:
            sky_darkness = 1.0 if hour >= 18 or hour < 6 else 0.0
        try:
            for habit in self._load().habits:
                if habit.habit_type != HABIT_BRIGHTNESS_BIAS:
                    continue
                ctx = habit.details.get("context") or {}
                low = float(ctx.get("sky_darkness_min", 0.0))
                high = float(ctx.get("sky_darkness_max", 1.0))
                # ranges are half-open; a range ending at 1.0 also takes 1.0
                if low <= sky_darkness < high or (high >= 1.0 and sky_darkness >= high):
                    return float(habit.details.get("bias", 1.0))
        except Exception:
            log.exception("Brightness bias lookup failed; using neutral bias")
        return 1.0

    def get_effect_preferences(self) -> dict[int, float]:
        """Effect id -> weight, evenly split across the saved favourites."""
        try:
            for habit in self._load().habits:
                if habit.habit_type != HABIT_EFFECT_PREFERENCE:
                    continue
                ids = habit.details.get("preferred_effects") or []
                if not ids:
                    continue
                weight = 1.0 / len(ids)
                return {int(i): weight for i in ids}
        except Exception:
            log.exception("Effect preference lookup failed; ignoring preferences")
        return {}

    def _load(self) -> HabitSnapshot:
        snapshot = self._snapshot
        version = self._version
        if snapshot is not None and snapshot.version == version:
            return snapshot
        habits = tuple(self._store.get_habits(self._user_id, limit=HABIT_READ_LIMIT))
        fresh = HabitSnapshot(version=version, habits=habits)
        with self._lock:
            if self._version == version:
                self._snapshot = fresh
        return fresh

    def invalidate(self) -> None:
        with self._lock:
            self._version += 1

    # -- Analysis ---------------------------------------------------------------

    def analyze_and_save_habits(self) -> bool:
        """Mine recent adjustments into habits.

        Returns True when there were enough adjustments to analyse (the cache
        is invalidated then), False otherwise or on failure.
        """
        try:
            events = self._store.get_recent_events(self._user_id, days=self._analysis_days)
            adjustments = [e for e in events if e.source == SOURCE_ADJUSTED]
            if len(adjustments) < MIN_ADJUSTMENTS:
                log.debug("Only %d adjustments for %s; skipping analysis",
                          len(adjustments), self._user_id)
                return False

            saved = self._analyze_brightness(adjustments)
            saved += self._analyze_effects(adjustments)
        except Exception:
            log.exception("Habit analysis failed for %s", self._user_id)
            return False

        self.invalidate()
        log.info("Habit analysis for %s: %d adjustments, %d habits saved",
                 self._user_id, len(adjustments), saved)
        return True

    def _analyze_brightness(self, adjustments: list[UsageEvent]) -> int:
        ratios: dict[str, list[float]] = {"night": [], "day": []}
        for event in adjustments:
            d = event.details
            if d.get("parameter") != "brightness":
                continue
            try:
                suggested = float(d["suggested"])
                adjusted = float(d["adjusted"])
            except (KeyError, TypeError, ValueError):
                continue
            if suggested == 0:
                continue
            darkness = d.get("sky_darkness")
            darkness = 0.5 if darkness is None else float(darkness)
            bucket = "night" if darkness >= NIGHT_DARKNESS else "day"
            ratios[bucket].append(adjusted / suggested)

        saved = 0
        for label, (low, high), when in _BUCKETS:
            samples = ratios[label]
            if len(samples) < MIN_BUCKET_SAMPLES:
                continue
            mean = float(np.mean(samples))
            if abs(mean - 1.0) <= MIN_BIAS_DEVIATION:
                continue
            if mean > 1.0:
                description = f"Prefers {round((mean - 1) * 100)}% brighter {when}"
            else:
                description = f"Prefers {round((1 - mean) * 100)}% dimmer {when}"
            self._store.save_habit(self._user_id, Habit(
                habit_type=HABIT_BRIGHTNESS_BIAS,
                description=description,
                details={
                    "context": {"sky_darkness_min": low, "sky_darkness_max": high},
                    "bias": round(mean, 2),
                },
                sample_count=len(samples),
            ))
            saved += 1
        return saved

    def _analyze_effects(self, adjustments: list[UsageEvent]) -> int:
        counts: Counter[int] = Counter()
        for event in adjustments:
            d = event.details
            if d.get("parameter") != "effect":
                continue
            try:
                counts[int(d["adjusted"])] += 1
            except (KeyError, TypeError, ValueError):
                continue

        if len(counts) < 2:
            return 0
        top = [effect_id for effect_id, _n in counts.most_common(MAX_PREFERRED_EFFECTS)]
        self._store.save_habit(self._user_id, Habit(
            habit_type=HABIT_EFFECT_PREFERENCE,
            description="Frequently switches to these effects",
            details={"preferred_effects": top},
            sample_count=sum(counts.values()),
        ))
        return 1
