"""Fill the lighting parameters a command left unspecified.

Each of the five parameters (colours, effect, brightness, speed, zone) is
resolved by its own cascade: an ordered list of strategy functions, each
returning a choice or None. The first non-empty choice wins and carries the
provenance of the strategy that produced it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence

from defaults import brightness as brightness_calc
from defaults.analysis import QueryAnalysis, analyze_query
from defaults.decision_tree import recommend_speed, select_effect
from defaults.effects import effect_info
from defaults.models import (
    ALL_ZONES,
    DefaultsConfidence,
    DefaultsContext,
    EffectInfo,
    EnrichedSuggestion,
    LightingSuggestion,
    PaletteInfo,
    ParameterSource,
    UserProfile,
    ZoneInfo,
)
from defaults.palettes import WARM_WHITE_FALLBACK, find_for_mood, find_for_query
from defaults.themes import EventThemeMatch, SportsTeam, find_team_in_query, match_event_theme
from intent.models import Brightness, ClassificationResult, CommandResult, Effect, Intent, SolidColor
from utils.colors import RGB, coerce_rgb, rgb_to_hex

log = logging.getLogger("lumen.defaults")

USER = ParameterSource.USER_SPECIFIED
CONTEXT = ParameterSource.CONTEXT_INFERRED
SYSTEM = ParameterSource.SYSTEM_DEFAULT

MAX_PAYLOAD_COLORS = 3
DEFAULT_PALETTE_ID = 5


class EnrichmentFailure(Exception):
    """Filling defaults failed for one request."""

    def __init__(self, text: str):
        super().__init__(f"Could not fill defaults for {text!r}")
        self.text = text


@dataclass(frozen=True)
class Request:
    """Everything a strategy may look at, computed once per resolution."""

    intent: Intent | None
    result: CommandResult
    raw_text: str
    analysis: QueryAnalysis
    theme: EventThemeMatch | None
    team: SportsTeam | None
    context: DefaultsContext
    profile: UserProfile
    learned_effects: dict[int, float]

    @property
    def command(self):
        return self.intent.command if self.intent is not None else None

    @property
    def segment(self) -> dict:
        payload = self.result.device_payload or {}
        if isinstance(payload.get("wled"), dict):
            payload = payload["wled"]
        segs = payload.get("seg")
        if isinstance(segs, list) and segs and isinstance(segs[0], dict):
            return segs[0]
        if isinstance(segs, dict):
            return segs
        return {}

    @property
    def payload_brightness(self) -> int | None:
        payload = self.result.device_payload or {}
        if isinstance(payload.get("wled"), dict):
            payload = payload["wled"]
        bri = payload.get("bri")
        return bri if isinstance(bri, int) else None


@dataclass(frozen=True)
class ColorChoice:
    colors: tuple[RGB, ...]
    palette: PaletteInfo
    source: ParameterSource


@dataclass(frozen=True)
class EffectChoice:
    effect: EffectInfo
    source: ParameterSource


@dataclass(frozen=True)
class ValueChoice:
    value: float
    source: ParameterSource


def _hex_names(colors: Sequence[RGB]) -> tuple[str, ...]:
    return tuple("#" + rgb_to_hex(c) for c in colors)


def _first(strategies: Sequence[Callable[[Request], Optional[object]]], request: Request):
    for strategy in strategies:
        choice = strategy(request)
        if choice is not None:
            return choice
    raise LookupError("cascade has no terminal strategy")


# -- Colours ---------------------------------------------------------------


def colors_from_preview(req: Request) -> ColorChoice | None:
    if not req.result.preview_colors:
        return None
    colors = tuple(req.result.preview_colors)
    return ColorChoice(colors, PaletteInfo("Custom", _hex_names(colors)), USER)


def colors_from_solid_intent(req: Request) -> ColorChoice | None:
    cmd = req.command
    if not isinstance(cmd, SolidColor):
        return None
    return ColorChoice((cmd.rgb,), PaletteInfo(cmd.name, (cmd.name,)), USER)


def colors_from_payload(req: Request) -> ColorChoice | None:
    colors = [c for c in (coerce_rgb(v) for v in req.segment.get("col") or []) if c is not None]
    if not colors:
        return None
    return ColorChoice(tuple(colors), PaletteInfo("Custom", _hex_names(colors)), USER)


def colors_from_team(req: Request) -> ColorChoice | None:
    if req.team is None:
        return None
    colors = req.team.rgb_values
    return ColorChoice(colors, PaletteInfo(req.team.display_name, _hex_names(colors)), CONTEXT)


def colors_from_event_theme(req: Request) -> ColorChoice | None:
    if req.theme is None:
        return None
    pattern = req.theme.pattern
    return ColorChoice(pattern.rgb_values, PaletteInfo(pattern.name, pattern.color_names), CONTEXT)


def colors_from_concept(req: Request) -> ColorChoice | None:
    palette = find_for_query(req.raw_text)
    if palette is None:
        return None
    return ColorChoice(
        palette.rgb_values, PaletteInfo(palette.display_name, palette.color_names), CONTEXT
    )


def colors_from_words(req: Request) -> ColorChoice | None:
    colors = req.analysis.color_preferences
    if not colors:
        return None
    return ColorChoice(colors, PaletteInfo("Custom", _hex_names(colors)), CONTEXT)


def colors_from_mood(req: Request) -> ColorChoice | None:
    if req.analysis.mood is None:
        return None
    palette = find_for_mood(req.analysis.mood)
    if palette is None:
        return None
    return ColorChoice(
        palette.rgb_values, PaletteInfo(palette.display_name, palette.color_names), CONTEXT
    )


def colors_fallback(req: Request) -> ColorChoice:
    p = WARM_WHITE_FALLBACK
    return ColorChoice(p.rgb_values, PaletteInfo(p.display_name, p.color_names), SYSTEM)


COLOR_STRATEGIES = [
    colors_from_preview,
    colors_from_solid_intent,
    colors_from_payload,
    colors_from_team,
    colors_from_event_theme,
    colors_from_concept,
    colors_from_words,
    colors_from_mood,
    colors_fallback,
]


# -- Effect ----------------------------------------------------------------


def effect_from_intent(req: Request) -> EffectChoice | None:
    cmd = req.command
    if not isinstance(cmd, Effect):
        return None
    return EffectChoice(effect_info(cmd.id, cmd.name), USER)


def effect_from_payload(req: Request) -> EffectChoice | None:
    fx = req.segment.get("fx")
    if not isinstance(fx, int):
        return None
    return EffectChoice(effect_info(fx), USER)


def effect_from_event_theme(req: Request) -> EffectChoice | None:
    if req.theme is None:
        return None
    pattern = req.theme.pattern
    return EffectChoice(effect_info(pattern.effect_id, pattern.effect_name), CONTEXT)


def effect_from_decision_tree(req: Request, has_user_colors: bool = False) -> EffectChoice:
    selection = select_effect(
        req.analysis,
        has_user_colors=has_user_colors,
        preferred_styles=req.profile.preferred_effect_styles,
        learned_preferences=req.learned_effects,
    )
    return EffectChoice(selection.effect, CONTEXT if selection.is_inferred else SYSTEM)


EFFECT_STRATEGIES = [
    effect_from_intent,
    effect_from_payload,
    effect_from_event_theme,
    effect_from_decision_tree,
]


# -- Brightness --------------------------------------------------------------


def brightness_from_intent(req: Request) -> ValueChoice | None:
    cmd = req.command
    if not isinstance(cmd, Brightness) or cmd.relative or cmd.value is None:
        return None
    return ValueChoice(cmd.value / 255.0, USER)


def brightness_from_payload(req: Request) -> ValueChoice | None:
    bri = req.payload_brightness
    if bri is None:
        return None
    return ValueChoice(max(0, min(255, bri)) / 255.0, USER)


BRIGHTNESS_STRATEGIES = [
    brightness_from_intent,
    brightness_from_payload,
]


# -- Speed -------------------------------------------------------------------


def speed_from_payload(req: Request) -> ValueChoice | None:
    sx = req.segment.get("sx")
    if not isinstance(sx, int):
        cmd = req.command
        sx = cmd.speed if isinstance(cmd, Effect) else None
    if sx is None:
        return None
    return ValueChoice(max(0, min(255, sx)) / 255.0, USER)


# -- Zone ----------------------------------------------------------------------


def zone_from_result(req: Request) -> ZoneInfo | None:
    return ZoneInfo(req.result.zone) if req.result.zone else None


def build_device_payload(colors: Sequence[RGB], effect: EffectInfo,
                         brightness: float, speed: float | None) -> dict:
    col = [list(c) for c in colors[:MAX_PAYLOAD_COLORS]] or [[255, 255, 255]]
    return {
        "on": True,
        "bri": max(0, min(255, round(brightness * 255))),
        "seg": [{
            "fx": effect.id,
            "sx": max(0, min(255, round((speed or 0.0) * 255))),
            "col": col,
            "pal": DEFAULT_PALETTE_ID,
        }],
    }


class DefaultsEngine:
    """Resolves a full lighting suggestion with per-parameter provenance.

    Args:
        bias_tracker: optional learned-bias source; needs
            ``get_brightness_bias(sky_darkness, hour)`` and
            ``get_effect_preferences()``.
        profile: user preferences used when a context carries none.
        darkness_at: ``now -> 0..1`` sky darkness, used when no context is given.
        clock: current-time source.
    """

    def __init__(self, bias_tracker=None, profile: UserProfile | None = None,
                 darkness_at: Callable[[datetime], float] | None = None,
                 clock: Callable[[], datetime] = datetime.now):
        self._bias = bias_tracker
        self._profile = profile or UserProfile()
        self._darkness_at = darkness_at
        self._clock = clock

    def current_context(self) -> DefaultsContext:
        now = self._clock()
        darkness = self._darkness_at(now) if self._darkness_at is not None else 0.0
        return DefaultsContext(
            sky_darkness=darkness,
            hour=now.hour,
            minute_of_day=now.hour * 60 + now.minute,
            profile=self._profile,
        )

    def resolve(
        self,
        intent: Intent | None,
        result: CommandResult,
        raw_text: str,
        classification: ClassificationResult | None = None,
        context: DefaultsContext | None = None,
    ) -> EnrichedSuggestion:
        """Resolve all five parameters for one command.

        Raises:
            EnrichmentFailure: anything inside the cascades failed.
        """
        try:
            return self._resolve(intent, result, raw_text, classification, context)
        except Exception as exc:
            raise EnrichmentFailure(raw_text) from exc

    def _resolve(self, intent, result, raw_text, classification, context) -> EnrichedSuggestion:
        context = context or self.current_context()
        request = Request(
            intent=intent,
            result=result,
            raw_text=raw_text,
            analysis=analyze_query(raw_text),
            theme=match_event_theme(raw_text),
            team=find_team_in_query(raw_text),
            context=context,
            profile=context.profile or self._profile,
            learned_effects=self._learned_effects(),
        )

        colors: ColorChoice = _first(COLOR_STRATEGIES, request)
        effect: EffectChoice = _first(
            EFFECT_STRATEGIES[:-1]
            + [lambda r: effect_from_decision_tree(r, colors.source is USER)],
            request,
        )
        level = _first(BRIGHTNESS_STRATEGIES + [self._brightness_from_context], request)
        speed = _first([speed_from_payload, lambda r: self._speed_for(r, effect.effect)], request)
        zone = zone_from_result(request)
        zone_source = USER if zone is not None else SYSTEM

        suggestion_speed = None if effect.effect.is_static else speed.value
        payload = result.device_payload or build_device_payload(
            colors.colors, effect.effect, level.value, suggestion_speed
        )
        suggestion = LightingSuggestion(
            response_text=result.response_text,
            colors=colors.colors,
            palette=colors.palette,
            effect=effect.effect,
            brightness=level.value,
            speed=suggestion_speed,
            zone=zone or ALL_ZONES,
            device_payload=payload,
        )
        confidence = DefaultsConfidence(
            colors_source=colors.source,
            effect_source=effect.source,
            brightness_source=level.source,
            speed_source=speed.source,
            zone_source=zone_source,
        )
        log.debug(
            "Defaults for %r (%s): colors=%s effect=%s bri=%s speed=%s zone=%s (%.2f)",
            raw_text,
            classification.classification.value if classification is not None else "unclassified",
            colors.source.value, effect.source.value, level.source.value,
            speed.source.value, zone_source.value, confidence.overall_confidence,
        )
        return EnrichedSuggestion(suggestion=suggestion, confidence=confidence)

    def _learned_effects(self) -> dict[int, float]:
        if self._bias is None:
            return {}
        return self._bias.get_effect_preferences()

    def _brightness_from_context(self, req: Request) -> ValueChoice:
        profile = req.profile
        ctx = req.context
        rec = brightness_calc.calculate(
            ctx.sky_darkness,
            vibe_level=profile.vibe_level,
            quiet_hours_start=profile.quiet_hours_start,
            quiet_hours_end=profile.quiet_hours_end,
            minute_of_day=ctx.minute_of_day,
            hoa_compliance=profile.hoa_compliance,
            energy=req.analysis.energy,
        )
        bias = 1.0
        if self._bias is not None:
            bias = self._bias.get_brightness_bias(ctx.sky_darkness, ctx.hour)
        return ValueChoice(brightness_calc.clamp(rec.brightness * bias), CONTEXT)

    @staticmethod
    def _speed_for(req: Request, effect: EffectInfo) -> ValueChoice:
        energy = req.analysis.energy
        return ValueChoice(
            recommend_speed(effect.id, energy),
            CONTEXT if energy is not None else SYSTEM,
        )
