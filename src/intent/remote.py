"""Tier 2: generative fallback for commands the local matcher can't handle.

Builds a context block (who the user is, what's on the lights, what was
already suggested), asks the LLM, pulls the embedded JSON payload out of the
reply and normalises it into the same Intent shape Tier 1 produces.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import Callable, Sequence

from intent.classifier import build_context_hint
from intent.models import (
    ActiveContext,
    Brightness,
    ClassificationResult,
    CommandResult,
    Effect,
    Intent,
    Navigate,
    Power,
    SolidColor,
    Tier,
    Unknown,
)
from intent.session import SuggestionHistory
from llm.base import BaseLLM
from utils.colors import RGB, coerce_rgb, rgb_to_hex

log = logging.getLogger("lumen.remote")

DEFAULT_REMOTE_CONFIDENCE = 0.90
MAX_CLARIFICATION_OPTIONS = 3

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)


class RemoteFailure(Exception):
    """The remote resolver could not produce a reply (network, API, timeout)."""

    def __init__(self, text: str, message: str = "remote resolution failed"):
        super().__init__(f"{message}: {text!r}")
        self.text = text


# -- JSON extraction ---------------------------------------------------------


def _balanced_spans(text: str):
    """Yield (start, end) of each balanced {...} span, trying every '{' in order.

    Braces inside JSON strings are ignored. A '{' that never closes yields
    nothing.
    """
    for start, ch in enumerate(text):
        if ch != "{":
            continue
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            c = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif c == "\\":
                    escaped = True
                elif c == '"':
                    in_string = False
                continue
            if c == '"':
                in_string = True
            elif c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    yield start, i + 1
                    break


def _first_object(text: str) -> tuple[dict, int, int] | None:
    for start, end in _balanced_spans(text):
        try:
            obj = json.loads(text[start:end])
        except json.JSONDecodeError:
            continue
        if isinstance(obj, dict):
            return obj, start, end
    return None


def extract_structured_payload(reply: str) -> tuple[dict | None, str]:
    """Split a model reply into (payload, conversational text).

    Fenced ```json blocks are tried first, then a brace scan over the whole
    reply. Malformed or missing JSON gives (None, reply) rather than an error.
    """
    if not reply:
        return None, ""

    for match in _FENCE_RE.finditer(reply):
        found = _first_object(match.group(1))
        if found is not None:
            verbal = _FENCE_RE.sub("", reply).strip()
            return found[0], verbal

    found = _first_object(reply)
    if found is not None:
        obj, start, end = found
        verbal = (reply[:start] + reply[end:]).strip()
        return obj, verbal

    return None, _FENCE_RE.sub("", reply).strip() or reply.strip()


# -- Context block -----------------------------------------------------------


def time_of_day_label(now: datetime) -> str:
    return "Morning" if 5 <= now.hour < 17 else "Night"


def format_full_date(now: datetime) -> str:
    """e.g. 'Sunday, Jan 5, 2026, 1:00 PM'."""
    hour12 = (now.hour + 11) % 12 + 1
    ampm = "PM" if now.hour >= 12 else "AM"
    return f"{now:%A}, {now:%b} {now.day}, {now.year}, {hour12}:{now.minute:02d} {ampm}"


def build_context_block(
    config: dict,
    now: datetime,
    recent_suggestions: Sequence[str] = (),
    active_context: ActiveContext | None = None,
    classification: ClassificationResult | None = None,
) -> str:
    location = (config.get("location") or "").strip() or "Unknown"
    interests = ", ".join(config.get("interests") or []) or "None"
    dislikes = ", ".join(config.get("dislikes") or [])

    lines = [
        "CONTEXT:",
        f"- User Location: {location}",
        f"- Current Date: {format_full_date(now)}",
        f"- Known Interests: {interests}",
        f"- Time of Day: {time_of_day_label(now)}",
    ]
    if dislikes:
        lines.append(f"- AVOID THESE: {dislikes}")
    if recent_suggestions:
        lines.append(
            "- RECENTLY SUGGESTED (do not repeat): " + ", ".join(recent_suggestions)
        )
    if active_context is not None and active_context.is_on:
        colors = ", ".join("#" + rgb_to_hex(c) for c in active_context.colors) or "unknown"
        lines.append(
            "- CURRENT PATTERN (refine this when the user asks for a change): "
            f"{active_context.pattern_name or 'unnamed'}, effect {active_context.effect_id}, "
            f"colors {colors}, brightness {active_context.brightness}"
        )

    block = "\n".join(lines)
    if classification is not None:
        block += "\n\n" + build_context_hint(classification)
    return block


# -- Normalisation -----------------------------------------------------------


def _int_or_none(value) -> int | None:
    try:
        return None if value is None else int(value)
    except (TypeError, ValueError):
        return None


def _as_list(value) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _colors(values) -> list[RGB]:
    out = []
    for v in _as_list(values):
        rgb = coerce_rgb(v)
        if rgb is not None:
            out.append(rgb)
    return out


def _confidence(payload: dict) -> float:
    try:
        value = float(payload["confidence"])
    except (KeyError, TypeError, ValueError):
        return DEFAULT_REMOTE_CONFIDENCE
    return max(0.0, min(1.0, value))


def _first_seg(payload: dict) -> dict | None:
    segs = payload.get("seg")
    if isinstance(segs, list) and segs and isinstance(segs[0], dict):
        return segs[0]
    if isinstance(segs, dict):
        return segs
    return None


def _is_device_payload(payload: dict) -> bool:
    return any(k in payload for k in ("on", "bri", "seg"))


def _from_device_payload(text: str, payload: dict, verbal: str) -> CommandResult:
    confidence = _confidence(payload)
    seg = _first_seg(payload)
    colors = _colors(seg.get("col")) if seg else []
    fx = _int_or_none(seg.get("fx")) if seg else None

    if fx is not None and fx != 0:
        cmd = Effect(id=fx, name=f"Effect {fx}", speed=_int_or_none(seg.get("sx")),
                     intensity=_int_or_none(seg.get("ix")))
    elif fx == 0 and len(colors) == 1:
        cmd = SolidColor(rgb=colors[0], name="#" + rgb_to_hex(colors[0]))
    elif payload.get("on") is False:
        cmd = Power(on=False)
    elif _int_or_none(payload.get("bri")) is not None:
        cmd = Brightness(value=max(0, min(255, int(payload["bri"]))))
    else:
        cmd = Power(on=True)

    return CommandResult(
        response_text=verbal or "Done.",
        tier=Tier.REMOTE,
        intent=Intent(cmd, confidence, text, Tier.REMOTE),
        device_payload=payload,
        preview_colors=colors,
    )


def _payload_from_command(command: dict) -> tuple[dict, list[RGB]]:
    colors = _colors(command.get("colors"))[:3]
    seg: dict = {}
    fx = _int_or_none(command.get("effect"))
    if fx is not None:
        seg["fx"] = fx
    for key, seg_key in (("speed", "sx"), ("intensity", "ix")):
        value = _int_or_none(command.get(key))
        if value is not None:
            seg[seg_key] = max(0, min(255, value))
    if colors:
        seg["col"] = [list(c) for c in colors]

    payload: dict = {"on": True}
    bri = _int_or_none(command.get("brightness"))
    if bri is not None:
        payload["bri"] = max(0, min(255, bri))
    if seg:
        payload["seg"] = [seg]
    return payload, colors


def normalize_payload(text: str, payload: dict, verbal: str) -> CommandResult:
    """Turn an extracted JSON payload into a remote-tier CommandResult."""
    if "wled" in payload and isinstance(payload["wled"], dict):
        return _from_device_payload(text, payload["wled"], verbal or payload.get("responseText", ""))
    if _is_device_payload(payload) and "intent" not in payload:
        return _from_device_payload(text, payload, verbal)

    response = str(payload.get("responseText") or verbal or "")
    options = [str(o) for o in _as_list(payload.get("clarificationOptions"))][:MAX_CLARIFICATION_OPTIONS]
    confidence = _confidence(payload)
    kind = payload.get("intent", "lighting_command")

    if kind == "navigation" and payload.get("navigationTarget"):
        intent = Intent(Navigate(route=str(payload["navigationTarget"])), confidence, text, Tier.REMOTE)
        return CommandResult(response, Tier.REMOTE, intent=intent, clarification_options=options)

    commands = [c for c in _as_list(payload.get("commands")) if isinstance(c, dict)]
    preview = _colors(payload.get("previewColors"))
    if kind != "lighting_command" or not commands:
        return CommandResult(
            response, Tier.REMOTE, preview_colors=preview, clarification_options=options
        )

    first = commands[0]
    device_payload, colors = _payload_from_command(first)
    fx = _int_or_none(first.get("effect"))
    if fx is not None and fx != 0:
        cmd = Effect(
            id=fx,
            name=first.get("effectName") or f"Effect {fx}",
            speed=_int_or_none(first.get("speed")),
            intensity=_int_or_none(first.get("intensity")),
        )
    elif colors and len(colors) == 1:
        cmd = SolidColor(rgb=colors[0], name=first.get("colorName") or "#" + rgb_to_hex(colors[0]))
    elif fx == 0:
        cmd = Effect(id=0, name=first.get("effectName") or "Solid")
    elif not colors and device_payload.get("bri") is not None:
        cmd = Brightness(value=device_payload["bri"])
    else:
        # colours without an effect: the effect is left for defaults to fill
        cmd = Unknown()

    zone = first.get("zone")
    return CommandResult(
        response_text=response,
        tier=Tier.REMOTE,
        intent=Intent(cmd, confidence, text, Tier.REMOTE),
        device_payload=device_payload,
        preview_colors=preview or colors,
        clarification_options=options,
        zone=str(zone) if zone else None,
    )


def pattern_name(payload: dict | None) -> str | None:
    """Name to remember in the suggestion history, if the reply carries one."""
    if not payload:
        return None
    if payload.get("patternName"):
        return str(payload["patternName"])
    for command in _as_list(payload.get("commands")):
        if isinstance(command, dict) and command.get("effectName"):
            return str(command["effectName"])
    return None


class RemoteResolver:
    """Adapter between the router and an LLM backend."""

    def __init__(self, llm: BaseLLM, config: dict,
                 clock: Callable[[], datetime] = datetime.now):
        self._llm = llm
        self._config = config
        self._clock = clock
        self._temperature = config.get("llm_temperature")

    def resolve(
        self,
        text: str,
        history: Sequence[tuple[str, str]] | None = None,
        active_context: ActiveContext | None = None,
        classification: ClassificationResult | None = None,
        suggestions: SuggestionHistory | None = None,
    ) -> CommandResult:
        """Ask the LLM once and normalise its reply.

        Raises:
            RemoteFailure: the call itself failed. A reply without usable JSON
                is not a failure; it comes back as a text-only result.
        """
        block = build_context_block(
            self._config,
            self._clock(),
            suggestions.recent() if suggestions is not None else (),
            active_context,
            classification,
        )
        try:
            reply = self._llm.complete(text, block, self._temperature, history)
        except Exception as exc:
            raise RemoteFailure(text) from exc

        payload, verbal = extract_structured_payload(reply)
        if payload is None:
            log.info("Remote reply had no structured payload; treating as text")
            return CommandResult(response_text=verbal, tier=Tier.REMOTE)

        try:
            result = normalize_payload(text, payload, verbal)
        except Exception:
            log.exception("Unusable structured payload; treating reply as text")
            return CommandResult(response_text=verbal, tier=Tier.REMOTE)
        if suggestions is not None:
            suggestions.add(pattern_name(payload))
        log.info(
            "Remote resolved %r -> %s",
            text, result.intent.kind if result.intent else "text",
        )
        return result

    def close(self) -> None:
        self._llm.close()
