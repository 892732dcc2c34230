"""Command router: classify, resolve locally or remotely, then fill defaults."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from defaults.engine import DefaultsEngine, EnrichmentFailure
from intent.classifier import classify
from intent.local_parser import parse_local, response_text, to_device_payload
from intent.models import (
    ActiveContext,
    CommandResult,
    Intent,
    Navigate,
    Power,
    RoutedCommand,
    Scene,
    SolidColor,
    Tier,
)
from intent.presets import PresetLibrary
from intent.remote import RemoteFailure, RemoteResolver
from intent.session import Session
from utils.phrases import FALLBACK_MESSAGE, suggestions_for

log = logging.getLogger("lumen.router")


class PayloadSink(Protocol):
    """Anything that can push a device payload to the lights."""

    def apply_payload(self, payload: dict) -> bool: ...


class CommandRouter:
    """Routes a lighting command through the two resolution tiers.

    Tier 1 (local matcher) handles what it recognises with high confidence.
    Everything else goes to Tier 2 (remote LLM) exactly once; if that fails
    the caller gets a fixed clarification with a few suggestions. Successful
    lighting results are then completed by the defaults engine.

    The router keeps no per-request state. Per-conversation state (suggestion
    history, turns, latest result) lives on the optional Session.
    """

    def __init__(
        self,
        config: dict,
        remote: RemoteResolver,
        presets: PresetLibrary | None = None,
        engine: DefaultsEngine | None = None,
        sink: PayloadSink | None = None,
    ):
        self._config = config
        self._remote = remote
        self._presets = presets or PresetLibrary()
        self._engine = engine
        self._sink = sink

    def route(
        self,
        text: str,
        history: Sequence[tuple[str, str]] = (),
        active_context: ActiveContext | None = None,
        session: Session | None = None,
    ) -> RoutedCommand:
        """Resolve one command. Never raises for resolution failures."""
        seq = session.next_seq() if session is not None else 0
        if active_context is None and session is not None:
            active_context = session.active_context
        if not history and session is not None:
            history = session.turns
        # a session always supplies its own turns, even none, so the backend
        # never falls back to its shared history
        remote_history = list(history) if history or session is not None else None

        classification = classify(
            text,
            active_scene_running=active_context.scene_running if active_context else False,
            active_color_count=len(active_context.colors) if active_context else 0,
            saved_names=self._presets.names,
        )
        local = parse_local(text, self._presets.all_scenes)
        log.info(
            "Routing %r: %s, local %s @ %.2f",
            text, classification.classification.value, local.kind, local.confidence,
        )

        used_remote = False
        fell_back = False
        if local.is_high_confidence:
            result = self._execute_local(local, active_context)
        else:
            used_remote = True
            try:
                result = self._remote.resolve(
                    text,
                    history=remote_history,
                    active_context=active_context,
                    classification=classification,
                    suggestions=session.suggestions if session is not None else None,
                )
            except RemoteFailure:
                log.exception("Remote resolution failed; offering suggestions")
                result = self._fallback(local)
                fell_back = True

        enriched = None
        if self._should_enrich(result):
            try:
                enriched = self._engine.resolve(result.intent, result, text, classification)
            except EnrichmentFailure:
                log.exception("Defaults enrichment failed (non-fatal)")

        routed = RoutedCommand(
            text=text,
            classification=classification,
            result=result,
            enriched=enriched,
            used_remote=used_remote,
            fell_back=fell_back,
        )

        is_latest = True
        if session is not None:
            is_latest = session.publish(seq, routed)
            session.record_turn(text, result.response_text)
            if not is_latest:
                log.info("Discarding stale result for %r (seq %d)", text, seq)
        if is_latest:
            self._apply(routed)
        return routed

    def _execute_local(self, intent: Intent, active_context: ActiveContext | None) -> CommandResult:
        cmd = intent.command
        preview = []
        if isinstance(cmd, Scene):
            scene = self._presets.get(cmd.id)
            payload = dict(scene.payload) if scene and scene.payload else None
            preview = scene.preview_colors if scene else []
        else:
            current = active_context.brightness if active_context else None
            payload = to_device_payload(intent, current)
            if isinstance(cmd, SolidColor):
                preview = [cmd.rgb]
        return CommandResult(
            response_text=response_text(intent),
            tier=Tier.LOCAL,
            intent=intent,
            device_payload=payload,
            preview_colors=preview,
        )

    @staticmethod
    def _fallback(partial: Intent) -> CommandResult:
        kind = partial.kind if partial.confidence > 0 else None
        return CommandResult(
            response_text=FALLBACK_MESSAGE,
            tier=Tier.LOCAL,
            clarification_options=suggestions_for(kind),
        )

    def _should_enrich(self, result: CommandResult) -> bool:
        if self._engine is None or result.is_text_only:
            return False
        cmd = result.intent.command if result.intent is not None else None
        if isinstance(cmd, Navigate):
            return False
        if isinstance(cmd, Power) and not cmd.on:
            return False
        return True

    def _apply(self, routed: RoutedCommand) -> bool:
        if self._sink is None:
            return False
        payload = (
            routed.enriched.suggestion.device_payload
            if routed.enriched is not None
            else routed.result.device_payload
        )
        if not payload:
            return False
        try:
            return bool(self._sink.apply_payload(payload))
        except Exception:
            log.exception("Applying payload failed")
            return False

    def close(self) -> None:
        """Close the remote backend."""
        try:
            self._remote.close()
        except Exception:
            log.exception("Error closing remote resolver")
