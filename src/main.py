"""Lumen - natural-language lighting commands from the terminal."""

import argparse
import logging
import logging.handlers
import sys
from pathlib import Path

from config import load_config
from intent import get_router
from intent.session import Session
from learning import get_bias_tracker
from utils.colors import rgb_to_hex
from utils.phrases import GOODBYE_PHRASES, STARTUP_PHRASES, pick_phrase

log = logging.getLogger("lumen")

QUIT_WORDS = {"quit", "exit", "bye"}


def setup_logging(config: dict) -> None:
    """Configure root logger with console and rotating file handlers."""
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    level = getattr(logging, config["log_level"].upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    # Rotating file handler
    log_dir = Path(config["log_dir"])
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / "lumen.log",
        maxBytes=1_000_000,
        backupCount=3,
    )
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)


def format_routed(routed) -> str:
    """Human-readable summary of one routed command."""
    lines = [routed.result.response_text or "(no reply)"]
    for option in routed.result.clarification_options:
        lines.append(f"  - {option}")

    enriched = routed.enriched
    if enriched is not None:
        s = enriched.suggestion
        c = enriched.confidence
        colors = " ".join("#" + rgb_to_hex(rgb) for rgb in s.colors[:5])
        speed = "-" if s.speed is None else f"{s.speed:.2f}"
        lines.append(
            f"  palette {s.palette.name} [{colors}] ({c.colors_source.value})"
        )
        lines.append(f"  effect  {s.effect.name} #{s.effect.id} ({c.effect_source.value})")
        lines.append(f"  bright  {s.brightness:.2f} ({c.brightness_source.value})")
        lines.append(f"  speed   {speed} ({c.speed_source.value})")
        lines.append(f"  zone    {s.zone.name} ({c.zone_source.value})")
        lines.append(f"  confidence {c.overall_confidence:.2f}")

    tier = "fallback" if routed.fell_back else routed.result.tier.value
    lines.append(f"  [{routed.classification.classification.value}, {tier}]")
    return "\n".join(lines)


def run_analysis(config: dict) -> int:
    tracker = get_bias_tracker(config)
    if tracker is None:
        print("No history database configured.")
        return 1
    if tracker.analyze_and_save_habits():
        print("Habits updated.")
    else:
        print("Not enough recent adjustments to analyse.")
    return 0


def run_repl(config: dict, router, session: Session) -> None:
    print(pick_phrase(STARTUP_PHRASES))
    while True:
        try:
            text = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not text:
            continue
        if text.lower() in QUIT_WORDS:
            break
        routed = router.route(text, session=session)
        print(format_routed(routed))
    print(pick_phrase(GOODBYE_PHRASES))


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="lumen",
        description="Resolve natural-language lighting commands.",
    )
    parser.add_argument("command", nargs="*", help="Route a single command and exit")
    parser.add_argument("--analyze", action="store_true",
                        help="Mine recent adjustments into learned habits")
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config)

    if args.analyze:
        sys.exit(run_analysis(config))

    tracker = None
    try:
        tracker = get_bias_tracker(config)
    except Exception:
        log.exception("History store unavailable; running without learned biases")

    router = get_router(config, bias_tracker=tracker)
    session = Session(suggestion_history_size=config.get("suggestion_history_size", 10))
    log.info("Starting Lumen (llm_mode=%s)", config.get("llm_mode"))

    try:
        if args.command:
            print(format_routed(router.route(" ".join(args.command), session=session)))
        else:
            run_repl(config, router, session)
    finally:
        router.close()
        log.info("Lumen stopped.")


if __name__ == "__main__":
    main()
