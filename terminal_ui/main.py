"""Main entry point for the terminal BlackJack game."""

import argparse
import locale
import sys
from dataclasses import replace
from random import Random

import colorama

from config import AppConfig, config as default_config
from core.game import RoundEngine
from core.leaderboard import ScoreStore
from logging_utils import get_logger, setup_logging
from terminal_ui.prompts import ConsolePrompter
from terminal_ui.render import ConsoleRenderer
from terminal_ui.session import SessionController

logger = get_logger(__name__)

# Conventional exit status after Ctrl-C
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blackjack",
        description="Play BlackJack against the bank in your terminal.",
    )
    parser.add_argument("--scores-file", help="Leaderboard file (default: scores.json)")
    parser.add_argument("--seed", type=int, help="Seed for reproducible rounds")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--no-color", action="store_true", help="Plain text output")
    return parser


def load_config(args: argparse.Namespace, base: AppConfig = default_config) -> AppConfig:
    """Apply command-line overrides to the environment configuration."""
    cfg = base
    if args.scores_file:
        cfg = replace(cfg, leaderboard=replace(cfg.leaderboard, path=args.scores_file))
    if args.seed is not None:
        cfg = replace(cfg, seed=args.seed)
    if args.log_level:
        cfg = replace(cfg, log_level=args.log_level.upper())
    return cfg


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config(args)

    setup_logging(cfg.log_level, debug=cfg.debug)
    colorama.just_fix_windows_console()
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as exc:
        logger.warning("Using default date format: %s", exc)

    renderer = ConsoleRenderer(color=not args.no_color)
    controller = SessionController(
        engine=RoundEngine(rules=cfg.game, rng=Random(cfg.seed)),
        store=ScoreStore.from_config(cfg.leaderboard),
        prompter=ConsolePrompter(),
        renderer=renderer,
    )

    try:
        return controller.run()
    except EOFError:
        renderer.goodbye()
        return 0
    except KeyboardInterrupt:
        renderer.write()
        return EXIT_INTERRUPTED
    except OSError as exc:
        logger.critical("Leaderboard storage failed: %s", exc)
        print(f"Fatal: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
