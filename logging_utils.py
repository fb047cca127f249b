"""Logging setup shared by the game and the terminal front end."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", debug: bool = False) -> None:
    """Call once at program start (terminal_ui/main.py)."""
    if debug:
        level = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
