"""Terminal front end: prompts, rendering and the session loop."""

from terminal_ui.prompts import ConsolePrompter, InputError, Prompter
from terminal_ui.render import ConsoleRenderer
from terminal_ui.session import SessionController

__all__ = [
    "ConsolePrompter",
    "InputError",
    "Prompter",
    "ConsoleRenderer",
    "SessionController",
]
