"""Line-based input for the terminal front end."""

from abc import ABC, abstractmethod
from typing import Callable, Iterable


class InputError(ValueError):
    """A response that is not one of the accepted choices."""

    def __init__(self, response: str, choices: Iterable[str]) -> None:
        self.response = response
        self.choices = tuple(choices)
        super().__init__(f"Unrecognized choice {response!r}, expected one of {', '.join(self.choices)}")


class Prompter(ABC):
    """Asks the player a question and waits for one line of answer."""

    @abstractmethod
    def ask(self, message: str) -> str:
        """Return the player's response, without the trailing newline."""
        ...


class ConsolePrompter(Prompter):
    """Reads answers from standard input."""

    def __init__(self, input_func: Callable[[str], str] | None = None) -> None:
        self._input = input_func or input

    def ask(self, message: str) -> str:
        return self._input(message)


def parse_choice(response: str, choices: Iterable[str]) -> str:
    """
    Match a response against the accepted choices.

    Surrounding whitespace and case are ignored.

    Raises:
        InputError: If the response matches none of the choices
    """
    choices = tuple(choices)
    normalized = response.strip().lower()
    for choice in choices:
        if normalized == choice.lower():
            return choice
    raise InputError(response, choices)


def parse_yes_no(response: str) -> bool:
    """Interpret a y/n answer."""
    return parse_choice(response, ("y", "n")) == "y"
