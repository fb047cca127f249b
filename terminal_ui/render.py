"""Text rendering for the terminal front end."""

import sys
from typing import TextIO

from colorama import Back, Fore, Style

from core.game.events import EventType, GameEvent
from core.leaderboard.records import ScoreRecord

CSI = "\033["

# (header, width) per leaderboard column
LEADERBOARD_COLUMNS = [
    ("Name", 15),
    ("Date", 25),
    ("Winner", 15),
    ("Player Score", 15),
    ("Bank Score", 15),
]

MENU_LINES = [
    "1. Play",
    "l. Leaderboard",
    "r. Reset leaderboard",
    "q. Exit",
]

WELCOME_LINES = [
    "Welcome to BlackJack game in terminal.",
    "",
    "Get as close to 21 as you can without going over!",
    "",
    "So, are you able to ...",
    "",
    "BEAT THE BANK!",
    "",
    "GLHF!",
]

# (outcome, reason) -> (style, message)
ANNOUNCEMENTS = {
    ("PLAYER_WIN", "blackjack"): ("win", "BlackJack! Player wins!"),
    ("BANK_WIN", "bust"): ("lose", "Busted! Player loses!"),
    ("BANK_WIN", "bank_blackjack"): ("lose", "BlackJack! Bank wins!"),
    ("PLAYER_WIN", "points"): ("win", "Player wins!"),
    ("BANK_WIN", "points"): ("lose", "Bank wins!"),
    ("TIE", "points"): ("tie", "Tie!"),
}

# Box-drawing characters: corners, edges and the title separator
_SINGLE = ("┌", "┐", "└", "┘", "─", "│", "├", "┤")
_DOUBLE = ("╔", "╗", "╚", "╝", "═", "║", "╟", "╢")


def _fit(text: str, width: int) -> str:
    """Truncate text to width, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: max(width - 1, 0)] + "…"


def box(title: str, lines: list[str], width: int, double: bool = False) -> list[str]:
    """Draw centered lines inside a titled box."""
    tl, tr, bl, br, h, v, ml, mr = _DOUBLE if double else _SINGLE
    inner = width - 2
    out = [
        tl + h * inner + tr,
        v + _fit(title, inner).center(inner) + v,
        ml + "─" * inner + mr,
    ]
    out.extend(v + _fit(line, inner).center(inner) + v for line in lines)
    out.append(bl + h * inner + br)
    return out


def table(headers: list[tuple[str, int]], rows: list[list[str]]) -> list[str]:
    """Draw a left-aligned table with fixed column widths."""

    def row_line(cells: list[str]) -> str:
        parts = [
            " " + _fit(cell, width - 2).ljust(width - 2) + " "
            for cell, (_, width) in zip(cells, headers)
        ]
        return "│" + "│".join(parts) + "│"

    def rule(left: str, mid: str, right: str) -> str:
        return left + mid.join("─" * width for _, width in headers) + right

    out = [rule("┌", "┬", "┐"), row_line([name for name, _ in headers]), rule("├", "┼", "┤")]
    out.extend(row_line(cells) for cells in rows)
    out.append(rule("└", "┴", "┘"))
    return out


class ConsoleRenderer:
    """
    Writes menus, round progress and the leaderboard to a text stream.

    Colors come from colorama and can be turned off, which tests rely on.
    """

    def __init__(self, stream: TextIO | None = None, color: bool = True) -> None:
        self._stream = stream or sys.stdout
        self._color = color

    def _paint(self, text: str, *styles: str) -> str:
        if not self._color or not styles:
            return text
        return "".join(styles) + text + Style.RESET_ALL

    def write(self, text: str = "") -> None:
        print(text, file=self._stream)

    def clear(self) -> None:
        """Clear the screen when writing to a real terminal."""
        if self._color and self._stream.isatty():
            self._stream.write(CSI + "H" + CSI + "2J")
            self._stream.flush()

    # Message styles

    def success(self, message: str) -> None:
        self.write(f"\n✅ {self._paint(message, Fore.LIGHTGREEN_EX)}\n")

    def warning(self, message: str) -> None:
        self.write(f"\n⚠️ {self._paint(message, Fore.LIGHTYELLOW_EX)}\n")

    def error(self, message: str) -> None:
        self.write(f"\n❌ {self._paint(message, Fore.LIGHTRED_EX)}\n")

    def info(self, message: str) -> None:
        self.write(f"\nℹ️ {self._paint(message, Back.BLUE)}\n")

    def win(self, message: str) -> None:
        self.write(f"\n🎉🎉🎉 {self._paint(message, Style.BRIGHT, Fore.GREEN)} 🎉🎉🎉")

    def lose(self, message: str) -> None:
        self.write(f"\n💔 {self._paint(message, Fore.LIGHTRED_EX)} 💔")

    def tie(self, message: str) -> None:
        self.write(f"\n🤝 {self._paint(message, Fore.BLUE)} 🤝")

    # Screens

    def title_screen(self) -> None:
        menu = box("Menu", MENU_LINES, 40)
        lines = WELCOME_LINES + [""] + menu + [""]
        for line in box("BlackJack", lines, 60, double=True):
            self.write(self._paint(line, Fore.YELLOW))

    def goodbye(self) -> None:
        lines = ["", "Thank you for playing!", "See you next time!", ""]
        for line in box("GOODBYE", lines, 60):
            self.write(self._paint(line, Fore.RED))

    def leaderboard(self, records: list[ScoreRecord]) -> None:
        self.write(f"\n------ {self._paint('Leaderboard', Fore.GREEN)} ------\n")
        rows = [
            [r.name, r.timestamp, r.winner_label, str(r.player_score), str(r.bank_score)]
            for r in records
        ]
        for line in table(LEADERBOARD_COLUMNS, rows):
            self.write(line)

    def announce(self, outcome: str, reason: str, player_total: int, bank_total: int) -> None:
        """Show how a round ended."""
        style, message = ANNOUNCEMENTS.get((outcome, reason), ("tie", outcome.title()))
        getattr(self, style)(message)
        self.write(f"\nPlayer score: {player_total} | Bank score: {bank_total}")

    # Round events

    def on_event(self, event: GameEvent) -> None:
        """Round event handler; subscribe it to a RoundEngine."""
        data = event.data
        if event.event_type == EventType.ROUND_STARTED:
            self.write(f"\nHello, {data['player_name']}!")
            self.write(f"\nPlayer: {data['player_total']}")
        elif event.event_type == EventType.CARD_DRAWN:
            self.write(f"\nYou got: {data['value']}")
            self.write(f"\nYour total: {data['player_total']}")
        elif event.event_type == EventType.ROUND_ENDED:
            self.announce(
                data["outcome"], data["reason"], data["player_total"], data["bank_total"]
            )
        elif event.event_type == EventType.INVALID_ACTION:
            self.warning(data.get("message", "Invalid action"))
