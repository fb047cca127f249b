"""Session controller: menu, rounds, leaderboard and retries."""

from core.game import InvalidPlayerNameError, Round, RoundEngine
from core.leaderboard import PersistenceError, ScoreStore, record_for
from logging_utils import get_logger
from terminal_ui.prompts import InputError, Prompter, parse_choice, parse_yes_no
from terminal_ui.render import ConsoleRenderer

logger = get_logger(__name__)

# Menu keys
PLAY = "1"
LEADERBOARD = "l"
RESET = "r"
QUIT = "q"

MENU_CHOICES = (PLAY, LEADERBOARD, RESET, QUIT)


class SessionController:
    """
    Drives one interactive session.

    Every prompt is answered before the next step runs. Invalid answers
    are reported and asked again in a loop.
    """

    def __init__(
        self,
        engine: RoundEngine,
        store: ScoreStore,
        prompter: Prompter,
        renderer: ConsoleRenderer,
    ) -> None:
        self.engine = engine
        self.store = store
        self.prompter = prompter
        self.renderer = renderer
        self.engine.subscribe(self.renderer.on_event)

    def run(self) -> int:
        """Show the menu until the player quits; returns the exit code."""
        self.renderer.clear()
        self.renderer.title_screen()

        while True:
            choice = self._ask_choice(
                "\nChoose an option: \n",
                MENU_CHOICES,
                "Invalid option! ... Try again ...",
            )
            if choice == QUIT:
                self.renderer.clear()
                self.renderer.goodbye()
                return 0

            self.renderer.clear()
            if choice == PLAY:
                self.play()
            elif choice == LEADERBOARD:
                self.show_leaderboard()
            elif choice == RESET:
                self.reset_leaderboard()

            self.renderer.title_screen()

    # Play

    def play(self) -> None:
        """Play rounds until the player declines a retry."""
        while True:
            round_ = self._deal()
            self._play_round(round_)

            if not self._save(round_):
                return

            if not self._ask_yes_no("\nDo you want to play again? (y/n) \n"):
                self.renderer.clear()
                return
            self.renderer.clear()

    def _deal(self) -> Round:
        while True:
            name = self.prompter.ask("\nEnter your name: ")
            try:
                return self.engine.start_round(name)
            except InvalidPlayerNameError:
                self.renderer.warning("Please enter a name to play.")

    def _play_round(self, round_: Round) -> None:
        while not round_.is_finished:
            if self._ask_yes_no("\nDo you want another card? (y/n): \n"):
                self.engine.draw_card(round_)
            else:
                self.engine.stand(round_)

    def _save(self, round_: Round) -> bool:
        record = record_for(round_, self.engine.rules.target)
        try:
            self.store.append(record)
        except PersistenceError as exc:
            logger.error("Score for %s not saved: %s", round_.player_name, exc)
            self.renderer.error(
                f"Could not save your score: {exc.reason}. "
                "Reset the leaderboard from the menu to start a new one."
            )
            return False
        return True

    # Leaderboard

    def show_leaderboard(self) -> None:
        try:
            records = self.store.load() if self.store.exists else []
        except PersistenceError as exc:
            self.renderer.error(f"Could not read the leaderboard: {exc.reason}")
            return

        if not records:
            self.renderer.warning("No scores available!")
            return

        self.renderer.leaderboard(self.store.sorted_view(records))
        self.prompter.ask("\nPress any key to continue ... \n")
        self.renderer.clear()

    def reset_leaderboard(self) -> None:
        """Clear the leaderboard after confirmation.

        A corrupt leaderboard can still be reset; that is the way out of it.
        """
        try:
            has_scores = self.store.has_scores()
        except PersistenceError as exc:
            self.renderer.error(f"The leaderboard is unreadable: {exc.reason}")
            has_scores = True

        if not has_scores:
            self.renderer.warning("No scores available!")
            return

        if self._ask_yes_no("\nAre you sure you want to reset the leaderboard? (y/n): \n"):
            self.store.reset()
            self.renderer.clear()
            self.renderer.success("Leaderboard cleared!")
        else:
            self.renderer.clear()
            self.renderer.info("No changes were made!")

    # Prompts

    def _ask_choice(self, message: str, choices: tuple[str, ...], warning: str) -> str:
        while True:
            response = self.prompter.ask(message)
            try:
                return parse_choice(response, choices)
            except InputError as exc:
                logger.debug("%s", exc)
                self.renderer.info(warning)

    def _ask_yes_no(self, message: str) -> bool:
        while True:
            response = self.prompter.ask(message)
            try:
                return parse_yes_no(response)
            except InputError as exc:
                logger.debug("%s", exc)
                self.renderer.info("Invalid option! ... Use 'y' or 'n'")
