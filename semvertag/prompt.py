"""Interactive prompts."""

from typing import Optional, Protocol

from .errors import PromptAborted


class Prompter(Protocol):
    """The interactive questions a tagging run may ask."""

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question, defaulting to yes."""

    def text(self, label: str) -> str:
        """Ask for a line of free text."""

    def select(self, label: str, items: list[str]) -> int:
        """Ask for one of the items and return its index."""


class ConsolePrompter:
    """A Prompter reading answers from standard input."""

    def __init__(self, input_func=input, output_func=print):
        self._input = input_func
        self._output = output_func

    def _ask(self, label: str) -> str:
        try:
            return self._input(label)
        except (EOFError, KeyboardInterrupt) as err:
            raise PromptAborted("Operation aborted.") from err

    def confirm(self, message: str) -> bool:
        while True:
            answer = self._ask(f"{message} [Y/n]: ").strip().lower()
            if answer in ("", "y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self._output("Please answer y or n.")

    def text(self, label: str) -> str:
        return self._ask(f"{label}: ").strip()

    def select(self, label: str, items: list[str]) -> int:
        if not items:
            raise PromptAborted(f"Nothing to choose for: {label}")

        self._output(f"{label}:")
        for index, item in enumerate(items, start=1):
            self._output(f"  {index:>2}) {item}")

        while True:
            choice: Optional[int] = None
            answer = self._ask(f"{label} [1-{len(items)}]: ").strip()

            if answer.isdigit():
                choice = int(answer)
            elif answer in items:
                choice = items.index(answer) + 1

            if choice is not None and 1 <= choice <= len(items):
                return choice - 1

            self._output(f"Invalid selection `{answer}`")
