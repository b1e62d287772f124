"""Terminal output sink with an explicit color toggle."""

import sys
from typing import TextIO

from colorama import Fore, Style


class Console:
    """Writes user-facing messages to a stream, optionally colored."""

    def __init__(self, stream: TextIO | None = None, use_color: bool = True, input_func=None):
        self.stream = stream or sys.stdout
        self.use_color = use_color
        self._input = input_func or input

    def _write(self, text: str, color: str = "") -> None:
        if self.use_color and color:
            text = f"{color}{text}{Style.RESET_ALL}"
        print(text, file=self.stream)

    def plain(self, text: str = "") -> None:
        self._write(text)

    def heading(self, text: str) -> None:
        self._write(text, Fore.BLUE)

    def info(self, text: str) -> None:
        self._write(text, Fore.BLUE)

    def highlight(self, text: str) -> None:
        self._write(text, Fore.GREEN)

    def success(self, text: str) -> None:
        self._write(f"✓ {text}", Fore.GREEN)

    def warning(self, text: str) -> None:
        self._write(text, Fore.YELLOW)

    def error(self, text: str) -> None:
        self._write(f"✗ {text}", Fore.RED)

    def prompt(self, text: str) -> str:
        """Show ``text`` without a newline and read one line of input."""
        print(text, end="", file=self.stream, flush=True)
        return self._input()
