"""
Rich-based user prompts
"""
from typing import Optional, TextIO
from rich.console import Console

from ...core.interfaces import PromptProvider
from ...core.logging import get_stdout_console

INFO_STYLE = "#808080"
SUCCESS_STYLE = "#FFFFFF"
ERROR_STYLE = "#808080"
WARNING_STYLE = "#808080"


class RichPromptProvider(PromptProvider):
    """
    Rich-based prompt provider.

    Reads one line per prompt from stdin, or from `stream` when given. An
    exhausted stream raises EOFError the same way input() does.
    """

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or get_stdout_console()
        self.stream = stream

    def _read(self, prompt: str) -> str:
        line = self.console.input(prompt, markup=False, stream=self.stream)
        if self.stream is not None and line == "":
            raise EOFError
        return line.strip()

    def prompt(self, message: str, default: Optional[str] = None) -> str:
        """Prompt user for one line of input, trimmed"""
        # Format message with default value if provided
        if default is not None:
            message = f"{message} (default {default})"

        answer = self._read(f"{message}: ")
        if not answer and default is not None:
            return default
        return answer

    def confirm(self, message: str) -> bool:
        """Prompt for y/n; anything but 'y' means no"""
        return self.prompt(f"{message} (y/n)").lower() == "y"

    def pause(self) -> None:
        """Wait for Enter"""
        self.console.print()
        self._read("Press Enter to continue...")

    def info(self, message: str) -> None:
        """Display info message"""
        self.console.print(message, style=INFO_STYLE, markup=False)

    def success(self, message: str) -> None:
        """Display success message"""
        self.console.print(f"✓ {message}", style=SUCCESS_STYLE, markup=False)

    def warning(self, message: str) -> None:
        """Display warning message"""
        self.console.print(f"⚠ {message}", style=WARNING_STYLE, markup=False)

    def error(self, message: str) -> None:
        """Display error message"""
        self.console.print(f"✗ {message}", style=ERROR_STYLE, markup=False)
