"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import Optional

from ...core.exceptions import HmpsshError
from ...core.logging import setup_logging, get_logger, get_stderr_console
from ..config.loader import load_settings
from .menu import create_menu

logger = get_logger(__name__)
stderr_console = get_stderr_console()

# Create main app
app = typer.Typer(
    name="hmpssh",
    add_completion=False,
    help="SSH connection manager",
    rich_markup_mode="rich",
)


@app.command()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
):
    """
    Hmpssh - SSH connection manager

    Starts the interactive menu. Type '?' at the prompt for options.
    """
    # Setup logging
    setup_logging(level=log_level, log_file=log_file)

    try:
        settings = load_settings()
        menu = create_menu(settings)
    except HmpsshError as e:
        logger.debug("Startup failed", exc_info=True)
        stderr_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    raise typer.Exit(menu.run())


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
