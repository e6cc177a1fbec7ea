"""
Interactive main menu
"""
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional

from rich.console import Console

from ...core.constants import SSH_DIR_MODE
from ...core.exceptions import (
    AgentError,
    HmpsshError,
    KeyAddError,
    StartupError,
    ValidationError,
)
from ...core.interfaces import ProcessRunner, PromptProvider, RecordStore
from ...core.logging import get_logger, get_stdout_console
from ...core.settings import Settings
from ...domain.agent import AgentEnvironment, AgentService
from ...domain.backup import BackupService
from ...domain.connect import Connector
from ...domain.keys import KeyService
from ...domain.records import ConnectionRecord, parse_selection
from ...infrastructure.process import SubprocessRunner
from ...infrastructure.state import FlatFileRecordStore
from .prompts import RichPromptProvider
from .render import (
    detect_terminal_width,
    render_banner,
    render_connections,
    render_help,
    render_selection,
)

logger = get_logger(__name__)


class MenuState(Enum):
    """Menu loop states"""
    IDLE = "idle"
    AWAITING_CHOICE = "awaiting_choice"
    DISPATCH = "dispatch"
    AWAITING_ACK = "awaiting_ack"
    CLEAR_SCREEN = "clear_screen"
    EXITED = "exited"


EXIT_CHOICE = "8"
HELP_CHOICES = ("?", "help")


class MenuLoop:
    """
    Single-threaded menu: show list, read a choice, run it, wait for Enter,
    clear the screen, repeat until Exit.

    Every HmpsshError raised by an operation is reported as one status line
    and the loop carries on.
    """

    def __init__(
        self,
        settings: Settings,
        store: RecordStore,
        keys: KeyService,
        backups: BackupService,
        connector: Connector,
        prompts: PromptProvider,
        console: Optional[Console] = None,
    ):
        self.settings = settings
        self.store = store
        self.keys = keys
        self.backups = backups
        self.connector = connector
        self.prompts = prompts
        self.console = console or get_stdout_console()
        self.state = MenuState.IDLE
        # Located on first connect and reused for the rest of the process
        self.agent: Optional[AgentEnvironment] = None

        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.add_connection,
            "2": self.connect_to_server,
            "3": self.delete_connection,
            "4": self.show_connections,
            "5": self.setup_ssh_key,
            "6": self.backup_config,
            "7": self.restore_config,
        }

    # ------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------

    def run(self) -> int:
        """
        Run until Exit or end of input.

        Returns:
            Process exit code
        """
        while self.state is not MenuState.EXITED:
            self.state = MenuState.IDLE
            self.show_main_menu()

            self.state = MenuState.AWAITING_CHOICE
            try:
                choice = self.prompts.prompt("Choice")
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                self.state = MenuState.EXITED
                break
            self.console.print()

            self.state = MenuState.DISPATCH
            try:
                keep_going = self.dispatch(choice)
            except EOFError:
                keep_going = False
            if not keep_going:
                self.state = MenuState.EXITED
                break

            self.state = MenuState.AWAITING_ACK
            try:
                self.prompts.pause()
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                self.state = MenuState.EXITED
                break

            self.state = MenuState.CLEAR_SCREEN
            self.console.clear()
            self.console.print()

        return 0

    def dispatch(self, choice: str) -> bool:
        """
        Run the operation for a menu choice.

        Returns:
            False when the choice is Exit
        """
        if choice in HELP_CHOICES:
            self.console.print(render_help(), markup=False)
            return True

        if choice == EXIT_CHOICE:
            self.prompts.success("Thank you for using SSH Connection Manager")
            return False

        action = self._actions.get(choice)
        if action is None:
            self.prompts.error("Invalid choice, type '?' for help")
            return True

        self._run_operation(action)
        return True

    def _run_operation(self, action: Callable[[], None]) -> None:
        """Run one operation, reporting failures instead of raising"""
        try:
            action()
        except HmpsshError as e:
            logger.debug(f"{action.__name__} failed: {e!r}")
            self.prompts.error(str(e))
        except KeyboardInterrupt:
            self.console.print()
            self.prompts.error("Cancelled")
        except EOFError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in {action.__name__}")
            self.prompts.error(f"Unexpected error: {e}")

    # ------------------------------------------------------------
    # Views
    # ------------------------------------------------------------

    def show_main_menu(self) -> None:
        """Connection list plus the help hint"""
        try:
            self.show_connections()
        except HmpsshError as e:
            self.prompts.error(str(e))
        self.prompts.info("Type '?' or 'help' for options")

    def show_connections(self) -> None:
        """Banner and the record cards"""
        self.console.print(render_banner(self.settings.project_url), markup=False, highlight=False)

        records = self.store.load()
        if not records:
            self.prompts.info("No connections yet")
            return

        width, detected = detect_terminal_width(self.console)
        if not detected:
            self.prompts.warning("Using default terminal width due to size detection error")
        self.console.print(render_connections(records, width))

    def _print_selection(self, records) -> None:
        for line in render_selection(records):
            self.console.print(line)

    # ------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------

    def add_connection(self) -> None:
        """Ask for a record, store it, optionally install the key on the host"""
        self.prompts.info("Add a new SSH connection:")

        name = self.prompts.prompt("Connection Name")
        if not name:
            raise ValidationError("Name cannot be empty")

        user = self.prompts.prompt("Username")
        if not user:
            raise ValidationError("Username cannot be empty")

        host = self.prompts.prompt("Host (IP or domain)")
        if not host:
            raise ValidationError("Host cannot be empty")

        port = self.prompts.prompt("Port (default 22)")

        record = ConnectionRecord.create(name, user, host, port)
        self.store.append(record)
        self.prompts.success("Connection added successfully")

        if not self.prompts.confirm("Setup SSH key now?"):
            return

        if not self.keys.key_exists():
            self.prompts.info("Generating new SSH key...")
            self.keys.ensure_key_pair(interactive=False)

        self.prompts.info(f"Copying key to {record.host}...")
        self.keys.install_public_key(record.user, record.host, record.port)
        self.prompts.success("SSH key setup completed")

    def connect_to_server(self) -> None:
        """Pick a record and hand the terminal to ssh"""
        records = self.store.load()
        if not records:
            self.prompts.info("No connections available")
            return

        # Cached before ssh-add so a failed registration keeps the agent
        try:
            if self.agent is None:
                self.agent = self.connector.locate_agent()
            self.connector.prepare(self.agent)
        except (AgentError, KeyAddError) as e:
            self.prompts.error(f"Failed to initialize SSH agent: {e}")
            return

        self.prompts.info("Select a server to connect (enter the number):")
        self._print_selection(records)

        index = parse_selection(self.prompts.prompt("Choice"), len(records))
        record = records[index]
        self.prompts.info(f"Connecting to {record.target}:{record.port}...")
        self.connector.connect(index, self.agent)

    def delete_connection(self) -> None:
        """Pick a record and remove it"""
        records = self.store.load()
        if not records:
            self.prompts.info("No connections to delete")
            return

        self.prompts.info("Select a connection to delete (enter the number):")
        self._print_selection(records)

        index = parse_selection(self.prompts.prompt("Choice"), len(records))
        self.store.delete(index)
        self.prompts.success("Connection deleted successfully")

    def setup_ssh_key(self) -> None:
        """Generate the key pair, asking before replacing an existing one"""
        self.prompts.info("Setting up SSH key...")

        force = False
        if self.keys.key_exists():
            if not self.prompts.confirm("SSH key already exists. Do you want to generate a new one?"):
                return
            force = True

        self.keys.ensure_key_pair(force_regenerate=force, interactive=True)
        self.prompts.success("SSH key generated successfully")

        description = self.keys.describe_public_key()
        if description:
            self.prompts.info(f"Public key: {description}")

    def backup_config(self) -> None:
        """Archive the config file and key pair"""
        now = datetime.now()
        self.prompts.info("Creating configuration backup...")
        self.prompts.info(f"Location: {self.backups.archive_path(now)}")
        result = self.backups.backup(now)
        for name in result.skipped:
            self.prompts.warning(f"{name} not found, left out of the backup")
        self.prompts.success("Backup successful")
        self.console.print("Please move the file to another device for restore", markup=False)

    def restore_config(self) -> None:
        """Extract a user-supplied archive into the ssh directory"""
        self.prompts.info("Enter the path to backup file:")
        path = self.prompts.prompt("Path")
        self.backups.restore(path)
        self.prompts.success("Configuration restored successfully")


def create_menu(
    settings: Settings,
    runner: Optional[ProcessRunner] = None,
    prompts: Optional[PromptProvider] = None,
    console: Optional[Console] = None,
) -> MenuLoop:
    """
    Wire the services into a menu.

    Creates the ssh directory, backup directory and an empty config file
    if they are missing.
    """
    runner = runner or SubprocessRunner()
    console = console or get_stdout_console()
    prompts = prompts or RichPromptProvider(console=console)

    store = FlatFileRecordStore(settings.config_file)
    store.ensure()
    try:
        settings.backup_dir.mkdir(mode=SSH_DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise StartupError(f"Cannot create backup directory {settings.backup_dir}: {e}") from e

    agents = AgentService(settings, runner)
    return MenuLoop(
        settings=settings,
        store=store,
        keys=KeyService(settings, runner),
        backups=BackupService(settings, runner),
        connector=Connector(settings, store, agents, runner),
        prompts=prompts,
        console=console,
    )
