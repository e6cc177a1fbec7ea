"""
Connection list rendering
"""
import os
from typing import List, Optional, Sequence, Tuple

import pyfiglet
from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...core.constants import (
    BANNER_TEXT,
    COLUMN_WIDTH,
    FALLBACK_TERMINAL_WIDTH,
    MAX_COLUMNS,
)
from ...domain.records.models import ConnectionRecord

NAME_STYLE = "#FFFFFF"
USER_STYLE = "#808080"
HOST_STYLE = "#808080"

MENU_OPTIONS = (
    "1. Add Connection",
    "2. Connect to Server",
    "3. Delete Connection",
    "4. View List",
    "5. Setup SSH Key",
    "6. Backup Config",
    "7. Restore Config",
    "8. Exit",
)


def render_banner(project_url: str) -> Text:
    """ASCII-art banner followed by the project URL"""
    art = pyfiglet.figlet_format(BANNER_TEXT)
    return Text(art + project_url + "\n")


def detect_terminal_width(console: Console) -> Tuple[int, bool]:
    """
    Width of the terminal behind a console.

    Returns:
        (width, detected); width is the fallback when detection fails
    """
    try:
        return os.get_terminal_size(console.file.fileno()).columns, True
    except (OSError, ValueError, AttributeError):
        return FALLBACK_TERMINAL_WIDTH, False


def column_count(width: int) -> int:
    """Number of record columns that fit in width"""
    for cols in range(MAX_COLUMNS, 1, -1):
        if width >= COLUMN_WIDTH * cols:
            return cols
    return 1


def chunk_rows(records: Sequence[ConnectionRecord], num_cols: int) -> List[List[ConnectionRecord]]:
    """Group records left-to-right into rows of num_cols"""
    return [list(records[i:i + num_cols]) for i in range(0, len(records), num_cols)]


def record_cell(record: ConnectionRecord) -> Panel:
    """Bordered three-line card for one record"""
    body = Text()
    body.append(f"Name: {record.name}", style=NAME_STYLE)
    body.append("\n")
    body.append(f"User: {record.user}", style=USER_STYLE)
    body.append("\n")
    body.append(f"Host: {record.host}:{record.port}", style=HOST_STYLE)
    return Panel(body, box=box.ROUNDED, width=COLUMN_WIDTH, padding=(0, 1))


def render_connections(records: Sequence[ConnectionRecord], width: int) -> Optional[Group]:
    """
    Lay records out in rows of cards sized to the terminal width.

    Returns:
        Renderable, or None when there are no records
    """
    if not records:
        return None

    num_cols = column_count(width)
    rows = []
    for row in chunk_rows(records, num_cols):
        grid = Table.grid()
        for _ in row:
            grid.add_column(width=COLUMN_WIDTH)
        grid.add_row(*(record_cell(record) for record in row))
        rows.append(grid)
    return Group(*rows)


def render_selection(records: Sequence[ConnectionRecord]) -> List[Text]:
    """'[i] name (user@host)' lines used when picking a record"""
    lines = []
    for index, record in enumerate(records):
        line = Text(f"[{index}] ")
        line.append(record.name, style=NAME_STYLE)
        line.append(" (")
        line.append(record.user, style=USER_STYLE)
        line.append("@")
        line.append(record.host, style=HOST_STYLE)
        line.append(")")
        lines.append(line)
    return lines


def render_help() -> str:
    """Numbered menu options"""
    return "\n".join(MENU_OPTIONS)
