"""
Flat-file connection record storage
"""
import os
from pathlib import Path
from typing import List, Tuple

from ...core.interfaces import RecordStore
from ...core.exceptions import StoreIOError, RecordIndexError, ValidationError
from ...core.constants import CONFIG_FILE_MODE, SSH_DIR_MODE
from ...core.logging import get_logger
from ...domain.records.models import ConnectionRecord

logger = get_logger(__name__)


class FlatFileRecordStore(RecordStore):
    """
    Line-per-record storage.

    Each non-blank line is ``name|user|host|port``. Lines that do not parse
    are skipped on load but kept in the file when it is rewritten, so a
    record's position counts only valid lines.
    """

    def __init__(self, path: Path):
        """
        Initialize record store.

        Args:
            path: Config file path
        """
        self.path = Path(path).expanduser()

    def ensure(self) -> None:
        """Create the parent directory and an empty config file if missing"""
        try:
            self.path.parent.mkdir(mode=SSH_DIR_MODE, parents=True, exist_ok=True)
            if not self.path.exists():
                fd = os.open(self.path, os.O_WRONLY | os.O_CREAT, CONFIG_FILE_MODE)
                os.close(fd)
        except OSError as e:
            raise StoreIOError(f"Failed to create config file: {e}") from e

    def _read_lines(self) -> List[str]:
        """Read non-blank, trimmed lines"""
        if not self.path.exists():
            return []

        try:
            text = self.path.read_text(encoding='utf-8')
        except OSError as e:
            raise StoreIOError(f"Failed to read config file: {e}") from e

        return [line.strip() for line in text.split("\n") if line.strip()]

    def _write_lines(self, lines: List[str]) -> None:
        """Rewrite the whole file, or truncate it when there are no lines"""
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_TRUNC | os.O_CREAT, CONFIG_FILE_MODE)
            with os.fdopen(fd, "w", encoding='utf-8') as f:
                if lines:
                    f.write("\n".join(lines) + "\n")
        except OSError as e:
            raise StoreIOError(f"Failed to update config file: {e}") from e

    def _parse(self, lines: List[str]) -> List[Tuple[int, ConnectionRecord]]:
        """Parse lines into (line number, record) pairs"""
        entries = []
        for lineno, line in enumerate(lines):
            try:
                entries.append((lineno, ConnectionRecord.from_line(line)))
            except ValidationError as e:
                logger.warning(f"Skipping line {lineno + 1} of {self.path}: {e}")
        return entries

    def load(self) -> List[ConnectionRecord]:
        """Load all records in file order"""
        return [record for _, record in self._parse(self._read_lines())]

    def get(self, index: int) -> ConnectionRecord:
        """Return the record at a position"""
        records = self.load()
        if index < 0 or index >= len(records):
            raise RecordIndexError(f"No connection at position {index}")
        return records[index]

    def append(self, record: ConnectionRecord) -> None:
        """
        Append a record.

        Raises:
            ValidationError: If the record is invalid (file untouched)
            StoreIOError: If the file cannot be opened or written
        """
        record.validate()

        try:
            fd = os.open(self.path, os.O_APPEND | os.O_RDWR | os.O_CREAT, CONFIG_FILE_MODE)
        except OSError as e:
            raise StoreIOError(f"Failed to open config file: {e}") from e

        try:
            with os.fdopen(fd, "a+b") as f:
                line = record.to_line() + "\n"
                # Keep the new record on its own line after a hand edit
                size = f.seek(0, os.SEEK_END)
                if size > 0:
                    f.seek(size - 1)
                    if f.read(1) != b"\n":
                        line = "\n" + line
                f.write(line.encode('utf-8'))
        except OSError as e:
            raise StoreIOError(f"Failed to save connection: {e}") from e

        logger.info(f"Appended connection '{record.name}' to {self.path}")

    def delete(self, index: int) -> ConnectionRecord:
        """
        Delete the record at a position and rewrite the file.

        Raises:
            RecordIndexError: If index is out of range (file untouched)
            StoreIOError: If the file cannot be read or rewritten
        """
        lines = self._read_lines()
        entries = self._parse(lines)
        if index < 0 or index >= len(entries):
            raise RecordIndexError(f"No connection at position {index}")

        lineno, record = entries[index]
        del lines[lineno]
        self._write_lines(lines)

        logger.info(f"Deleted connection '{record.name}' from {self.path}")
        return record
