"""
Connection record models
"""
from dataclasses import dataclass

from ...core.constants import DEFAULT_SSH_PORT, MAX_PORT_DIGITS, RECORD_DELIMITER
from ...core.exceptions import ValidationError, RecordIndexError


def is_valid_port(port: str) -> bool:
    """Port is 1-5 ASCII digits"""
    return port.isascii() and port.isdigit() and 1 <= len(port) <= MAX_PORT_DIGITS


@dataclass
class ConnectionRecord:
    """One stored connection profile"""
    name: str
    user: str
    host: str
    port: str = DEFAULT_SSH_PORT

    @property
    def target(self) -> str:
        """user@host destination"""
        return f"{self.user}@{self.host}"

    def validate(self) -> None:
        """
        Validate record fields.

        Raises:
            ValidationError: If a required field is empty, contains the
                delimiter, or the port is not 1-5 digits
        """
        for label, value in (("Name", self.name), ("Username", self.user), ("Host", self.host)):
            if not value.strip():
                raise ValidationError(f"{label} cannot be empty")
            if RECORD_DELIMITER in value:
                raise ValidationError(f"{label} cannot contain '{RECORD_DELIMITER}'")
        if not is_valid_port(self.port):
            raise ValidationError("Invalid port number")

    def to_line(self) -> str:
        """Serialize as name|user|host|port"""
        return RECORD_DELIMITER.join((self.name, self.user, self.host, self.port))

    @classmethod
    def from_line(cls, line: str) -> "ConnectionRecord":
        """
        Parse one stored line.

        A line with three fields gets the default port. Fields past the
        fourth are ignored.

        Raises:
            ValidationError: If the line is malformed
        """
        parts = line.strip().split(RECORD_DELIMITER)
        if len(parts) < 3:
            raise ValidationError(f"Malformed record: {line!r}")

        port = parts[3] if len(parts) >= 4 else DEFAULT_SSH_PORT
        record = cls(name=parts[0], user=parts[1], host=parts[2], port=port)
        record.validate()
        return record

    @classmethod
    def create(cls, name: str, user: str, host: str, port: str = "") -> "ConnectionRecord":
        """Build a validated record from raw user input, defaulting the port"""
        port = port.strip()
        record = cls(
            name=name.strip(),
            user=user.strip(),
            host=host.strip(),
            port=port or DEFAULT_SSH_PORT,
        )
        record.validate()
        return record


def parse_selection(choice: str, count: int) -> int:
    """
    Turn a typed record number into a position.

    Raises:
        ValidationError: If the input is not a number
        RecordIndexError: If the number is outside 0..count-1
    """
    try:
        index = int(choice.strip())
    except ValueError:
        raise ValidationError("Invalid selection")
    if index < 0 or index >= count:
        raise RecordIndexError("Invalid selection")
    return index
