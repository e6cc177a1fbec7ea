"""
Backup service - tar bridge for the ssh directory
"""
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from ...core.constants import (
    BACKUP_PREFIX,
    BACKUP_SUFFIX,
    BACKUP_TIMESTAMP_FORMAT,
    CONFIG_FILE_NAME,
    PRIVATE_KEY_NAME,
    PUBLIC_KEY_NAME,
    SSH_DIR_MODE,
    TAR_BINARY,
)
from ...core.exceptions import BackupError, BackupNotFoundError, RestoreError
from ...core.interfaces import ProcessRunner
from ...core.logging import get_logger
from ...core.settings import Settings

logger = get_logger(__name__)

ARCHIVE_MEMBERS = (CONFIG_FILE_NAME, PRIVATE_KEY_NAME, PUBLIC_KEY_NAME)


@dataclass
class BackupResult:
    """Created archive and what went into it"""
    archive: Path
    members: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class BackupService:
    """Snapshots and restores connections.conf and the key pair"""

    def __init__(self, settings: Settings, runner: ProcessRunner):
        self.settings = settings
        self.runner = runner

    def archive_path(self, now: Optional[datetime] = None) -> Path:
        """Timestamped archive path under the backup directory"""
        now = now or datetime.now()
        name = f"{BACKUP_PREFIX}{now.strftime(BACKUP_TIMESTAMP_FORMAT)}{BACKUP_SUFFIX}"
        return self.settings.backup_dir / name

    def backup(self, now: Optional[datetime] = None) -> BackupResult:
        """
        Archive the config file and whichever key files exist.

        Args:
            now: Timestamp for the archive name (default: current time)

        Returns:
            BackupResult

        Raises:
            BackupError: If the config file is missing or tar fails
        """
        ssh_dir = self.settings.ssh_dir
        if not (ssh_dir / CONFIG_FILE_NAME).exists():
            raise BackupError(f"Config file not found: {ssh_dir / CONFIG_FILE_NAME}", tool=TAR_BINARY)

        members = [name for name in ARCHIVE_MEMBERS if (ssh_dir / name).exists()]
        skipped = [name for name in ARCHIVE_MEMBERS if name not in members]
        for name in skipped:
            logger.warning(f"Backup skips missing {ssh_dir / name}")

        archive = self.archive_path(now)
        try:
            archive.parent.mkdir(mode=SSH_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise BackupError(f"Cannot create backup directory: {e}", tool=TAR_BINARY) from e

        cmd = [TAR_BINARY, "-czf", str(archive), "-C", str(ssh_dir), *members]
        result = self.runner.capture(cmd)
        if not result.success:
            raise BackupError(
                f"Failed to create backup: {result.stderr.strip() or f'exit status {result.exit_code}'}",
                tool=TAR_BINARY,
                exit_code=result.exit_code,
            )

        logger.info(f"Wrote backup {archive} ({', '.join(members)})")
        return BackupResult(archive=archive, members=members, skipped=skipped)

    def restore(self, path: Union[str, Path]) -> None:
        """
        Extract an archive into the ssh directory.

        Archive members are not inspected before extraction.

        Raises:
            BackupNotFoundError: If path does not exist
            RestoreError: If tar fails
        """
        archive = Path(path).expanduser()
        if not str(path).strip() or not archive.exists():
            raise BackupNotFoundError("Backup file not found", tool=TAR_BINARY)

        ssh_dir = self.settings.ssh_dir
        try:
            ssh_dir.mkdir(mode=SSH_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise RestoreError(f"Cannot create {ssh_dir}: {e}", tool=TAR_BINARY) from e

        result = self.runner.capture([TAR_BINARY, "-xzf", str(archive), "-C", str(ssh_dir)])
        if not result.success:
            raise RestoreError(
                f"Failed to restore backup: {result.stderr.strip() or f'exit status {result.exit_code}'}",
                tool=TAR_BINARY,
                exit_code=result.exit_code,
            )

        logger.info(f"Restored {archive} into {ssh_dir}")
