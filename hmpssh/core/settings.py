"""
Resolved runtime settings
"""
from dataclasses import dataclass
from pathlib import Path

from .constants import (
    CONFIG_FILE_NAME,
    PRIVATE_KEY_NAME,
    PUBLIC_KEY_NAME,
    PROJECT_URL,
)


@dataclass
class Settings:
    """Filesystem locations used by every component"""
    ssh_dir: Path
    backup_dir: Path
    project_url: str = PROJECT_URL

    @property
    def config_file(self) -> Path:
        return self.ssh_dir / CONFIG_FILE_NAME

    @property
    def key_path(self) -> Path:
        return self.ssh_dir / PRIVATE_KEY_NAME

    @property
    def public_key_path(self) -> Path:
        return self.ssh_dir / PUBLIC_KEY_NAME

    @classmethod
    def for_home(cls, home: Path) -> "Settings":
        """Default layout below a home directory"""
        return cls(ssh_dir=home / ".ssh", backup_dir=home / "ssh_backup")
