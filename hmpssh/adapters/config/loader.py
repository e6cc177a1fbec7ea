"""
Settings loader with priority: env > TOML > defaults
"""
import os
import tomllib
from pathlib import Path
from typing import Dict, Any, Mapping, Optional

from ...core.constants import DEFAULT_SETTINGS_PATH
from ...core.exceptions import StartupError
from ...core.logging import get_logger
from ...core.settings import Settings

logger = get_logger(__name__)

SETTINGS_KEYS = ("ssh_dir", "backup_dir")


class ConfigLoader:
    """Configuration loader with priority support"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._env_prefix = "HMPSSH_"
        self._environ = os.environ if environ is None else environ

    def settings_path(self) -> Path:
        """Location of the optional TOML settings file"""
        return Path(self._environ.get(f"{self._env_prefix}CONFIG", DEFAULT_SETTINGS_PATH)).expanduser()

    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML settings file"""
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        try:
            data = tomllib.loads(path.read_text(encoding='utf-8'))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise StartupError(f"Failed to parse settings file {path}: {e}") from e

        unknown = set(data) - set(SETTINGS_KEYS)
        if unknown:
            logger.warning(f"Ignoring unknown settings in {path}: {', '.join(sorted(unknown))}")
        return {key: str(data[key]) for key in SETTINGS_KEYS if key in data}

    def load_env(self) -> Dict[str, Any]:
        """Load settings from environment variables"""
        config = {}
        for key in SETTINGS_KEYS:
            value = self._environ.get(f"{self._env_prefix}{key.upper()}")
            if value:
                config[key] = value
        return config

    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones.
        """
        result: Dict[str, Any] = {}
        for config in configs:
            result.update(config)
        return result

    def load(self, home: Optional[Path] = None) -> Settings:
        """
        Resolve settings: env > TOML > defaults.

        Args:
            home: Home directory for the defaults (default: current user's)

        Returns:
            Settings

        Raises:
            StartupError: If the home directory cannot be determined or the
                settings file is invalid
        """
        if home is None:
            home = resolve_home()
        defaults = Settings.for_home(home)

        configs = [{
            "ssh_dir": str(defaults.ssh_dir),
            "backup_dir": str(defaults.backup_dir),
        }]

        toml_path = self.settings_path()
        if toml_path.exists():
            configs.append(self.load_toml(toml_path))

        env_config = self.load_env()
        if env_config:
            configs.append(env_config)

        merged = self.merge_configs(*configs)
        return Settings(
            ssh_dir=Path(merged["ssh_dir"]).expanduser(),
            backup_dir=Path(merged["backup_dir"]).expanduser(),
        )


def resolve_home() -> Path:
    """
    Current user's home directory.

    Raises:
        StartupError: If it cannot be determined
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise StartupError(f"Cannot resolve home directory: {e}") from e


def load_settings(environ: Optional[Mapping[str, str]] = None, home: Optional[Path] = None) -> Settings:
    """Load settings from the environment and the optional settings file"""
    return ConfigLoader(environ).load(home=home)
