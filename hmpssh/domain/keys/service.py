"""
Key management service - ssh-keygen and ssh-copy-id bridge
"""
from typing import List, Optional

import paramiko
from paramiko.pkey import UnknownKeyType
from paramiko.ssh_exception import SSHException

from ...core.constants import (
    KEY_BITS,
    KEY_TYPE,
    SSH_COPY_ID_BINARY,
    SSH_DIR_MODE,
    SSH_KEYGEN_BINARY,
)
from ...core.exceptions import KeyGenerationError, KeyInstallError
from ...core.interfaces import ProcessRunner
from ...core.logging import get_logger
from ...core.settings import Settings

logger = get_logger(__name__)


class KeyService:
    """
    Owns the single key pair at settings.key_path.

    Key material is never handled here; generation and installation are
    delegated to ssh-keygen and ssh-copy-id with the user's terminal attached.
    """

    def __init__(self, settings: Settings, runner: ProcessRunner):
        self.settings = settings
        self.runner = runner

    def key_exists(self) -> bool:
        """Check if the private key file exists"""
        return self.settings.key_path.exists()

    def build_keygen_command(self, interactive: bool) -> List[str]:
        """ssh-keygen argument vector; unattended runs get an empty passphrase"""
        cmd = [
            SSH_KEYGEN_BINARY,
            "-t", KEY_TYPE,
            "-b", KEY_BITS,
            "-f", str(self.settings.key_path),
        ]
        if not interactive:
            cmd += ["-N", ""]
        return cmd

    def build_copy_id_command(self, user: str, host: str, port: str) -> List[str]:
        """ssh-copy-id argument vector"""
        return [
            SSH_COPY_ID_BINARY,
            "-i", str(self.settings.key_path),
            "-p", port,
            f"{user}@{host}",
        ]

    def ensure_key_pair(self, force_regenerate: bool = False, interactive: bool = False) -> bool:
        """
        Generate the key pair if it is missing.

        Args:
            force_regenerate: Run ssh-keygen even if the key exists. The
                caller is responsible for asking the user first; ssh-keygen
                itself confirms the overwrite on the terminal.
            interactive: Let ssh-keygen prompt for a passphrase

        Returns:
            True if ssh-keygen ran successfully, False if nothing was done

        Raises:
            KeyGenerationError: If ssh-keygen fails
        """
        if self.key_exists() and not force_regenerate:
            logger.debug(f"Key already present at {self.settings.key_path}")
            return False

        self.settings.ssh_dir.mkdir(mode=SSH_DIR_MODE, parents=True, exist_ok=True)

        result = self.runner.handoff(self.build_keygen_command(interactive))
        if not result.success:
            raise KeyGenerationError(
                "Failed to generate SSH key",
                tool=SSH_KEYGEN_BINARY,
                exit_code=result.exit_code,
            )

        logger.info(f"Generated key pair at {self.settings.key_path}")
        return True

    def install_public_key(self, user: str, host: str, port: str) -> None:
        """
        Copy the public key to user@host.

        Raises:
            KeyInstallError: If ssh-copy-id fails
        """
        result = self.runner.handoff(self.build_copy_id_command(user, host, port))
        if not result.success:
            raise KeyInstallError(
                "Failed to copy SSH key to host",
                tool=SSH_COPY_ID_BINARY,
                exit_code=result.exit_code,
            )
        logger.info(f"Installed public key on {user}@{host}:{port}")

    def describe_public_key(self) -> Optional[str]:
        """
        Summarize the public key as "<type> SHA256:<fingerprint>".

        Returns:
            Description, or None if the public key is missing or unreadable
        """
        pub_path = self.settings.public_key_path
        if not pub_path.exists():
            return None

        try:
            blob = paramiko.PublicBlob.from_file(str(pub_path))
            key = paramiko.PKey.from_type_string(blob.key_type, blob.key_blob)
        except (OSError, ValueError, SSHException, UnknownKeyType) as e:
            logger.warning(f"Cannot read public key {pub_path}: {e}")
            return None

        return f"{blob.key_type} {key.fingerprint}"
