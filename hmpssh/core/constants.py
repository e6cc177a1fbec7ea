"""
Project constants definitions
"""

# ============================================================
# Paths
# ============================================================

DEFAULT_SSH_DIR = "~/.ssh"
DEFAULT_BACKUP_DIR = "~/ssh_backup"
DEFAULT_SETTINGS_PATH = "~/.config/hmpssh/config.toml"

CONFIG_FILE_NAME = "connections.conf"
PRIVATE_KEY_NAME = "id_rsa"
PUBLIC_KEY_NAME = "id_rsa.pub"

SSH_DIR_MODE = 0o700
CONFIG_FILE_MODE = 0o600

PROJECT_URL = "https://github.com/thxrhmn/hmpssh"
BANNER_TEXT = "Hmpssh"

# ============================================================
# Record Format
# ============================================================

RECORD_DELIMITER = "|"
DEFAULT_SSH_PORT = "22"
MAX_PORT_DIGITS = 5

# ============================================================
# Presentation
# ============================================================

BASE_COLUMN_WIDTH = 30
BORDER_PADDING = 2
COLUMN_WIDTH = BASE_COLUMN_WIDTH + BORDER_PADDING
MAX_COLUMNS = 3
FALLBACK_TERMINAL_WIDTH = 80

# ============================================================
# External Tools
# ============================================================

SSH_BINARY = "ssh"
SSH_KEYGEN_BINARY = "ssh-keygen"
SSH_COPY_ID_BINARY = "ssh-copy-id"
SSH_AGENT_BINARY = "ssh-agent"
SSH_ADD_BINARY = "ssh-add"
TAR_BINARY = "tar"

KEY_TYPE = "rsa"
KEY_BITS = "4096"

AUTH_SOCK_ENV = "SSH_AUTH_SOCK"
AGENT_PID_ENV = "SSH_AGENT_PID"

# ============================================================
# Backup
# ============================================================

BACKUP_PREFIX = "ssh_config_backup_"
BACKUP_SUFFIX = ".tar.gz"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
