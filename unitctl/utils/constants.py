"""Library constants and default paths."""

import os

# Library metadata
APP_NAME = "unitctl"
APP_VERSION = "1.0.0"

# Paths (expanded when used, so an unknown home never breaks import)
CONFIG_DIR = os.path.join("~", ".config", APP_NAME)
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.yaml")
CONFIG_ENV = "UNITCTL_CONFIG"

# Executables (overridable per instance, through the environment or the config file)
SYSTEMCTL_EXEC = "systemctl"
JOURNALCTL_EXEC = "journalctl"
SYSTEMCTL_ENV = "UNITCTL_SYSTEMCTL"
JOURNALCTL_ENV = "UNITCTL_JOURNALCTL"

# Unit file locations
DEFAULT_SERVICES_DIR = "/etc/systemd/system/"
USER_SERVICES_DIR = ".local/share/systemd/user/"
SERVICE_EXT = ".service"

# Default settings
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_JOURNAL_LINES = "20"
STREAM_CLOSE_TIMEOUT = 5  # seconds to wait after terminate before killing

# systemctl status exit codes (LSB semantics)
EXIT_UNIT_UNUSED = 2
EXIT_UNIT_NOT_ACTIVE = 3
EXIT_NO_SUCH_UNIT = 4
