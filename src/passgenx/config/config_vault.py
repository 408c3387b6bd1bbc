# config_vault.py
"""
Configuration constants
"""
from pathlib import Path
# ==============================================================
# Version
# ==============================================================
# Software version
VERSION = "0.2.0"

# Derivation algorithm. Every password ever generated depends on it.
# Bump only together with a documented algorithm change.
ALGORITHM_VERSION = "sha256-ctr-v1"

# ==============================================================
# Vault settings
# ==============================================================
# Per-user directory holding the identifier vault and error log
BASE_DIR = Path.home() / ".passgenx"
VAULT_FILE = BASE_DIR / "vault.yml"

# Identifier used when neither the user nor the vault supplies one
DEFAULT_IDENTIFIER = "default"

# Random bytes per generated identifier (hex encoded -> 16 chars)
IDENTIFIER_BYTES = 8

# ==============================================================
# Logging
# ==============================================================
LOG_FILE = BASE_DIR / "error.log"
LOG_LEVEL = "WARNING"

# ==============================================================
# Password generation defaults
# ==============================================================
PASS_DEFAULTS = {
    "length": 16,                   # Default generated password length
    "min_length": 8,                # Bounds applied by the CLI, not the engine
    "max_length": 64,
    "case_type": "both",
    "include_symbols": True,
    "include_digits": True,
}
CASE_CHOICES = ("lower", "upper", "both")

# ==============================================================
# Clipboard security
# ==============================================================
CLIPBOARD_TIMEOUT = 30               # Seconds before auto-clear, 0 disables

# ==============================================================
# Display & formatting
# ==============================================================
UTF8 = "utf-8"
DT_FORMAT_BACKUP = "YYYY_MM_DD_HH_mm_ss"

# length of visible domain when listing the vault
DOMAIN_LEN = 30

# separator
SEP_LG = "=" * 50
SEP_SM = "-" * 50

# ==============================================================
# Optional: local overrides
# Local configuration file overrides standard config values.
# Create passgenx/config/config_local.py (never commit it), e.g.
#
#   from passgenx.config.config_vault import PASS_DEFAULTS
#   CLIPBOARD_TIMEOUT = 15
#   PASS_DEFAULTS["length"] = 24
# ==============================================================
try:
    from passgenx.config.config_local import *
except ImportError:
    pass  # No local config — use defaults above
