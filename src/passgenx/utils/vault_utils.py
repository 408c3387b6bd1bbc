import os
import shutil
import logging
import secrets
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pendulum
import yaml

from passgenx.config.config_vault import *

logger = logging.getLogger(__name__)

# load_status values
LOAD_OK = "loaded"
LOAD_MISSING = "missing"
LOAD_CORRUPTED = "corrupted"
LOAD_PARTIAL = "partial"       # some hand-edited entries could not be used


class IdentifierStore:
    """
    Local vault of domain -> identifier mappings, kept in one YAML file.

    Identifiers are not secret; they only pick which password a domain and
    master secret produce. The file stays hand-editable: one
    `domain: identifier` line per entry.

    Usage:
        store = IdentifierStore.open()
        identifier = store.get_identifier("github.com")
        if identifier is None:
            identifier = store.generate_and_store("github.com")

    Known limitation:
        There is no file locking. Two processes writing the same vault at
        once race each other and the last writer wins.
    """

    def __init__(self, path: Path | str = VAULT_FILE):
        self.path = Path(path)
        self.load_status = LOAD_MISSING
        self._vault: Dict[str, str] = {}

    @classmethod
    def open(cls, path: Path | str = VAULT_FILE) -> "IdentifierStore":
        """
        Create the vault directory if needed and load the vault.

        A missing file gives an empty vault. A damaged file also gives an
        empty vault; the problem is logged and recorded in `load_status`
        instead of being raised.

        Raises:
            OSError: If the vault directory cannot be created.
        """
        store = cls(path)
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.load()
        return store

    @property
    def recovered_from_corruption(self) -> bool:
        return self.load_status == LOAD_CORRUPTED

    def load(self) -> str:
        """
        (Re)load the vault from disk.

        Returns:
            The resulting load status: 'loaded', 'missing', 'partial' or
            'corrupted'.
        """
        self._vault = {}

        if not self.path.exists():
            self.load_status = LOAD_MISSING
            return self.load_status

        try:
            with self.path.open("r", encoding=UTF8) as f:
                # BaseLoader keeps every scalar as text, so hand-typed ids
                # such as 0123 or 1e10 are not turned into numbers.
                data = yaml.load(f, Loader=yaml.BaseLoader)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            return self._mark_corrupted(f"Vault file could not be read or parsed: {e}")

        if data is None:
            # Empty file
            data = {}
        if not isinstance(data, dict):
            return self._mark_corrupted(
                f"Vault file must contain a mapping, found {type(data).__name__}"
            )

        self._vault, skipped = _clean_entries(data)
        self.load_status = LOAD_PARTIAL if skipped else LOAD_OK
        return self.load_status

    def get_identifier(self, domain: str) -> Optional[str]:
        """Return the stored identifier for domain, or None."""
        return self._vault.get(domain)

    def store_identifier(self, domain: str, identifier: str) -> None:
        """
        Insert or replace the identifier for domain and save the vault.

        Raises:
            OSError: If the vault cannot be written.
        """
        previous = dict(self._vault)
        self._vault[domain] = identifier
        try:
            self.save()
        except OSError:
            self._vault = previous
            raise

    def generate_and_store(self, domain: str) -> str:
        """
        Mint a random identifier for domain, store it and return it.

        Returns:
            16 lowercase hex characters from a cryptographically secure source.
        """
        identifier = secrets.token_hex(IDENTIFIER_BYTES)
        self.store_identifier(domain, identifier)
        return identifier

    def list_domains(self) -> List[str]:
        return list(self._vault)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._vault.items())

    def __contains__(self, domain) -> bool:
        return domain in self._vault

    def __len__(self) -> int:
        return len(self._vault)

    def save(self) -> None:
        """
        Write the whole vault to disk.

        Writes to a temporary file first and atomically replaces the vault.
        If the vault was loaded from a damaged file, or some of its entries
        had to be skipped, the file on disk is copied aside before it is
        overwritten so nothing hand-edited is lost.

        Raises:
            OSError: If the vault cannot be written.
        """
        if self.load_status in (LOAD_CORRUPTED, LOAD_PARTIAL) and self.path.exists():
            self._backup()

        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write to temporary file first.
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding=UTF8) as f:
            yaml.safe_dump(
                self._vault,
                f,
                explicit_start=True,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=True,
            )
            f.flush()
            os.fsync(f.fileno()) # force to disk

        # Atomic replace the vault file.
        os.replace(tmp, self.path)
        self.load_status = LOAD_OK

    def _mark_corrupted(self, msg: str) -> str:
        self._vault = {}
        self.load_status = LOAD_CORRUPTED
        now = pendulum.now().to_iso8601_string()
        logger.error(f"[{now}] {msg}. Continuing with an empty vault ({self.path}).\n")
        return self.load_status

    def _backup(self) -> Path:
        stamp = pendulum.now().format(DT_FORMAT_BACKUP)
        kind = "corrupt" if self.recovered_from_corruption else "backup"
        backup = self.path.with_name(f"{self.path.name}.{kind}-{stamp}")
        shutil.copy2(self.path, backup)
        now = pendulum.now().to_iso8601_string()
        logger.warning(f"[{now}] Vault ({self.load_status}) copied to {backup} before overwrite.\n")
        return backup


def _clean_entries(data: dict) -> Tuple[Dict[str, str], int]:
    """
    Keep only the usable entries of a hand-edited mapping.

    Entries with a complex key, an empty value or a nested value cannot be
    used and are dropped.

    Returns:
        (usable entries, number of entries dropped)
    """
    skipped = 0
    entries: Dict[str, str] = {}
    for domain, identifier in data.items():
        if not isinstance(domain, str) or not domain:
            _skip(domain, "unsupported domain key")
            skipped += 1
            continue
        if not isinstance(identifier, str) or not identifier:
            _skip(domain, "identifier must be a non-empty plain value")
            skipped += 1
            continue
        entries[domain] = identifier
    return entries, skipped


def _skip(domain, reason: str) -> None:
    now = pendulum.now().to_iso8601_string()
    logger.warning(f"[{now}] Skipping vault entry {domain!r}: {reason}\n")
