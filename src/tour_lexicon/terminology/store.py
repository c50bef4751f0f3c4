"""
Persisted alias table.

The table lives in a single JSON file and is unique on ``alias_normalized``.
Reads always go to disk so a resolver reload picks up a re-seeded table.
"""

import json
import logging
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from .models import AliasRecord

logger = logging.getLogger("tour-lexicon")


class AliasStoreError(Exception):
    """Raised when the alias table cannot be read or written."""


class AliasTable:
    """In-memory alias rows keyed by ``alias_normalized``, in insertion order.

    Enforces the table's uniqueness constraint: inserting a row whose key is
    already present leaves the existing row in place.
    """

    def __init__(self, records: list[AliasRecord] | None = None) -> None:
        self._rows: dict[str, AliasRecord] = {}
        for record in records or []:
            self.insert(record)

    def insert(self, record: AliasRecord) -> AliasRecord | None:
        """Insert a row unless its key already exists.

        Returns:
            None if inserted, otherwise the existing row holding the key
        """
        existing = self._rows.get(record.alias_normalized)
        if existing is not None:
            return existing
        self._rows[record.alias_normalized] = record
        return None

    def get(self, alias_normalized: str) -> AliasRecord | None:
        return self._rows.get(alias_normalized)

    def records(self) -> list[AliasRecord]:
        """Rows in insertion order."""
        return list(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[AliasRecord]:
        return iter(self._rows.values())

    def __contains__(self, alias_normalized: object) -> bool:
        return alias_normalized in self._rows


class AliasStore:
    """JSON file holding the alias table.

    File format:
        {"aliases": [{"term_id": ..., "alias_raw": ..., "alias_normalized": ...,
                      "token_len": ..., "is_canonical": ...}, ...]}

    A missing file is an empty table.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read_records(self) -> list[AliasRecord]:
        """Read all rows from disk.

        Raises:
            AliasStoreError: If the file is unreadable, not JSON, or holds invalid rows
        """
        if not self.path.exists():
            logger.debug(f"Alias table {self.path} not found, treating as empty")
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise AliasStoreError(f"Failed to read alias table {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("aliases"), list):
            raise AliasStoreError(f"Alias table {self.path} must contain an 'aliases' list")

        try:
            return [AliasRecord(**row) for row in data["aliases"]]
        except (TypeError, ValidationError) as e:
            raise AliasStoreError(f"Invalid row in alias table {self.path}: {e}") from e

    def read_table(self) -> AliasTable:
        return AliasTable(self.read_records())

    def write_table(self, table: AliasTable) -> None:
        """Replace the file contents atomically (write to temp, then rename)."""
        payload = {"aliases": [record.model_dump() for record in table]}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.path.with_suffix(".tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            temp_file.replace(self.path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise AliasStoreError(f"Failed to write alias table {self.path}: {e}") from e
        logger.debug(f"Wrote {len(table)} alias rows to {self.path}")
