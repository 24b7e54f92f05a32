from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from common.errors import MissingValueError
from common.ssm_store import SECURE_STRING, PageToken, ParameterStore


logger = logging.getLogger(__name__)


class MigrationDriver:
    """
    Walks every parameter under a path and rewrites it as SecureString.

    - Pages are fetched recursively with decryption, one call at a time, and
      entries are handled in the order the store returns them.
    - Dry run prints what would change and never writes.
    - Live run writes each entry back with the same name and value, type
      SecureString, Overwrite=True. Entries that are already SecureString are
      rewritten too.
    - The first failure aborts the run; nothing is retried or skipped.

    `processed` holds the number of entries visited by the latest `run`,
    including after an aborted one.
    """

    def __init__(self, store: ParameterStore, *, out: Optional[TextIO] = None) -> None:
        self._store = store
        self._out = out
        self.processed = 0

    def _echo(self, line: str) -> None:
        print(line, file=self._out or sys.stdout)

    def run(self, path_prefix: str, dry_run: bool) -> int:
        """Migrate everything below `path_prefix`; returns the number of entries visited.

        Raises StoreError if a fetch or write fails and MissingValueError if a
        live run meets an entry without a decrypted value.
        """
        self.processed = 0
        next_token: Optional[PageToken] = None

        self._echo(f"🔎 Fetching parameters from {path_prefix}")

        while True:
            page = self._store.fetch_page(
                path_prefix, recursive=True, with_decryption=True, next_token=next_token
            )

            # Item count wins over the token: an empty page ends the walk
            if not page.parameters:
                if page.next_token:
                    logger.warning("Empty page returned with a continuation token; stopping")
                self._echo("⚠️ No parameters found in this batch.")
                break

            for param in page.parameters:
                self._echo(f"➡️ Found {param.name} (Type: {param.type})")

                if dry_run:
                    self.processed += 1
                    self._echo(f"   🟡 Would convert {param.name} to {SECURE_STRING}")
                    continue

                if not param.value:
                    raise MissingValueError(param.name)

                self.processed += 1
                version = self._store.write_parameter(
                    param.name, param.value, type=SECURE_STRING, overwrite=True
                )
                logger.debug("Wrote %s as version %s", param.name, version)
                self._echo(f"   ✅ Converted {param.name} to {SECURE_STRING}")

            next_token = page.next_token
            if not next_token:
                break

        if dry_run:
            self._echo(f"🟡 Dry-run complete. Total parameters scanned: {self.processed}")
        else:
            self._echo(f"🎉 Migration complete! Total parameters converted: {self.processed}")
        return self.processed
