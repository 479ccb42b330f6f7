# -*- coding: utf-8 -*-
"""
Conversion History Store

Bounded FIFO log of conversions, persisted after every mutation.

On-disk format (one record per line):

    <from>,<to>,<value>,<result>,<unix_seconds>

``value`` and ``result`` carry up to eight significant digits. Lines that
do not have this five-field shape are skipped on load.

Persistence failures are logged and remembered in ``last_error``; they
never raise and never block a conversion. The in-memory log stays
authoritative.
"""

import csv
import logging
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from unitconv.config import MAX_HISTORY
from unitconv.exceptions import PersistenceIOError
from unitconv.models import HistoryEntry

logger = logging.getLogger(__name__)

CSV_HEADER = ["From", "To", "Value", "Result", "Timestamp"]


class HistoryStore:
    """
    Durable, bounded, ordered log of conversions.

    Single writer: the order of ``append`` calls is the order on disk.

    Example:
        >>> store = HistoryStore("conversion_history.txt")
        >>> store.load()
        0
        >>> entry = store.append("km", "m", 1.0, 1000.0)
        >>> len(store)
        1
    """

    def __init__(
        self,
        path: Union[str, Path],
        max_entries: int = MAX_HISTORY,
        clock: Callable[[], float] = time.time,
    ):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.path = Path(path)
        self.max_entries = max_entries
        self._clock = clock
        self._entries: List[HistoryEntry] = []
        self.last_error: Optional[PersistenceIOError] = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def entries(self) -> List[HistoryEntry]:
        """Snapshot of the log, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def append(self, from_symbol: str, to_symbol: str, value: float, result: float) -> HistoryEntry:
        """Record a conversion, evicting the oldest entry when full, then persist."""
        entry = HistoryEntry(
            from_symbol=from_symbol,
            to_symbol=to_symbol,
            value=value,
            result=result,
            timestamp=int(self._clock()),
        )
        if len(self._entries) >= self.max_entries:
            evicted = self._entries.pop(0)
            logger.debug("History full, evicted %s", evicted.to_line())
        self._entries.append(entry)
        self.persist()
        return entry

    def clear(self) -> None:
        """Empty the log, then persist."""
        self._entries.clear()
        logger.info("History cleared")
        self.persist()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> int:
        """Replace the in-memory log with the contents of the history file.

        A missing file is not an error. Malformed lines are skipped.
        Reading stops once ``max_entries`` entries are loaded.

        Returns:
            Number of entries loaded.
        """
        self._entries = []
        if not self.path.exists():
            logger.debug("No history file at %s", self.path)
            return 0

        skipped = 0
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    if len(self._entries) >= self.max_entries:
                        break
                    entry = HistoryEntry.from_line(line)
                    if entry is None:
                        skipped += 1
                        continue
                    self._entries.append(entry)
        except OSError as e:
            self._report(PersistenceIOError(self.path, "read", str(e)))
            return len(self._entries)

        if skipped:
            logger.warning("Skipped %d malformed line(s) in %s", skipped, self.path)
        logger.info("Loaded %d history entries from %s", len(self._entries), self.path)
        return len(self._entries)

    def persist(self) -> bool:
        """Rewrite the whole history file.

        Returns:
            True on success, False if the file could not be written.
        """
        try:
            with open(self.path, "w", encoding="utf-8", newline="\n") as f:
                for entry in self._entries:
                    f.write(entry.to_line() + "\n")
        except OSError as e:
            self._report(PersistenceIOError(self.path, "save history to", str(e)))
            return False
        self.last_error = None
        logger.debug("Persisted %d history entries to %s", len(self._entries), self.path)
        return True

    def export_csv(self, path: Union[str, Path]) -> bool:
        """Write the log as CSV with a local-time timestamp column.

        Returns:
            True on success, False if the file could not be written.
        """
        path = Path(path)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerow(CSV_HEADER)
                for entry in self._entries:
                    writer.writerow([
                        entry.from_symbol,
                        entry.to_symbol,
                        f"{entry.value:.8g}",
                        f"{entry.result:.8g}",
                        entry.local_time(),
                    ])
        except OSError as e:
            self._report(PersistenceIOError(path, "create CSV file", str(e)))
            return False
        self.last_error = None
        logger.info("Exported %d history entries to %s", len(self._entries), path)
        return True

    def _report(self, error: PersistenceIOError) -> None:
        self.last_error = error
        logger.warning("%s", error.message)
