"""
In-memory table catalog.

Synthesizers only read from the catalog; registering new tables is the
caller's job once a CREATE TABLE has been produced.
"""
import logging
import threading
from typing import Dict, Iterable, List, Optional

from sqlsynth.core.schema import Table

logger = logging.getLogger(__name__)


class Catalog:
    """Registry of known tables, kept in insertion order."""

    def __init__(self, tables: Optional[Iterable[Table]] = None):
        self._tables: Dict[str, Table] = {}
        self._lock = threading.RLock()
        for table in tables or ():
            self.add_table(table)

    def add_table(self, table: Table) -> None:
        with self._lock:
            if table.name in self._tables:
                logger.debug("Replacing table %s in catalog", table.name)
            self._tables[table.name] = table

    def all_tables(self) -> List[Table]:
        """Ordered snapshot of the registered tables."""
        with self._lock:
            return list(self._tables.values())

    def lookup(self, name: str) -> Optional[Table]:
        with self._lock:
            return self._tables.get(name)

    def table_names(self) -> List[str]:
        with self._lock:
            return list(self._tables.keys())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tables

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)
