"""Rebuild single pages when their sibling markdown or markup files change."""

import asyncio
import logging
import pathlib
from typing import Dict, Iterable, List, Optional, Set, Tuple

from watchfiles import awatch

from .entries import Entry
from .generator import PageGenerator
from .paths import normalize_path

logger = logging.getLogger(__name__)

EntryTable = Dict[pathlib.PurePosixPath, Entry]


def build_entry_table(entries: Iterable[Entry]) -> EntryTable:
    """Map every existing sibling file to the entry it belongs to."""
    table: EntryTable = {}
    for entry in entries:
        for path in entry.sibling_paths:
            table[path] = entry
    return table


def watched_directories(table: EntryTable) -> List[pathlib.PurePosixPath]:
    """Distinct parent directories of the watched siblings, in table order."""
    return list(dict.fromkeys(path.parent for path in table))


def entries_for_changes(changes: Iterable[Tuple[object, str]], table: EntryTable) -> List[Entry]:
    """Entries affected by a batch of watchfiles changes.

    Each entry appears once, in the order its first change was seen. Paths
    that are not watched siblings are ignored.
    """
    affected: Dict[pathlib.PurePosixPath, Entry] = {}
    for _, raw_path in changes:
        entry = table.get(normalize_path(raw_path))
        if entry is not None and entry.script_path not in affected:
            affected[entry.script_path] = entry
    return list(affected.values())


class WatchController:
    """Watch each entry's siblings and regenerate only that entry's page.

    Watches sit on the siblings' directories rather than on the files, so a
    sibling replaced by rename (as many editors save) keeps being watched.
    A filter passes only the registered sibling paths.
    """

    def __init__(self, generator: PageGenerator, reporter=None, watch=awatch):
        self.generator = generator
        self.reporter = reporter or generator.reporter
        self._watch = watch
        self._stop_event = asyncio.Event()
        self.table: EntryTable = {}

    def register(self, entries: Iterable[Entry]) -> List[pathlib.PurePosixPath]:
        """Record the entries to watch and return the watched paths."""
        self.table = build_entry_table(entries)
        return list(self.table)

    @property
    def watched_paths(self) -> List[pathlib.PurePosixPath]:
        return list(self.table)

    def is_watched(self, change, path: str) -> bool:
        """``watch_filter`` for watchfiles: only registered siblings pass."""
        return normalize_path(path) in self.table

    def rebuild(self, entry: Entry) -> Optional[pathlib.Path]:
        """Regenerate one page. Failures are logged and do not propagate."""
        try:
            return self.generator.write(entry.refreshed())
        except Exception:
            logger.exception(f"Failed to rebuild {entry.script_path}")
            self.reporter.report("rebuild-failed", entry.script_path)
            return None

    async def handle_changes(self, changes: Set[Tuple[object, str]]) -> None:
        for entry in entries_for_changes(changes, self.table):
            logger.debug(f"Rebuilding {entry.output_path}")
            await asyncio.to_thread(self.rebuild, entry)

    async def _watch_directory(self, directory: pathlib.PurePosixPath) -> None:
        try:
            async for changes in self._watch(
                str(directory),
                watch_filter=self.is_watched,
                stop_event=self._stop_event,
            ):
                await self.handle_changes(changes)
        except Exception:
            logger.exception(f"Stopped watching {directory}")
            self.reporter.report("watch-failed", directory)

    async def run(self) -> None:
        """Watch all registered paths until :meth:`stop` is called.

        A watch that fails is reported and dropped; the others keep running.
        """
        directories = watched_directories(self.table)
        if not directories:
            return
        await asyncio.gather(*(self._watch_directory(d) for d in directories))

    def stop(self) -> None:
        self._stop_event.set()
