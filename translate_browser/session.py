from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol

from .cache import TranslationCache
from .debug import get_logger
from .dispatcher import RenameJob, RenameResult, ResultEvent, TranslationResult
from .filter_mixin import FilterMixin
from .formatting import format_error, format_rename_success
from .lister import DirectoryLister, Entry, ResolutionJob

NO_TRANSLATION_STATUS = "✗ Pas de traduction disponible"
RENAMING_STATUS = "Renommage en cours..."
INVALID_NAME_STATUS = "✗ Erreur: nom de fichier invalide"


class Mode(Enum):
    BROWSING = "browsing"
    CONFIRMING_RENAME = "confirming_rename"


@dataclass
class PendingRename:
    entry: Entry
    proposed: str
    in_flight: bool = False


class Dispatcher(Protocol):
    def submit_resolutions(self, jobs: List[ResolutionJob]) -> int: ...

    def submit_rename(self, job: RenameJob) -> None: ...


class BrowserSession(FilterMixin):
    """Browse / confirm-rename state machine.

    Owns the current path, the displayed entries, the mode and the status
    line. Every mutation happens through the methods below, called one at a
    time from the UI event loop; workers only ever hand back result events.
    """

    def __init__(
        self,
        lister: DirectoryLister,
        cache: TranslationCache,
        dispatcher: Dispatcher,
        start_path: str,
    ) -> None:
        self.lister = lister
        self.cache = cache
        self.dispatcher = dispatcher
        self.logr = get_logger("session")
        self.current_path: str = os.path.abspath(start_path)
        self.entries: List[Entry] = []
        self.mode: Mode = Mode.BROWSING
        self.status: str = ""
        self.rename: Optional[PendingRename] = None
        self.cursor: int = 0
        self._filter_text = ""

    # -------- Queries --------
    def visible_entries(self) -> List[Entry]:
        ft = self._filter_text.lower()
        if not ft:
            return list(self.entries)
        return [e for e in self.entries if ft in e.filter_value().lower()]

    def selected_entry(self) -> Optional[Entry]:
        visible = self.visible_entries()
        if 0 <= self.cursor < len(visible):
            return visible[self.cursor]
        return None

    def find_entry(self, name: str) -> Optional[Entry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def select(self, index: int) -> None:
        count = len(self.visible_entries())
        self.cursor = max(0, min(index, count - 1)) if count else 0

    def move_cursor(self, delta: int) -> None:
        self.select(self.cursor + delta)

    def _on_filter_changed(self) -> None:
        self.cursor = 0

    # -------- Browsing transitions --------
    def start(self) -> None:
        self.navigate_to(self.current_path)

    def navigate_to(self, path: str) -> None:
        listing = self.lister.list(path)
        self.current_path = path
        self.entries = listing.entries
        self.cursor = 0
        self._filter_text = ""
        self.status = "" if listing.ok else format_error(listing.error)
        self.logr.debug("navigate: path=%s entries=%d jobs=%d", path, len(listing.entries), len(listing.jobs))
        if listing.jobs:
            self.dispatcher.submit_resolutions(listing.jobs)

    def open_selected(self) -> bool:
        if self.mode is not Mode.BROWSING:
            return False
        entry = self.selected_entry()
        if entry is None or not entry.is_dir:
            return False
        self.navigate_to(entry.path)
        return True

    def go_parent(self) -> bool:
        if self.mode is not Mode.BROWSING:
            return False
        parent = os.path.dirname(self.current_path)
        if not parent or parent == self.current_path:
            return False
        self.navigate_to(parent)
        return True

    # -------- Rename transitions --------
    def request_rename(self, entry: Optional[Entry] = None) -> bool:
        if self.mode is not Mode.BROWSING:
            return False
        if entry is None:
            entry = self.selected_entry()
        if entry is None:
            return False
        translation = self.cache.get(entry.name)
        if not translation or translation == entry.name:
            self.status = NO_TRANSLATION_STATUS
            return False
        self.mode = Mode.CONFIRMING_RENAME
        self.rename = PendingRename(entry=entry, proposed=translation)
        self.status = ""
        return True

    def cancel_rename(self) -> bool:
        if self.mode is not Mode.CONFIRMING_RENAME or self.rename is None:
            return False
        if self.rename.in_flight:
            return False
        self.mode = Mode.BROWSING
        self.rename = None
        self.status = ""
        return True

    def confirm_rename(self, edited: str = "") -> Optional[RenameJob]:
        pending = self.rename
        if self.mode is not Mode.CONFIRMING_RENAME or pending is None or pending.in_flight:
            return None
        new_name = edited or pending.proposed
        if os.sep in new_name or (os.altsep and os.altsep in new_name) or new_name in (".", ".."):
            self.status = INVALID_NAME_STATUS
            return None
        source = pending.entry.path
        job = RenameJob(source, os.path.join(os.path.dirname(source), new_name))
        pending.in_flight = True
        self.status = RENAMING_STATUS
        self.dispatcher.submit_rename(job)
        return job

    # -------- Result events --------
    def handle_event(self, event: ResultEvent) -> Optional[Entry]:
        """Merge a worker result; returns the entry that changed, if any."""
        if isinstance(event, TranslationResult):
            return self.apply_translation(event)
        if isinstance(event, RenameResult):
            self.apply_rename(event)
            return None
        raise TypeError(f"unsupported result event: {event!r}")

    def apply_translation(self, result: TranslationResult) -> Optional[Entry]:
        if result.directory != self.current_path:
            self.logr.debug(
                "stale result dropped: name=%s listed_in=%s current=%s",
                result.name,
                result.directory,
                self.current_path,
            )
            return None
        entry = self.find_entry(result.name)
        if entry is None:
            self.logr.debug("result without entry dropped: name=%s path=%s", result.name, self.current_path)
            return None
        entry.apply_translation(result.translation)
        return entry

    def apply_rename(self, result: RenameResult) -> None:
        self.mode = Mode.BROWSING
        self.rename = None
        if not result.success:
            self.logr.warning("rename failed: %s -> %s: %s", result.source, result.destination, result.error)
            self.status = format_error(result.error)
            return
        self.logr.info("renamed %s -> %s", result.source, result.destination)
        self.navigate_to(self.current_path)
        new_name = os.path.basename(result.destination)
        for idx, entry in enumerate(self.visible_entries()):
            if entry.name == new_name:
                self.cursor = idx
                break
        self.status = format_rename_success(result.source, result.destination)
