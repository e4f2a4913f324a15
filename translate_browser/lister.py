from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from .cache import TranslationCache
from .debug import get_logger
from .formatting import format_label, format_pending_label

HIDDEN_PREFIX = "."


class DisplayItem(Protocol):
    """What the list view needs from anything it shows."""

    def title(self) -> str: ...

    def description(self) -> str: ...

    def filter_value(self) -> str: ...


@dataclass
class Entry:
    name: str
    path: str
    is_dir: bool
    label: str
    resolving: bool = False

    def title(self) -> str:
        if self.resolving:
            return f"{self.name} ⏳"
        if self.is_dir:
            return f"{self.name} 📁"
        return self.name

    def description(self) -> str:
        return self.label

    def filter_value(self) -> str:
        return self.name

    def apply_translation(self, translation: str) -> None:
        self.label = format_label(self.is_dir, translation)
        self.resolving = False


@dataclass(frozen=True)
class ResolutionJob:
    name: str
    directory: str


@dataclass
class Listing:
    path: str
    entries: List[Entry] = field(default_factory=list)
    jobs: List[ResolutionJob] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def read_directory(path: str) -> List[Tuple[str, bool]]:
    """Return ``(name, is_dir)`` for the direct children of ``path``, sorted by name."""
    children: List[Tuple[str, bool]] = []
    with os.scandir(path) as it:
        for item in it:
            try:
                is_dir = item.is_dir()
            except OSError:
                is_dir = False
            children.append((item.name, is_dir))
    children.sort(key=lambda child: child[0])
    return children


class DirectoryLister:
    def __init__(self, cache: TranslationCache) -> None:
        self.cache = cache
        self.logr = get_logger("lister")

    def list(self, path: str) -> Listing:
        try:
            children = read_directory(path)
        except OSError as exc:
            self.logr.warning("cannot read directory %s: %s", path, exc)
            return Listing(path=path, error=str(exc))

        listing = Listing(path=path)
        for name, is_dir in children:
            if name.startswith(HIDDEN_PREFIX):
                continue
            cached = self.cache.get(name)
            full = os.path.join(path, name)
            if cached is not None:
                entry = Entry(name, full, is_dir, format_label(is_dir, cached), resolving=False)
            else:
                entry = Entry(name, full, is_dir, format_pending_label(is_dir), resolving=True)
                listing.jobs.append(ResolutionJob(name, path))
            listing.entries.append(entry)
        self.logr.debug("list: path=%s entries=%d pending=%d", path, len(listing.entries), len(listing.jobs))
        return listing
