from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from translate_browser.cache import TranslationCache
from translate_browser.dispatcher import RenameJob
from translate_browser.lister import DirectoryLister, ResolutionJob
from translate_browser.resolver import NameResolver
from translate_browser.session import BrowserSession


class FakeTranslator:
    """Translates from a fixed table and records every call."""

    def __init__(self, table: Optional[Dict[str, str]] = None) -> None:
        self.table = dict(table or {})
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def translate(self, text: str, source: str, target: str) -> str:
        with self._lock:
            self.calls.append((text, source, target))
        return self.table.get(text, f"{text}-fr")


class ExplodingTranslator:
    def __init__(self, exc: BaseException = RuntimeError("backend exploded")) -> None:
        self.exc = exc
        self.calls = 0

    def translate(self, text: str, source: str, target: str) -> str:
        self.calls += 1
        raise self.exc


class RecordingDispatcher:
    """Keeps jobs instead of running them so tests control delivery order."""

    def __init__(self) -> None:
        self.resolutions: List[ResolutionJob] = []
        self.renames: List[RenameJob] = []

    def submit_resolutions(self, jobs) -> int:
        jobs = list(jobs)
        self.resolutions.extend(jobs)
        return len(jobs)

    def submit_rename(self, job: RenameJob) -> None:
        self.renames.append(job)


@pytest.fixture()
def cache() -> TranslationCache:
    return TranslationCache()


@pytest.fixture()
def translator() -> FakeTranslator:
    return FakeTranslator({"report": "rapport", "notes": "remarques"})


@pytest.fixture()
def resolver(cache: TranslationCache, translator: FakeTranslator) -> NameResolver:
    return NameResolver(cache, translator=translator)


@pytest.fixture()
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def tree(tmp_path: Path) -> Path:
    """``root/{alpha/{report.txt,notes.md}, beta/{Desktop/}, report.txt, .hidden}``."""
    (tmp_path / "alpha").mkdir()
    (tmp_path / "alpha" / "report.txt").write_text("a", encoding="utf-8")
    (tmp_path / "alpha" / "notes.md").write_text("n", encoding="utf-8")
    (tmp_path / "beta").mkdir()
    (tmp_path / "beta" / "Desktop").mkdir()
    (tmp_path / "report.txt").write_text("r", encoding="utf-8")
    (tmp_path / ".hidden").write_text("h", encoding="utf-8")
    return tmp_path


@pytest.fixture()
def session(tree: Path, cache: TranslationCache, dispatcher: RecordingDispatcher) -> BrowserSession:
    s = BrowserSession(DirectoryLister(cache), cache, dispatcher, str(tree))
    s.start()
    return s
