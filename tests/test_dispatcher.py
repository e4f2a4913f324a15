"""Tests for job scheduling and the rename operation."""

from __future__ import annotations

import queue

from translate_browser.cache import TranslationCache
from translate_browser.dispatcher import (
    JobDispatcher,
    RenameJob,
    RenameResult,
    TranslationResult,
    rename_path,
)
from translate_browser.lister import ResolutionJob
from translate_browser.resolver import NameResolver

from .conftest import FakeTranslator


def _drain(events: "queue.Queue", count: int) -> list:
    return [events.get(timeout=10) for _ in range(count)]


def test_concurrent_resolutions_fill_cache_completely() -> None:
    cache = TranslationCache()
    translator = FakeTranslator()
    resolver = NameResolver(cache, translator=translator)
    events: "queue.Queue" = queue.Queue()
    dispatcher = JobDispatcher(resolver, post=events.put, max_workers=8)
    names = [f"document{chr(97 + i % 26)}{chr(97 + i // 26)}.txt" for i in range(60)]

    try:
        assert dispatcher.submit_resolutions(ResolutionJob(n, "/docs") for n in names) == 60
        results = _drain(events, 60)
    finally:
        dispatcher.shutdown()

    assert all(isinstance(r, TranslationResult) for r in results)
    assert {r.name for r in results} == set(names)
    expected = {n: f"{n[:-4]}-fr.txt" for n in names}
    assert cache.snapshot() == expected
    assert {r.name: r.translation for r in results} == expected


def test_custom_spawn_receives_group_names() -> None:
    spawned = []
    posted = []
    resolver = NameResolver(TranslationCache(), translator=FakeTranslator())
    dispatcher = JobDispatcher(resolver, post=posted.append, spawn=lambda fn, group: spawned.append((fn, group)))

    dispatcher.submit_resolutions([ResolutionJob("Music", "/home/u")])
    dispatcher.submit_rename(RenameJob("/nope/a", "/nope/b"))

    assert [g for _, g in spawned] == ["resolve", "rename"]
    for fn, _ in spawned:
        fn()
    assert posted[0] == TranslationResult("Music", "Musique", "/home/u")
    assert isinstance(posted[1], RenameResult) and not posted[1].success


def test_rename_path_success(tmp_path) -> None:
    src = tmp_path / "report.txt"
    src.write_text("x", encoding="utf-8")
    dst = tmp_path / "rapport.txt"

    result = rename_path(str(src), str(dst))

    assert result == RenameResult(str(src), str(dst), True, None)
    assert dst.read_text(encoding="utf-8") == "x"
    assert not src.exists()


def test_rename_path_refuses_to_overwrite(tmp_path) -> None:
    src = tmp_path / "report.txt"
    dst = tmp_path / "rapport.txt"
    src.write_text("new", encoding="utf-8")
    dst.write_text("old", encoding="utf-8")

    result = rename_path(str(src), str(dst))

    assert not result.success
    assert "exists" in result.error.lower()
    assert src.read_text(encoding="utf-8") == "new"
    assert dst.read_text(encoding="utf-8") == "old"


def test_rename_path_reports_missing_source(tmp_path) -> None:
    result = rename_path(str(tmp_path / "ghost"), str(tmp_path / "fantome"))

    assert not result.success
    assert result.error
