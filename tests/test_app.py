"""Headless smoke tests for the Textual application wiring."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

from translate_browser.app import TranslateBrowserApp, _row_cells
from translate_browser.cache import TranslationCache
from translate_browser.config import BrowserConfig
from translate_browser.resolver import NameResolver
from translate_browser.session import Mode

from .conftest import FakeTranslator


def _inline_spawn(work, group) -> None:
    work()


def _make_app(path) -> TranslateBrowserApp:
    resolver = NameResolver(TranslationCache(), translator=FakeTranslator({"report": "rapport"}))
    config = BrowserConfig(start_path=str(path), remote_enabled=False)
    return TranslateBrowserApp(config, resolver=resolver, spawn=_inline_spawn)


def test_listing_is_resolved_and_rendered(tmp_path) -> None:
    (tmp_path / "Desktop").mkdir()
    (tmp_path / "report.txt").write_text("x", encoding="utf-8")
    app = _make_app(tmp_path)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.pause()
            assert app.table.row_count == 2
            assert [e.label for e in app.session.entries] == ["Dossier → Bureau", "Fichier → rapport.txt"]
            assert not any(e.resolving for e in app.session.entries)
            assert app.title.endswith(str(tmp_path))

    asyncio.run(scenario())


def test_rename_round_trip(tmp_path) -> None:
    (tmp_path / "report.txt").write_text("x", encoding="utf-8")
    app = _make_app(tmp_path)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.pause()
            assert app.focused is app.table

            await pilot.press("enter")
            await pilot.pause()
            assert app.session.mode is Mode.CONFIRMING_RENAME
            assert app.rename_panel.display
            assert app.focused is app.rename_panel.input
            assert app.rename_panel.input.value == "rapport.txt"

            await pilot.press("enter")
            for _ in range(3):
                await pilot.pause()

            assert app.session.mode is Mode.BROWSING
            assert (tmp_path / "rapport.txt").exists()
            assert not (tmp_path / "report.txt").exists()
            assert app.session.status.startswith("✓ Renommé")

    asyncio.run(scenario())


def test_escape_cancels_rename(tmp_path) -> None:
    (tmp_path / "Music").mkdir()
    app = _make_app(tmp_path)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            app.action_request_rename()
            await pilot.pause()
            assert app.session.mode is Mode.CONFIRMING_RENAME

            app.action_escape()
            await pilot.pause()
            assert app.session.mode is Mode.BROWSING
            assert not app.rename_panel.display
            assert (tmp_path / "Music").exists()

    asyncio.run(scenario())


def test_typing_filters_rows_and_escape_clears(tmp_path) -> None:
    (tmp_path / "Music").mkdir()
    (tmp_path / "report.txt").write_text("x", encoding="utf-8")
    app = _make_app(tmp_path)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.table.row_count == 2

            await pilot.press("m", "u")
            await pilot.pause()
            assert app.session.filter_text == "mu"
            assert [e.name for e in app.session.visible_entries()] == ["Music"]
            assert app.table.row_count == 1

            await pilot.press("escape")
            await pilot.pause()
            assert not app.session.filter_active()
            assert app.table.row_count == 2
            assert app.session.mode is Mode.BROWSING

    asyncio.run(scenario())


def test_rows_render_any_display_item() -> None:
    item = SimpleNamespace(
        title=lambda: "notes 📁",
        description=lambda: "Dossier → remarques",
        filter_value=lambda: "notes",
    )

    assert _row_cells(item) == ("notes 📁", "Dossier → remarques")
