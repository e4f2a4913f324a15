from typing import Callable, Optional, Tuple

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import DataTable, Footer, Header, Input, Static
from textual.worker import Worker, WorkerState

from .cache import TranslationCache
from .config import BrowserConfig
from .debug import get_logger
from .dispatcher import JobDispatcher, RenameResult, ResultEvent
from .formatting import format_title
from .keymap import browser_bindings
from .lister import DirectoryLister, DisplayItem
from .resolver import NameResolver
from .session import BrowserSession, Mode
from .tips import browser_tips
from .utils import safe_call
from .version import __version__


def _row_cells(item: DisplayItem) -> Tuple[str, str]:
    return item.title(), item.description()


class JobFinished(Message):
    """A worker finished; carries its immutable result event to the UI loop."""

    def __init__(self, event: ResultEvent) -> None:
        super().__init__()
        self.event = event


class BrowserDataTable(DataTable):
    BINDINGS = [
        Binding("home", "goto_first_row", "Début", show=False),
        Binding("end", "goto_last_row", "Fin", show=False),
        Binding("left", "go_up", "Parent", show=False),
        Binding("alt+up", "go_up", "Parent", show=False),
        Binding("right", "open_selected", "Ouvrir", show=False),
    ]

    def action_goto_first_row(self) -> None:
        if self.row_count:
            safe_call(setattr, self, "cursor_coordinate", (0, 0))

    def action_goto_last_row(self) -> None:
        rc = self.row_count
        if rc:
            safe_call(setattr, self, "cursor_coordinate", (rc - 1, 0))

    def on_key(self, event: events.Key) -> None:  # type: ignore
        """Delegate filter keys to the App; consume if handled.

        Handling at the widget level ensures Backspace works reliably
        since Textual delivers keys to the focused widget first.
        """
        handler = getattr(self.app, "process_filter_key", None)
        if handler and handler(event):
            safe_call(event.stop)

    def action_go_up(self) -> None:
        self.app.action_go_up()  # type: ignore[attr-defined]

    def action_open_selected(self) -> None:
        self.app.action_open_selected()  # type: ignore[attr-defined]


class RenamePanel(Vertical):
    DEFAULT_CSS = """
    RenamePanel {
        height: auto;
        border: round steelblue;
        padding: 1 2;
        display: none;
    }
    """

    def compose(self) -> ComposeResult:
        self.info = Static("", id="rename-info")
        yield self.info
        self.input = Input(placeholder="Nouveau nom...", max_length=255, id="rename-input")
        yield self.input

    def show(self, old_name: str, proposed: str) -> None:
        self.info.update(
            f"Renommer:\n\n  Ancien: {old_name}\n  Nouveau: {proposed}\n\nModifier le nom:"
        )
        self.input.value = proposed
        self.display = True
        safe_call(self.input.focus)

    def hide(self) -> None:
        self.display = False


class TranslateBrowserApp(App):
    TITLE = "Navigateur de fichiers"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    #entries { height: 1fr; }
    #status { height: auto; color: $accent; text-style: bold; padding: 0 1; }
    #tips { height: 1; color: $text-muted; padding: 0 1; }
    """

    BINDINGS = browser_bindings()

    def __init__(
        self,
        config: BrowserConfig,
        resolver: Optional[NameResolver] = None,
        cache: Optional[TranslationCache] = None,
        spawn: Optional[Callable[[Callable[[], None], str], None]] = None,
    ) -> None:
        super().__init__()
        self.logr = get_logger("app")
        self.config = config
        if resolver is not None:
            self.cache = resolver.cache
        else:
            self.cache = cache if cache is not None else TranslationCache()
            resolver = NameResolver(self.cache, source_lang=config.source_lang, target_lang=config.target_lang)
        self.resolver = resolver
        self.dispatcher = JobDispatcher(resolver, post=self._post_result, spawn=spawn or self._spawn_worker)
        self.session = BrowserSession(
            DirectoryLister(self.cache),
            self.cache,
            self.dispatcher,
            config.start_path,
        )

    # -------- Worker plumbing --------
    def _spawn_worker(self, work: Callable[[], None], group: str) -> None:
        self.run_worker(work, group=group, thread=True, exit_on_error=False)

    def _post_result(self, event: ResultEvent) -> None:
        # Called from worker threads; post_message is thread safe.
        self.post_message(JobFinished(event))

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.state == WorkerState.ERROR:
            self.logr.error("worker %s failed: %s", event.worker.group, event.worker.error)

    # -------- Layout --------
    def compose(self) -> ComposeResult:
        yield Header()
        self.table = BrowserDataTable(id="entries")
        self.table.cursor_type = "row"
        yield self.table
        self.rename_panel = RenamePanel(id="rename")
        yield self.rename_panel
        self.status_line = Static("", id="status")
        yield self.status_line
        self.tips = Static("", id="tips")
        yield self.tips
        yield Footer()

    def on_mount(self) -> None:
        self.table.add_column("Nom", key="name")
        self.table.add_column("Traduction", key="translation")
        self.session.start()
        self.logr.debug("mounted: path=%s", self.session.current_path)
        self._render_entries()
        safe_call(self.table.focus)

    def _render_entries(self) -> None:
        visible = self.session.visible_entries()
        self.table.clear()
        for entry in visible:
            self.table.add_row(*_row_cells(entry), key=entry.name)
        if visible:
            safe_call(setattr, self.table, "cursor_coordinate", (self.session.cursor, 0))
        self.title = format_title(self.session.current_path)
        self._render_status()

    def _render_status(self) -> None:
        self.status_line.update(self.session.status)
        pending = self.session.rename
        self.tips.update(
            browser_tips(
                self.session.get_filter_hint(),
                confirming=self.session.mode is Mode.CONFIRMING_RENAME,
                in_flight=bool(pending and pending.in_flight),
            )
        )

    def _update_row(self, name: str) -> None:
        entry = self.session.find_entry(name)
        if entry is None or name not in self.table.rows:
            return
        title, description = _row_cells(entry)
        try:
            self.table.update_cell(name, "name", title)
            self.table.update_cell(name, "translation", description)
        except Exception:
            self._render_entries()

    # -------- Result events --------
    def on_job_finished(self, message: JobFinished) -> None:
        event = message.event
        entry = self.session.handle_event(event)
        if isinstance(event, RenameResult):
            self.rename_panel.hide()
            self._render_entries()
            safe_call(self.table.focus)
            return
        if entry is not None:
            self._update_row(entry.name)

    # -------- Keyboard --------
    def process_filter_key(self, event: events.Key) -> bool:
        if self.session.mode is not Mode.BROWSING:
            return False
        if self.session.process_filter_key(event):
            self._render_entries()
            return True
        return False

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:  # type: ignore
        cursor = self.table.cursor_row
        if cursor is not None:
            self.session.select(cursor)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:  # type: ignore
        self.action_request_rename()

    def action_open_selected(self) -> None:
        if self.session.open_selected():
            self._render_entries()

    def action_go_up(self) -> None:
        if self.session.go_parent():
            self._render_entries()

    def action_request_rename(self) -> None:
        if self.session.mode is not Mode.BROWSING:
            return
        if self.session.request_rename():
            pending = self.session.rename
            self.rename_panel.show(pending.entry.name, pending.proposed)
        self._render_status()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.session.confirm_rename(event.value)
        self._render_status()

    def action_escape(self) -> None:
        if self.session.mode is Mode.CONFIRMING_RENAME:
            if self.session.cancel_rename():
                self.rename_panel.hide()
                self._render_status()
                safe_call(self.table.focus)
            return
        if self.session.filter_active():
            self.session.clear_filter()
            self._render_entries()

    def action_cursor_home(self) -> None:
        self.table.action_goto_first_row()

    def action_cursor_end(self) -> None:
        self.table.action_goto_last_row()

    def action_quit(self) -> None:  # type: ignore[override]
        """Clear filter first when active; otherwise quit."""
        if self.session.filter_active():
            self.session.clear_filter()
            self._render_entries()
            return
        self.exit()

    def action_quit_now(self) -> None:
        self.exit()

    def on_unmount(self) -> None:
        self.dispatcher.shutdown(wait=False)
