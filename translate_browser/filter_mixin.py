from __future__ import annotations

from typing import Any


class FilterMixin:
    """Reusable quick-filter state driven by key events.

    Host class should implement:
    - _on_filter_changed(self): react to a new filter string
    """

    _filter_text: str = ""

    @property
    def filter_text(self) -> str:
        return getattr(self, "_filter_text", "")

    def filter_active(self) -> bool:
        return bool(getattr(self, "_filter_text", ""))

    def get_filter_hint(self) -> str:
        ft = getattr(self, "_filter_text", "")
        return f" | Filtre: '{ft}' (Échap=effacer)" if ft else ""

    def set_filter(self, text: str) -> None:
        if text != getattr(self, "_filter_text", ""):
            self._filter_text = text
            self._on_filter_changed()

    def clear_filter(self) -> None:
        if getattr(self, "_filter_text", ""):
            self._filter_text = ""
            self._on_filter_changed()

    def filter_backspace(self) -> None:
        if getattr(self, "_filter_text", ""):
            self._filter_text = self._filter_text[:-1]
            self._on_filter_changed()

    def filter_append_char(self, ch: str) -> None:
        if not ch:
            return
        self._filter_text = getattr(self, "_filter_text", "") + ch
        self._on_filter_changed()

    def _on_filter_changed(self) -> None:
        """Hook for host to refresh rows. Overridden by host."""
        pass

    def process_filter_key(self, event: Any) -> bool:
        """Handle printable, backspace, escape for quick filter.

        Returns True if the event was consumed and should not propagate.
        """
        k = getattr(event, "character", None) or getattr(event, "key", None)
        key_name = getattr(event, "key", None)
        ctrl = getattr(event, "ctrl", False)
        alt = getattr(event, "alt", False)
        meta = getattr(event, "meta", False)

        # Printable single-character keys become part of filter
        if isinstance(k, str) and len(k) == 1 and k.isprintable() and not (ctrl or alt or meta):
            self.filter_append_char(k)
            return True

        # Robust backspace handling across terminals/platforms
        if k in ("backspace", "ctrl+h", "\b", "\x7f") or key_name in ("backspace", "ctrl+h"):
            if getattr(self, "_filter_text", ""):
                self.filter_backspace()
                return True

        if key_name == "escape" or k == "escape":
            if getattr(self, "_filter_text", ""):
                self.clear_filter()
                return True

        return False
