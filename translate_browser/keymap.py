from textual.binding import Binding


# Centralized default key bindings for the browser view.


def browser_bindings() -> list[Binding]:
    return [
        Binding("ctrl+q", "quit", "Quitter"),
        Binding("ctrl+c", "quit_now", "", show=False),
        Binding("enter", "request_rename", "Renommer"),
        Binding("right", "open_selected", "Ouvrir"),
        Binding("left", "go_up", "Parent"),
        Binding("alt+up", "go_up", "Parent", show=False),
        Binding("escape", "escape", "", show=False),
        Binding("home", "cursor_home", "Début", show=False),
        Binding("end", "cursor_end", "Fin", show=False),
    ]
