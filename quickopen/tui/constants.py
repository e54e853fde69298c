"""Shared key bindings for the TUI."""

from textual.binding import Binding

# List navigation forwarded from the query input, which keeps focus.
QUICK_OPEN_NAVIGATION_BINDINGS = [
    Binding("down", "cursor_down", "Down", show=False),
    Binding("up", "cursor_up", "Up", show=False),
    Binding("pagedown", "page_down", "Page Down", show=False),
    Binding("pageup", "page_up", "Page Up", show=False),
]
