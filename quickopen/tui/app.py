"""Main TUI application for QuickOpen.

Built with Textual. Opens the quick-open finder on start and exits with the
chosen candidate.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from .. import __version__
from ..config import Config
from ..services import Ranker
from .modals import QuickOpenModal

logger = logging.getLogger(__name__)


class QuickOpenApp(App[Optional[str]]):
    """Quick-open application.

    Exits with the selected candidate, or None when the finder is cancelled
    and the user quits.
    """

    TITLE = "QuickOpen"
    SUB_TITLE = f"v{__version__}"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #selection {
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("ctrl+o", "quick_open", "Open"),
        Binding("enter", "accept", "Accept"),
        Binding("escape", "quit", "Quit"),
    ]

    def __init__(self, candidates: Sequence[str], config: Optional[Config] = None) -> None:
        """Initialize the app.

        Args:
            candidates: Strings offered by the finder.
            config: Loaded configuration, defaults when None.
        """
        super().__init__()
        self._config = config if config is not None else Config()
        self._ranker = Ranker(
            candidates,
            max_results=self._config.ranking.max_results,
            workers=self._config.ranking.workers,
            matcher=self._config.ranking.matcher,
        )
        self.selection: Optional[str] = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self._selection_text(), id="selection", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.action_quick_open()

    def _selection_text(self) -> str:
        if self.selection is None:
            return "Nothing selected. Press Ctrl+O to search."
        return f"Selected: {self.selection}"

    def action_quick_open(self) -> None:
        """Open the quick-open finder."""
        modal = QuickOpenModal(
            ranker=self._ranker,
            placeholder_symbol=self._config.display.placeholder,
            show_grid=self._config.ranking.matcher == "dp",
            debounce_delay=self._config.display.debounce_delay,
        )
        self.push_screen(modal, self._on_selected)

    def _on_selected(self, result: Optional[str]) -> None:
        if result is None:
            return
        logger.info("Selected %s", result)
        self.selection = result
        self.query_one("#selection", Static).update(self._selection_text())

    def action_accept(self) -> None:
        """Exit returning the current selection."""
        self.exit(self.selection)
