"""fzf-style quick-open modal backed by the Ranker."""

from __future__ import annotations

import logging
from typing import Optional

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import Input, ListItem, ListView, Static
from textual.worker import get_current_worker

from ...cli.formatters import format_match_grid, format_result_row
from ...services import MatchResult, Ranker, RankingCancelled
from ..constants import QUICK_OPEN_NAVIGATION_BINDINGS

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class QuickOpenItem(ListItem):
    """A list item holding one ranked result."""

    def __init__(self, result: MatchResult) -> None:
        super().__init__()
        self.result = result

    def compose(self) -> ComposeResult:
        yield Static(format_result_row(self.result), markup=False)


class QuickOpenModal(ModalScreen[Optional[str]]):
    """Quick-open finder.

    Type to re-rank, arrows to move, Enter to open, Esc to cancel.
    Returns the chosen candidate, or None on cancel.
    """

    DEFAULT_CSS = """
    QuickOpenModal {
        align: center middle;
    }

    QuickOpenModal > #quick-open-container {
        width: 90;
        height: 85%;
        background: $surface;
        border: thick $primary;
        padding: 1;
    }

    QuickOpenModal > #quick-open-container > #quick-open-input {
        height: 3;
        margin-bottom: 1;
    }

    QuickOpenModal > #quick-open-container > #quick-open-list {
        height: 1fr;
        border: solid $primary-background;
    }

    QuickOpenModal > #quick-open-container > #quick-open-grid {
        height: auto;
        max-height: 12;
        padding: 0 1;
        color: $text-muted;
    }

    QuickOpenModal > #quick-open-container > #quick-open-footer {
        height: 1;
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        *QUICK_OPEN_NAVIGATION_BINDINGS,
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+u", "clear_query", "Clear", priority=True),
    ]

    def __init__(
        self,
        ranker: Ranker,
        placeholder_symbol: str = ".",
        show_grid: bool = True,
        debounce_delay: float = 0.15,
        **kwargs,
    ) -> None:
        """Initialize the quick-open modal.

        Args:
            ranker: Ranker over the candidate list.
            placeholder_symbol: Grid symbol for cells without a score.
            show_grid: Show the highlighted result's match grid.
            debounce_delay: Seconds to wait after a keystroke before ranking.
        """
        super().__init__(**kwargs)
        self._ranker = ranker
        self._placeholder_symbol = placeholder_symbol
        self._show_grid = show_grid
        self._debounce_delay = debounce_delay
        self._debounce_timer: Optional[Timer] = None
        self._generation = 0
        self.results: list[MatchResult] = []
        self.needle = ""

    def compose(self) -> ComposeResult:
        with Vertical(id="quick-open-container"):
            yield Input(placeholder="Search files...", id="quick-open-input")
            yield ListView(id="quick-open-list")
            yield Static("", id="quick-open-grid", markup=False)
            yield Static(
                "↑/↓ navigate • Enter open • Ctrl+U clear • Esc cancel",
                id="quick-open-footer",
            )

    def on_mount(self) -> None:
        self.query_one("#quick-open-input", Input).focus()
        self._start_search("")

    def on_input_changed(self, event: Input.Changed) -> None:
        """Re-rank after the debounce delay."""
        if self._debounce_timer is not None:
            self._debounce_timer.stop()
            self._debounce_timer = None
        value = event.value
        if self._debounce_delay > 0:
            self._debounce_timer = self.set_timer(
                self._debounce_delay, lambda: self._start_search(value)
            )
        else:
            self._start_search(value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._select_highlighted()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        if isinstance(event.item, QuickOpenItem):
            self.dismiss(event.item.result.candidate)

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        result = event.item.result if isinstance(event.item, QuickOpenItem) else None
        self._show_match_grid(result)

    def _start_search(self, needle: str) -> None:
        self._generation += 1
        self._rank(needle, self._generation)

    @work(exclusive=True, thread=True, group="quick-open-rank")
    def _rank(self, needle: str, generation: int) -> None:
        """Rank on a worker thread; a newer search cancels this one."""
        worker = get_current_worker()
        try:
            results = self._ranker.rank(needle, should_cancel=lambda: worker.is_cancelled)
        except RankingCancelled:
            return
        except Exception:
            logger.exception("Ranking failed for %r", needle)
            if not worker.is_cancelled:
                self.app.call_from_thread(self._show_error, needle, generation)
            return
        if not worker.is_cancelled:
            self.app.call_from_thread(self._populate_list, needle, results, generation)

    def _show_error(self, needle: str, generation: int) -> None:
        """Replace the list contents with an error row."""
        if generation != self._generation:
            return
        self.needle = needle
        self.results = []
        list_view = self.query_one("#quick-open-list", ListView)
        list_view.clear()
        list_view.append(ListItem(Static("Search failed, see the log", markup=False)))
        self._show_match_grid(None)

    def _populate_list(self, needle: str, results: list[MatchResult], generation: int) -> None:
        """Replace the list contents with a completed ranking."""
        if generation != self._generation:
            logger.debug("Dropping stale ranking for %r", needle)
            return

        self.needle = needle
        self.results = results

        list_view = self.query_one("#quick-open-list", ListView)
        list_view.clear()
        if not results:
            list_view.append(ListItem(Static("No matches found")))
            self._show_match_grid(None)
            return
        for result in results:
            list_view.append(QuickOpenItem(result))

        def set_selection() -> None:
            if generation != self._generation:
                return
            if len(list_view) > 0:
                list_view.index = 0

        self.call_after_refresh(set_selection)

    def _show_match_grid(self, result: Optional[MatchResult]) -> None:
        grid_view = self.query_one("#quick-open-grid", Static)
        if not self._show_grid or result is None:
            grid_view.update("")
            return
        grid_view.update(format_match_grid(result, self._placeholder_symbol))

    def _highlighted_result(self) -> Optional[MatchResult]:
        list_view = self.query_one("#quick-open-list", ListView)
        item = list_view.highlighted_child
        if isinstance(item, QuickOpenItem):
            return item.result
        return self.results[0] if self.results else None

    def _select_highlighted(self) -> None:
        result = self._highlighted_result()
        if result is not None:
            self.dismiss(result.candidate)

    def _move(self, delta: int) -> None:
        list_view = self.query_one("#quick-open-list", ListView)
        if len(list_view) == 0:
            return
        current = list_view.index or 0
        list_view.index = max(0, min(len(list_view) - 1, current + delta))

    def action_cursor_down(self) -> None:
        self._move(1)

    def action_cursor_up(self) -> None:
        self._move(-1)

    def action_page_down(self) -> None:
        self._move(PAGE_SIZE)

    def action_page_up(self) -> None:
        self._move(-PAGE_SIZE)

    def action_clear_query(self) -> None:
        """Empty the query, showing the unfiltered list again."""
        self.query_one("#quick-open-input", Input).value = ""

    def action_cancel(self) -> None:
        self.dismiss(None)
