"""CLI output formatters.

Text rendering of ranked results, match grids and score explanations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from quickopen.matching import Grid, ScoreTrace
    from quickopen.services import MatchResult


def format_result_row(result: MatchResult) -> str:
    """Format a ranked result as ``score  candidate``."""
    return f"{result.score:>4}  {result.candidate}"


def format_text_grid(grid: Grid[str]) -> str:
    """Lay out a text grid with every cell padded to the widest cell.

    Args:
        grid: Grid of already-rendered cells.

    Returns:
        One line per row, cells separated by a single space.
    """
    cell_width = max((len(cell) for row in grid.rows() for cell in row), default=1)
    return "\n".join(
        " ".join(cell.rjust(cell_width) for cell in row).rstrip() for row in grid.rows()
    )


def format_match_grid(result: MatchResult, placeholder: str = ".") -> str:
    """Render a result's grid with the candidate as a header row.

    Returns an empty string when the result carries no grid.
    """
    text_grid = result.display_grid(placeholder)
    if text_grid is None:
        return ""
    return format_text_grid(text_grid)


def format_explanation(trace: ScoreTrace) -> str:
    """Format a score trace: each contribution, then the total."""
    lines = [trace.explanation] if trace.entries else []
    lines.append(f"total:\t{trace.total}")
    return "\n".join(lines)


def echo_error(message: str) -> None:
    """Echo an error message in red."""
    click.echo(click.style(f"✗ {message}", fg="red"))


def echo_warning(message: str) -> None:
    """Echo a warning message in yellow."""
    click.echo(click.style(f"⚠ {message}", fg="yellow"))


def echo_header(message: str) -> None:
    """Echo a header with underline."""
    click.echo(f"\n{message}")
    click.echo("=" * len(message))


def echo_results(
    results: list[MatchResult], show_grid: bool = False, placeholder: str = "."
) -> None:
    """Print ranked results, optionally each followed by its match grid."""
    if not results:
        echo_warning("No matches")
        return
    for result in results:
        click.echo(format_result_row(result))
        if show_grid:
            grid_text = format_match_grid(result, placeholder)
            if grid_text:
                click.echo(grid_text)
                click.echo()
