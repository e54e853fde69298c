"""QuickOpen command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..config import ConfigError, load_config
from ..matching import match_dp, match_recursive
from ..services import MatchResult
from .formatters import (
    echo_error,
    echo_header,
    echo_results,
    echo_warning,
    format_explanation,
    format_match_grid,
)
from .helpers import get_ranker, resolve_candidates

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_candidates_file_option = click.option(
    "--file",
    "candidates_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read candidates from a file, one per line.",
)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a TOML config file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="quickopen")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """QuickOpen - fuzzy quick-open ranking for file lists."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        echo_error(str(e))
        ctx.exit(1)


@main.command()
@click.argument("needle")
@click.argument("candidates", nargs=-1)
@_candidates_file_option
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum results.")
@click.option("--grid/--no-grid", "show_grid", default=None, help="Show match grids.")
@click.option("--workers", type=click.IntRange(min=0), default=None, help="Scoring processes.")
@click.pass_context
def rank(
    ctx: click.Context,
    needle: str,
    candidates: tuple[str, ...],
    candidates_file: Optional[Path],
    limit: Optional[int],
    show_grid: Optional[bool],
    workers: Optional[int],
) -> None:
    """Rank CANDIDATES (or the configured list) against NEEDLE."""
    cfg = ctx.obj["config"]
    if show_grid is None:
        show_grid = cfg.display.show_grid

    try:
        items = resolve_candidates(cfg, candidates, candidates_file)
    except ConfigError as e:
        echo_error(str(e))
        ctx.exit(1)

    if show_grid and cfg.ranking.matcher != "dp":
        echo_warning("Grids are only available with the dp matcher")

    ranker = get_ranker(ctx, items, limit=limit, workers=workers, keep_grids=show_grid)
    results = ranker.rank(needle)
    logger.info("Ranked %d candidates for %r: %d shown", len(items), needle, len(results))
    echo_results(results, show_grid=show_grid, placeholder=cfg.display.placeholder)


@main.command()
@click.argument("needle")
@click.argument("haystack")
@click.pass_context
def grid(ctx: click.Context, needle: str, haystack: str) -> None:
    """Show the match grid of NEEDLE against HAYSTACK."""
    cfg = ctx.obj["config"]
    found = match_dp(needle, haystack)
    if found is None:
        echo_warning(f"{needle!r} does not match {haystack!r}")
        return
    result = MatchResult(haystack, found.score, found.grid)
    click.echo(f"score: {found.score}")
    click.echo(format_match_grid(result, cfg.display.placeholder))


@main.command()
@click.argument("needle")
@click.argument("haystack")
def explain(needle: str, haystack: str) -> None:
    """Explain how NEEDLE scores against HAYSTACK."""
    trace = match_recursive(needle, haystack)
    if trace is None:
        echo_warning(f"{needle!r} does not match {haystack!r}")
        return
    echo_header(f"{needle!r} in {haystack!r}")
    click.echo(format_explanation(trace))


@main.command()
@click.argument("candidates", nargs=-1)
@_candidates_file_option
@click.pass_context
def tui(ctx: click.Context, candidates: tuple[str, ...], candidates_file: Optional[Path]) -> None:
    """Open the interactive quick-open finder."""
    from ..tui import QuickOpenApp

    cfg = ctx.obj["config"]
    try:
        items = resolve_candidates(cfg, candidates, candidates_file)
    except ConfigError as e:
        echo_error(str(e))
        ctx.exit(1)

    selection = QuickOpenApp(candidates=items, config=cfg).run()
    if selection:
        click.echo(selection)


if __name__ == "__main__":
    main()
