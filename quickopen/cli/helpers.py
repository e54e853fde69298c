"""Shared CLI helpers for context management and service creation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from click import Context

    from ..config import Config
    from ..services import Ranker


def resolve_candidates(
    config: Config, candidates: Sequence[str], candidates_file: Optional[Path] = None
) -> list[str]:
    """Pick the candidate list for a command.

    Precedence: candidates given on the command line, then ``--file``, then
    the config's ``candidates_file``, then the built-in demo files.

    Args:
        config: Loaded configuration.
        candidates: Positional candidates from the command line.
        candidates_file: Path given with ``--file``.

    Returns:
        Candidate strings in their original order.
    """
    from ..config import load_candidates
    from ..services import DEMO_FILES

    if candidates:
        return list(candidates)
    if candidates_file is not None:
        return load_candidates(candidates_file)
    if config.candidates_file is not None:
        return load_candidates(config.candidates_file)
    return list(DEMO_FILES)


def get_ranker(
    ctx: Context,
    candidates: Sequence[str],
    limit: Optional[int] = None,
    workers: Optional[int] = None,
    keep_grids: bool = True,
) -> Ranker:
    """Create a Ranker from the context's config, with command-line overrides.

    Args:
        ctx: Click context holding the loaded config.
        candidates: Candidate strings to rank.
        limit: Overrides ``ranking.max_results`` when given.
        workers: Overrides ``ranking.workers`` when given.
        keep_grids: Attach match grids to results.

    Returns:
        Ranker instance.
    """
    from ..services import Ranker

    cfg: Config = ctx.obj["config"]
    return Ranker(
        candidates,
        max_results=cfg.ranking.max_results if limit is None else limit,
        workers=cfg.ranking.workers if workers is None else workers,
        matcher=cfg.ranking.matcher,
        keep_grids=keep_grids,
    )
