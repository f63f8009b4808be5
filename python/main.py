#!/usr/bin/env python3
"""Fifteen puzzle workbench and solver.

Usage::

    python main.py play                     # interactive rich workbench
    python main.py solve "5,1,2,3,..." "1,2,3,...,15,0"
    python main.py check "1,2,3,...,15,0"
    python main.py scramble --moves 80 --seed 7
"""

import logging
import random
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import GameGenerator  # noqa: E402
from backend.engine.gamesolver import SearchStatus, Solver, SolverConfig, build_steps  # noqa: E402
from backend.engine.gamesolver.solvability import (  # noqa: E402
    check_solvable,
    is_board_individually_valid,
)
from backend.models.board import Board  # noqa: E402
from backend.models.errors import MalformedBoard, Unreachable  # noqa: E402

logger = logging.getLogger("fifteen")


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _parse(text: str, size: int, label: str) -> Board:
    try:
        return Board.parse(text, size=size)
    except MalformedBoard as e:
        typer.secho(f"Invalid {label} board: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _config(linear_conflict: Optional[bool], max_nodes: Optional[int]) -> SolverConfig:
    return SolverConfig.from_env().with_overrides(
        use_linear_conflict=linear_conflict,
        max_nodes=max_nodes,
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, help="Fifteen puzzle workbench and solver.")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Show solver debug logging.",
    ),
) -> None:
    """Fifteen puzzle workbench and solver."""
    _configure_logging(verbose)


@app.command()
def play(
    size: int = typer.Option(
        4, "-s", "--size",
        min=2, max=6,
        help="Grid size.",
    ),
    delay: float = typer.Option(
        0.4, "--delay",
        min=0.0,
        help="Seconds between steps when replaying a solution.",
    ),
) -> None:
    """Open the interactive workbench."""
    from frontend.cli.rich.app import run

    run(size=size, solver=Solver(SolverConfig.from_env()), delay=delay)


@app.command()
def solve(
    start: str = typer.Argument(..., help="Start board, e.g. '1,2,3,...,15,0'."),
    goal: Optional[str] = typer.Argument(None, help="Goal board (canonical if omitted)."),
    size: int = typer.Option(4, "-s", "--size", min=2, max=6, help="Grid size."),
    linear_conflict: Optional[bool] = typer.Option(
        None, "--linear-conflict/--no-linear-conflict",
        help="Add linear conflict to the Manhattan estimate.",
    ),
    max_nodes: Optional[int] = typer.Option(
        None, "--max-nodes",
        min=1,
        help="Give up after this many node expansions.",
    ),
) -> None:
    """Find an optimal move sequence from START to GOAL."""
    from frontend.cli.rich.app import print_solution, solve_with_progress

    start_board = _parse(start, size, "start")
    goal_board = _parse(goal, size, "goal") if goal else Board.solved(size)

    solver = Solver(_config(linear_conflict, max_nodes))
    try:
        result = solve_with_progress(solver, start_board, goal_board)
    except Unreachable as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if result.status is not SearchStatus.SOLVED:
        typer.secho(
            f"No solution: search {result.status.value} after "
            f"{result.nodes_explored:,} nodes.",
            fg=typer.colors.YELLOW,
            err=True,
        )
        raise typer.Exit(code=2)

    steps, boards = build_steps(start_board, result.path)
    print_solution(start_board, steps, boards)
    typer.echo(
        f"\n{len(result.path)} moves in {len(steps)} steps "
        f"({result.nodes_explored:,} nodes, {result.elapsed:.2f}s)"
    )


@app.command()
def check(
    board: str = typer.Argument(..., help="Board to check."),
    size: int = typer.Option(4, "-s", "--size", min=2, max=6, help="Grid size."),
) -> None:
    """Report whether BOARD is well-formed and solvable."""
    values = [v for v in board.replace(",", " ").split()]
    try:
        numbers = [int(v) for v in values]
    except ValueError:
        numbers = []
    if not is_board_individually_valid(numbers, size):
        typer.secho("invalid: not a permutation", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    parsed = Board.from_flat(numbers, size=size)
    if check_solvable(parsed):
        typer.secho("valid, solvable", fg=typer.colors.GREEN)
    else:
        typer.secho("valid, not solvable", fg=typer.colors.YELLOW)
        raise typer.Exit(code=2)


@app.command()
def scramble(
    size: int = typer.Option(4, "-s", "--size", min=2, max=6, help="Grid size."),
    moves: Optional[int] = typer.Option(
        None, "-m", "--moves",
        min=0,
        help="Random moves from the solved board (50-150 if omitted).",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed."),
) -> None:
    """Print a random solvable board."""
    board = GameGenerator.scramble(
        GameGenerator.solved(size), moves=moves, rng=random.Random(seed)
    )
    typer.echo(board.serialize())


if __name__ == "__main__":
    app()
