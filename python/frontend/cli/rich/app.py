"""Rich terminal frontend — set up two boards, solve, and replay.

Uses the ``rich`` library for styled output.  The left board is played by
hand (arrows / WASD, or scrambled); the right board is the target.  The
solver runs in the foreground with a live progress bar and Ctrl-C cancels
it at the next progress snapshot.
"""

from __future__ import annotations

import logging
import time

import rich.box
from rich.align import Align
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import (
    ProgressSnapshot,
    SearchResult,
    SearchStatus,
    Solver,
    Step,
    build_steps,
    format_steps,
)
from backend.engine.gamesolver.solvability import check_solvable, is_reachable
from backend.models.board import Board, Direction
from backend.models.errors import Unreachable
from frontend.cli.input_handler import get_key

console = Console()
logger = logging.getLogger(__name__)

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- board rendering ----------------------------------------------------------


def render_board(board: Board, goal: Board | None = None, title: str = "") -> Table:
    """Return a Rich Table representing the puzzle grid.

    Tiles already where *goal* wants them are green.
    """
    width = len(str(board.size * board.size - 1))
    table = Table(
        title=title or None,
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.tiles):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif goal is not None and board.is_tile_correct(r, c, goal):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def _solvable_text(board: Board) -> Text:
    if check_solvable(board):
        return Text("solvable ✓", style="green")
    return Text("unsolvable ✗", style="red")


# -- solver helpers -----------------------------------------------------------


def solve_with_progress(solver: Solver, start: Board, goal: Board) -> SearchResult:
    """Run the solver under a live progress bar.  Ctrl-C cancels."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold cyan]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>5.1f}%"),
        TextColumn("[dim]{task.fields[nodes]:,} nodes"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Initializing solver...", total=100, nodes=0)

        def on_progress(snapshot: ProgressSnapshot) -> None:
            progress.update(
                task,
                completed=snapshot.percentage,
                description=snapshot.phase,
                nodes=snapshot.nodes_explored,
            )

        try:
            return solver.solve(start, goal, on_progress)
        except KeyboardInterrupt:
            logger.info("Search interrupted by user")
            result = solver.last_result
            if result is None:
                # Interrupted before the run was created.
                return SearchResult(status=SearchStatus.CANCELLED)
            return result


def print_solution(start: Board, steps: list[Step], boards: list[Board]) -> None:
    """Print every step with the board it produces."""
    goal = boards[-1]
    console.print(Align.center(render_board(start, goal, title="Start")))
    for step in steps:
        after = boards[step.board_range[1]]
        console.print(
            Align.center(render_board(after, goal, title=f"{step.number}. {step.description}"))
        )
    console.print()
    console.print(format_steps(steps))


# -- screens ------------------------------------------------------------------


def _draw_workbench(game: GamePlay, status: str = "") -> None:
    console.clear()

    board = game.state.board
    target = game.goal
    boards = Columns(
        [
            Group(
                render_board(board, target, title="Current"),
                Align.center(_solvable_text(board)),
            ),
            Group(
                render_board(target, title="Target"),
                Align.center(_solvable_text(target)),
            ),
        ],
        padding=(0, 6),
    )

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(f"{game.state.elapsed_time:.0f}s", style="bold yellow")
    stats.append("    Reachable: ", style="dim")
    if is_reachable(board, target):
        stats.append("yes", style="bold green")
    else:
        stats.append("no", style="bold red")

    controls = Text()
    for key, label in (
        ("↑↓←→", "move"),
        ("R", "scramble"),
        ("X", "reset"),
        ("T", "set target"),
        ("U", "undo"),
        ("N", "hint"),
        ("V", "solve"),
        ("Q", "quit"),
    ):
        controls.append(f"  {key}", style="bold cyan")
        controls.append(f" {label} ", style="dim")

    panel = Panel(
        Align.center(boards),
        title=f"[bold cyan]Fifteen Solver  {game.size}×{game.size}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_playback(
    steps: list[Step], boards: list[Board], index: int, status: str = ""
) -> None:
    """Show the board after *index* steps and the step list around it."""
    console.clear()

    goal = boards[-1]
    board = boards[steps[index - 1].board_range[1]] if index else boards[0]

    listing = Table(show_header=False, box=None, padding=(0, 1))
    listing.add_column(justify="right", style="dim")
    listing.add_column()
    lo = max(0, index - 6)
    for step in steps[lo : lo + 12]:
        style = "bold yellow" if step.number == index else (
            "green" if step.number < index else ""
        )
        listing.add_row(f"{step.number}.", Text(step.description, style=style))

    body = Columns([render_board(board, goal), listing], padding=(0, 4))
    panel = Panel(
        body,
        title=f"[bold yellow]Solution  step {index}/{len(steps)}[/bold yellow]",
        border_style="yellow",
        padding=(1, 2),
    )

    controls = Text()
    controls.append("  ←→", style="bold cyan")
    controls.append("  step   ", style="dim")
    controls.append("P", style="bold cyan")
    controls.append("  play   ", style="dim")
    controls.append("Enter", style="bold cyan")
    controls.append("  apply   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


# -- loops --------------------------------------------------------------------


def _playback(steps: list[Step], boards: list[Board], delay: float) -> bool:
    """Step through a solution.  Returns True if the user chose to apply it."""
    index = 0
    while True:
        _draw_playback(steps, boards, index)
        key = get_key()
        if key == "right":
            index = min(len(steps), index + 1)
        elif key == "left":
            index = max(0, index - 1)
        elif key == "play":
            while index < len(steps):
                index += 1
                _draw_playback(steps, boards, index, "[cyan]Playing…[/cyan]")
                time.sleep(delay)
        elif key == "enter":
            return True
        elif key == "quit":
            return False


def _solve(game: GamePlay, solver: Solver, delay: float) -> str:
    start = game.state.board
    goal = game.goal
    if start == goal:
        return "[green]Already at the target![/green]"
    try:
        result = solve_with_progress(solver, start, goal)
    except Unreachable:
        return "[red]Target is not reachable from this board (parity differs).[/red]"

    if result.status is SearchStatus.CANCELLED:
        return "[yellow]Search cancelled.[/yellow]"
    if not result.solved:
        return f"[yellow]Gave up after {result.nodes_explored:,} nodes.[/yellow]"

    steps, boards = build_steps(start, result.path)
    if _playback(steps, boards, delay):
        for move in result.path:
            game.apply(move)
    return (
        f"[bold green]Solved in {len(result.path)} moves "
        f"({len(steps)} steps, {result.nodes_explored:,} nodes, "
        f"{result.elapsed:.1f}s).[/bold green]"
    )


def _hint(game: GamePlay, solver: Solver) -> str:
    board = game.state.board
    if board == game.goal:
        return "[green]Already at the target![/green]"
    if not is_reachable(board, game.goal):
        return "[red]No hint: target is not reachable.[/red]"
    move = solver.hint(board, game.goal)
    if move is None:
        return "[yellow]No hint available.[/yellow]"
    game.apply(move)
    return f"[cyan]Hint:[/cyan] moved tile [bold]{move.tile}[/bold] {move.direction.value}"


def _workbench(size: int, solver: Solver, delay: float) -> None:
    game = GamePlay.from_board(GameGenerator.solved(size))
    status = ""

    while True:
        _draw_workbench(game, status)
        status = ""
        key = get_key()

        if key in _DIRECTIONS:
            game.move(_DIRECTIONS[key])
        elif key == "scramble":
            game = GamePlay.from_board(GameGenerator.scramble(game.state.board), game.goal)
            status = "[yellow]Scrambled![/yellow]"
        elif key == "reset":
            game = GamePlay.from_board(GameGenerator.solved(size), game.goal)
        elif key == "target":
            game = GamePlay.from_board(game.state.board, goal=game.state.board)
            status = "[cyan]Target set to the current board.[/cyan]"
        elif key == "undo":
            game.undo()
        elif key == "hint":
            status = _hint(game, solver)
        elif key == "solve":
            game.state.pause()
            status = _solve(game, solver, delay)
            game.state.resume()
        elif key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return


# -- public entry point -------------------------------------------------------


def run(size: int = 4, solver: Solver | None = None, delay: float = 0.4) -> None:
    """Launch the interactive workbench."""
    _workbench(size, solver or Solver(), delay)
