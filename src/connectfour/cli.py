"""
Command-line interface for connectfour.

Commands:
- play: Play against the AI or a friend in the terminal
- move: Ask the engine for a move in a given position
- arena: Pit MCTS against random or against itself
- benchmark: Measure search speed
- config: Write the default configuration to YAML
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console

app = typer.Typer(
    name="c4",
    help="Connect Four with a Monte Carlo Tree Search opponent",
    no_args_is_help=True,
)

console = Console()


def render(board, last_move: int = -1) -> str:
    """
    Render the board as plain text.

    - 'X' = player 1
    - 'O' = player 2
    - '.' = empty
    """
    symbols = {0: ".", 1: "X", 2: "O"}

    lines = []
    lines.append(" " + " ".join(str(i % 10) for i in range(board.cols)))
    lines.append("-" * (board.cols * 2 + 1))

    for r in range(board.rows):
        row_str = "|" + "|".join(symbols[board[r, c]] for c in range(board.cols)) + "|"
        lines.append(row_str)

    lines.append("-" * (board.cols * 2 + 1))

    if last_move >= 0:
        pointer = " " * (last_move * 2 + 1) + "^"
        lines.append(pointer)

    return "\n".join(lines)


def _load_config(config_path: Optional[Path]):
    from .utils import Config

    if config_path and config_path.exists():
        return Config.load(str(config_path))
    return Config()


def _parse_moves(moves: str) -> list[int]:
    try:
        return [int(m) for m in moves.replace(",", " ").split()]
    except ValueError:
        raise typer.BadParameter("Moves must be column numbers separated by spaces or commas")


@app.command()
def play(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML file"
    ),
    friend: Optional[bool] = typer.Option(
        None, "--friend/--vs-ai", help="Two humans, or a human against the AI"
    ),
    human_first: Optional[bool] = typer.Option(
        None, "--first/--second", help="Human plays first"
    ),
    difficulty: Optional[str] = typer.Option(
        None, "--difficulty", "-d", help="easy, medium, hard or expert (default: mcts.iterations)"
    ),
    grid: Optional[str] = typer.Option(
        None, "--grid", "-g", help="small (5x6), standard (6x7) or large (7x8)"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for the AI"),
) -> None:
    """Play in the terminal. Enter a column number, 'u' to undo, 'r' to restart, 'q' to quit."""
    from .game import Player
    from .play import GameSession, get_difficulty_config
    from .utils import BoardConfig, create_rng, print_board

    config = _load_config(config_path)
    board_config = BoardConfig.from_preset(grid) if grid else config.board
    vs_ai = config.play.vs_ai if friend is None else not friend
    if human_first is None:
        ai_player = Player(config.play.ai_player)
    else:
        ai_player = Player.TWO if human_first else Player.ONE

    level_name = difficulty or config.play.difficulty
    if level_name:
        level = get_difficulty_config(level_name)
        iterations, label = level.iterations, level.name
    else:
        iterations, label = config.mcts.iterations, "Custom"

    session = GameSession(
        rows=board_config.rows,
        cols=board_config.cols,
        vs_ai=vs_ai,
        ai_player=ai_player,
        iterations=iterations,
        exploration=config.mcts.exploration,
        backup=config.mcts.backup,
        rng=create_rng(seed if seed is not None else config.seed),
    )

    if not vs_ai:
        console.print("\n[bold]Connect Four[/] - Player 1 is X, Player 2 is O")
    else:
        human = "O" if ai_player == Player.ONE else "X"
        console.print(f"\n[bold]Connect Four[/] - You are {human}, AI plays {label} ({iterations} iterations)")

    last_move = -1
    while True:
        if session.ai_to_move:
            console.print("[cyan]AI thinking...[/]")
            start = time.time()
            result = session.ai_move()
            console.print(f"[dim]Searched for {time.time() - start:.1f}s[/]")
            last_move = result.column
            console.print(f"AI played column {result.column}\n")
            continue

        print_board(render(session.board, last_move), title=f"Move {session.move_count}")

        if session.is_over:
            console.print(f"[bold green]{session.message}[/]")
            for player in Player:
                profile = session.scoreboard.profile(player)
                console.print(
                    f"{profile.name}: {profile.wins}W {profile.losses}L ({profile.win_rate:.0f}%)"
                )
            if not typer.confirm("Play again?", default=False):
                break
            session.restart()
            last_move = -1
            continue

        answer = typer.prompt(f"Player {int(session.current_player)} move (0-{session.board.cols - 1})")
        answer = answer.strip().lower()
        if answer == "q":
            break
        if answer == "u":
            session.undo()
            console.print(f"[yellow]{session.message}[/]")
            last_move = -1
            continue
        if answer == "r":
            session.restart()
            last_move = -1
            continue

        try:
            column = int(answer)
        except ValueError:
            console.print(f"[red]Enter a number 0-{session.board.cols - 1}[/]")
            continue
        if column not in session.legal_moves:
            console.print("[red]Invalid move, try again[/]")
            continue

        session.play(column)
        last_move = column


@app.command()
def move(
    moves: str = typer.Argument("", help="Columns played so far, e.g. '3 3 4'"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML file"
    ),
    rows: Optional[int] = typer.Option(None, "--rows", help="Grid rows"),
    cols: Optional[int] = typer.Option(None, "--cols", help="Grid columns"),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-n", help="MCTS iterations"),
    backup: Optional[str] = typer.Option(None, "--backup", help="negamax or unflipped"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Write search metrics here"),
) -> None:
    """Print the engine's move for the position reached by the given columns."""
    from .errors import ConnectFourError
    from .game import board_from_moves
    from .mcts import MCTS, best_move
    from .utils import Logger, SearchMetrics, create_rng, create_progress, print_board

    config = _load_config(config_path)
    rows = rows if rows is not None else config.board.rows
    cols = cols if cols is not None else config.board.cols
    iterations = iterations if iterations is not None else config.mcts.iterations
    backup = backup or config.mcts.backup
    seed = seed if seed is not None else config.seed
    log_dir = str(log_dir) if log_dir else config.log_dir

    logger = Logger(log_dir=log_dir)

    try:
        board, player = board_from_moves(_parse_moves(moves), rows, cols)
    except (ConnectFourError, ValueError) as e:
        logger.log_error(str(e))
        raise typer.Exit(code=1)

    print_board(render(board), title=f"Player {int(player)} to move")

    start = time.time()
    try:
        mcts = MCTS(exploration=config.mcts.exploration, backup=backup, rng=create_rng(seed))
        with create_progress() as progress:
            task = progress.add_task("Searching", total=iterations)
            root = mcts.search(
                board,
                player,
                iterations,
                progress_callback=lambda n: progress.update(task, completed=n),
            )
        column = best_move(root)
    except (ConnectFourError, ValueError) as e:
        logger.log_error(str(e))
        raise typer.Exit(code=1)

    logger.log_search(SearchMetrics(
        rows=board.rows,
        cols=board.cols,
        player=int(player),
        iterations=root.visits,
        move=column,
        elapsed=time.time() - start,
        visit_counts=root.visit_counts(),
    ))
    console.print(f"[bold green]Best move: {column}[/]")


@app.command()
def arena(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML file"
    ),
    opponent: str = typer.Option("random", "--opponent", help="random or mcts"),
    games: Optional[int] = typer.Option(None, "--games", "-n", help="Number of games"),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-i", help="MCTS iterations per move"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
) -> None:
    """Play MCTS against a random mover or another MCTS."""
    from .eval import Arena
    from .utils import create_rng, create_progress, print_config

    config = _load_config(config_path)
    if games is not None:
        config.arena.num_games = games
    if iterations is not None:
        config.arena.iterations = iterations
    print_config(config)

    arena_ = Arena(
        iterations=config.arena.iterations,
        exploration=config.mcts.exploration,
        backup=config.mcts.backup,
        rows=config.board.rows,
        cols=config.board.cols,
        rng=create_rng(seed if seed is not None else config.seed),
    )

    console.print("[cyan]Running evaluation...[/]")
    wins, losses, draws = 0, 0, 0
    with create_progress() as progress:
        task = progress.add_task("Arena [W:0 L:0 D:0]", total=config.arena.num_games)

        def callback(n, result_str):
            nonlocal wins, losses, draws
            if result_str == "W":
                wins += 1
            elif result_str == "L":
                losses += 1
            else:
                draws += 1
            progress.update(
                task,
                advance=1,
                description=f"Arena [W:{wins} L:{losses} D:{draws}]"
            )

        result = arena_.evaluate("mcts", opponent, config.arena.num_games, progress_callback=callback)

    console.print("\n[bold]Results (MCTS perspective):[/]")
    console.print(f"  Wins:   {result.wins}")
    console.print(f"  Losses: {result.losses}")
    console.print(f"  Draws:  {result.draws}")
    console.print(f"  Score:  {result.score*100:.1f}%")


@app.command()
def benchmark(
    iterations: int = typer.Option(2_000, "--iterations", "-i", help="MCTS iterations"),
    searches: int = typer.Option(5, "--searches", "-n", help="Searches to run"),
    rows: int = typer.Option(6, "--rows", help="Grid rows"),
    cols: int = typer.Option(7, "--cols", help="Grid columns"),
) -> None:
    """Benchmark MCTS performance from the empty board."""
    from .game import Player, new_board
    from .mcts import MCTS
    from .utils import create_rng

    mcts = MCTS(rng=create_rng(0))
    board = new_board(rows, cols)

    console.print(f"[cyan]Running {searches} searches with {iterations} iterations...[/]")

    start = time.time()
    for i in range(searches):
        column = mcts.select_move(board, Player.ONE, iterations)
        console.print(f"Search {i+1}: column {column}")

    elapsed = time.time() - start
    console.print(f"\n[green]Total time: {elapsed:.2f}s[/]")
    console.print(f"[green]Searches/sec: {searches/elapsed:.2f}[/]")
    console.print(f"[green]Iterations/sec: {searches*iterations/elapsed:.0f}[/]")


@app.command("config")
def write_config(
    output: Path = typer.Option(Path("connectfour.yaml"), "--output", "-o", help="Output file"),
) -> None:
    """Write the default configuration to a YAML file."""
    from .utils import get_default_config, print_config

    config = get_default_config()
    output.parent.mkdir(parents=True, exist_ok=True)
    config.save(str(output))
    print_config(config)
    console.print(f"[green]Saved config to {output}[/]")


if __name__ == "__main__":
    app()
