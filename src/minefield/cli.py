"""
Minefield - terminal front-end.

Usage:
    minefield play [--difficulty NAME | --rows R --columns C --mines M] [--seed N]
    minefield autoplay [--games N] [--seed N]
"""
import argparse
import logging
import sys
from typing import Iterable, Iterator, List, Optional

from .board import DIFFICULTIES, BoardConfig, GameStatus, get_difficulty
from .engine import BoardSnapshot, GameEngine
from .environment import MinesweeperEnv
from .errors import InvalidConfiguration, OutOfBounds
from .render import render_text


logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  r ROW COL          reveal a cell
  f ROW COL          place or remove a flag
  n [DIFFICULTY]     start a new game
  q                  quit"""


# ============================================================================
# Configuration
# ============================================================================

def build_config(args: argparse.Namespace) -> BoardConfig:
    """Turn command line flags into a board configuration."""
    custom = (args.rows, args.columns, args.mines)
    if any(value is not None for value in custom):
        if any(value is None for value in custom):
            raise InvalidConfiguration(
                "--rows, --columns and --mines must be given together"
            )
        return BoardConfig(args.rows, args.columns, args.mines)
    return get_difficulty(args.difficulty)


# ============================================================================
# Interactive Play
# ============================================================================

def show(snapshot: BoardSnapshot) -> None:
    """Print a snapshot with its status line."""
    print(render_text(snapshot, show_coordinates=True))
    if snapshot.status == GameStatus.WON:
        print("*** You cleared the field! ***")
    elif snapshot.status == GameStatus.LOST:
        print("*** BOOM - you hit a mine ***")
    else:
        print(f"Mines left: {snapshot.mines_remaining}")


def _parse_position(parts: List[str]) -> Optional[tuple]:
    if len(parts) != 3:
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def run_session(engine: GameEngine, commands: Iterable[str]) -> GameStatus:
    """
    Apply text commands to an engine until input ends or the player quits.

    Args:
        engine: Engine to drive.
        commands: Lines of player input.

    Returns:
        Status of the game being played when the session ended.
    """
    for line in commands:
        parts = line.strip().lower().split()
        if not parts:
            continue
        command = parts[0]

        if command in ("q", "quit"):
            break
        if command in ("h", "help", "?"):
            print(HELP_TEXT)
            continue
        if command in ("n", "new"):
            try:
                config = get_difficulty(parts[1]) if len(parts) > 1 else None
            except InvalidConfiguration as error:
                print(error)
                continue
            engine.reset(config)
            continue
        if command not in ("r", "reveal", "f", "flag"):
            print(f"Unknown command {command!r}; type 'h' for help")
            continue

        position = _parse_position(parts)
        if position is None:
            print(f"Usage: {command} ROW COL")
            continue
        try:
            engine.cell(*position)
        except OutOfBounds as error:
            print(error)
            continue

        if engine.status() != GameStatus.PLAYING:
            print("Game is over; type 'n' for a new game")
        elif command in ("r", "reveal"):
            engine.reveal(*position)
        else:
            engine.toggle_flag(*position)

    return engine.status()


def _read_commands() -> Iterator[str]:
    """Yield lines typed by the player until end of input."""
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    engine = GameEngine(build_config(args), seed=args.seed)
    engine.subscribe(show)

    print(HELP_TEXT)
    show(engine.snapshot())
    run_session(engine, _read_commands())


# ============================================================================
# Automated Play
# ============================================================================

def autoplay(args: argparse.Namespace) -> int:
    """
    Play random valid reveals through the Gymnasium environment.

    Returns:
        Number of games won.
    """
    config = build_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    env.action_space.seed(args.seed)

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        info = {}

        while not done:
            mask = env.get_action_mask().astype("int8")
            action = env.action_space.sample(mask=mask)
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_state") == GameStatus.WON.name:
            wins += 1
        logger.info("Game %d finished: %s", game + 1, info.get("game_state"))

    print(env.render())
    print(f"\n=== Final: {wins}/{args.games} wins ({100 * wins / args.games:.0f}%) ===")
    return wins


# ============================================================================
# Entry Point
# ============================================================================

def _add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES),
        default="beginner",
        help="Preset board size",
    )
    parser.add_argument("--rows", type=int, help="Custom number of rows")
    parser.add_argument("--columns", type=int, help="Custom number of columns")
    parser.add_argument("--mines", type=int, help="Custom number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minefield", description="Minefield - clear the grid without hitting a mine"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every move"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    _add_board_arguments(play_parser)

    autoplay_parser = subparsers.add_parser(
        "autoplay", help="Watch random reveals play out"
    )
    _add_board_arguments(autoplay_parser)
    autoplay_parser.add_argument(
        "--games", type=int, default=10, help="Number of games to play"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "autoplay":
            if args.games < 1:
                raise InvalidConfiguration("--games must be at least 1")
            autoplay(args)
        else:
            parser.print_help()
    except InvalidConfiguration as error:
        print(f"error: {error}", file=sys.stderr)
        return 2
    return 0
