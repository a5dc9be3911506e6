"""
Command-line interface: play against the engine or analyse a position.

    perfect-play play [--mark X|O] [--no-delay] [--book PATH] [--self-play]
    perfect-play solve XX-OO---- [--maximizer O]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from perfect_play.api import Engine
from perfect_play.core.types import Outcome
from perfect_play.debug.viz import (
    format_analytics,
    format_search,
    render_board,
    render_move_scores,
)
from perfect_play.games.board import (
    as_board,
    cell_name,
    game_outcome,
    mark_from_symbol,
    mark_symbol,
    side_to_move,
)
from perfect_play.games.tic_tac_toe import TicTacToe
from perfect_play.memory.opening_book import OpeningBook
from perfect_play.session import GameSession
from perfect_play.utils.config import BOOK_PATH, EngineConfig

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="perfect-play",
        description="Perfect-play tic-tac-toe engine",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Plain output without ANSI colors",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play a game in the terminal")
    play.add_argument(
        "--mark", "-m",
        default="X",
        help="Your mark, X or O (default: X; X moves first)",
    )
    play.add_argument(
        "--no-delay",
        action="store_true",
        help="Skip the engine's thinking pause",
    )
    play.add_argument(
        "--book", "-b",
        default=None,
        help=f"Opening book database (default: {BOOK_PATH})",
    )
    play.add_argument(
        "--no-book",
        action="store_true",
        help="Do not read or write an opening book",
    )
    play.add_argument(
        "--self-play",
        action="store_true",
        help="Engine plays both sides",
    )
    play.add_argument(
        "--show-scores",
        action="store_true",
        help="Print the engine's move scores after each engine move",
    )

    solve = sub.add_parser("solve", help="Analyse a board, e.g. XX-OO----")
    solve.add_argument("board", help="9 cells: X, O and - for empty (/ and | allowed)")
    solve.add_argument(
        "--maximizer",
        default=None,
        help="Side to solve for (default: the side to move)",
    )
    return parser.parse_args(argv)


def _print_outcome(outcome: Outcome) -> None:
    print("\n" + "=" * 40)
    if outcome.is_win:
        print(f"GAME OVER - {mark_symbol(outcome.mark)} wins")
    else:
        print("GAME OVER - draw")
    print("=" * 40)


def _human_turn(session: GameSession) -> None:
    """Prompt until the human enters a legal cell."""
    mark = mark_symbol(session.human_mark)
    while True:
        raw = input(f"Your move ({mark}) [0-8]: ").strip()
        try:
            index = int(raw)
        except ValueError:
            print(f"Invalid input: {raw!r}")
            continue
        if session.play_human(index):
            return
        print(f"Illegal move: {index}")


def run_session(session: GameSession, show_scores: bool = False, color: bool = True) -> Outcome:
    print(render_board(session.board, color=color))
    while not session.is_over():
        if session.is_ai_turn():
            result = session.play_ai()
            if result is None or not result.found:
                break
            print(f"\nEngine ({mark_symbol(session.ai_mark)}) played {result.move} "
                  f"({cell_name(result.move)})")
            if show_scores:
                print(render_move_scores(result, color=color))
                print(format_search(result))
        else:
            _human_turn(session)
        print(render_board(session.board, highlight=session.outcome.pattern, color=color))

    outcome = session.outcome
    _print_outcome(outcome)
    return outcome


def run_self_play(config: EngineConfig, show_scores: bool = False, color: bool = True) -> Outcome:
    engine = Engine(config)
    game = TicTacToe()
    print(game.state_string())
    while not game.is_over():
        mover = game.current_player()
        result = engine.choose_move(game.board, maximizer=mover)
        if not result.found:
            break
        game.apply_move(result.move)
        print(f"\n{mark_symbol(mover)} played {result.move} ({cell_name(result.move)})")
        if show_scores:
            print(render_move_scores(result, color=color))
            print(format_search(result))
        print(render_board(game.board, highlight=game.outcome().pattern, color=color))

    outcome = game.outcome()
    _print_outcome(outcome)
    return outcome


def solve(board_text: str, maximizer: Optional[str], color: bool = True) -> int:
    board = as_board(board_text)
    outcome = game_outcome(board)
    print(render_board(board, highlight=outcome.pattern, color=color))

    if outcome.is_over:
        _print_outcome(outcome)
        return 0

    mark = mark_from_symbol(maximizer) if maximizer else side_to_move(board)
    result = Engine().choose_move(board, maximizer=mark)
    print(f"\nBest move for {mark_symbol(mark)}: {result.move} ({cell_name(result.move)})")
    print(render_move_scores(result, color=color))
    print(format_search(result))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    color = not args.no_color

    try:
        if args.command == "solve":
            return solve(args.board, args.maximizer, color=color)

        config = EngineConfig(thinking_delay=not args.no_delay)
        if args.self_play:
            run_self_play(config, show_scores=args.show_scores, color=color)
            return 0

        human_mark = mark_from_symbol(args.mark)
        book = None if args.no_book else OpeningBook(args.book or BOOK_PATH)
        try:
            session = GameSession(human_mark=human_mark, config=config, book=book)
            while True:
                run_session(session, show_scores=args.show_scores, color=color)
                print(format_analytics(session.analytics))
                if input("Play again? [y/N]: ").strip().lower() not in ("y", "yes"):
                    break
                session.start_new_game()
        finally:
            if book is not None:
                book.close()
        return 0

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted - shutting down...")
        return 130
    except Exception:
        logger.exception("Fatal error")
        raise


if __name__ == "__main__":
    sys.exit(main())
