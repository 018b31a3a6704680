#!/usr/bin/env python3
"""
Example demonstrating the Klondike game controller.

This script deals a seeded game, prints the board, and lets a simple greedy
player drive the selection state machine until it runs out of moves or wins.
"""

import argparse
import logging
import sys

try:
    from klondike import Game, MoveResult
    from klondike.events import EventBus, EngineEventType
except ImportError:
    print("ERROR: klondike package not found or incompletely installed.")
    print("Please install it with: pip install -e .")
    sys.exit(1)


def render(game: Game) -> str:
    """Draw the board as text from a snapshot."""
    state = game.snapshot().to_adapter_format()
    lines = [
        f"Stock: {state['stock_count']:2d}   Discard: {state['discard_top'] or '--'}"
        f" ({state['discard_count']})",
        "Foundations: " + "  ".join(top or "--" for top in state["foundations"]),
    ]
    for i, column in enumerate(state["columns"]):
        hidden = "## " * column["hidden"]
        lines.append(f"  {i}: {hidden}{', '.join(column['cards'])}")
    return "\n".join(lines)


def play_to_foundation(game: Game) -> bool:
    """Try every single-card move onto a foundation."""
    for f in range(len(game.foundations)):
        if not game.discard.is_empty():
            game.select_discard()
            game.move_selection_to_foundation(f)
            if game.last_result == MoveResult.MOVED:
                return True
        for c in range(len(game.tableau)):
            if game.tableau[c].face_up.is_empty():
                continue
            game.select_tableau(c, 1)
            game.move_selection_to_foundation(f)
            if game.last_result == MoveResult.MOVED:
                return True
    return False


def play_to_tableau(game: Game) -> bool:
    """Try the discard and whole face-up runs onto other columns."""
    for dest in range(len(game.tableau)):
        if not game.discard.is_empty():
            game.select_discard()
            game.select_tableau(dest, 1)
            if game.last_result == MoveResult.MOVED:
                return True
        for src in range(len(game.tableau)):
            column = game.tableau[src]
            if src == dest or column.face_up.is_empty():
                continue
            # Moving a King run off an otherwise empty column gains nothing
            if column.face_down.is_empty() and game.tableau[dest].face_up.is_empty():
                continue
            game.select_tableau(src, len(column.face_up))
            game.select_tableau(dest, 1)
            if game.last_result == MoveResult.MOVED:
                return True
    return False


def main():
    parser = argparse.ArgumentParser(description="Deal and auto-play a Klondike game.")
    parser.add_argument("-s", "--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "-m",
        "--max-steps",
        type=int,
        default=500,
        help="maximum number of actions to take (default: 500)",
    )
    parser.add_argument(
        "-d", "--draw", type=int, default=3, help="cards per draw (default: 3)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    EventBus.get_instance().on(
        EngineEventType.GAME_WON, lambda data: print(f"*** Game {data['game_id']} won ***")
    )

    game = Game(seed=args.seed, rules={"draw_count": args.draw})
    print(render(game))

    idle_draws = 0
    step = 0
    for step in range(args.max_steps):
        if game.is_won():
            break
        if play_to_foundation(game) or play_to_tableau(game):
            idle_draws = 0
            continue
        game.draw_from_stock()
        idle_draws += 1
        # A full pass through stock and discard without any play
        if idle_draws > (len(game.stock) + len(game.discard)) // args.draw + 2:
            break

    print()
    print(render(game))
    print(f"Won: {game.is_won()}  Solved: {game.is_solved()}  Steps: {step + 1}")


if __name__ == "__main__":
    main()
