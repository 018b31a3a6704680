"""
Klondike game model: piles, rules, state views and the game controller.
"""

from klondike.solitaire.board import Board
from klondike.solitaire.game import Game
from klondike.solitaire.piles import (
    CardPile,
    DiscardPile,
    FoundationPile,
    StockPile,
    TableauColumn,
)
from klondike.solitaire.rules import (
    KlondikeRules,
    can_place_on_foundation,
    can_place_on_tableau,
    is_valid_run,
)
from klondike.solitaire.state import (
    BoardState,
    ColumnState,
    DiscardSelection,
    MoveResult,
    NoSelection,
    TableauSelection,
)

__all__ = [
    "Board",
    "BoardState",
    "CardPile",
    "ColumnState",
    "DiscardPile",
    "DiscardSelection",
    "FoundationPile",
    "Game",
    "KlondikeRules",
    "MoveResult",
    "NoSelection",
    "StockPile",
    "TableauColumn",
    "TableauSelection",
    "can_place_on_foundation",
    "can_place_on_tableau",
    "is_valid_run",
]
