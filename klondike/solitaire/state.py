"""
State models for the Klondike game controller.

This module provides the selection variants the controller switches between,
the outcome of a move attempt, and immutable snapshots of the board that
renderers can read without being able to change the game.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional, Tuple, Union
import time

from klondike.common.card import Card
from klondike.solitaire.piles import DiscardPile, TableauColumn


class MoveResult(Enum):
    """Outcome of the last move attempt."""

    NO_MOVE = auto()
    MOVED = auto()
    REJECTED = auto()


@dataclass(frozen=True)
class NoSelection:
    """Nothing is picked up."""

    kind = "none"


@dataclass(frozen=True)
class DiscardSelection:
    """The top card of the discard pile is picked up."""

    pile: DiscardPile
    kind = "discard"


@dataclass(frozen=True)
class TableauSelection:
    """
    The top ``run_length`` face-up cards of a tableau column are picked up.
    """

    column: TableauColumn
    run_length: int
    kind = "tableau"


Selection = Union[NoSelection, DiscardSelection, TableauSelection]

NO_SELECTION = NoSelection()


def _card_str(card: Optional[Card]) -> Optional[str]:
    return str(card) if card is not None else None


@dataclass(frozen=True)
class ColumnState:
    """
    Immutable view of a tableau column.

    Attributes:
        face_down: Hidden cards, bottom first
        face_up: Playable run, bottom first
        number_selected: Size of the picked-up run, 0 if none
    """

    face_down: Tuple[Card, ...] = ()
    face_up: Tuple[Card, ...] = ()
    number_selected: int = 0

    @property
    def is_selected(self) -> bool:
        return self.number_selected > 0


@dataclass(frozen=True)
class BoardState:
    """
    Immutable snapshot of a Klondike game.

    Attributes:
        game_id: Identifier of the game the snapshot was taken from
        stock: Stock cards, bottom first
        discard: Discard cards, bottom first
        discard_selected: Whether the discard pile is picked up
        foundations: Each foundation's cards, bottom first
        columns: The seven tableau columns
        selection: "none", "discard" or "tableau"
        selected_column: Index of the selected column, if any
        num_face_down_tableau_cards: Hidden tableau cards counter
        num_face_down_stock_cards: Unplayed stock cards counter
        is_won: Win status under the game's win rule
        is_solved: Whether every foundation is complete
        last_result: Outcome of the last move attempt
        timestamp: Time when this snapshot was created
    """

    game_id: str
    stock: Tuple[Card, ...] = ()
    discard: Tuple[Card, ...] = ()
    discard_selected: bool = False
    foundations: Tuple[Tuple[Card, ...], ...] = ()
    columns: Tuple[ColumnState, ...] = ()
    selection: str = NoSelection.kind
    selected_column: Optional[int] = None
    num_face_down_tableau_cards: int = 0
    num_face_down_stock_cards: int = 0
    is_won: bool = False
    is_solved: bool = False
    last_result: MoveResult = MoveResult.NO_MOVE
    timestamp: float = field(default_factory=lambda: time.time())

    @property
    def card_count(self) -> int:
        return (
            len(self.stock)
            + len(self.discard)
            + sum(len(f) for f in self.foundations)
            + sum(len(c.face_down) + len(c.face_up) for c in self.columns)
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the board state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the board state
        """
        return {
            "game_id": self.game_id,
            "stock": [str(card) for card in self.stock],
            "discard": [str(card) for card in self.discard],
            "discard_selected": self.discard_selected,
            "foundations": [[str(card) for card in f] for f in self.foundations],
            "columns": [
                {
                    "face_down": [str(card) for card in column.face_down],
                    "face_up": [str(card) for card in column.face_up],
                    "number_selected": column.number_selected,
                }
                for column in self.columns
            ],
            "selection": self.selection,
            "selected_column": self.selected_column,
            "num_face_down_tableau_cards": self.num_face_down_tableau_cards,
            "num_face_down_stock_cards": self.num_face_down_stock_cards,
            "is_won": self.is_won,
            "is_solved": self.is_solved,
            "last_result": self.last_result.name,
            "timestamp": self.timestamp,
        }

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the board state to what a renderer needs to draw the table.

        Hidden cards are reported as counts only.

        Returns:
            Dictionary in renderer-friendly format
        """
        return {
            "stock_count": len(self.stock),
            "discard_top": _card_str(self.discard[-1] if self.discard else None),
            "discard_count": len(self.discard),
            "discard_selected": self.discard_selected,
            "foundations": [
                _card_str(f[-1] if f else None) for f in self.foundations
            ],
            "columns": [
                {
                    "hidden": len(column.face_down),
                    "cards": [str(card) for card in column.face_up],
                    "selected": column.number_selected,
                }
                for column in self.columns
            ],
            "won": self.is_won,
        }
