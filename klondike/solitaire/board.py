"""
The Board aggregate: every pile of one Klondike layout.

The board is owned by a single game controller, which is the only writer
once play has started.
"""

from typing import Iterator, List, Optional, Sequence

from klondike.solitaire.constants import NUM_FOUNDATIONS, NUM_TABLEAU_COLUMNS
from klondike.solitaire.piles import (
    CardPile,
    DiscardPile,
    FoundationPile,
    StockPile,
    TableauColumn,
)


class Board:
    """
    Stock, discard, foundations and tableau columns of a game.

    Piles supplied by the caller are used as-is so a renderer holding them
    sees the game's changes; missing piles are created empty.
    """

    def __init__(
        self,
        stock: Optional[CardPile] = None,
        tableau: Optional[Sequence[TableauColumn]] = None,
        discard: Optional[DiscardPile] = None,
        foundations: Optional[Sequence[FoundationPile]] = None,
    ):
        self.stock = stock if stock is not None else StockPile()
        self.discard = discard if discard is not None else DiscardPile()
        if tableau is None:
            tableau = [TableauColumn() for _ in range(NUM_TABLEAU_COLUMNS)]
        if foundations is None:
            foundations = [FoundationPile() for _ in range(NUM_FOUNDATIONS)]
        self.tableau: List[TableauColumn] = list(tableau)
        self.foundations: List[FoundationPile] = list(foundations)
        self._validate()

    def _validate(self) -> None:
        if len(self.tableau) != NUM_TABLEAU_COLUMNS:
            raise ValueError(
                f"Klondike needs {NUM_TABLEAU_COLUMNS} tableau columns, got {len(self.tableau)}"
            )
        if len(self.foundations) != NUM_FOUNDATIONS:
            raise ValueError(
                f"Klondike needs {NUM_FOUNDATIONS} foundations, got {len(self.foundations)}"
            )
        if len({id(column) for column in self.tableau}) != NUM_TABLEAU_COLUMNS:
            raise ValueError("Tableau columns must be distinct")
        if len({id(pile) for pile in self.foundations}) != NUM_FOUNDATIONS:
            raise ValueError("Foundation piles must be distinct")
        if any(not pile.is_empty() for pile in self.piles()):
            raise ValueError("A new game must start from empty piles")

    def piles(self) -> Iterator[CardPile]:
        """Every single pile, tableau sub-piles included."""
        yield self.stock
        yield self.discard
        yield from self.foundations
        for column in self.tableau:
            yield column.face_down
            yield column.face_up

    def card_count(self) -> int:
        return sum(len(pile) for pile in self.piles())

    def column_index(self, column: TableauColumn) -> int:
        for i, candidate in enumerate(self.tableau):
            if candidate is column:
                return i
        raise ValueError("Column is not part of this board")

    def foundation_index(self, foundation: FoundationPile) -> int:
        for i, candidate in enumerate(self.foundations):
            if candidate is foundation:
                return i
        raise ValueError("Foundation is not part of this board")

    def __repr__(self) -> str:
        return (
            f"Board(stock={len(self.stock)}, discard={len(self.discard)}, "
            f"foundations={[len(f) for f in self.foundations]}, "
            f"tableau={[len(c) for c in self.tableau]})"
        )
