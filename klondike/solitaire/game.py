"""
Klondike game controller.

This module provides the Game class, which shuffles and deals a new game and
then runs the selection state machine: the player picks up a source (the
discard pile or a run of tableau cards) and then names a destination. Illegal
moves are rejected without raising; the pending selection is cleared after
every move attempt.
"""

from typing import Any, Dict, Optional, Sequence, Union
import logging
import time
import uuid

from klondike.common.card import Card
from klondike.common.deck import Deck, make_rng
from klondike.events import EventBus, EngineEventType
from klondike.solitaire.board import Board
from klondike.solitaire.constants import (
    INITIAL_FACE_DOWN_STOCK,
    INITIAL_FACE_DOWN_TABLEAU,
    NUM_TABLEAU_COLUMNS,
    WIN_RULE_FOUNDATIONS,
)
from klondike.solitaire.piles import (
    CardPile,
    DiscardPile,
    FoundationPile,
    TableauColumn,
)
from klondike.solitaire.rules import KlondikeRules, is_valid_run
from klondike.solitaire.state import (
    NO_SELECTION,
    BoardState,
    ColumnState,
    DiscardSelection,
    MoveResult,
    NoSelection,
    Selection,
    TableauSelection,
)

logger = logging.getLogger(__name__)


class Game:
    """
    The game controller.

    Example:
        ```python
        stock = StockPile()
        columns = [TableauColumn() for _ in range(7)]
        game = Game(stock, columns, seed=42)

        game.draw_from_stock()
        game.select_discard()
        won = game.select_tableau(columns[3], 1)
        ```
    """

    def __init__(
        self,
        stock: Optional[CardPile] = None,
        tableau: Optional[Sequence[TableauColumn]] = None,
        seed: Optional[int] = None,
        discard: Optional[DiscardPile] = None,
        foundations: Optional[Sequence[FoundationPile]] = None,
        rules: Union[KlondikeRules, Dict[str, Any], None] = None,
    ):
        """
        Shuffle a new deck into the stock and deal the tableau.

        Args:
            stock: The stock pile; must be empty
            tableau: The seven tableau columns; must be empty
            seed: Random number seed. None or -1 means no seed is used.
            discard: The discard pile, created if omitted
            foundations: The four foundation piles, created if omitted
            rules: Table rules, as KlondikeRules or a config dictionary
        """
        self.rules = KlondikeRules.coerce(rules)
        self.board = Board(stock, tableau, discard, foundations)
        self.id = str(uuid.uuid4())
        self.seed = seed
        self.event_bus = EventBus.get_instance()

        self.selection: Selection = NO_SELECTION
        self.last_result = MoveResult.NO_MOVE
        self.num_face_down_tableau_cards = INITIAL_FACE_DOWN_TABLEAU
        self.num_face_down_stock_cards = INITIAL_FACE_DOWN_STOCK
        self._win_announced = False

        self._random_numbers = make_rng(seed)

        logger.info("Created game %s (seed=%s, %r)", self.id, seed, self.rules)
        self._emit(
            EngineEventType.GAME_CREATED,
            {"seed": seed, "rules": self.rules.to_dict()},
        )

        self._shuffle_new_deck()
        self._deal_cards()

        self._emit(EngineEventType.GAME_STARTED, {"stock_count": len(self.stock)})

    @classmethod
    def new_game(
        cls,
        stock: Optional[CardPile] = None,
        tableau: Optional[Sequence[TableauColumn]] = None,
        seed: Optional[int] = None,
        **kwargs,
    ) -> "Game":
        """Shuffle and deal a new game; see ``Game.__init__``."""
        return cls(stock, tableau, seed, **kwargs)

    # Pile access

    @property
    def stock(self) -> CardPile:
        return self.board.stock

    @property
    def discard(self) -> DiscardPile:
        return self.board.discard

    @property
    def tableau(self) -> Sequence[TableauColumn]:
        return tuple(self.board.tableau)

    @property
    def foundations(self) -> Sequence[FoundationPile]:
        return tuple(self.board.foundations)

    def card_count(self) -> int:
        """Total number of cards across every pile."""
        return self.board.card_count()

    # Setup

    def _shuffle_new_deck(self) -> None:
        """
        Shuffles a new deck and pushes the cards onto the stock.
        """
        deck = Deck().shuffle(self._random_numbers)
        for card in deck.cards:
            self.stock.push(card)
        logger.debug("Shuffled %d cards into the stock", deck.size)
        self._emit(
            EngineEventType.SHUFFLE,
            {"seed": self.seed, "card_count": len(self.stock)},
        )

    def _deal_cards(self) -> None:
        """
        Deals the triangular layout: column i gets i hidden cards under one face-up card.
        """
        columns = self.board.tableau
        for i in range(NUM_TABLEAU_COLUMNS):
            self._transfer_cards(self.stock, columns[i].face_up, 1)
            for j in range(i + 1, NUM_TABLEAU_COLUMNS):
                self._transfer_cards(self.stock, columns[j].face_down, 1)

        for i, column in enumerate(columns):
            self._emit(
                EngineEventType.CARD_DEALT,
                {
                    "column": i,
                    "card": str(column.face_up.peek()),
                    "face_down": len(column.face_down),
                },
            )
        logger.debug("Dealt tableau, %d cards left in stock", len(self.stock))

    # Stock

    def draw_from_stock(self) -> None:
        """
        Draws the next cards from the stock, or returns the discard pile to the
        stock if the stock is empty.
        """
        stock, discard = self.stock, self.discard
        if not stock.is_empty():
            count = min(self.rules.draw_count, len(stock))
            self._transfer_cards(stock, discard, count)
            drawn = discard.cards[-count:]
            logger.debug("Drew %s", ", ".join(str(card) for card in drawn))
            self._emit(
                EngineEventType.STOCK_DRAWN,
                {
                    "cards": [str(card) for card in drawn],
                    "stock_count": len(stock),
                },
            )
        else:
            count = len(discard)
            self._transfer_cards(discard, stock, count)
            logger.debug("Recycled %d discards into the stock", count)
            self._emit(EngineEventType.STOCK_RECYCLED, {"stock_count": count})

    # Selection

    def select_discard(self) -> None:
        """
        Selects the top discarded card, or removes the selection if there already is one.
        """
        if not isinstance(self.selection, NoSelection):
            self._remove_selection()
            return

        if self.discard.is_empty():
            logger.debug("Ignoring selection of an empty discard pile")
            return

        self.selection = DiscardSelection(self.discard)
        self.discard.is_selected = True
        self._emit(
            EngineEventType.SELECTION_CHANGED,
            {"selection": "discard", "card": str(self.discard.peek())},
        )

    def select_tableau(self, column: Union[TableauColumn, int], n: int) -> bool:
        """
        Selects the top n face-up cards of a column, or tries to move the
        current selection onto that column.

        A move is only attempted when n is at most 1; the selection is cleared
        after any attempt. Selecting fewer than one card is ignored.

        Args:
            column: The column (or its index) to select or to move cards to
            n: The number of cards to select

        Returns:
            Whether the game is won
        """
        column = self._resolve_column(column)
        selection = self.selection

        if isinstance(selection, NoSelection):
            if n < 1:
                logger.debug("Ignoring selection of %d tableau cards", n)
                return self._check_won()
            self.selection = TableauSelection(column, n)
            column.number_selected = n
            self._emit(
                EngineEventType.SELECTION_CHANGED,
                {
                    "selection": "tableau",
                    "column": self.board.column_index(column),
                    "count": n,
                },
            )
        else:
            if n > 1:
                self.last_result = MoveResult.NO_MOVE
            elif isinstance(selection, DiscardSelection):
                self.discard_to_tableau(column)
            else:
                self.tableau_to_tableau(column)
            self._remove_selection()
        return self._check_won()

    def move_selection_to_foundation(
        self, foundation: Union[FoundationPile, int]
    ) -> bool:
        """
        Moves the selected card to the given foundation pile, if possible.

        Args:
            foundation: The foundation pile or its index

        Returns:
            Whether the game is won
        """
        foundation = self._resolve_foundation(foundation)
        if isinstance(self.selection, TableauSelection):
            self.tableau_to_foundation(foundation)
        elif isinstance(self.selection, DiscardSelection):
            self.discard_to_foundation(foundation)
        else:
            self.last_result = MoveResult.NO_MOVE
        self._remove_selection()
        return self._check_won()

    def clear_selection(self) -> None:
        """Drops any pending selection without moving."""
        self._remove_selection()

    def _remove_selection(self) -> None:
        """
        Deselects any selected cards.
        """
        selection = self.selection
        if isinstance(selection, NoSelection):
            return
        if isinstance(selection, DiscardSelection):
            selection.pile.is_selected = False
        else:
            selection.column.number_selected = 0
        self.selection = NO_SELECTION
        self._emit(EngineEventType.SELECTION_CHANGED, {"selection": "none"})

    # Moves

    def discard_to_tableau(self, column: TableauColumn) -> MoveResult:
        """
        Moves the selected discard onto a tableau column if it fits there.
        """
        if not isinstance(self.selection, DiscardSelection):
            return self._set_result(MoveResult.NO_MOVE)

        card = self.discard.peek()
        if card is None or not self.rules.can_place_on_tableau(card, column.face_up):
            return self._reject("discard", card, column)

        self._transfer_cards(self.discard, column.face_up, 1)
        self.num_face_down_stock_cards -= 1
        return self._moved("discard", card, column)

    def discard_to_foundation(self, foundation: FoundationPile) -> MoveResult:
        """
        Moves the selected discard onto a foundation pile if it fits there.
        """
        if not isinstance(self.selection, DiscardSelection):
            return self._set_result(MoveResult.NO_MOVE)

        card = self.discard.peek()
        if card is None or not self.rules.can_place_on_foundation(card, foundation):
            return self._reject("discard", card, foundation)

        self._transfer_cards(self.discard, foundation, 1)
        self.num_face_down_stock_cards -= 1
        return self._moved("discard", card, foundation)

    def tableau_to_tableau(self, dest: TableauColumn) -> MoveResult:
        """
        Moves the selected run onto another column if its deepest card fits there.
        """
        selection = self.selection
        if not isinstance(selection, TableauSelection):
            return self._set_result(MoveResult.NO_MOVE)

        source = selection.column
        n = source.number_selected
        if dest is source or not self._is_movable_run(source, n):
            return self._reject(source, None, dest)

        base = source.face_up.cards[-n]
        if not self.rules.can_place_on_tableau(base, dest.face_up):
            return self._reject(source, base, dest)

        self._transfer_run(source.face_up, dest.face_up, n)
        self._flip_tableau_column_card(source)
        return self._moved(source, base, dest, count=n)

    def tableau_to_foundation(self, foundation: FoundationPile) -> MoveResult:
        """
        Moves a single selected tableau card onto a foundation pile if it fits there.
        """
        selection = self.selection
        if not isinstance(selection, TableauSelection):
            return self._set_result(MoveResult.NO_MOVE)

        source = selection.column
        card = source.face_up.peek()
        if (
            source.number_selected != 1
            or card is None
            or not self.rules.can_place_on_foundation(card, foundation)
        ):
            return self._reject(source, card, foundation)

        self._transfer_cards(source.face_up, foundation, 1)
        self._flip_tableau_column_card(source)
        result = self._moved(source, card, foundation)
        self._remove_selection()
        return result

    def _is_movable_run(self, column: TableauColumn, n: int) -> bool:
        if n < 1 or n > len(column.face_up):
            return False
        if self.rules.validate_runs:
            return is_valid_run(column.face_up.cards[-n:])
        return True

    def _flip_tableau_column_card(self, column: TableauColumn) -> None:
        """
        Flips the next hidden card of a column whose face-up pile ran out.
        """
        card = column.reveal()
        if card is not None:
            self.num_face_down_tableau_cards -= 1
            logger.debug("Revealed %s", card)
            self._emit(
                EngineEventType.CARD_REVEALED,
                {
                    "column": self.board.column_index(column),
                    "card": str(card),
                    "face_down_remaining": self.num_face_down_tableau_cards,
                },
            )

    @staticmethod
    def _transfer_cards(source: CardPile, dest: CardPile, count: int) -> None:
        """
        Moves cards one at a time from the top of source to the top of dest.
        """
        for _ in range(count):
            dest.push(source.pop())

    @staticmethod
    def _transfer_run(source: CardPile, dest: CardPile, count: int) -> None:
        """
        Moves the top count cards of source onto dest, keeping their order.
        """
        temp = CardPile()
        Game._transfer_cards(source, temp, count)
        Game._transfer_cards(temp, dest, count)

    # Win detection

    def is_won(self) -> bool:
        """
        Checks if the game is won under the game's win rule.

        With the default counter rule the game is won once no tableau card is
        hidden and at most one stock card has not been played.
        """
        if self.rules.win_rule == WIN_RULE_FOUNDATIONS:
            return self.is_solved()
        return (
            self.num_face_down_tableau_cards == 0
            and self.num_face_down_stock_cards <= 1
        )

    def is_solved(self) -> bool:
        """Checks if every foundation holds a full suit."""
        return all(f.is_complete() for f in self.board.foundations)

    def _check_won(self) -> bool:
        won = self.is_won()
        if won and not self._win_announced:
            self._win_announced = True
            logger.info("Game %s won", self.id)
            self._emit(
                EngineEventType.GAME_WON,
                {"solved": self.is_solved(), "timestamp": time.time()},
            )
        return won

    # Views

    def snapshot(self) -> BoardState:
        """
        Take an immutable snapshot of the board for rendering.
        """
        selection = self.selection
        selected_column = None
        if isinstance(selection, TableauSelection):
            selected_column = self.board.column_index(selection.column)
        return BoardState(
            game_id=self.id,
            stock=self.stock.cards,
            discard=self.discard.cards,
            discard_selected=self.discard.is_selected,
            foundations=tuple(f.cards for f in self.board.foundations),
            columns=tuple(
                ColumnState(
                    face_down=column.face_down.cards,
                    face_up=column.face_up.cards,
                    number_selected=column.number_selected,
                )
                for column in self.board.tableau
            ),
            selection=selection.kind,
            selected_column=selected_column,
            num_face_down_tableau_cards=self.num_face_down_tableau_cards,
            num_face_down_stock_cards=self.num_face_down_stock_cards,
            is_won=self.is_won(),
            is_solved=self.is_solved(),
            last_result=self.last_result,
        )

    # Helpers

    def _resolve_column(self, column: Union[TableauColumn, int]) -> TableauColumn:
        if isinstance(column, int):
            if not 0 <= column < NUM_TABLEAU_COLUMNS:
                raise IndexError(f"No tableau column {column}")
            return self.board.tableau[column]
        self.board.column_index(column)
        return column

    def _resolve_foundation(
        self, foundation: Union[FoundationPile, int]
    ) -> FoundationPile:
        if isinstance(foundation, int):
            if not 0 <= foundation < len(self.board.foundations):
                raise IndexError(f"No foundation {foundation}")
            return self.board.foundations[foundation]
        self.board.foundation_index(foundation)
        return foundation

    def _describe(self, pile) -> str:
        if pile == "discard":
            return "discard"
        if isinstance(pile, TableauColumn):
            return f"tableau[{self.board.column_index(pile)}]"
        return f"foundation[{self.board.foundation_index(pile)}]"

    def _set_result(self, result: MoveResult) -> MoveResult:
        self.last_result = result
        return result

    def _moved(self, source, card: Card, dest, count: int = 1) -> MoveResult:
        logger.debug(
            "Moved %s (%d card(s)) from %s to %s",
            card,
            count,
            self._describe(source),
            self._describe(dest),
        )
        self._emit(
            EngineEventType.CARD_MOVED,
            {
                "card": str(card),
                "count": count,
                "source": self._describe(source),
                "dest": self._describe(dest),
            },
        )
        return self._set_result(MoveResult.MOVED)

    def _reject(self, source, card: Optional[Card], dest) -> MoveResult:
        logger.debug(
            "Rejected move of %s from %s to %s",
            card,
            self._describe(source),
            self._describe(dest),
        )
        self._emit(
            EngineEventType.MOVE_REJECTED,
            {
                "card": str(card) if card is not None else None,
                "source": self._describe(source),
                "dest": self._describe(dest),
            },
        )
        return self._set_result(MoveResult.REJECTED)

    def _emit(self, event_type: EngineEventType, data: Dict[str, Any]) -> None:
        self.event_bus.emit(event_type, {"game_id": self.id, **data})

    def __repr__(self) -> str:
        return f"Game(id={self.id!r}, seed={self.seed!r}, board={self.board!r})"
