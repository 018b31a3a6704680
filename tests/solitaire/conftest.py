"""
Fixtures for the Klondike game tests.

Cards are written as short strings such as "AH", "10S" or "KC".
"""

import pytest

from klondike.common.card import Card, Rank, Suit
from klondike.solitaire import Game, StockPile, TableauColumn

RANK_CODES = {"A": Rank.ACE, "J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING}
SUIT_CODES = {"C": Suit.CLUBS, "D": Suit.DIAMONDS, "H": Suit.HEARTS, "S": Suit.SPADES}


def parse_card(text: str) -> Card:
    rank_text, suit_text = text[:-1], text[-1]
    rank = RANK_CODES.get(rank_text) or Rank(int(rank_text))
    return Card(SUIT_CODES[suit_text], rank)


@pytest.fixture
def card():
    """Card parser, e.g. card("QH")."""
    return parse_card


@pytest.fixture
def stock():
    return StockPile()


@pytest.fixture
def columns():
    return [TableauColumn() for _ in range(7)]


@pytest.fixture
def game(stock, columns):
    """A game dealt with a fixed seed."""
    return Game(stock, columns, seed=42)


@pytest.fixture
def arrange():
    """
    Replace the contents of a dealt game's piles.

    Unmentioned piles end up empty. Columns are given as
    {index: (face_down, face_up)} with cards listed bottom first.
    """

    def _arrange(game, stock=(), discard=(), columns=None, foundations=None):
        for pile in game.board.piles():
            pile._cards.clear()
        for text in stock:
            game.stock.push(parse_card(text))
        for text in discard:
            game.discard.push(parse_card(text))
        for index, (face_down, face_up) in (columns or {}).items():
            column = game.board.tableau[index]
            for text in face_down:
                column.face_down.push(parse_card(text))
            for text in face_up:
                column.face_up.push(parse_card(text))
        for index, cards in (foundations or {}).items():
            for text in cards:
                game.board.foundations[index].push(parse_card(text))
        return game

    return _arrange
