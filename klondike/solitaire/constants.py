"""Klondike layout constants."""

from klondike.common.card import Rank

NUM_TABLEAU_COLUMNS = 7
NUM_FOUNDATIONS = 4
DECK_SIZE = 52

# Hidden cards right after the deal: 0 + 1 + ... + 6 in the tableau,
# and whatever the deal leaves in the stock.
INITIAL_FACE_DOWN_TABLEAU = sum(range(NUM_TABLEAU_COLUMNS))
INITIAL_FACE_DOWN_STOCK = DECK_SIZE - NUM_TABLEAU_COLUMNS - INITIAL_FACE_DOWN_TABLEAU

DEFAULT_DRAW_COUNT = 3

# Only a King may start an empty column, only an Ace an empty foundation
TABLEAU_BASE_RANK = Rank.KING
FOUNDATION_BASE_RANK = Rank.ACE
FOUNDATION_SIZE = 13

WIN_RULE_COUNTERS = "counters"
WIN_RULE_FOUNDATIONS = "foundations"
WIN_RULES = (WIN_RULE_COUNTERS, WIN_RULE_FOUNDATIONS)
