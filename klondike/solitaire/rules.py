from typing import Any, Dict, Optional, Sequence, Union

from klondike.common.card import Card
from klondike.solitaire.constants import (
    DEFAULT_DRAW_COUNT,
    FOUNDATION_BASE_RANK,
    TABLEAU_BASE_RANK,
    WIN_RULE_COUNTERS,
    WIN_RULES,
)
from klondike.solitaire.piles import CardPile


def can_place_on_tableau(card: Card, pile: CardPile) -> bool:
    """
    Check if a card may be played onto a tableau column's face-up pile.

    An empty column takes only a King. Otherwise the card must be one rank
    below the top card and of the opposite color.
    """
    top = pile.peek()
    if top is None:
        return card.rank == TABLEAU_BASE_RANK
    return (
        card.rank.rank_value == top.rank.rank_value - 1 and card.is_red != top.is_red
    )


def can_place_on_foundation(card: Card, pile: CardPile) -> bool:
    """
    Check if a card may be played onto a foundation pile.

    An empty foundation takes only an Ace. Otherwise the card must be one
    rank above the top card and of the same suit.
    """
    top = pile.peek()
    if top is None:
        return card.rank == FOUNDATION_BASE_RANK
    return card.rank.rank_value == top.rank.rank_value + 1 and card.suit == top.suit


def is_valid_run(cards: Sequence[Card]) -> bool:
    """
    Check that cards, bottom first, descend by one rank and alternate color.

    Empty and single-card runs are valid.
    """
    for lower, upper in zip(cards, cards[1:]):
        if upper.rank.rank_value != lower.rank.rank_value - 1:
            return False
        if upper.is_red == lower.is_red:
            return False
    return True


class KlondikeRules:
    def __init__(
        self,
        draw_count: int = DEFAULT_DRAW_COUNT,
        win_rule: str = WIN_RULE_COUNTERS,
        validate_runs: bool = True,
    ):
        """
        Table rules for a Klondike game.

        Args:
            draw_count: Cards turned from the stock per draw.
            win_rule: "counters" wins when no hidden tableau card and at most
                one unplayed stock card remain; "foundations" wins only when
                every foundation is complete.
            validate_runs: Reject tableau moves whose selected run is out of
                range or not a descending, alternating sequence.
        """
        if not isinstance(draw_count, int) or draw_count < 1:
            raise ValueError(f"draw_count must be a positive integer: {draw_count}")
        if win_rule not in WIN_RULES:
            raise ValueError(f"Unknown win rule: {win_rule}")
        self.draw_count = draw_count
        self.win_rule = win_rule
        self.validate_runs = validate_runs

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> "KlondikeRules":
        """Build rules from a config dictionary, ignoring unknown keys."""
        config = config or {}
        return cls(
            draw_count=config.get("draw_count", DEFAULT_DRAW_COUNT),
            win_rule=config.get("win_rule", WIN_RULE_COUNTERS),
            validate_runs=config.get("validate_runs", True),
        )

    @classmethod
    def coerce(
        cls, rules: Union["KlondikeRules", Dict[str, Any], None]
    ) -> "KlondikeRules":
        if isinstance(rules, KlondikeRules):
            return rules
        return cls.from_dict(rules)

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        return {
            "draw_count": self.draw_count,
            "win_rule": self.win_rule,
            "validate_runs": self.validate_runs,
        }

    def can_place_on_tableau(self, card: Card, pile: CardPile) -> bool:
        return can_place_on_tableau(card, pile)

    def can_place_on_foundation(self, card: Card, pile: CardPile) -> bool:
        return can_place_on_foundation(card, pile)

    def __repr__(self) -> str:
        return (
            f"KlondikeRules(draw_count={self.draw_count}, "
            f"win_rule={self.win_rule!r}, validate_runs={self.validate_runs})"
        )
