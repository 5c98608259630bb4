"""
BlackjackHand: a hand that knows how to score itself and hide its hole card.
"""

from typing import List, Optional

from twentyone.blackjack import scoring
from twentyone.common.card import Card
from twentyone.common.hand import Hand


class BlackjackHand(Hand):
    """A hand in the game of 21. Scores are recomputed on every call."""

    def __init__(self, goal: int = scoring.GOAL):
        super().__init__()
        self._goal = goal

    def value(self) -> int:
        """Calculate the optimal value of the hand with ace handling."""
        return scoring.score(self._cards, self._goal)

    def hard_value(self) -> int:
        """Value of the hand with every Ace counted as 1."""
        return scoring.hard_total(self._cards)

    def visible_value(self) -> int:
        """Value of the face-up cards only, as an observer would count it."""
        return scoring.score(self.visible_cards, self._goal)

    @property
    def is_soft(self) -> bool:
        return scoring.is_soft(self._cards, self._goal)

    @property
    def is_bust(self) -> bool:
        return scoring.is_bust(self._cards, self._goal)

    @property
    def is_natural(self) -> bool:
        """Determine if the hand is a two card 21."""
        return scoring.is_natural(self._cards, self._goal)

    @property
    def visible_cards(self) -> List[Card]:
        return [card for card in self._cards if not card.face_down]

    @property
    def hole_card(self) -> Optional[Card]:
        """The first face-down card, if one is still hidden."""
        for card in self._cards:
            if card.face_down:
                return card
        return None

    def reveal(self) -> Optional[Card]:
        """
        Turn every face-down card face up.

        Returns:
            The first card that was flipped, or None if nothing was hidden.
        """
        revealed = None
        for card in self._cards:
            if card.face_down:
                card.face_down = False
                if revealed is None:
                    revealed = card
        return revealed
