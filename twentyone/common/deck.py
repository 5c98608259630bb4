"""
This module contains the Deck class, which represents the finite supply of
cards used for one game.

Cards are drawn from the back of the deck. A deck is never refilled: once
every card has been drawn, further draws raise `DeckExhausted`.

>>> deck = Deck()
>>> deck.size
52
>>> deck.draw()
Card(Suit.DIAMONDS, Rank.ACE)
>>> deck.size
51
"""

import random
from typing import Iterable, List, Optional, Tuple

from twentyone.common.card import Card, Rank, Suit
from twentyone.common.errors import DeckExhausted


class Deck:
    """
    A class representing a deck of cards.
    """

    def __init__(
        self,
        cards: Optional[Iterable[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Deck instance.

        :param cards: Cards to populate the deck, the last one being drawn
                      first. If not provided, a full 52 card deck is built.
        :param rng: Random number generator used by `shuffle`. A generator
                    seeded from OS entropy is created when omitted.
        """
        if cards is None:
            self._cards: List[Card] = self.build()
        else:
            self._cards = list(cards)
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def stacked(cls, draw_order: Iterable[Card]) -> "Deck":
        """
        Build an unshuffled deck that deals `draw_order` front to back.

        :param draw_order: Cards in the order `draw` should return them.
        :return: A deck whose first draw is ``draw_order[0]``.
        """
        return cls(cards=list(reversed(list(draw_order))))

    @staticmethod
    def build() -> List[Card]:
        """
        Construct the 52 card identity set, one card per suit and rank.

        Fresh Card objects are created on every call so face-down state is
        never shared between decks.

        :return: A list of Card instances in suit-major order.
        """
        return [Card(suit, rank) for suit in Suit for rank in Rank]

    def shuffle(self) -> "Deck":
        """
        Apply a uniformly random permutation to the remaining cards.

        :return: The deck itself, to allow ``Deck().shuffle()``.
        """
        self._rng.shuffle(self._cards)
        return self

    def draw(self) -> Card:
        """
        Remove and return the next card.

        :return: The card at the back of the deck.
        :raises DeckExhausted: If the deck is empty.
        """
        if not self._cards:
            raise DeckExhausted("Cannot draw from an empty deck")
        return self._cards.pop()

    @property
    def cards(self) -> Tuple[Card, ...]:
        """Snapshot of the remaining cards; the last one is drawn next."""
        return tuple(self._cards)

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.

        :return: The size of the deck.
        """
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self._cards]})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the deck.

        >>> str(Deck())
        'Deck of 52 cards'
        """
        return f"Deck of {len(self._cards)} cards"
