"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck. Each suit
carries its display icon and the one-letter code used in card identity codes.

- `Rank`: An enum representing the thirteen ranks, Two through Ace. Each rank
carries its short label and its nominal value in a game of 21 (face cards are
worth 10, the Ace is worth 11 until the scorer demotes it).

- `Card`: A class representing a playing card. Suit and rank never change once
a card is created; only the `face_down` flag may be flipped, and it is purely
a presentation detail.
"""

from enum import Enum, unique

FACE_DOWN_SYMBOL = "□"


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.

    >>> Suit.SPADES.icon, Suit.SPADES.code
    ('♠', 'S')
    """

    HEARTS = ("❤", "H")
    SPADES = ("♠", "S")
    CLUBS = ("♣", "C")
    DIAMONDS = ("♦", "D")

    def __init__(self, icon: str, code: str):
        self.icon = icon
        self.code = code

    def __str__(self) -> str:
        return self.icon


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.

    Members are ``(label, value)`` pairs so the four ten-valued ranks stay
    distinct members instead of collapsing into aliases.
    """

    TWO = ("2", 2)
    THREE = ("3", 3)
    FOUR = ("4", 4)
    FIVE = ("5", 5)
    SIX = ("6", 6)
    SEVEN = ("7", 7)
    EIGHT = ("8", 8)
    NINE = ("9", 9)
    TEN = ("10", 10)
    JACK = ("J", 10)
    QUEEN = ("Q", 10)
    KING = ("K", 10)
    ACE = ("A", 11)

    def __init__(self, rank_str: str, rank_value: int):
        self.rank_str = rank_str
        self.rank_value = rank_value

    @property
    def is_ace(self) -> bool:
        return self is Rank.ACE

    def __str__(self) -> str:
        return self.rank_str


class Card:
    """
    Class representing a playing card. This class is a member of a card deck.

    >>> card = Card(Suit.HEARTS, Rank.KING)
    >>> card.label, card.identity_code, card.rank_value
    ('K❤', 'KH', 10)
    >>> card.face_down = True
    >>> print(card)
    □
    """

    __slots__ = ("_suit", "_rank", "face_down")

    def __init__(self, suit: Suit, rank: Rank, face_down: bool = False):
        """
        Initialize a Card instance.

        :param suit: Suit of the card (one of the Suit enums)
        :param rank: Rank of the card (one of the Rank enums)
        :param face_down: Whether the card is dealt hidden
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        self._suit = suit
        self._rank = rank
        self.face_down = face_down

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def rank_value(self) -> int:
        """Nominal value of the card; an Ace reports 11."""
        return self._rank.rank_value

    @property
    def is_ace(self) -> bool:
        return self._rank.is_ace

    @property
    def label(self) -> str:
        """Human-readable, suit-qualified label such as ``10♦``."""
        return f"{self._rank.rank_str}{self._suit.icon}"

    @property
    def identity_code(self) -> str:
        """Stable code unique to the rank and suit, such as ``10D``."""
        return f"{self._rank.rank_str}{self._suit.code}"

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        The face-down flag is not part of a card's identity.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return NotImplemented

    def __hash__(self):
        return hash((self._suit, self._rank))

    def __repr__(self) -> str:
        return f"Card(Suit.{self._suit.name}, Rank.{self._rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: The face-down symbol while hidden, otherwise the card label.
        """
        return FACE_DOWN_SYMBOL if self.face_down else self.label
