"""
Hand scoring for the game of 21.

Every function here is pure: it takes the cards of a hand (a `Hand` or any
iterable of `Card`) and derives a number or a flag from them. Scores are
never stored, callers recompute them whenever a hand changes.

An Ace counts 11 unless that would take the total past the goal, in which
case it counts 1. Aces are demoted one at a time, each demotion lowering the
total by exactly 10, so the first total at or under the goal is also the
highest one reachable.
"""

from typing import Iterable

from twentyone.common.card import Card

GOAL = 21
ACE_DEMOTION = 10
TEN_VALUE = 10


def score(cards: Iterable[Card], goal: int = GOAL) -> int:
    """
    Calculate the best total for a hand.

    Args:
        cards: The cards to score.
        goal: Total that must not be exceeded.

    Returns:
        The highest total not above `goal`, or the smallest overshoot when
        every Ace is already counted as 1.

    >>> from twentyone.common.card import Card, Rank, Suit
    >>> score([Card(Suit.CLUBS, Rank.ACE), Card(Suit.HEARTS, Rank.ACE), Card(Suit.SPADES, Rank.NINE)])
    21
    """
    total = 0
    soft_aces = 0
    for card in cards:
        total += card.rank_value
        if card.is_ace:
            soft_aces += 1

    while total > goal and soft_aces > 0:
        total -= ACE_DEMOTION
        soft_aces -= 1

    return total


def hard_total(cards: Iterable[Card]) -> int:
    """Total with every Ace counted as 1."""
    total = 0
    for card in cards:
        total += card.rank_value - ACE_DEMOTION if card.is_ace else card.rank_value
    return total


def is_soft(cards: Iterable[Card], goal: int = GOAL) -> bool:
    """Whether at least one Ace is still counted as 11."""
    cards = list(cards)
    return score(cards, goal) > hard_total(cards)


def is_bust(cards: Iterable[Card], goal: int = GOAL) -> bool:
    return score(cards, goal) > goal


def is_natural(cards: Iterable[Card], goal: int = GOAL) -> bool:
    """Whether the hand is exactly two cards totalling the goal."""
    cards = list(cards)
    return len(cards) == 2 and score(cards, goal) == goal


def count_ten_value(cards: Iterable[Card]) -> int:
    """Number of cards worth exactly 10: tens and face cards."""
    return sum(1 for card in cards if card.rank_value == TEN_VALUE)
