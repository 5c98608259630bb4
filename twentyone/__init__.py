"""
twentyone: a two-party game of 21 between a player and the house.

The engine lives in `twentyone.blackjack`; cards, deck and hands in
`twentyone.common`; the event bus in `twentyone.events`.
"""

from twentyone.blackjack.action import Action
from twentyone.blackjack.rules import Rules
from twentyone.blackjack.session import (
    GameSession,
    apply_player_action,
    new_session,
    run_dealer_phase,
)
from twentyone.blackjack.state import GamePhase, Party, TurnResult
from twentyone.common.errors import DeckExhausted, InvalidAction, TwentyOneError

__all__ = [
    "Action",
    "Rules",
    "GameSession",
    "GamePhase",
    "Party",
    "TurnResult",
    "new_session",
    "apply_player_action",
    "run_dealer_phase",
    "TwentyOneError",
    "DeckExhausted",
    "InvalidAction",
]
