"""
This module provides the turn state machine for a game of 21. It uses the
state design pattern: the session holds one state object at a time and
delegates to it. The game progresses through the phases

    INIT -> PLAYER_TURN -> DEALER_TURN -> PLAYER_WIN | DEALER_WIN | TIE

and may jump from INIT or PLAYER_TURN straight to a terminal phase.

Classes:

GamePhase: The phases of a game, terminal ones included.
TurnResult: What a single call into the machine did.
GameState: An abstract base class for game states.
InitState: Resolves the opening deal, including naturals.
PlayerTurnState: Accepts HIT and STAND from the player.
DealersTurnState: Lets the dealer strategy draw until it stops or busts.
EndGameState: A terminal state; it rejects every action.

The handle method of each state performs the automatic work of its phase;
handle_action applies a player action. Both report through the session,
which owns the deck and hands.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Tuple

from twentyone.blackjack.action import Action
from twentyone.common.card import Card
from twentyone.common.errors import InvalidAction
from twentyone.events import EngineEventType

if TYPE_CHECKING:
    from twentyone.blackjack.session import GameSession


class GamePhase(Enum):
    """
    Possible phases of a game.
    """

    INIT = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    PLAYER_WIN = auto()
    DEALER_WIN = auto()
    TIE = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.PLAYER_WIN, GamePhase.DEALER_WIN, GamePhase.TIE)


class Party(Enum):
    """The two sides of the table."""

    PLAYER = "player"
    HOUSE = "house"


@dataclass(frozen=True)
class TurnResult:
    """
    Outcome of one call into the state machine.

    Attributes:
        phase: Phase of the game after the call
        accepted: False when the action was rejected and nothing changed
        cards_drawn: Cards dealt during the call, in order
        message: Short human-readable description
    """

    phase: GamePhase
    accepted: bool = True
    cards_drawn: Tuple[Card, ...] = ()
    message: str = ""

    @property
    def is_over(self) -> bool:
        return self.phase.is_terminal


def compare_scores(player_score: int, house_score: int) -> GamePhase:
    """Resolve a game in which neither side busted."""
    if player_score > house_score:
        return GamePhase.PLAYER_WIN
    if house_score > player_score:
        return GamePhase.DEALER_WIN
    return GamePhase.TIE


class GameState(ABC):
    """
    Abstract base class for game states.
    """

    phase: GamePhase

    def handle(self, session: "GameSession") -> TurnResult:
        """Perform the automatic work of this phase. Most phases have none."""
        return TurnResult(self.phase, accepted=False, message=f"Nothing to do during {self.phase.name}")

    def handle_action(self, session: "GameSession", action: Action) -> TurnResult:
        """Apply a player action. Only the player's turn accepts any."""
        raise InvalidAction(f"{action.name} is not allowed during {self.phase.name}", action)

    def __str__(self) -> str:
        return self.__class__.__name__


class InitState(GameState):
    """
    The state right after the opening deal.
    """

    phase = GamePhase.INIT

    def handle(self, session):
        """
        Ends the game at once when a two card hand already totals the goal,
        otherwise hands the turn to the player.
        """
        rules = session.rules
        if rules.resolve_naturals:
            player_natural = rules.is_natural(session.player_hand)
            house_natural = rules.is_natural(session.house_hand)
            if player_natural and house_natural:
                return session.finish(GamePhase.TIE, "both hands are naturals")
            if player_natural:
                return session.finish(GamePhase.PLAYER_WIN, "player natural")
            if house_natural:
                return session.finish(GamePhase.DEALER_WIN, "house natural")

        session.set_state(PlayerTurnState(), "opening deal is undecided")
        return TurnResult(GamePhase.PLAYER_TURN, message="Player to act")


class PlayerTurnState(GameState):
    """The state where the player hits or stands."""

    phase = GamePhase.PLAYER_TURN

    def handle_action(self, session, action):
        session.emit(
            EngineEventType.PLAYER_ACTION,
            {"action": action.name, "player_score": session.player_score},
        )

        if action is Action.STAND:
            session.set_state(DealersTurnState(), "player stands")
            return TurnResult(GamePhase.DEALER_TURN, message="It's the dealers turn")

        card = session.deal_to(Party.PLAYER)
        score = session.player_score
        if session.rules.is_bust(session.player_hand):
            session.emit(
                EngineEventType.HAND_BUSTED, {"party": Party.PLAYER.value, "score": score}
            )
            session.finish(GamePhase.DEALER_WIN, f"player busts with {score}")
            return TurnResult(session.phase, cards_drawn=(card,), message=f"Player busts with {score}")

        if session.rules.player_wins_on_goal and score == session.rules.goal:
            session.finish(GamePhase.PLAYER_WIN, f"player reaches {score}")
            return TurnResult(session.phase, cards_drawn=(card,), message=f"Player reaches {score}")

        return TurnResult(session.phase, cards_drawn=(card,), message=f"Player draws {card}")


class DealersTurnState(GameState):
    """
    The state where the dealer plays out its hand.
    """

    phase = GamePhase.DEALER_TURN

    def handle(self, session):
        """
        Consult the dealer strategy until it stands or the house busts, then
        compare scores.
        """
        rules = session.rules
        drawn = []

        while rules.dealer_may_draw(session.house_hand) and session.dealer_strategy.should_hit(
            session.player_hand,
            session.house_hand,
            session.player_score,
            session.house_score,
        ):
            card = self.dealer_action(session)
            drawn.append(card)

            if rules.is_bust(session.house_hand):
                score = session.house_score
                session.emit(
                    EngineEventType.HAND_BUSTED, {"party": Party.HOUSE.value, "score": score}
                )
                session.finish(GamePhase.PLAYER_WIN, f"house busts with {score}")
                return TurnResult(session.phase, cards_drawn=tuple(drawn), message=f"Dealer busts with {score}")

        session.emit(
            EngineEventType.DEALER_ACTION,
            {"action": Action.STAND.name, "house_score": session.house_score},
        )
        outcome = compare_scores(session.player_score, session.house_score)
        session.finish(
            outcome, f"player {session.player_score} vs house {session.house_score}"
        )
        return TurnResult(session.phase, cards_drawn=tuple(drawn), message="Dealer stands")

    def dealer_action(self, session) -> Card:
        card = session.deal_to(Party.HOUSE)
        session.emit(
            EngineEventType.DEALER_ACTION,
            {"action": Action.HIT.name, "card": card.label, "house_score": session.house_score},
        )
        return card


class EndGameState(GameState):
    """
    A terminal state. Every action is rejected.
    """

    def __init__(self, phase: GamePhase):
        if not phase.is_terminal:
            raise ValueError(f"{phase.name} is not a terminal phase")
        self.phase = phase

    def handle_action(self, session, action):
        raise InvalidAction(f"The game is over ({self.phase.name})", action)

    @property
    def winner(self) -> Optional[Party]:
        if self.phase is GamePhase.PLAYER_WIN:
            return Party.PLAYER
        if self.phase is GamePhase.DEALER_WIN:
            return Party.HOUSE
        return None

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.phase.name})"
