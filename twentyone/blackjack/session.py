"""
Game session for a single play-through of 21.

A `GameSession` owns the deck, the player's hand and the house's hand, and
holds the current state of the turn state machine. The module-level
functions `new_session`, `apply_player_action` and `run_dealer_phase` are the
interface a rendering shell drives; they never raise `InvalidAction` and
report rejected actions through `TurnResult.accepted` instead.
"""

import logging
import random
import uuid
from typing import Any, Dict, Optional, Union

from twentyone.blackjack.action import Action
from twentyone.blackjack.decision_logger import decision_logger
from twentyone.blackjack.hand import BlackjackHand
from twentyone.blackjack.rules import Rules
from twentyone.blackjack.state import (
    DealersTurnState,
    EndGameState,
    GamePhase,
    GameState,
    InitState,
    Party,
    TurnResult,
)
from twentyone.blackjack.strategy import DealerStrategy, TableReadingDealerStrategy
from twentyone.common.card import Card
from twentyone.common.deck import Deck
from twentyone.common.errors import InvalidAction
from twentyone.events import EngineEventType, EventBus, EventEmitter

logger = logging.getLogger("twentyone.session")


class GameSession:
    """
    One game of 21 between a player and the house.

    The session is created in the INIT phase with empty hands; `start` deals
    the opening cards and resolves naturals. Use `new_session` to get a
    started session.
    """

    def __init__(
        self,
        rules: Optional[Rules] = None,
        deck: Optional[Deck] = None,
        dealer_strategy: Optional[DealerStrategy] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        """
        Initialize the session.

        Args:
            rules: Rules of the game; defaults to standard 21
            deck: Deck to deal from. When omitted a full deck is built and
                  shuffled with `rng`
            dealer_strategy: Policy deciding whether the house draws
            rng: Random number generator for the shuffle
            seed: Seed for a new generator when `rng` is not given; the
                  generator draws on OS entropy when both are omitted
            event_bus: Emitter to publish events on; defaults to the global bus
        """
        self.id = str(uuid.uuid4())
        self.rules = rules or Rules()
        if deck is None:
            deck = Deck(rng=rng if rng is not None else random.Random(seed)).shuffle()
        self._deck = deck
        self.player_hand = BlackjackHand(self.rules.goal)
        self.house_hand = BlackjackHand(self.rules.goal)
        self.dealer_strategy = dealer_strategy or TableReadingDealerStrategy(self.rules)
        self.event_bus = event_bus or EventBus.get_instance()
        self.current_state: GameState = InitState()
        self._started = False

    def start(self) -> "GameSession":
        """
        Deal two cards to the player, then two to the house with the first
        one face down, and resolve the opening.
        """
        if self._started:
            raise InvalidAction("The session has already been dealt")
        self._started = True

        decision_logger.log_round_start(self.id)
        self.emit(EngineEventType.GAME_STARTED, {"rules": self.rules.to_dict()})

        self.deal_to(Party.PLAYER)
        self.deal_to(Party.PLAYER)
        self.deal_to(Party.HOUSE, face_down=True)
        self.deal_to(Party.HOUSE)

        self.current_state.handle(self)
        return self

    # Player and dealer turns

    def apply_action(self, action: Union[Action, str]) -> TurnResult:
        """
        Apply a player action or console token.

        Unrecognised tokens and actions that are illegal in the current phase
        are reported as a rejected TurnResult; the game is left untouched.
        """
        parsed = Action.parse(action)
        try:
            if parsed is None:
                raise InvalidAction(f"Invalid command: {action!r}", action)
            return self.current_state.handle_action(self, parsed)
        except InvalidAction as e:
            logger.debug(f"Rejected action {action!r} during {self.phase.name}: {e}")
            self.emit(
                EngineEventType.INVALID_ACTION,
                {"action": str(action), "phase": self.phase.name, "reason": str(e)},
            )
            return TurnResult(self.phase, accepted=False, message=str(e))

    def hit(self) -> TurnResult:
        """Draw a card for the player. Raises InvalidAction outside the player's turn."""
        return self.current_state.handle_action(self, Action.HIT)

    def stand(self) -> TurnResult:
        """End the player's turn. Raises InvalidAction outside the player's turn."""
        return self.current_state.handle_action(self, Action.STAND)

    def play_dealer(self) -> TurnResult:
        """Play the house's hand to the end. Raises InvalidAction outside the dealer's turn."""
        if not isinstance(self.current_state, DealersTurnState):
            raise InvalidAction(f"The dealer cannot play during {self.phase.name}")
        return self.current_state.handle(self)

    def run_dealer_phase(self) -> TurnResult:
        try:
            return self.play_dealer()
        except InvalidAction as e:
            return TurnResult(self.phase, accepted=False, message=str(e))

    # Primitives used by the states

    def deal_to(self, party: Party, face_down: bool = False) -> Card:
        """Move the next card from the deck into a hand."""
        card = self._deck.draw()
        card.face_down = face_down
        hand = self.player_hand if party is Party.PLAYER else self.house_hand
        hand.add_card(card)
        self.emit(
            EngineEventType.CARD_DEALT,
            {
                "party": party.value,
                "card": str(card),
                "is_hole_card": face_down,
                "cards_remaining": self._deck.size,
            },
        )
        return card

    def set_state(self, state: GameState, reason: str = "") -> None:
        previous = self.current_state.phase
        self.current_state = state
        decision_logger.log_phase_transition(previous.name, state.phase.name, reason)
        self.emit(
            EngineEventType.PHASE_CHANGED,
            {"from": previous.name, "to": state.phase.name, "reason": reason},
        )

    def finish(self, phase: GamePhase, reason: str) -> TurnResult:
        """Enter a terminal phase and reveal the hole card."""
        self.set_state(EndGameState(phase), reason)

        revealed = self.house_hand.reveal()
        if revealed is not None:
            self.emit(
                EngineEventType.CARD_REVEALED,
                {"party": Party.HOUSE.value, "card": revealed.label},
            )

        scores = {"player": self.player_score, "house": self.house_score}
        decision_logger.log_round_end(self.id, phase.name, scores)
        self.emit(
            EngineEventType.GAME_ENDED,
            {
                "outcome": phase.name,
                "winner": self.winner.value if self.winner else None,
                "reason": reason,
                **scores,
            },
        )
        return TurnResult(phase, message=reason)

    def emit(self, event_type: EngineEventType, data: Dict[str, Any]) -> None:
        self.event_bus.emit(event_type, {"game_id": self.id, **data})

    # Read accessors

    @property
    def phase(self) -> GamePhase:
        return self.current_state.phase

    @property
    def is_over(self) -> bool:
        return self.phase.is_terminal

    @property
    def outcome(self) -> Optional[GamePhase]:
        return self.phase if self.is_over else None

    @property
    def winner(self) -> Optional[Party]:
        """The winning party once the game is over; None while playing or on a tie."""
        if isinstance(self.current_state, EndGameState):
            return self.current_state.winner
        return None

    @property
    def player_score(self) -> int:
        return self.player_hand.value()

    @property
    def house_score(self) -> int:
        return self.house_hand.value()

    @property
    def visible_house_score(self) -> int:
        """House score as the player sees it, hole card excluded."""
        return self.house_hand.visible_value()

    @property
    def cards_remaining(self) -> int:
        return self._deck.size

    def to_dict(self) -> Dict[str, Any]:
        """
        Snapshot of the table as the player may see it.

        The hole card is rendered as the face-down symbol and left out of the
        house score until it is revealed.
        """
        hidden = self.house_hand.hole_card is not None
        return {
            "id": self.id,
            "phase": self.phase.name,
            "is_over": self.is_over,
            "winner": self.winner.value if self.winner else None,
            "player": {
                "cards": [str(card) for card in self.player_hand],
                "score": self.player_score,
            },
            "house": {
                "cards": [str(card) for card in self.house_hand],
                "score": self.visible_house_score if hidden else self.house_score,
                "hidden_cards": len(self.house_hand) - len(self.house_hand.visible_cards),
            },
            "cards_remaining": self.cards_remaining,
            "rules": self.rules.to_dict(),
        }

    def __repr__(self) -> str:
        return f"GameSession(id={self.id!r}, phase={self.phase.name})"


def new_session(
    rules: Optional[Rules] = None,
    deck: Optional[Deck] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    dealer_strategy: Optional[DealerStrategy] = None,
    event_bus: Optional[EventEmitter] = None,
) -> GameSession:
    """Build a deck, deal the opening hands and resolve naturals."""
    session = GameSession(
        rules=rules,
        deck=deck,
        dealer_strategy=dealer_strategy,
        rng=rng,
        seed=seed,
        event_bus=event_bus,
    )
    return session.start()


def apply_player_action(session: GameSession, action: Union[Action, str]) -> TurnResult:
    return session.apply_action(action)


def run_dealer_phase(session: GameSession) -> TurnResult:
    return session.run_dealer_phase()
