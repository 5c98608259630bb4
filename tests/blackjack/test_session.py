import pytest

from twentyone import (
    DeckExhausted,
    GamePhase,
    InvalidAction,
    Party,
    Rules,
    apply_player_action,
    new_session,
    run_dealer_phase,
)
from twentyone.blackjack.session import GameSession
from twentyone.common.card import FACE_DOWN_SYMBOL, Card, Rank, Suit
from twentyone.common.deck import Deck
from twentyone.events import EngineEventType, EventBus


def stacked(*specs):
    """Deck dealing (rank, suit) pairs front to back."""
    return Deck.stacked(Card(suit, rank) for rank, suit in specs)


@pytest.fixture
def events():
    recorded = []
    EventBus.get_instance().on_any(recorded.append)
    return recorded


def event_names(events):
    return [name for name, _ in events]


def test_opening_deal_order_and_hole_card():
    deck = stacked(
        (Rank.TWO, Suit.SPADES),
        (Rank.THREE, Suit.SPADES),
        (Rank.FOUR, Suit.SPADES),
        (Rank.FIVE, Suit.SPADES),
        (Rank.SIX, Suit.SPADES),
    )
    session = new_session(deck=deck)

    assert session.phase is GamePhase.PLAYER_TURN
    assert session.player_hand.cards == [Card(Suit.SPADES, Rank.TWO), Card(Suit.SPADES, Rank.THREE)]
    assert session.house_hand.cards == [Card(Suit.SPADES, Rank.FOUR), Card(Suit.SPADES, Rank.FIVE)]
    assert session.house_hand.hole_card == Card(Suit.SPADES, Rank.FOUR)
    assert session.cards_remaining == 1

    view = session.to_dict()
    assert view["house"]["cards"] == [FACE_DOWN_SYMBOL, "5♠"]
    assert view["house"]["score"] == 5
    assert view["house"]["hidden_cards"] == 1
    assert view["player"]["score"] == 5
    assert view["winner"] is None


def test_player_natural_ends_game_before_player_turn(events):
    deck = stacked(
        (Rank.ACE, Suit.SPADES),
        (Rank.KING, Suit.HEARTS),
        (Rank.NINE, Suit.CLUBS),
        (Rank.EIGHT, Suit.DIAMONDS),
    )
    session = new_session(deck=deck)

    assert session.phase is GamePhase.PLAYER_WIN
    assert session.winner is Party.PLAYER
    assert session.player_score == 21
    assert session.house_score == 17
    phases = [data["to"] for name, data in events if name == "PHASE_CHANGED"]
    assert phases == ["PLAYER_WIN"]


def test_house_natural_wins():
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.NINE, Suit.HEARTS),
        (Rank.ACE, Suit.CLUBS),
        (Rank.KING, Suit.DIAMONDS),
    )
    session = new_session(deck=deck)

    assert session.phase is GamePhase.DEALER_WIN
    assert session.winner is Party.HOUSE
    assert session.house_hand.hole_card is None


def test_both_naturals_tie():
    deck = stacked(
        (Rank.ACE, Suit.SPADES),
        (Rank.KING, Suit.HEARTS),
        (Rank.ACE, Suit.CLUBS),
        (Rank.QUEEN, Suit.DIAMONDS),
    )
    session = new_session(deck=deck)

    assert session.phase is GamePhase.TIE
    assert session.winner is None
    assert session.outcome is GamePhase.TIE


def test_naturals_can_be_left_to_play_out():
    deck = stacked(
        (Rank.ACE, Suit.SPADES),
        (Rank.KING, Suit.HEARTS),
        (Rank.NINE, Suit.CLUBS),
        (Rank.EIGHT, Suit.DIAMONDS),
    )
    session = new_session(rules=Rules(resolve_naturals=False), deck=deck)

    assert session.phase is GamePhase.PLAYER_TURN


def test_player_bust_leaves_house_untouched(events):
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.SIX, Suit.HEARTS),
        (Rank.KING, Suit.CLUBS),
        (Rank.SEVEN, Suit.DIAMONDS),
        (Rank.SEVEN, Suit.SPADES),
    )
    session = new_session(deck=deck)

    result = apply_player_action(session, "h")

    assert result.accepted
    assert result.cards_drawn == (Card(Suit.SPADES, Rank.SEVEN),)
    assert result.phase is GamePhase.DEALER_WIN
    assert session.player_score == 23
    assert len(session.house_hand) == 2
    assert "HAND_BUSTED" in event_names(events)
    assert "DEALER_ACTION" not in event_names(events)


def test_full_game_player_wins():
    deck = stacked(
        (Rank.TWO, Suit.SPADES),
        (Rank.THREE, Suit.SPADES),
        (Rank.FOUR, Suit.SPADES),
        (Rank.FIVE, Suit.SPADES),
        (Rank.SIX, Suit.SPADES),
        (Rank.SEVEN, Suit.SPADES),
        (Rank.EIGHT, Suit.SPADES),
        (Rank.NINE, Suit.SPADES),
    )
    session = new_session(deck=deck)

    assert apply_player_action(session, "h").phase is GamePhase.PLAYER_TURN
    assert session.player_score == 11
    assert apply_player_action(session, "h").phase is GamePhase.PLAYER_TURN
    assert session.player_score == 18

    result = apply_player_action(session, "f")
    assert result.phase is GamePhase.DEALER_TURN
    assert result.message == "It's the dealers turn"
    assert session.house_hand.hole_card is not None

    result = run_dealer_phase(session)
    assert result.cards_drawn == (Card(Suit.SPADES, Rank.EIGHT),)
    assert session.house_score == 17
    assert session.phase is GamePhase.PLAYER_WIN
    assert session.cards_remaining == 1


def test_dealer_bust():
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.NINE, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SIX, Suit.HEARTS),
        (Rank.KING, Suit.CLUBS),
    )
    session = new_session(deck=deck)
    session.stand()

    result = session.play_dealer()

    assert result.phase is GamePhase.PLAYER_WIN
    assert result.cards_drawn == (Card(Suit.CLUBS, Rank.KING),)
    assert session.house_score == 26


def test_soft_dealer_hand_keeps_drawing_to_tie():
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.NINE, Suit.SPADES),
        (Rank.ACE, Suit.HEARTS),
        (Rank.SIX, Suit.HEARTS),
        (Rank.FIVE, Suit.CLUBS),
        (Rank.SEVEN, Suit.CLUBS),
        (Rank.TWO, Suit.CLUBS),
    )
    session = new_session(deck=deck)
    session.stand()

    result = run_dealer_phase(session)

    assert len(result.cards_drawn) == 2
    assert session.house_score == 19
    assert session.phase is GamePhase.TIE


def test_dealer_stands_when_ahead():
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.FIVE, Suit.SPADES),
        (Rank.NINE, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
        (Rank.TWO, Suit.CLUBS),
    )
    session = new_session(deck=deck)
    session.stand()

    result = run_dealer_phase(session)

    assert result.cards_drawn == ()
    assert session.phase is GamePhase.DEALER_WIN


def test_hole_card_revealed_exactly_once(events):
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.NINE, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
    )
    session = new_session(deck=deck)
    session.stand()
    run_dealer_phase(session)

    revealed = [data for name, data in events if name == "CARD_REVEALED"]
    assert revealed == [
        {"game_id": session.id, "party": "house", "card": "10❤"}
    ]
    assert session.house_hand.hole_card is None
    assert session.to_dict()["house"]["cards"] == ["10❤", "7❤"]
    assert session.to_dict()["house"]["score"] == 17


def test_player_wins_on_goal():
    specs = (
        (Rank.TEN, Suit.SPADES),
        (Rank.SIX, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
        (Rank.FIVE, Suit.CLUBS),
    )
    session = new_session(rules=Rules(player_wins_on_goal=True), deck=stacked(*specs))
    assert apply_player_action(session, "h").phase is GamePhase.PLAYER_WIN

    session = new_session(deck=stacked(*specs))
    assert apply_player_action(session, "h").phase is GamePhase.PLAYER_TURN
    assert session.player_score == 21


def test_invalid_token_is_rejected(events):
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.SIX, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
        (Rank.TWO, Suit.CLUBS),
    )
    session = new_session(deck=deck)
    before = session.player_hand.cards

    result = apply_player_action(session, "x")

    assert not result.accepted
    assert result.phase is GamePhase.PLAYER_TURN
    assert session.player_hand.cards == before
    assert "INVALID_ACTION" in event_names(events)


def test_actions_rejected_after_game_over():
    deck = stacked(
        (Rank.ACE, Suit.SPADES),
        (Rank.KING, Suit.HEARTS),
        (Rank.NINE, Suit.CLUBS),
        (Rank.EIGHT, Suit.DIAMONDS),
    )
    session = new_session(deck=deck)

    result = apply_player_action(session, "h")
    assert not result.accepted
    assert session.phase is GamePhase.PLAYER_WIN
    assert len(session.player_hand) == 2

    with pytest.raises(InvalidAction):
        session.hit()


def test_dealer_phase_only_runs_on_dealer_turn():
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.SIX, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
    )
    session = new_session(deck=deck)

    result = run_dealer_phase(session)
    assert not result.accepted
    assert session.phase is GamePhase.PLAYER_TURN
    with pytest.raises(InvalidAction):
        session.play_dealer()


def test_player_cannot_act_during_dealer_turn():
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.SIX, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
    )
    session = new_session(deck=deck)
    session.stand()

    assert not apply_player_action(session, "h").accepted
    assert session.phase is GamePhase.DEALER_TURN


def test_deck_exhaustion_propagates():
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.SIX, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
    )
    session = new_session(deck=deck)

    with pytest.raises(DeckExhausted):
        apply_player_action(session, "h")


def test_short_deck_cannot_deal_opening_hands():
    deck = stacked((Rank.TEN, Suit.SPADES), (Rank.SIX, Suit.SPADES))
    with pytest.raises(DeckExhausted):
        new_session(deck=deck)


def test_session_starts_only_once():
    session = GameSession(seed=1)
    assert session.phase is GamePhase.INIT
    session.start()
    with pytest.raises(InvalidAction):
        session.start()


def test_same_seed_same_deal():
    first = new_session(seed=42)
    second = new_session(seed=42)

    assert first.player_hand.cards == second.player_hand.cards
    assert first.house_hand.cards == second.house_hand.cards
    assert first.id != second.id


def test_lifecycle_events(events):
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.NINE, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
    )
    session = new_session(deck=deck)
    session.stand()
    session.play_dealer()

    names = event_names(events)
    assert names[0] == "GAME_STARTED"
    assert names[1:5] == ["CARD_DEALT"] * 4
    assert names[-1] == "GAME_ENDED"
    assert all(data["game_id"] == session.id for _, data in events)

    ended = events[-1][1]
    assert ended["outcome"] == "PLAYER_WIN"
    assert ended["winner"] == "player"
    assert ended["player"] == 19
    assert ended["house"] == 17

    hole_deal = [data for name, data in events if name == "CARD_DEALT"][2]
    assert hole_deal["party"] == "house"
    assert hole_deal["is_hole_card"] is True
    assert hole_deal["card"] == FACE_DOWN_SYMBOL


def test_dealer_decisions_are_archived_per_game():
    from twentyone.blackjack.decision_logger import decision_logger

    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.FIVE, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.TWO, Suit.HEARTS),
        (Rank.FOUR, Suit.CLUBS),
    )
    session = new_session(deck=deck)
    session.stand()
    session.play_dealer()

    summary = decision_logger.get_decision_summary()
    assert summary["total_decisions"] == 2
    assert summary["hits"] == 1
    assert summary["stands"] == 1
    assert session.phase is GamePhase.DEALER_WIN


def test_custom_event_bus_isolated_from_global():
    from twentyone.events import EventEmitter

    bus = EventEmitter()
    private, shared = [], []
    bus.on(EngineEventType.GAME_STARTED, private.append)
    EventBus.get_instance().on(EngineEventType.GAME_STARTED, shared.append)

    new_session(seed=5, event_bus=bus)

    assert len(private) == 1
    assert shared == []


def test_standing_at_five_against_ordered_deck():
    ranks = [Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX, Rank.SEVEN]
    session = new_session(deck=stacked(*((rank, Suit.CLUBS) for rank in ranks)))
    assert session.player_score == 5

    apply_player_action(session, "f")
    result = run_dealer_phase(session)

    # House already leads 9 to 5 so the policy settles without drawing
    assert result.cards_drawn == ()
    assert session.house_score == 9
    assert session.phase is GamePhase.DEALER_WIN


@pytest.mark.parametrize("token", ["hit", "HIT", "stand", "finish", " h", "f "])
def test_action_words_are_not_commands(token):
    deck = stacked(
        (Rank.TEN, Suit.SPADES),
        (Rank.SIX, Suit.SPADES),
        (Rank.TEN, Suit.HEARTS),
        (Rank.SEVEN, Suit.HEARTS),
        (Rank.TWO, Suit.CLUBS),
    )
    session = new_session(deck=deck)
    before = session.player_hand.cards

    result = apply_player_action(session, token)

    assert not result.accepted
    assert result.cards_drawn == ()
    assert session.phase is GamePhase.PLAYER_TURN
    assert session.player_hand.cards == before
    assert session.cards_remaining == 1
