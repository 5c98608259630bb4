"""
Console front end for the game of 21.

This module is a thin shell around the engine: it renders the table as text,
reads the player's commands (``h`` to hit, ``f`` to finish) and reports the
result. All game decisions are made by the session.
"""

import argparse
import logging
import random
import sys
from collections import Counter
from typing import Optional

from twentyone.blackjack.action import Action
from twentyone.blackjack.rules import Rules
from twentyone.blackjack.session import (
    GameSession,
    apply_player_action,
    new_session,
    run_dealer_phase,
)
from twentyone.blackjack.state import GamePhase
from twentyone.common.deck import Deck
from twentyone.common.io_interface import (
    ConsoleIOInterface,
    IOInterface,
    LoggingIOInterface,
)

KEYBOARD_HELP = "Press 'h' to get a card (Hit) or 'f' to finish.\n"
TABLE_RULE = "___________________________________________\n"
INVALID_COMMAND = "Invalid command!"

RESULT_MESSAGES = {
    GamePhase.PLAYER_WIN: "You won!",
    GamePhase.DEALER_WIN: "You lost! Game Over!",
    GamePhase.TIE: "It's a tie!",
}


def render_table(session: GameSession) -> str:
    """Render both hands, the dealer's hole card shown face down while hidden."""
    view = session.to_dict()
    return "\n".join(
        [
            TABLE_RULE,
            "Dealer:",
            " ".join(view["house"]["cards"]),
            "",
            "You:",
            " ".join(view["player"]["cards"]),
        ]
    )


def announce_result(session: GameSession, io_interface: IOInterface) -> None:
    io_interface.output(render_table(session))
    io_interface.output(f"\nDealer score: {session.house_score}")
    io_interface.output(f"Player score: {session.player_score}")
    io_interface.output(f"\n{RESULT_MESSAGES[session.phase]}")


def play_game(
    io_interface: IOInterface,
    rules: Optional[Rules] = None,
    rng: Optional[random.Random] = None,
    deck: Optional[Deck] = None,
) -> GameSession:
    """
    Play one game on the given interface and return the finished session.

    When the input runs out the player is taken to stand.
    """
    session = new_session(rules=rules, deck=deck, rng=rng)
    io_interface.output(KEYBOARD_HELP)
    io_interface.output(render_table(session))

    while session.phase is GamePhase.PLAYER_TURN:
        try:
            command = io_interface.input("")
        except EOFError:
            command = Action.STAND.command

        result = apply_player_action(session, command)
        if not result.accepted:
            io_interface.output(INVALID_COMMAND)
        elif session.phase is GamePhase.DEALER_TURN:
            io_interface.output(result.message)
        elif not session.is_over:
            io_interface.output(render_table(session))

    if session.phase is GamePhase.DEALER_TURN:
        result = run_dealer_phase(session)
        for card in result.cards_drawn:
            io_interface.output(f"Dealer draws {card}")

    announce_result(session, io_interface)
    return session


def create_rules(args) -> Rules:
    return Rules(
        dealer_stand_threshold=args.dealer_threshold,
        player_wins_on_goal=args.player_wins_on_goal,
    )


def create_io_interface(args) -> IOInterface:
    io_interface = ConsoleIOInterface()
    if args.log_file:
        return LoggingIOInterface(args.log_file, io_interface)
    return io_interface


def main(argv=None) -> int:
    """
    Main function to start the game.

    Parses command-line arguments, plays the requested number of games
    against the console and prints a tally when more than one was played.
    """
    parser = argparse.ArgumentParser(description="Play 21 against the house.")
    parser.add_argument(
        "--num_games", type=int, default=1, help="Number of games to play"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the shuffle for a reproducible sequence of games.",
    )
    parser.add_argument(
        "--log_file",
        type=str,
        help="Also append a transcript of every game to this file.",
    )
    parser.add_argument(
        "--dealer_threshold",
        type=int,
        default=17,
        help="Hard total at which the dealer must stop drawing.",
    )
    parser.add_argument(
        "--player_wins_on_goal",
        action="store_true",
        help="A hit that lands exactly on 21 wins immediately.",
        default=False,
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine events and dealer decisions to stderr.",
        default=False,
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        rules = create_rules(args)
    except ValueError as e:
        parser.error(str(e))
    io_interface = create_io_interface(args)
    rng = random.Random(args.seed)

    tally = Counter()
    try:
        for _ in range(args.num_games):
            session = play_game(io_interface, rules, rng)
            tally[session.phase] += 1
    except KeyboardInterrupt:
        io_interface.output("\nGame aborted.")
        return 1

    if args.num_games > 1:
        io_interface.output(
            f"\nWon: {tally[GamePhase.PLAYER_WIN]}  "
            f"Lost: {tally[GamePhase.DEALER_WIN]}  "
            f"Tied: {tally[GamePhase.TIE]}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
