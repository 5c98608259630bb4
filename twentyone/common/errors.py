"""Exceptions raised by the twentyone engine."""


class TwentyOneError(Exception):
    """Base class for every error raised by the engine."""

    pass


class DeckExhausted(TwentyOneError):
    """Raised when a card is drawn from an empty deck.

    A two-hand game can never legitimately drain a 52 card deck, so this
    signals a broken session lifecycle and is never handled by the engine.
    """

    pass


class InvalidAction(TwentyOneError):
    """Raised when an action is not legal in the current phase of the game."""

    def __init__(self, message: str, action=None):
        super().__init__(message)
        self.action = action
