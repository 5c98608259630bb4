"""Defines the Action enum for the moves a player can make in a game of 21."""
from enum import Enum
from typing import Optional, Union


class Action(Enum):
    """Enum for the possible actions a player can take, keyed by console command."""

    HIT = "h"
    STAND = "f"

    @property
    def command(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: Union["Action", str, None]) -> Optional["Action"]:
        """
        Map a console token to an Action.

        Only ``"h"`` (HIT) and ``"f"`` (STAND) are commands. Anything else,
        action names and surrounding whitespace included, yields None.
        """
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            return None
        try:
            return cls(token)
        except ValueError:
            return None
