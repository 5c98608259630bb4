from twentyone.blackjack import scoring
from twentyone.common.hand import Hand


class Rules:
    def __init__(
        self,
        goal: int = scoring.GOAL,
        dealer_stand_threshold: int = 17,
        resolve_naturals: bool = True,
        player_wins_on_goal: bool = False,
    ):
        if goal <= 0:
            raise ValueError(f"goal must be positive, got {goal}")
        if not 0 < dealer_stand_threshold <= goal:
            raise ValueError(
                f"dealer_stand_threshold must be between 1 and {goal}, "
                f"got {dealer_stand_threshold}"
            )
        self.goal = goal
        self.dealer_stand_threshold = dealer_stand_threshold
        self.resolve_naturals = resolve_naturals
        self.player_wins_on_goal = player_wins_on_goal

    @classmethod
    def from_dict(cls, config: dict) -> "Rules":
        """Build rules from a configuration mapping, rejecting unknown keys."""
        unknown = set(config) - set(cls().to_dict())
        if unknown:
            raise ValueError(f"Unknown rule(s): {', '.join(sorted(unknown))}")
        return cls(**config)

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        return {
            "goal": self.goal,
            "dealer_stand_threshold": self.dealer_stand_threshold,
            "resolve_naturals": self.resolve_naturals,
            "player_wins_on_goal": self.player_wins_on_goal,
        }

    def score(self, hand: Hand) -> int:
        return scoring.score(hand, self.goal)

    def is_bust(self, hand: Hand) -> bool:
        return scoring.is_bust(hand, self.goal)

    def is_natural(self, hand: Hand) -> bool:
        """Check if a hand is a two card hand worth exactly the goal."""
        return scoring.is_natural(hand, self.goal)

    def dealer_may_draw(self, hand: Hand) -> bool:
        """
        Check the dealer's stand floor.

        The floor is checked on the hard total (every Ace as 1) so a soft
        hand never stops the dealer early.

        Args:
            hand (Hand): The dealer's hand.

        Returns:
            bool: False once the hard total reaches the threshold.
        """
        return scoring.hard_total(hand) < self.dealer_stand_threshold

    def __repr__(self) -> str:
        args = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"Rules({args})"
