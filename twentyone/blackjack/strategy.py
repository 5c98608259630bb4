from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from twentyone.blackjack import scoring
from twentyone.blackjack.decision_logger import (
    DecisionContext,
    DecisionLogger,
    decision_logger,
)
from twentyone.blackjack.rules import Rules
from twentyone.common.hand import Hand


class DealerStrategy(ABC):
    @abstractmethod
    def should_hit(
        self,
        player_hand: Hand,
        house_hand: Hand,
        player_score: int,
        house_score: int,
    ) -> bool:
        """Decide whether the house draws another card."""
        pass


class TableReadingDealerStrategy(DealerStrategy):
    """
    The house's heuristic: chase the player, stop when ahead, and on a tie
    only risk a card when ten-valued cards dominate the table.

    The house never draws once its hard total reaches the stand threshold.
    The ten-value count looks at the cards already on the table, not at what
    is left in the deck.
    """

    def __init__(
        self,
        rules: Optional[Rules] = None,
        logger: Optional[DecisionLogger] = None,
    ):
        self.rules = rules or Rules()
        self.logger = logger or decision_logger

    def should_hit(self, player_hand, house_hand, player_score, house_score) -> bool:
        hard = scoring.hard_total(house_hand)
        ten_value_cards = scoring.count_ten_value(player_hand) + scoring.count_ten_value(
            house_hand
        )
        table_cards = len(player_hand) + len(house_hand)

        if hard >= self.rules.dealer_stand_threshold:
            decision, reason = False, "hard total at stand threshold"
        elif house_score < player_score:
            decision, reason = True, "behind the player"
        elif house_score > player_score:
            decision, reason = False, "ahead of the player"
        else:
            # Integer half, so 3 of 5 cards tips it but 2 of 5 does not
            decision = ten_value_cards > table_cards // 2
            reason = "tied, table heavy in tens" if decision else "tied, settling"

        self.logger.log_decision(
            DecisionContext(
                timestamp=datetime.now(),
                house_cards=list(house_hand),
                player_cards=list(player_hand),
                house_score=house_score,
                player_score=player_score,
                hard_total=hard,
                ten_value_cards=ten_value_cards,
                table_cards=table_cards,
                should_hit=decision,
                reason=reason,
            )
        )
        return decision
