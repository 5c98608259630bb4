"""
Logging for the dealer's decision path.
Tracks every policy evaluation and the phase changes of each game.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..common.card import Card


@dataclass
class DecisionContext:
    """Context for a single dealer decision."""

    timestamp: datetime
    house_cards: List[Card]
    player_cards: List[Card]
    house_score: int
    player_score: int
    hard_total: int
    ten_value_cards: int = 0
    table_cards: int = 0
    should_hit: Optional[bool] = None
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "house_cards": [card.label for card in self.house_cards],
            "player_cards": [card.label for card in self.player_cards],
            "house_score": self.house_score,
            "player_score": self.player_score,
            "hard_total": self.hard_total,
            "ten_value_cards": self.ten_value_cards,
            "table_cards": self.table_cards,
            "should_hit": self.should_hit,
            "reason": self.reason,
        }


class DecisionLogger:
    """Logs the dealer's decision-making process."""

    def __init__(self, log_level: Optional[int] = None):
        self.logger = logging.getLogger("twentyone.decisions")
        # Simulations can silence the decision trail entirely
        if os.environ.get("TWENTYONE_DISABLE_LOGGING", "").lower() in (
            "1",
            "true",
            "yes",
        ):
            self.logger.setLevel(logging.ERROR)
        elif log_level is not None:
            self.logger.setLevel(log_level)

        self.decision_history: List[DecisionContext] = []
        self.current_round_decisions: List[DecisionContext] = []

    def set_level(self, level):
        """Set the logging level."""
        self.logger.setLevel(level)

    def log_decision(self, context: DecisionContext):
        """Record a dealer decision with full context."""
        self.current_round_decisions.append(context)
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Dealer holds {[card.label for card in context.house_cards]} "
                f"(score={context.house_score}, hard={context.hard_total}) "
                f"vs player {context.player_score}"
            )
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Dealer {'hits' if context.should_hit else 'stands'} "
                f"(reason: {context.reason or 'unknown'})"
            )

    def log_phase_transition(self, from_phase: str, to_phase: str, reason: str):
        """Log a change of game phase."""
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(f"Phase {from_phase} -> {to_phase} ({reason})")

    def log_round_start(self, game_id: str):
        """Log the start of a new game."""
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(f"=== Game {game_id} starting ===")
        self.current_round_decisions = []

    def log_round_end(self, game_id: str, outcome: str, scores: Dict[str, int]):
        """Log the end of a game with its outcome."""
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(f"=== Game {game_id} ended: {outcome} {scores} ===")

        # Archive current round decisions
        self.decision_history.extend(self.current_round_decisions)
        self.current_round_decisions = []

    def get_decision_summary(self) -> Dict[str, Any]:
        """Get a summary of all archived decisions."""
        summary: Dict[str, Any] = {
            "total_decisions": len(self.decision_history),
            "hits": 0,
            "stands": 0,
            "by_reason": {},
        }

        for decision in self.decision_history:
            if decision.should_hit:
                summary["hits"] += 1
            else:
                summary["stands"] += 1
            reason = decision.reason or "unknown"
            summary["by_reason"][reason] = summary["by_reason"].get(reason, 0) + 1

        return summary

    def export_decisions(self, filepath: str):
        """Export decision history to a JSON file."""
        data = {
            "decisions": [d.to_dict() for d in self.decision_history],
            "summary": self.get_decision_summary(),
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        self.logger.info(
            f"Exported {len(self.decision_history)} decisions to {filepath}"
        )


# Global logger instance
decision_logger = DecisionLogger()
