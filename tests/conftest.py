"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by every test package.
"""

import pytest

from twentyone.blackjack.decision_logger import decision_logger
from twentyone.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture(scope="function", autouse=True)
def reset_decision_history():
    """Start every test with an empty dealer decision trail."""
    decision_logger.decision_history = []
    decision_logger.current_round_decisions = []
    yield
    decision_logger.decision_history = []
    decision_logger.current_round_decisions = []
