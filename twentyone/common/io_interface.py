"""
This module contains the IOInterface abstract base class and its implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import aiofiles


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for the text input/output the console
    shell performs. The engine itself never touches an IOInterface.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt.

        Raises EOFError when no more input will ever arrive.
        """
        pass


class DummyIOInterface(IOInterface):
    """
    A dummy IO interface for simulation purposes. Does not perform any actual IO.

    Every prompt is answered with the stand command so a game always ends.
    """

    def output(self, message: str) -> None:
        """Simulates output operation."""
        pass

    def input(self, prompt: str) -> str:
        """Simulates input operation."""
        return "f"


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output messages and replays scripted input.

    Methods
    -------
    def output(self, message):
        Collect an output message.

    def input(self, prompt):
        Return the next scripted response, or raise EOFError when none are left.

    def add_input(self, *responses):
        Queue responses for later prompts.
    """

    __test__ = False

    def __init__(self, responses: Optional[list[str]] = None):
        self.sent_messages: list[str] = []
        self.prompts: list[str] = []
        self.input_responses: list[str] = list(responses or [])

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        raise EOFError("No more scripted input in TestIOInterface queue.")

    def add_input(self, *responses: str) -> None:
        """Add responses to the input queue."""
        self.input_responses.extend(responses)


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive gameplay.
    """

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)


class LoggingIOInterface(IOInterface):
    """
    A logging IO interface that keeps a transcript of a game.

    Output is appended to the log file and forwarded to the wrapped interface;
    prompts and the answers read from the wrapped interface are logged too.
    """

    def __init__(self, log_file_path: str, inner: Optional[IOInterface] = None):
        self.log_file_path = log_file_path
        self.inner = inner if inner is not None else ConsoleIOInterface()

    def output(self, message: str) -> None:
        """Write an output message to the log file and the wrapped interface."""
        self._append(message)
        self.inner.output(message)

    def input(self, prompt: str) -> str:
        """Read from the wrapped interface, logging prompt and response."""
        response = self.inner.input(prompt)
        self._append(f"[INPUT] {prompt}{response}")
        return response

    async def output_async(self, message: str) -> None:
        """Async version of output for callers running inside an event loop."""
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")
        self.inner.output(message)

    def _append(self, line: str) -> None:
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(line + "\n")
