"""Base classes for shell commands."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .params import Param


class InvalidCommandError(ValueError):
    """Raised when a command cannot run with the parameters it was given."""


class ShellCommand(ABC):
    """A command that acts on the SSD and reports through standard output."""

    @abstractmethod
    def run(self, param: Param) -> None:
        """Carry out the command; raise InvalidCommandError on bad parameters."""


class ScriptCommand(ABC):
    """A command that runs a test script and returns its verdict."""

    @abstractmethod
    def run(self, param: Param) -> str:
        """Run the script named by ``param`` and return its result text."""