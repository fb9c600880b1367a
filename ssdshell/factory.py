"""Creates shell commands from parsed parameters."""

from __future__ import annotations

from functools import lru_cache
from typing import Callable

from .base import InvalidCommandError, ShellCommand
from .commands import (
    CommandExit,
    CommandFlush,
    CommandFullRead,
    CommandFullWrite,
    CommandHelp,
    CommandRead,
    CommandWrite,
)
from .erase import CommandErase, CommandEraseRange
from .logger import get_logger
from .params import Command, Param
from .ssd import SSD

Creator = Callable[[SSD], ShellCommand]


class CommandFactory:
    """Maps each kind of command to a callable that builds it for a drive."""

    def __init__(self) -> None:
        self._creators: dict[Command, Creator] = {}

    def register(self, command: Command, creator: Creator) -> None:
        """Register ``creator`` for ``command``; the first registration wins."""
        if command in self._creators:
            return
        get_logger().log(
            "CommandFactory.register",
            f"Registering command factory for command: {command.name}",
            console=False,
        )
        self._creators[command] = creator

    def create(self, param: Param, ssd: SSD) -> ShellCommand:
        """Build the command for ``param``; raise InvalidCommandError if there is none."""
        logger = get_logger()
        if param.command is Command.INVALID:
            logger.log(
                "CommandFactory.create",
                f"Invalid command {param.command.name}",
                console=False,
            )
            raise InvalidCommandError("invalid command")
        creator = self._creators.get(param.command)
        if creator is None:
            logger.log(
                "CommandFactory.create",
                f"No factory registered for command: {param.command.name}",
                console=False,
            )
            raise InvalidCommandError(f"no command registered for {param.command.name}")
        return creator(ssd)


@lru_cache(maxsize=None)
def default_factory() -> CommandFactory:
    """Return the shared factory with every shell command registered."""
    factory = CommandFactory()
    creators: tuple[tuple[Command, Creator], ...] = (
        (Command.ERASE, CommandErase),
        (Command.ERASE_RANGE, CommandEraseRange),
        (Command.EXIT, lambda ssd: CommandExit()),
        (Command.FLUSH, CommandFlush),
        (Command.FULLREAD, CommandFullRead),
        (Command.FULLWRITE, CommandFullWrite),
        (Command.HELP, lambda ssd: CommandHelp()),
        (Command.READ, CommandRead),
        (Command.WRITE, CommandWrite),
    )
    for command, creator in creators:
        factory.register(command, creator)
    return factory