"""The interactive test shell and the program's entry point."""

from __future__ import annotations

import sys
from typing import Iterable, Iterator

from .base import InvalidCommandError
from .factory import default_factory
from .logger import get_logger
from .params import Command
from .parser import Parser
from .scripts import INVALID_SCRIPT_OUTPUT, CommandTestScript, ScriptRunner
from .ssd import SSD, RealSSD

PROMPT = "Shell> "
INVALID_COMMAND_OUTPUT = "INVALID COMMAND"


class TestShell:
    """Reads command lines, runs them against a drive and prints the results."""

    __test__ = False

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd
        self.parser = Parser()
        get_logger().log("TestShell.__init__", f"{ssd.name}is loaded", console=False)

    def execute(self, line: str) -> Command:
        """Parse and run one line; return the kind of command it was."""
        param = self.parser.parse(line)
        if param.command is Command.SCRIPT:
            try:
                result = CommandTestScript(self.ssd).run(param)
            except InvalidCommandError:
                result = INVALID_SCRIPT_OUTPUT
            print(result)
            return param.command
        try:
            command = default_factory().create(param, self.ssd)
            command.run(param)
        except InvalidCommandError:
            print(INVALID_COMMAND_OUTPUT)
        return param.command

    def run(self, lines: Iterable[str]) -> int:
        """Prompt for and run each line until 'exit' or the end of input."""
        get_logger().log("TestShell.run", "Shell is starting", console=False)
        for raw in lines:
            print(PROMPT, end="", flush=True)
            if self.execute(raw.rstrip("\r\n")) is Command.EXIT:
                break
        return 0


def _stdin_lines() -> Iterator[str]:
    yield from sys.stdin


def main(argv=None) -> int:
    """Run a script file when one path is given, otherwise the interactive shell."""
    args = list(sys.argv[1:] if argv is None else argv)
    ssd = RealSSD("ssd.exe", "ssd_output.txt")
    if len(args) == 1:
        get_logger().set_console_output(False)
        ScriptRunner(ssd, args[0]).run()
        return 0
    return TestShell(ssd).run(_stdin_lines())


if __name__ == "__main__":
    sys.exit(main())