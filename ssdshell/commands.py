"""The basic shell commands: write, read, fullwrite, fullread, flush, exit and help."""

from __future__ import annotations

import re

from .base import InvalidCommandError, ShellCommand
from .params import Command, FullWriteParam, Param, ReadParam, WriteParam
from .ssd import LBA_COUNT, SSD, is_invalid_lba, is_invalid_value

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")

_HELP_ENTRIES: tuple[tuple[str, str, str], ...] = (
    ("write", "write [LBA] [Value]", "Write the specified value to the given LBA."),
    ("read", "read [LBA]", "Read the value from the specified LBA."),
    ("fullwrite", "fullwrite [Value]", "Write the same value to all LBAs."),
    ("fullread", "fullread", "Read and print all LBAs."),
    (
        "erase",
        "erase [LBA]  [SIZE]",
        "Delete values from the specified LBA for the given size.",
    ),
    (
        "erase_range",
        "erase_range [Start LBA]  [End LBA]",
        "Delete values from Start LBA to End LBA.",
    ),
    (
        "flush",
        "flush",
        "Execute all commands in the Command Buffer and clear the entire buffer.",
    ),
    ("help", "help", "Display help information."),
    ("exit", "exit", "Exit the shell."),
    ("", "", ""),
    ("test script 1", "1_FullWriteAndReadCompare or 1_", "Execute test script 1."),
    ("test script 2", "2_PartialLBAWrite or 2_", "Execute test script 2."),
    ("test script 3", "3_WriteReadAging or 3_", "Execute test script 3."),
    ("test script 4", "4_EraseAndWriteAging or 4_", "Execute test script 4."),
)


def _to_int(text: str) -> int:
    """Read the leading integer of ``text`` as a 32-bit signed value."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise InvalidCommandError(f"not a number: {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise InvalidCommandError(f"number out of range: {text!r}")
    return value


def _reject_invalid(param: Param) -> None:
    if param.command is Command.INVALID:
        raise InvalidCommandError("invalid command")


def _check_value(value: str) -> None:
    if is_invalid_value(value):
        raise InvalidCommandError(f"invalid value: {value!r}")


class CommandWrite(ShellCommand):
    """Write one value to one LBA."""

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd

    def run(self, param: Param) -> None:
        _reject_invalid(param)
        if not isinstance(param, WriteParam):
            raise InvalidCommandError("write needs an LBA and a value")
        lba = _to_int(param.lba)
        if is_invalid_lba(lba):
            raise InvalidCommandError(f"invalid LBA: {lba}")
        _check_value(param.data)
        self.ssd.write(lba, param.data)
        print("[Write] Done")


class CommandRead(ShellCommand):
    """Read and print the value stored at one LBA."""

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd

    def run(self, param: Param) -> None:
        _reject_invalid(param)
        if not isinstance(param, ReadParam):
            raise InvalidCommandError("read needs an LBA")
        lba = _to_int(param.lba)
        if is_invalid_lba(lba):
            raise InvalidCommandError(f"invalid LBA: {lba}")
        value = self.ssd.read(lba)
        print(f"[Read] LBA {lba:02d} : {value}")


class CommandFullWrite(ShellCommand):
    """Write the same value to every LBA."""

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd

    def run(self, param: Param) -> None:
        _reject_invalid(param)
        if not isinstance(param, FullWriteParam):
            raise InvalidCommandError("fullwrite needs a value")
        _check_value(param.data)
        for lba in range(LBA_COUNT):
            self.ssd.write(lba, param.data)
        print("[Fullwrite] Done")


class CommandFullRead(ShellCommand):
    """Read and print every LBA in order."""

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd

    def run(self, param: Param) -> None:
        _reject_invalid(param)
        for lba in range(LBA_COUNT):
            print(f"[Fullread] LBA {lba:02d} : {self.ssd.read(lba)}")


class CommandFlush(ShellCommand):
    """Ask the drive to apply its buffered commands."""

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd

    def run(self, param: Param) -> None:
        _reject_invalid(param)
        self.ssd.flush()


class CommandExit(ShellCommand):
    """Announce shutdown; the shell loop itself stops."""

    def run(self, param: Param) -> None:
        _reject_invalid(param)
        print("Shutting down")


def help_text() -> str:
    """Return the shell's help page."""
    lines = ["[Team Info] Double Checker Team", "", "[Command Usage]"]
    for name, usage, comment in _HELP_ENTRIES:
        if not name:
            lines.append("")
            continue
        lines.append(f"    {name}")
        lines.append(f"        Usage : {usage}")
        lines.append(f"        Comment : {comment}")
    return "\n".join(lines) + "\n"


class CommandHelp(ShellCommand):
    """Print the help page."""

    def run(self, param: Param) -> None:
        print(help_text(), end="")