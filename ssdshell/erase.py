"""The erase and erase_range shell commands."""

from __future__ import annotations

import re
from typing import Iterator

from .base import InvalidCommandError, ShellCommand
from .params import Command, EraseParam, EraseRangeParam, Param
from .ssd import LBA_COUNT, MAX_ERASE_SIZE, SSD

MAX_LBA = LBA_COUNT - 1
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


def _to_int(text: str) -> int:
    """Read the leading integer of ``text`` as a 32-bit signed value."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise InvalidCommandError(f"not a number: {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise InvalidCommandError(f"number out of range: {text!r}")
    return value


def _is_invalid_lba(lba: int) -> bool:
    return lba < 0 or lba > MAX_LBA


def forward_range(lba: int, size: int) -> tuple[int, int]:
    """Turn a backwards erase (negative size) into a start and a positive size.

    A backwards range that runs below LBA 0 is clipped at 0.
    """
    if size >= 0:
        return lba, size
    start = max(lba + size + 1, 0)
    return start, lba - start + 1


def erase_chunks(lba: int, size: int) -> Iterator[tuple[int, int]]:
    """Yield (lba, size) pieces of at most 10 blocks that stay within the drive."""
    current, remaining = lba, size
    while current <= MAX_LBA and remaining > 0:
        chunk = min(remaining, MAX_ERASE_SIZE, LBA_COUNT - current)
        yield current, chunk
        current += chunk
        remaining -= chunk


class CommandErase(ShellCommand):
    """Erase ``size`` blocks from ``lba``; a negative size erases backwards."""

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd

    def run(self, param: Param) -> None:
        if not isinstance(param, EraseParam):
            raise InvalidCommandError("erase needs an LBA and a size")
        lba = _to_int(param.lba)
        size = _to_int(param.size)
        if _is_invalid_lba(lba):
            raise InvalidCommandError(f"invalid LBA: {lba}")
        start, count = forward_range(lba, size)
        for chunk_lba, chunk_size in erase_chunks(start, count):
            self.ssd.erase(chunk_lba, chunk_size)
        print("[Erase] Done")


class CommandEraseRange(CommandErase):
    """Erase every block between two LBAs, inclusive, in either order."""

    def run(self, param: Param) -> None:
        if not isinstance(param, EraseRangeParam):
            raise InvalidCommandError("erase_range needs a start and an end LBA")
        start = _to_int(param.lba_start)
        end = _to_int(param.lba_end)
        if _is_invalid_lba(start) or _is_invalid_lba(end):
            raise InvalidCommandError(f"invalid LBA range: {start} ~ {end}")
        size = end - start + 1 if start <= end else end - start - 1
        super().run(EraseParam(Command.ERASE, str(start), str(size)))