"""SSD drivers: an in-memory fake and one that runs an external program."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from .logger import get_logger

LBA_COUNT = 100
MAX_ERASE_SIZE = 10
ERASED_VALUE = "0x00000000"
READ_ERROR = "ERROR"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def is_invalid_lba(lba: int) -> bool:
    return lba < 0 or lba >= LBA_COUNT


def is_invalid_value(value: str) -> bool:
    """A valid value is '0x' followed by exactly eight hex digits."""
    if len(value) != 10 or not value.startswith("0x"):
        return True
    return not set(value[2:]) <= _HEX_DIGITS


def is_invalid_erase(lba: int, size: int) -> bool:
    """Check an erase request; ``lba`` is assumed valid."""
    if size < 0 or size > MAX_ERASE_SIZE:
        return True
    if size == 0:
        return False
    return lba + size - 1 >= LBA_COUNT


class SSD(ABC):
    """The operations the shell performs on a drive."""

    name = ""

    @abstractmethod
    def write(self, lba: int, value: str) -> None: ...

    @abstractmethod
    def read(self, lba: int) -> str: ...

    @abstractmethod
    def erase(self, lba: int, size: int) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...


class MockSSD(SSD):
    """An SSD kept in memory; unwritten blocks read as zero."""

    name = "Fake SSD Driver"

    def __init__(self) -> None:
        self._cache: dict[int, str] = {}

    def write(self, lba: int, value: str) -> None:
        if is_invalid_lba(lba) or is_invalid_value(value):
            return
        get_logger().log("MockSSD.write", f"lba: {lba}, value :{value}", console=False)
        self._cache[lba] = value

    def read(self, lba: int) -> str:
        if is_invalid_lba(lba):
            return READ_ERROR
        value = self._cache.get(lba)
        if value is None:
            return ERASED_VALUE
        get_logger().log("MockSSD.read", f"lba: {lba}, value :{value}", console=False)
        return value

    def erase(self, lba: int, size: int) -> None:
        if is_invalid_lba(lba) or is_invalid_erase(lba, size):
            return
        last = lba + size - 1
        get_logger().log("MockSSD.erase", f"lba: {lba} ~ {last}", console=False)
        for index in range(lba, last + 1):
            self._cache.pop(index, None)

    def flush(self) -> None:
        # Writes land in the cache directly, so nothing is buffered.
        get_logger().log("MockSSD.flush", "Flush called", console=False)


class RealSSD(SSD):
    """Drives an external SSD program and reads its answers from a file."""

    name = "Real SSD Driver"

    def __init__(self, executable: str = "ssd.exe", output_file: str = "ssd_output.txt"):
        self.executable = executable
        self.output_file = Path(output_file)

    def execute(self, args) -> int:
        """Run the SSD program with ``args``; return its exit status."""
        command = [self.executable, *(str(arg) for arg in args)]
        try:
            return subprocess.run(command, check=False).returncode
        except OSError:
            return -1

    def _run_external(self, args) -> None:
        text = " ".join([self.executable, *(str(arg) for arg in args)])
        logger = get_logger()
        logger.log("RealSSD.run_external", text, console=False)
        status = self.execute(args)
        if status != 0:
            logger.log(
                "RealSSD.run_external",
                f"Failed to execute command: {text}, return code: {status}",
                console=True,
            )
            print("program is not executing correctly")

    def _first_output_line(self) -> str | None:
        try:
            with self.output_file.open(encoding="utf-8") as handle:
                line = handle.readline()
        except OSError:
            return None
        if line == "":
            return None
        return line.rstrip("\n")

    def write(self, lba: int, value: str) -> None:
        if is_invalid_lba(lba) or is_invalid_value(value):
            return
        self._run_external(["W", lba, value])

    def read(self, lba: int) -> str:
        if is_invalid_lba(lba):
            return READ_ERROR
        self.execute(["R", lba])
        line = self._first_output_line()
        return READ_ERROR if line is None else line

    def erase(self, lba: int, size: int) -> None:
        if is_invalid_lba(lba):
            return
        self.execute(["E", lba, size])

    def flush(self) -> None:
        self.execute(["F"])