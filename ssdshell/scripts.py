"""Built-in test scripts and the ways to run them."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from pathlib import Path

from .base import InvalidCommandError, ScriptCommand
from .logger import get_logger
from .params import Param, ScriptParam
from .ssd import ERASED_VALUE, LBA_COUNT, SSD

PASS_OUTPUT = "PASS"
FAIL_OUTPUT = "FAIL"
INVALID_SCRIPT_OUTPUT = "INVALID_COMMAND"


def random_input_data() -> str:
    """Return a random value in the drive's '0x' plus eight hex digits form."""
    return f"0x{random.getrandbits(32):08X}"


class TestScriptCase(ABC):
    """A numbered, named test scenario run against a drive."""

    __test__ = False

    number: int = 0
    name: str = ""

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd

    @property
    def full_name(self) -> str:
        return f"{self.number}_{self.name}"

    @property
    def short_name(self) -> str:
        return f"{self.number}_"

    def read_compare(self, lba: int, expected: str) -> bool:
        """Read ``lba`` and report whether it holds ``expected``."""
        value = self.ssd.read(int(lba))
        if value == expected:
            return True
        print(f"ReadCompare FAIL: LBA {lba} expected: {expected} / read: {value}")
        return False

    @abstractmethod
    def run(self) -> bool:
        """Run the scenario; return True when every comparison held."""


class FullWriteAndReadCompare(TestScriptCase):
    """Write and verify the whole drive, five blocks at a time."""

    number = 1
    name = "FullWriteAndReadCompare"

    def run(self) -> bool:
        for start in range(0, LBA_COUNT, 5):
            data = random_input_data()
            block = range(start, start + 5)
            for lba in block:
                self.ssd.write(lba, data)
            if not all(self.read_compare(lba, data) for lba in block):
                return False
        return True


class PartialLBAWrite(TestScriptCase):
    """Write LBAs 0 to 4 out of order thirty times and verify them."""

    number = 2
    name = "PartialLBAWrite"

    def run(self) -> bool:
        for _ in range(30):
            data = random_input_data()
            for lba in (4, 0, 3, 1, 2):
                self.ssd.write(lba, data)
            if not all(self.read_compare(lba, data) for lba in range(5)):
                return False
        return True


class WriteReadAging(TestScriptCase):
    """Repeatedly write and verify the first and last LBA."""

    number = 3
    name = "WriteReadAging"

    def run(self) -> bool:
        for _ in range(0, 200, 5):
            data = random_input_data()
            self.ssd.write(0, data)
            self.ssd.write(LBA_COUNT - 1, data)
            if not self.read_compare(0, data):
                return False
            if not self.read_compare(LBA_COUNT - 1, data):
                return False
        return True


class EraseAndWriteAging(TestScriptCase):
    """Overwrite then erase every even LBA and check the erased blocks read zero."""

    number = 4
    name = "EraseAndWriteAging"

    def run(self) -> bool:
        data = random_input_data()
        last = LBA_COUNT - 1
        for _ in range(0, 30, 5):
            for site in range(2, LBA_COUNT, 2):
                self.ssd.write(site, data)
                self.ssd.write(site, data)
                self.ssd.erase(site, 3 if site != LBA_COUNT - 2 else 2)
                checked = range(site, min(site + 3, last + 1))
                if not all(self.read_compare(lba, ERASED_VALUE) for lba in checked):
                    return False
        return True


_CASE_CLASSES: tuple[type[TestScriptCase], ...] = (
    FullWriteAndReadCompare,
    PartialLBAWrite,
    WriteReadAging,
    EraseAndWriteAging,
)


def script_cases(ssd: SSD) -> list[TestScriptCase]:
    """Return the built-in scripts, in number order, bound to ``ssd``."""
    return [cls(ssd) for cls in _CASE_CLASSES]


class CommandTestScript(ScriptCommand):
    """Run the script a ScriptParam names and return PASS or FAIL."""

    def __init__(self, ssd: SSD) -> None:
        self.ssd = ssd
        self.cases = script_cases(ssd)

    def run(self, param: Param) -> str:
        if not isinstance(param, ScriptParam):
            raise InvalidCommandError("not a script command")
        logger = get_logger()
        requested = param.number
        if not 1 <= requested <= len(self.cases):
            logger.log(
                "CommandTestScript.run",
                f"invalid script number({requested})",
                console=False,
            )
            raise InvalidCommandError(f"invalid script number({requested})")
        case = self.cases[requested - 1]
        if param.script_name not in (case.full_name, case.short_name):
            logger.log(
                "CommandTestScript.run",
                f"invalid script name({param.script_name})",
                console=False,
            )
            raise InvalidCommandError(f"invalid script name({param.script_name})")
        logger.log("CommandTestScript.run", f"Run Script: {param.script_name}", console=False)
        if case.run():
            return PASS_OUTPUT
        logger.log("CommandTestScript.run", "--- TEST FAIL ---", console=False)
        return FAIL_OUTPUT


class ScriptRunner:
    """Runs the scripts listed one per line in a file, stopping at the first failure."""

    def __init__(self, ssd: SSD, script_path) -> None:
        self.ssd = ssd
        self.script_path = script_path
        self._by_name: dict[str, type[TestScriptCase]] = {}
        for cls in _CASE_CLASSES:
            self._by_name[f"{cls.number}_{cls.name}"] = cls
            self._by_name[f"{cls.number}_"] = cls
        get_logger().log("ScriptRunner.__init__", f"{ssd.name}is loaded.", console=False)

    def run(self) -> None:
        try:
            with Path(self.script_path).open(encoding="utf-8") as handle:
                lines = [raw.rstrip("\n") for raw in handle]
        except OSError:
            print(f"Cannot open script file: {self.script_path}")
            return
        for line in lines:
            if not line:
                continue
            print(f"{line} --- Run...", end="", flush=True)
            cls = self._by_name.get(line)
            if cls is None:
                print("INVALID SCRIPT")
                break
            try:
                ok = cls(self.ssd).run()
            except Exception:
                ok = False
            if not ok:
                print("FAIL!")
                break
            print("Pass")