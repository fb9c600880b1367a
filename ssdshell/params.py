"""Parsed shell command parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class Command(Enum):
    """Kinds of command the shell understands."""

    WRITE = auto()
    READ = auto()
    HELP = auto()
    EXIT = auto()
    FULLWRITE = auto()
    FULLREAD = auto()
    FLUSH = auto()
    ERASE = auto()
    ERASE_RANGE = auto()
    SCRIPT = auto()
    INVALID = auto()
    DOUBLE_CHECKER = auto()


@dataclass
class Param:
    """A command with no arguments."""

    command: Command


@dataclass
class WriteParam(Param):
    lba: str
    data: str


@dataclass
class ReadParam(Param):
    lba: str


@dataclass
class FullWriteParam(Param):
    data: str


@dataclass
class EraseParam(Param):
    lba: str
    size: str


@dataclass
class EraseRangeParam(Param):
    lba_start: str
    lba_end: str


@dataclass
class ScriptParam(Param):
    """A test script request; ``number`` is the integer form of ``script_number``."""

    script_number: str
    script_name: str
    number: int = field(init=False)

    def __post_init__(self) -> None:
        self.number = int(self.script_number) if self.script_number else 0