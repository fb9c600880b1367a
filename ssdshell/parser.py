"""Turns a line typed at the shell into a command parameter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from .logger import get_logger
from .params import (
    Command,
    EraseParam,
    EraseRangeParam,
    FullWriteParam,
    Param,
    ReadParam,
    ScriptParam,
    WriteParam,
)

_SCRIPT_NAME = re.compile(r"([0-9]+)_.*", re.DOTALL)
_DEC_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
NO_SCRIPT_NUMBER = "0"


def split_args(text: str) -> list[str]:
    """Split a command line on runs of whitespace."""
    return text.split()


def is_dec(text: str) -> bool:
    """A decimal number: a digit or '-' followed only by digits."""
    if not text:
        return False
    head, rest = text[0], text[1:]
    if not (head in _DEC_DIGITS or head == "-"):
        return False
    return set(rest) <= _DEC_DIGITS


def is_hex(text: str) -> bool:
    """A hexadecimal number: '0x' followed by at least one hex digit."""
    if len(text) < 3 or not text.startswith("0x"):
        return False
    return set(text[2:]) <= _HEX_DIGITS


def is_number(text: str) -> bool:
    """True for a decimal number, or a hexadecimal one prefixed with '0x'."""
    if not text:
        return False
    if text.startswith("0x"):
        return is_hex(text)
    return is_dec(text)


def extract_script_number(text: str) -> str:
    """Return the leading number of a '<number>_<name>' token, or '0'."""
    match = _SCRIPT_NAME.fullmatch(text)
    return match.group(1) if match else NO_SCRIPT_NUMBER


def _numbers_at(*positions: int) -> Callable[[list[str]], bool]:
    return lambda tokens: all(is_number(tokens[i]) for i in positions)


def _always(tokens: list[str]) -> bool:
    return True


@dataclass(frozen=True)
class _Spec:
    arg_count: int
    build: Callable[[list[str]], Param]
    validate: Callable[[list[str]], bool]


_SPECS: dict[str, _Spec] = {
    "write": _Spec(
        3, lambda t: WriteParam(Command.WRITE, t[1], t[2]), _numbers_at(1, 2)
    ),
    "read": _Spec(2, lambda t: ReadParam(Command.READ, t[1]), _numbers_at(1)),
    "fullwrite": _Spec(
        2, lambda t: FullWriteParam(Command.FULLWRITE, t[1]), _numbers_at(1)
    ),
    "exit": _Spec(1, lambda t: Param(Command.EXIT), _always),
    "help": _Spec(1, lambda t: Param(Command.HELP), _always),
    "fullread": _Spec(1, lambda t: Param(Command.FULLREAD), _always),
    "flush": _Spec(1, lambda t: Param(Command.FLUSH), _always),
    "erase": _Spec(
        3, lambda t: EraseParam(Command.ERASE, t[1], t[2]), _numbers_at(1, 2)
    ),
    "erase_range": _Spec(
        3,
        lambda t: EraseRangeParam(Command.ERASE_RANGE, t[1], t[2]),
        _numbers_at(1, 2),
    ),
    "doublechecker": _Spec(1, lambda t: Param(Command.DOUBLE_CHECKER), _always),
    "script": _Spec(
        1,
        lambda t: ScriptParam(Command.SCRIPT, extract_script_number(t[0]), t[0]),
        _always,
    ),
}


def _invalid() -> Param:
    return Param(Command.INVALID)


class Parser:
    """Recognises shell commands and test-script names."""

    def parse(self, text: str) -> Param:
        """Parse one line; an unrecognised line yields an INVALID param."""
        tokens = split_args(text)
        if not tokens:
            return _invalid()
        logger = get_logger()
        if self.is_valid_script_command_structure(tokens):
            logger.log(
                "Parser.parse", "Valid script command structure detected.", console=False
            )
            return _SPECS["script"].build(tokens)
        if not self.is_valid_command_structure(tokens):
            logger.log(
                "Parser.parse", "Invalid command structure detected.", console=False
            )
            return _invalid()
        param = self.gen_command_param(tokens)
        logger.log("Parser.parse", "Command parsed successfully. ", console=False)
        return param

    def is_valid_command_structure(self, tokens: list[str]) -> bool:
        if not tokens:
            return False
        spec = _SPECS.get(tokens[0])
        if spec is None or len(tokens) != spec.arg_count:
            return False
        return spec.validate(tokens)

    def is_valid_script_command_structure(self, tokens: list[str]) -> bool:
        if not tokens or extract_script_number(tokens[0]) == NO_SCRIPT_NUMBER:
            return False
        spec = _SPECS["script"]
        if len(tokens) != spec.arg_count:
            return False
        return spec.validate(tokens)

    def gen_command_param(self, tokens: list[str]) -> Param:
        """Build the param for ``tokens`` without checking argument formats."""
        if not tokens:
            return _invalid()
        spec = _SPECS.get(tokens[0])
        if spec is None or len(tokens) < spec.arg_count:
            return _invalid()
        return spec.build(tokens)