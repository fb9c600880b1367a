import pytest

from ssdshell.base import InvalidCommandError, ScriptCommand, ShellCommand
from ssdshell.params import Command, Param


class _Echo(ShellCommand):
    def __init__(self):
        self.seen = []

    def run(self, param):
        if param.command is Command.INVALID:
            raise InvalidCommandError("bad")
        self.seen.append(param.command)


class _Verdict(ScriptCommand):
    def run(self, param):
        return "PASS" if param.command is Command.SCRIPT else "FAIL"


def test_abstract_classes_cannot_be_instantiated():
    with pytest.raises(TypeError):
        ShellCommand()
    with pytest.raises(TypeError):
        ScriptCommand()


def test_concrete_shell_command_runs():
    command = _Echo()
    command.run(Param(Command.HELP))
    assert command.seen == [Command.HELP]


def test_invalid_command_error_is_a_value_error():
    with pytest.raises(ValueError, match="bad"):
        _Echo().run(Param(Command.INVALID))


def test_script_command_returns_text():
    assert _Verdict().run(Param(Command.SCRIPT)) == "PASS"
    assert _Verdict().run(Param(Command.HELP)) == "FAIL"