import pytest

from ssdshell.base import InvalidCommandError
from ssdshell.erase import (
    CommandErase,
    CommandEraseRange,
    erase_chunks,
    forward_range,
)
from ssdshell.params import Command, EraseParam, Param
from ssdshell.parser import Parser
from ssdshell.ssd import MockSSD

DEFAULT_VALUE = "0x00000000"
SUCCESS = "[Erase] Done\n"


@pytest.fixture(autouse=True)
def _work_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def preset_value(lba):
    return f"0x{lba + 1:08x}"


class RecordingSSD(MockSSD):
    def __init__(self):
        super().__init__()
        self.erase_calls = []

    def erase(self, lba, size):
        self.erase_calls.append((lba, size))
        super().erase(lba, size)


@pytest.fixture
def ssd():
    drive = RecordingSSD()
    for lba in range(100):
        drive.write(lba, preset_value(lba))
    return drive


def gen(args):
    return Parser().gen_command_param(args)


def assert_state(ssd, erased):
    for lba in range(100):
        expected = DEFAULT_VALUE if lba in erased else preset_value(lba)
        assert ssd.read(lba) == expected


def test_erase_invalid_lba(ssd, capsys):
    with pytest.raises(InvalidCommandError):
        CommandErase(ssd).run(gen(["erase", "-1", "20"]))
    assert capsys.readouterr().out != SUCCESS
    assert_state(ssd, set())


@pytest.mark.parametrize("lba", ["0", "50", "99"])
def test_erase_zero(ssd, capsys, lba):
    CommandErase(ssd).run(gen(["erase", lba, "0"]))
    assert capsys.readouterr().out == SUCCESS
    assert_state(ssd, set())


@pytest.mark.parametrize(
    "lba, size, erased",
    [
        ("0", "5", range(0, 5)),
        ("4", "-5", range(0, 5)),
        ("0", "11", range(0, 11)),
        ("20", "-15", range(6, 21)),
        ("0", "100", range(100)),
        ("99", "-100", range(100)),
        ("0", "300", range(100)),
        ("99", "-300", range(100)),
    ],
)
def test_erase(ssd, capsys, lba, size, erased):
    CommandErase(ssd).run(gen(["erase", lba, size]))
    assert capsys.readouterr().out == SUCCESS
    assert_state(ssd, set(erased))


def test_erase_sends_chunks_of_at_most_ten(ssd):
    CommandErase(ssd).run(gen(["erase", "0", "300"]))
    assert all(0 < size <= 10 for _, size in ssd.erase_calls)
    assert sum(size for _, size in ssd.erase_calls) == 100


def test_erase_rejects_wrong_param(ssd):
    with pytest.raises(InvalidCommandError):
        CommandErase(ssd).run(Param(Command.FLUSH))


def test_erase_rejects_non_number(ssd):
    with pytest.raises(InvalidCommandError):
        CommandErase(ssd).run(EraseParam(Command.ERASE, "abc", "3"))
    assert_state(ssd, set())


def test_forward_range():
    assert forward_range(0, 5) == (0, 5)
    assert forward_range(4, -5) == (0, 5)
    assert forward_range(20, -15) == (6, 15)
    assert forward_range(99, -300) == (0, 100)


@pytest.mark.parametrize("lba, size", [(0, 11), (95, 30), (0, 100), (42, 0)])
def test_erase_chunks_are_contiguous_and_bounded(lba, size):
    chunks = list(erase_chunks(lba, size))
    position = lba
    for chunk_lba, chunk_size in chunks:
        assert chunk_lba == position
        assert 0 < chunk_size <= 10
        position += chunk_size
    assert position == min(lba + size, 100)


@pytest.mark.parametrize(
    "start, end",
    [
        ("-1", "0"),
        ("0", "-1"),
        ("-1", "100"),
        ("100", "-1"),
        ("99", "100"),
        ("100", "99"),
    ],
)
def test_erase_range_invalid(ssd, capsys, start, end):
    with pytest.raises(InvalidCommandError):
        CommandEraseRange(ssd).run(gen(["erase_range", start, end]))
    assert capsys.readouterr().out == ""
    assert_state(ssd, set())


@pytest.mark.parametrize(
    "start, end, erased",
    [
        ("50", "54", range(50, 55)),
        ("54", "50", range(50, 55)),
        ("45", "70", range(45, 71)),
        ("70", "45", range(45, 71)),
        ("0", "99", range(100)),
        ("99", "0", range(100)),
        ("70", "99", range(70, 100)),
        ("99", "70", range(70, 100)),
    ],
)
def test_erase_range(ssd, capsys, start, end, erased):
    CommandEraseRange(ssd).run(gen(["erase_range", start, end]))
    assert capsys.readouterr().out == SUCCESS
    assert_state(ssd, set(erased))


def test_erase_range_rejects_erase_param(ssd):
    with pytest.raises(InvalidCommandError):
        CommandEraseRange(ssd).run(EraseParam(Command.ERASE, "0", "5"))
    assert_state(ssd, set())