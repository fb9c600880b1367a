import io

import pytest

from ssdshell.logger import get_logger
from ssdshell.params import Command
from ssdshell.shell import TestShell, main
from ssdshell.ssd import MockSSD

PREFIX = "Shell> "
EXIT_OUTPUT = PREFIX + "Shutting down\n"


@pytest.fixture(autouse=True)
def _work_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    yield
    get_logger().set_console_output(True)


@pytest.fixture
def shell():
    return TestShell(MockSSD())


def run_lines(shell, lines, capsys):
    capsys.readouterr()
    shell.run(lines)
    return capsys.readouterr().out


def test_start_and_exit(shell, capsys):
    assert run_lines(shell, ["exit"], capsys) == EXIT_OUTPUT


def test_write(shell, capsys):
    out = run_lines(shell, ["write 3 0xAAAABBBB", "exit"], capsys)
    assert out == PREFIX + "[Write] Done\n" + EXIT_OUTPUT


def test_read(shell, capsys):
    out = run_lines(shell, ["read 0", "exit"], capsys)
    assert out == PREFIX + "[Read] LBA 00 : 0x00000000\n" + EXIT_OUTPUT


def test_write_and_read(shell, capsys):
    out = run_lines(shell, ["write 4 0xAAAABBBB", "read 4", "exit"], capsys)
    assert out == (
        PREFIX + "[Write] Done\n" + PREFIX + "[Read] LBA 04 : 0xAAAABBBB\n" + EXIT_OUTPUT
    )


def test_fullwrite(shell, capsys):
    out = run_lines(shell, ["fullwrite 0xABCDFFFF", "exit"], capsys)
    assert out == PREFIX + "[Fullwrite] Done\n" + EXIT_OUTPUT


def test_fullread(shell, capsys):
    out = run_lines(shell, ["fullread", "exit"], capsys)
    body = "".join(f"[Fullread] LBA {lba:02d} : 0x00000000\n" for lba in range(100))
    assert out == PREFIX + body + EXIT_OUTPUT


def test_fullwrite_and_fullread(shell, capsys):
    out = run_lines(shell, ["fullwrite 0xAAAABBBB", "fullread", "exit"], capsys)
    body = "".join(f"[Fullread] LBA {lba:02d} : 0xAAAABBBB\n" for lba in range(100))
    assert out == PREFIX + "[Fullwrite] Done\n" + PREFIX + body + EXIT_OUTPUT


def test_invalid_command(shell, capsys):
    out = run_lines(shell, ["strange_commands", "exit"], capsys)
    assert out == PREFIX + "INVALID COMMAND\n" + EXIT_OUTPUT


@pytest.mark.parametrize(
    "name",
    [
        "1_FullWriteAndReadCompare",
        "1_",
        "2_PartialLBAWrite",
        "2_",
        "3_WriteReadAging",
        "3_",
        "4_EraseAndWriteAging",
        "4_",
    ],
)
def test_scripts_pass(shell, capsys, name):
    out = run_lines(shell, [name, "exit"], capsys)
    assert "PASS" in out
    assert "FAIL" not in out


@pytest.mark.parametrize("name", ["5_", "1_WrongName"])
def test_unknown_script_reports_invalid(shell, capsys, name):
    capsys.readouterr()
    assert shell.execute(name) is Command.SCRIPT
    assert capsys.readouterr().out == "INVALID_COMMAND\n"


def test_execute_returns_command_kind(shell, capsys):
    assert shell.execute("exit") is Command.EXIT
    assert shell.execute("bogus") is Command.INVALID


def test_unregistered_command_is_invalid(shell, capsys):
    capsys.readouterr()
    shell.execute("doublechecker")
    assert capsys.readouterr().out == "INVALID COMMAND\n"


def test_bad_write_value_is_invalid(shell, capsys):
    out = run_lines(shell, ["write 3 1234GHIJ", "exit"], capsys)
    assert out == PREFIX + "INVALID COMMAND\n" + EXIT_OUTPUT


def test_lines_after_exit_are_not_run(capsys):
    ssd = MockSSD()
    shell = TestShell(ssd)
    run_lines(shell, ["exit", "write 3 0xAAAABBBB"], capsys)
    assert ssd.read(3) == "0x00000000"


def test_run_stops_at_end_of_input(shell, capsys):
    capsys.readouterr()
    assert shell.run(["write 3 0xAAAABBBB"]) == 0
    assert capsys.readouterr().out == PREFIX + "[Write] Done\n"


def test_main_script_file_with_unknown_script(tmp_path, capsys):
    script = tmp_path / "temp_script.txt"
    script.write_text("foobar\n", encoding="utf-8")
    capsys.readouterr()
    assert main([str(script)]) == 0
    assert capsys.readouterr().out == "foobar --- Run...INVALID SCRIPT\n"


def test_main_missing_script_file(capsys):
    capsys.readouterr()
    assert main(["no_such_file.txt"]) == 0
    assert "Cannot open script file: no_such_file.txt" in capsys.readouterr().out


def test_main_interactive_exit(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("exit\n"))
    capsys.readouterr()
    assert main([]) == 0
    assert capsys.readouterr().out == EXIT_OUTPUT