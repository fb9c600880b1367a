# ssdshell

An interactive test shell for an SSD with 100 logical block addresses
(LBA 0 to 99). Each block holds a value written as `0x` followed by
exactly eight hex digits; a block that was never written, or was erased,
reads as `0x00000000`.

The shell works against any `ssdshell.ssd.SSD`. Two are provided:

- `MockSSD` keeps the blocks in memory.
- `RealSSD` runs an external SSD program (`ssd.exe` by default) with the
  arguments `W <lba> <value>`, `R <lba>`, `E <lba> <size>` or `F`, and
  takes a read's answer from the first line of `ssd_output.txt`. A read
  returns `ERROR` when that file is missing or empty. If a write cannot
  be run or exits with a non-zero status, the shell prints
  `program is not executing correctly`.

## Install

```
pip install .
```

## Interactive use

```
ssdshell
```

This drives a `RealSSD` using `ssd.exe` and `ssd_output.txt`. The shell
prints `Shell> ` for each line read from standard input and stops at
`exit` or at the end of input.

| Command | Effect |
| --- | --- |
| `write <LBA> <Value>` | Write a value to one LBA; prints `[Write] Done` |
| `read <LBA>` | Prints `[Read] LBA NN : <value>` |
| `fullwrite <Value>` | Write the same value to every LBA; prints `[Fullwrite] Done` |
| `fullread` | Prints `[Fullread] LBA NN : <value>` for LBA 00 to 99 |
| `erase <LBA> <SIZE>` | Erase SIZE blocks from LBA; a negative SIZE erases backwards |
| `erase_range <Start> <End>` | Erase from Start to End inclusive, in either order |
| `flush` | Ask the SSD to flush its command buffer |
| `help` | Show usage |
| `exit` | Print `Shutting down` and leave the shell |

Erases print `[Erase] Done`. They are sent to the SSD in pieces of at
most 10 blocks and are clipped to the ends of the drive, so `erase 0 300`
clears every block and `erase 99 -300` does too. An LBA outside 0 to 99,
a badly formed value, a wrong number of arguments or an unknown command
prints `INVALID COMMAND`.

Built-in test scripts run by name, in full or short form, and print
`PASS` or `FAIL`. A name that does not match a script prints
`INVALID_COMMAND`.

- `1_FullWriteAndReadCompare` or `1_`
- `2_PartialLBAWrite` or `2_`
- `3_WriteReadAging` or `3_`
- `4_EraseAndWriteAging` or `4_`

## Running a script file

```
ssdshell scripts.txt
```

Each non-empty line of the file names a test script, in full or short
form. Each line prints `<name> --- Run...` and then `Pass`. The run stops
at the first `FAIL!` or `INVALID SCRIPT`. A script that raises an error
counts as a failure. If the file cannot be opened, the shell prints
`Cannot open script file: <path>`.

## Use from Python

```python
from ssdshell.ssd import MockSSD
from ssdshell.shell import TestShell

shell = TestShell(MockSSD())
shell.run(["write 3 0xAAAABBBB", "read 3", "exit"])
```

`TestShell.execute(line)` runs a single line and returns its
`ssdshell.params.Command`. The scripts are also available one by one:
`ssdshell.scripts.script_cases(ssd)` returns them, and each has a
`run()` that returns `True` on success. `ScriptRunner(ssd, path).run()`
runs a script file.

## Logging

Activity is logged to `latest.log` in the working directory. Log lines
are not echoed to the console when a script file is run. Once the log
reaches 10 KB it is renamed to `until_<timestamp>.log`. Older rotated
logs are then renamed with a `.zip` suffix. They are only renamed, not
compressed.

## Limitations

- `flush` on a `MockSSD` does nothing, because writes are applied at
  once. On a `RealSSD` it only runs the external program with `F`.
- `doublechecker` is recognised by the parser, but no command is
  attached to it, so it prints `INVALID COMMAND`.
- The `ssdshell` command always uses a `RealSSD`. To work without the
  external program, build a `TestShell` on a `MockSSD` from Python.