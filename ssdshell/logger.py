"""Line logger with size-based rotation of its log file."""

from __future__ import annotations

import itertools
import os
from datetime import datetime
from functools import lru_cache
from pathlib import Path

MAX_FILE_SIZE = 10 * 1024
ROTATED_PREFIX = "until_"
LOG_SUFFIX = ".log"
ARCHIVE_SUFFIX = ".zip"


class LogFileSystem:
    """File-system operations the logger needs, kept replaceable."""

    def exists(self, path) -> bool:
        return Path(path).exists()

    def file_size(self, path) -> int:
        return Path(path).stat().st_size

    def list_files(self, directory) -> list[Path]:
        return list(Path(directory).iterdir())

    def is_regular_file(self, entry) -> bool:
        return Path(entry).is_file()

    def file_name(self, entry) -> str:
        return Path(entry).name

    def last_write_time(self, entry) -> float:
        return Path(entry).stat().st_mtime

    def rename(self, source, target) -> None:
        os.replace(source, target)


def format_timestamp(moment: datetime, for_file: bool = False) -> str:
    """Format a moment for a log line, or for a rotated file name."""
    if for_file:
        return moment.strftime("%y%m%d_%Hh_%Mm_%Ss")
    return moment.strftime("%y.%m.%d %H:%M:%S")


class Logger:
    """Appends timestamped lines to a log file, rotating it past 10 KB."""

    def __init__(self, log_path="latest.log", filesystem: LogFileSystem | None = None):
        self.log_path = Path(log_path)
        self._own_filesystem = filesystem if filesystem is not None else LogFileSystem()
        self.filesystem = self._own_filesystem
        self.console_output = True

    def set_console_output(self, on: bool) -> None:
        self.console_output = on

    def set_filesystem(self, filesystem: LogFileSystem) -> None:
        self.filesystem = filesystem

    def restore_filesystem(self) -> None:
        self.filesystem = self._own_filesystem

    def log(self, function_name: str, message: str, console: bool = True) -> None:
        """Write one line; echo it to standard output when both switches allow."""
        self._rotate_if_needed()
        line = f"[{format_timestamp(datetime.now())}] {function_name:<30}: {message}"
        if self.console_output and console:
            print(line)
        with self.log_path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")

    def _rotate_if_needed(self) -> None:
        fs = self.filesystem
        if not fs.exists(self.log_path):
            return
        if fs.file_size(self.log_path) < MAX_FILE_SIZE:
            return
        stamp = format_timestamp(datetime.now(), for_file=True)
        target = self._unique_rotated_path(ROTATED_PREFIX + stamp)
        fs.rename(self.log_path, target)
        self._archive_old_logs()

    def _unique_rotated_path(self, base: str) -> Path:
        candidate = self.log_path.with_name(base + LOG_SUFFIX)
        if not self.filesystem.exists(candidate):
            return candidate
        for counter in itertools.count():
            candidate = self.log_path.with_name(f"{base}_{counter}{LOG_SUFFIX}")
            if not self.filesystem.exists(candidate):
                return candidate
        raise AssertionError("unreachable")

    def _archive_old_logs(self) -> None:
        fs = self.filesystem
        rotated = [
            entry
            for entry in fs.list_files(self.log_path.parent)
            if fs.is_regular_file(entry)
            and fs.file_name(entry).startswith(ROTATED_PREFIX)
            and fs.file_name(entry).endswith(LOG_SUFFIX)
        ]
        if len(rotated) <= 1:
            return
        rotated.sort(key=fs.last_write_time)
        for entry in rotated[:-1]:
            fs.rename(entry, Path(entry).with_suffix(ARCHIVE_SUFFIX))


@lru_cache(maxsize=None)
def get_logger() -> Logger:
    """Return the shared logger, writing to latest.log in the working directory."""
    return Logger()