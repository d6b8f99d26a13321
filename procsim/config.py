"""Configuration file parsing and the process table it describes."""

from __future__ import annotations

import random
import re
import sys
from dataclasses import dataclass, field
from typing import Any

_ENTRY_RE = re.compile(r"\s*([+-]?\d+)(?!\d)\s*(\S+)\s+(\S)")
_END_RE = re.compile(r"\s*([+-]?\d+)")

VALID_COMMANDS = ("S", "T")


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is malformed."""


@dataclass
class ProcessInfo:
    """State of one named child process."""

    name: str
    process_index: int
    process: Any = None
    sem_index: int | None = None
    active: bool = False


@dataclass
class Processes:
    """All processes named in a configuration file."""

    info: list[ProcessInfo] = field(default_factory=list)
    end_timestamp: int = 0

    @property
    def n(self) -> int:
        return len(self.info)

    def is_process_defined(self, name: str) -> bool:
        """Return True if a process with this name is already known."""
        return any(p.name == name for p in self.info)

    def get_process_index(self, name: str) -> int:
        """Return the index of the named process; KeyError if unknown."""
        for p in self.info:
            if p.name == name:
                return p.process_index
        raise KeyError(name)

    def _add(self, name: str) -> int:
        index = len(self.info)
        self.info.append(ProcessInfo(name=name, process_index=index))
        return index


@dataclass
class ConfigEntry:
    """One command line of the configuration file."""

    timestamp: int
    process_name: str
    command: str
    process_index: int


@dataclass
class Config:
    """The parsed configuration: the text file and the ordered commands."""

    text_file: str
    entries: list[ConfigEntry] = field(default_factory=list)


def count_file_lines(file_name: str) -> int:
    """Return the number of lines in a file."""
    with open(file_name, encoding="utf-8", errors="replace") as fh:
        return sum(1 for _ in fh)


def read_config(config_file: str, text_file: str) -> tuple[Config, Processes]:
    """Parse a configuration file into a Config and a Processes table."""
    try:
        fh = open(config_file, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ConfigError("Cannot open config file") from exc

    config = Config(text_file=text_file)
    processes = Processes()

    with fh:
        for line in fh:
            match = _ENTRY_RE.match(line)
            if match is None:
                end = _END_RE.match(line)
                if end is None:
                    raise ConfigError("Invalid config file format")
                processes.end_timestamp = int(end.group(1))
                print(f"End timestamp: {processes.end_timestamp}")
                break

            timestamp = int(match.group(1))
            name = match.group(2)
            command = match.group(3)
            print(f"Timestamp: {timestamp}, Process: {name}, Command: {command}")

            if processes.is_process_defined(name):
                index = processes.get_process_index(name)
            else:
                index = processes._add(name)

            if command not in VALID_COMMANDS:
                raise ConfigError("Invalid command on config file")

            config.entries.append(
                ConfigEntry(
                    timestamp=timestamp,
                    process_name=name,
                    command=command,
                    process_index=index,
                )
            )

    return config, processes


def choose_random_file_line(file_name: str, rng: random.Random | None = None) -> str:
    """Pick a uniformly random non-blank line of a file, without its newline."""
    rng = rng if rng is not None else random.Random()
    with open(file_name, encoding="utf-8", errors="replace") as fh:
        lines = fh.readlines()

    if not any(line.strip(" \t\n\r") for line in lines):
        print(f"No usable line in {file_name}", file=sys.stderr)
        raise ValueError(f"{file_name} holds no non-blank line")

    while True:
        selected = ""
        for n, line in enumerate(lines, start=1):
            if rng.random() < 1.0 / n:
                selected = line
        if selected.strip(" \t\n\r"):
            break

    if selected.endswith("\n"):
        selected = selected[:-1]
    return selected