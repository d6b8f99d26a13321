"""Command line entry point."""

from __future__ import annotations

import re
import sys

from procsim.config import ConfigError, read_config
from procsim.parent import parent_process

_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    """Parse a leading integer the lenient way, yielding 0 when there is none."""
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Run the simulation: CONFIG_FILE TEXT_FILE SEMAPHORE_COUNT."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 3:
        print("You have inserted less arguments than needed", file=sys.stderr)
        return 1

    config_file, text_file = args[0], args[1]
    semaphore_count = _leading_int(args[2])

    print(f"CONFIG {config_file}")
    print(f"TEXT {text_file}")

    try:
        config, processes = read_config(config_file, text_file)
        parent_process(config, processes, semaphore_count)
    except (ConfigError, ValueError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())