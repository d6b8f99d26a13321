"""Child processes that print the messages the parent hands them."""

from __future__ import annotations

import multiprocessing
import re
from multiprocessing import shared_memory
from typing import Any

from procsim.shm import SharedBuffer

_MESSAGE_RE = re.compile(r"\s*(\S+)\s+([+-]?\d+)")


def _parse_command(text: str) -> tuple[str, int] | None:
    """Split a ``WORD NUMBER`` message, or return None if it is not one."""
    match = _MESSAGE_RE.match(text)
    if match is None:
        return None
    return match.group(1), int(match.group(2))


def spawn_child(
    context: Any,
    sem: Any,
    sem_print: Any,
    buffer: SharedBuffer,
    child_name: str,
    timestamp: int,
) -> Any:
    """Start a child process for ``child_name`` and return its process handle."""
    ctx = context if context is not None else multiprocessing.get_context()
    buffer.write(f"SPAWN {timestamp}")
    process = ctx.Process(
        target=child_process,
        args=(sem, sem_print, buffer.name, child_name),
        name=f"child-{child_name}",
    )
    process.start()
    print(f"Spawned child {child_name}", flush=True)
    return process


def terminate_child(
    sem: Any,
    process: Any,
    buffer: SharedBuffer,
    child_name: str,
    timestamp: int,
) -> None:
    """Tell a child to stop and wait until it has exited."""
    buffer.write(f"TERMINATE {timestamp}")
    sem.release()
    process.join()


def child_process(
    sem: Any, sem_print: Any, buffer_name: str, child_name: str
) -> tuple[int, int]:
    """Serve messages until told to terminate.

    Returns the number of timestamps the child ran for and the number of
    messages it served.
    """
    shm = shared_memory.SharedMemory(name=buffer_name)
    with SharedBuffer(shm, shm.size) as buffer:
        start = _parse_command(buffer.read())
        start_timestamp = start[1] if start is not None else 0
        end_timestamp = 0
        served = 0

        while True:
            sem.acquire()
            message = buffer.read()
            parsed = _parse_command(message)
            if parsed is not None and parsed[0] == "TERMINATE":
                end_timestamp = parsed[1]
                print(f"Child {child_name} received termination signal", flush=True)
                break

            print(f"Child {child_name} received message: {message}", flush=True)
            served += 1
            sem_print.release()

    elapsed = end_timestamp - start_timestamp
    print(
        f"Child {child_name} has runned for {elapsed} timestamps "
        f"and has served {served} requests!",
        flush=True,
    )
    return elapsed, served