"""Semaphores that pace the child processes."""

from __future__ import annotations

import multiprocessing
from typing import Any

from procsim.config import Processes


def _context(context: Any) -> Any:
    return context if context is not None else multiprocessing.get_context()


def create_semaphores(count: int, context: Any = None) -> list[Any]:
    """Create ``count`` semaphores, each starting at zero."""
    if count < 0:
        raise ValueError("Semaphore creation failed: negative count")
    ctx = _context(context)
    return [ctx.Semaphore(0) for _ in range(count)]


def create_semaphore_print(context: Any = None) -> Any:
    """Create the semaphore children post after printing a message."""
    return _context(context).Semaphore(0)


def assign_semaphore_to_process(
    processes: Processes, process_index: int, count: int
) -> int | None:
    """Return the lowest semaphore index not held by an active process."""
    taken = {
        p.sem_index
        for p in processes.info
        if p.active and p.sem_index is not None
    }
    return next((i for i in range(count) if i not in taken), None)