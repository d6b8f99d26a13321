"""The parent loop that spawns, feeds and terminates children over time."""

from __future__ import annotations

import multiprocessing
import random
from typing import Any

from procsim.child import spawn_child, terminate_child
from procsim.config import Config, ProcessInfo, Processes, choose_random_file_line
from procsim.semaphores import (
    assign_semaphore_to_process,
    create_semaphore_print,
    create_semaphores,
)
from procsim.shm import SharedBuffer, create_shared_memory


def choose_random_active_child(
    processes: Processes, rng: random.Random | None = None
) -> int:
    """Return the index of a randomly chosen active process."""
    active = [i for i, info in enumerate(processes.info) if info.active]
    if not active:
        raise ValueError("no active child process")
    chooser = rng if rng is not None else random
    return chooser.choice(active)


def _terminate(
    info: ProcessInfo, semaphores: list[Any], buffer: SharedBuffer, timestamp: int
) -> None:
    terminate_child(semaphores[info.sem_index], info.process, buffer, info.name, timestamp)
    info.sem_index = None
    info.active = False


def _kill_leftovers(processes: Processes) -> None:
    for info in processes.info:
        if info.active and info.process is not None:
            info.process.kill()
            info.process.join()
            info.active = False
            info.sem_index = None


def parent_process(config: Config, processes: Processes, semaphore_count: int) -> int:
    """Run the simulation until the exit timestamp; return the final time."""
    context = multiprocessing.get_context()
    rng = random.Random()
    semaphores = create_semaphores(semaphore_count, context)
    sem_print = create_semaphore_print(context)
    buffer = create_shared_memory()

    entries = config.entries
    current_time = 0
    active_children = 0
    next_entry = 0
    finished = False

    try:
        while current_time < processes.end_timestamp:
            if active_children > 0:
                sem_print.acquire()
            print(f"Timestamp {current_time}", flush=True)

            if next_entry < len(entries) and entries[next_entry].timestamp == current_time:
                entry = entries[next_entry]
                info = processes.info[entry.process_index]
                if entry.command == "S":
                    if active_children < semaphore_count and not info.active:
                        sem_index = assign_semaphore_to_process(
                            processes, entry.process_index, semaphore_count
                        )
                        info.sem_index = sem_index
                        info.process = spawn_child(
                            context,
                            semaphores[sem_index],
                            sem_print,
                            buffer,
                            info.name,
                            current_time,
                        )
                        info.active = True
                        active_children += 1
                elif entry.command == "T" and info.active:
                    _terminate(info, semaphores, buffer, current_time)
                    active_children -= 1
                next_entry += 1

            current_time += 1

            if active_children == 0:
                continue

            chosen = choose_random_active_child(processes, rng)
            buffer.write(choose_random_file_line(config.text_file, rng))
            semaphores[processes.info[chosen].sem_index].release()

        # Let the last message be printed before the buffer is reused.
        if active_children > 0:
            sem_print.acquire()

        for info in processes.info:
            if info.active:
                _terminate(info, semaphores, buffer, current_time)
                active_children -= 1
        finished = True
    finally:
        if not finished:
            _kill_leftovers(processes)
        buffer.close()
        buffer.unlink()

    return current_time