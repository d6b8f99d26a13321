import multiprocessing

import pytest

from procsim.config import Processes
from procsim.semaphores import (
    assign_semaphore_to_process,
    create_semaphore_print,
    create_semaphores,
)


def _processes(*states):
    processes = Processes()
    for k, (sem_index, active) in enumerate(states):
        processes._add(f"P{k}")
        processes.info[k].sem_index = sem_index
        processes.info[k].active = active
    return processes


def test_assign_first_free():
    processes = _processes((None, False), (None, False))
    assert assign_semaphore_to_process(processes, 0, 3) == 0


def test_assign_skips_taken():
    processes = _processes((0, True), (None, False))
    assert assign_semaphore_to_process(processes, 1, 3) == 1


def test_assign_ignores_inactive_holders():
    processes = _processes((0, False), (1, True), (None, False))
    assert assign_semaphore_to_process(processes, 2, 3) == 0


def test_assign_fills_gap():
    processes = _processes((0, True), (2, True), (None, False))
    assert assign_semaphore_to_process(processes, 2, 3) == 1


def test_assign_none_when_all_taken():
    processes = _processes((0, True), (1, True), (None, False))
    assert assign_semaphore_to_process(processes, 2, 2) is None


def test_create_semaphores_start_at_zero():
    sems = create_semaphores(3, multiprocessing.get_context())
    assert len(sems) == 3
    assert [s.acquire(block=False) for s in sems] == [False, False, False]


def test_semaphore_release_then_acquire():
    sems = create_semaphores(2)
    sems[1].release()
    assert sems[0].acquire(block=False) is False
    assert sems[1].acquire(block=False) is True
    assert sems[1].acquire(block=False) is False


def test_create_semaphores_negative():
    with pytest.raises(ValueError):
        create_semaphores(-1)


def test_create_semaphore_print():
    sem = create_semaphore_print(multiprocessing.get_context())
    assert sem.acquire(block=False) is False
    sem.release()
    assert sem.acquire(timeout=1) is True