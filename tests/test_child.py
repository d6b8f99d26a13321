import multiprocessing
import threading
import uuid

import pytest

from procsim.child import child_process, spawn_child, terminate_child
from procsim.shm import SHM_SIZE, create_shared_memory


@pytest.fixture
def buffer():
    buf = create_shared_memory(name=f"procsim_t_{uuid.uuid4().hex[:12]}", size=SHM_SIZE)
    yield buf
    buf.close()
    buf.unlink()


def _run_in_thread(sem, sem_print, buffer, name):
    result = {}

    def target():
        result["report"] = child_process(sem, sem_print, buffer.name, name)

    thread = threading.Thread(target=target)
    thread.start()
    return thread, result


def test_child_process_counts_requests(buffer, capsys):
    sem = threading.Semaphore(0)
    sem_print = threading.Semaphore(0)
    buffer.write("SPAWN 0")
    thread, result = _run_in_thread(sem, sem_print, buffer, "A")

    for message in ("first line", "second line"):
        buffer.write(message)
        sem.release()
        assert sem_print.acquire(timeout=10)

    buffer.write("TERMINATE 5")
    sem.release()
    thread.join(timeout=10)

    assert result["report"] == (5, 2)
    out = capsys.readouterr().out
    assert "Child A received message: first line" in out
    assert "Child A received message: second line" in out
    assert "Child A received termination signal" in out
    assert "Child A has runned for 5 timestamps and has served 2 requests!" in out


def test_terminate_word_without_number_is_a_message(buffer, capsys):
    sem = threading.Semaphore(0)
    sem_print = threading.Semaphore(0)
    buffer.write("SPAWN 1")
    thread, result = _run_in_thread(sem, sem_print, buffer, "C")

    buffer.write("TERMINATE")
    sem.release()
    assert sem_print.acquire(timeout=10)

    buffer.write("TERMINATE 3")
    sem.release()
    thread.join(timeout=10)

    assert result["report"] == (2, 1)
    assert "Child C received message: TERMINATE" in capsys.readouterr().out


def test_spawn_and_terminate_real_process(buffer, capsys):
    ctx = multiprocessing.get_context()
    sem = ctx.Semaphore(0)
    sem_print = ctx.Semaphore(0)

    process = spawn_child(ctx, sem, sem_print, buffer, "A", 2)
    assert buffer.read() == "SPAWN 2"
    assert "Spawned child A" in capsys.readouterr().out

    buffer.write("hello")
    sem.release()
    assert sem_print.acquire(timeout=30)

    terminate_child(sem, process, buffer, "A", 6)
    assert process.exitcode == 0
    assert buffer.read() == "TERMINATE 6"