"""A fixed-size shared text buffer between the parent and its children."""

from __future__ import annotations

from multiprocessing import shared_memory

SHM_SIZE = 1024
SHM_NAME = "shared_memory"


class SharedBuffer:
    """A NUL-terminated text message held in a named shared memory block."""

    def __init__(self, shm: shared_memory.SharedMemory, size: int) -> None:
        self._shm = shm
        self.size = size

    @property
    def name(self) -> str:
        return self._shm.name

    def write(self, text: str) -> None:
        """Store text, truncated to fit with its terminating NUL."""
        data = text.encode("utf-8")[: self.size - 1]
        buf = self._shm.buf
        buf[: len(data)] = data
        buf[len(data) : self.size] = bytes(self.size - len(data))

    def read(self) -> str:
        """Return the text stored up to the first NUL byte."""
        raw = bytes(self._shm.buf[: self.size])
        end = raw.find(b"\0")
        if end != -1:
            raw = raw[:end]
        return raw.decode("utf-8", errors="replace")

    def close(self) -> None:
        """Detach this handle from the shared block."""
        self._shm.close()

    def unlink(self) -> None:
        """Remove the shared block from the system."""
        self._shm.unlink()

    def __enter__(self) -> SharedBuffer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_shared_memory(name: str = SHM_NAME, size: int = SHM_SIZE) -> SharedBuffer:
    """Create the named shared block, or attach to it if it already exists."""
    if size <= 0:
        raise ValueError("Shared memory resizing failed: size must be positive")
    try:
        shm = shared_memory.SharedMemory(name=name, create=True, size=size)
    except FileExistsError:
        shm = shared_memory.SharedMemory(name=name)
        if shm.size < size:
            shm.close()
            raise ValueError("Shared memory resizing failed") from None
    return SharedBuffer(shm, size)