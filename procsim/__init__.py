"""Parent/child process simulation driven by a timeline config file, using semaphores and shared memory."""

__version__ = "0.1.0"