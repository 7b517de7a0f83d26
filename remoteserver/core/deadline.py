"""
Deadline-bound execution of blocking calls.
"""

import concurrent.futures
from typing import Any, Callable, TypeVar

T = TypeVar("T")


class DeadlineExceeded(TimeoutError):
    """A blocking call did not finish within its budget."""

    def __init__(self, timeout: float):
        super().__init__(f"timed out after {timeout:g}s")
        self.timeout = timeout


def run_with_deadline(func: Callable[..., T], timeout: float, *args: Any, **kwargs: Any) -> T:
    """
    Run ``func(*args, **kwargs)`` on a worker thread and wait at most ``timeout``.

    Exceptions raised by ``func`` propagate unchanged. On expiry the pool is
    shut down without waiting, so the caller regains control at the deadline
    even if the underlying call (e.g. ``getaddrinfo``) cannot be interrupted.

    Raises:
        DeadlineExceeded: the call did not complete in time
    """
    executor = concurrent.futures.ThreadPoolExecutor(
        max_workers=1, thread_name_prefix="remoteserver-probe"
    )
    future = executor.submit(func, *args, **kwargs)
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        if future.done():
            # socket.timeout raised by func itself
            raise
        future.cancel()
        raise DeadlineExceeded(timeout) from None
    finally:
        executor.shutdown(wait=False)
