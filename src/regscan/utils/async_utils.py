"""Run browser coroutines from synchronous CLI entry points."""

import asyncio
import asyncio.base_subprocess
import gc
import signal
import sys
import threading
import warnings
from collections.abc import Callable, Coroutine, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar, cast

T = TypeVar("T")


@contextmanager
def _cancel_on_sigterm(runner: asyncio.Runner) -> Iterator[None]:
    """Treat SIGTERM like Ctrl+C so the browser session still unwinds.

    ``asyncio.Runner`` already handles SIGINT on the main thread.
    """
    if sys.platform == "win32" or threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum: int, frame: Any) -> None:
        for task in asyncio.all_tasks(runner.get_loop()):
            task.cancel()

    previous = signal.signal(signal.SIGTERM, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def _run_in_fresh_loop(coro: Coroutine[Any, Any, T]) -> T:
    # Playwright's driver subprocess needs the proactor loop on Windows
    loop_factory = asyncio.ProactorEventLoop if sys.platform == "win32" else None
    with asyncio.Runner(loop_factory=loop_factory) as runner:
        try:
            with _cancel_on_sigterm(runner):
                return runner.run(coro)
        finally:
            # Finalize subprocess transports while the loop is still open
            gc.collect()


def safe_async_run(coro: Coroutine[Any, Any, T]) -> T:
    """Run ``coro`` to completion on a private event loop.

    When called from a thread that already runs a loop (pytest-asyncio, notebooks)
    the coroutine runs on a helper thread instead.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return _run_in_fresh_loop(coro)

    outcome: dict[str, Any] = {}

    def worker() -> None:
        try:
            outcome["result"] = _run_in_fresh_loop(coro)
        except BaseException as exc:
            outcome["error"] = exc

    thread = threading.Thread(target=worker, name="regscan-loop", daemon=True)
    thread.start()
    thread.join()

    if "error" in outcome:
        raise outcome["error"]
    return cast(T, outcome["result"])


def _quiet_transport_del(original: Callable[[Any], None]) -> Callable[[Any], None]:
    def __del__(self: Any) -> None:
        try:
            original(self)
        except RuntimeError as exc:
            if "Event loop is closed" not in str(exc):
                raise

    __del__._regscan_quiet = True  # type: ignore[attr-defined]
    return __del__


def suppress_event_loop_closed_error() -> None:
    """Silence 'Event loop is closed' from Playwright's driver subprocess.

    Its transport may be finalized after the loop shut down; the error is raised
    from ``__del__`` and as a RuntimeWarning. Safe to call more than once.
    """
    transport = asyncio.base_subprocess.BaseSubprocessTransport
    if not getattr(transport.__del__, "_regscan_quiet", False):
        transport.__del__ = _quiet_transport_del(transport.__del__)
    warnings.filterwarnings("ignore", message=".*Event loop is closed.*", category=RuntimeWarning)
