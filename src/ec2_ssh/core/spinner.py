"""Background loading with a spinner while the result is awaited"""

import os
import threading
import time
from concurrent.futures import Future
from typing import Callable, Generic, Optional, TypeVar

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

T = TypeVar("T")


class BackgroundTask(Generic[T]):
    """Run ``func`` on a daemon thread as soon as the task is created.

    The thread is a daemon so an operator who aborts the prompt does not
    have to wait for the load to finish. The result may be awaited once.
    """

    def __init__(self, func: Callable[[], T], name: str = "background-load"):
        self._func = func
        self._future: Future = Future()
        self._awaited = False
        self._lock = threading.Lock()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        if not self._future.set_running_or_notify_cancel():
            return
        try:
            self._future.set_result(self._func())
        except Exception as e:
            self._future.set_exception(e)

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> T:
        with self._lock:
            if self._awaited:
                raise RuntimeError("Background task result already consumed")
            self._awaited = True
        return self._future.result(timeout=timeout)


def _should_use_spinner(console: Console) -> bool:
    """Animate only when ``console`` is an interactive terminal.

    ``EC2_SSH_NO_SPINNER`` turns the spinner off and ``EC2_SSH_FORCE_SPINNER``
    turns it on regardless of the terminal. CI runs never animate.
    """
    if _env_flag("EC2_SSH_NO_SPINNER"):
        return False
    if _env_flag("EC2_SSH_FORCE_SPINNER"):
        return True
    if _env_flag("CI"):
        return False
    return console.is_terminal and not console.is_dumb_terminal


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


def wait_with_spinner(
    task: BackgroundTask[T],
    message: str = "Loading...",
    timeout_seconds: int = 300,
    console: Optional[Console] = None,
) -> T:
    """Await a background task, showing a spinner until it finishes"""
    console = console or Console()
    if task.done() or not _should_use_spinner(console):
        return task.result(timeout=timeout_seconds)

    start_time = time.time()

    with Live(
        Spinner("dots", text=message, style="cyan"),
        console=console,
        refresh_per_second=10,
        transient=True,
    ) as live:
        while not task.done():
            elapsed = time.time() - start_time
            if elapsed > timeout_seconds:
                raise TimeoutError(f"Task timed out after {timeout_seconds}s")
            live.update(
                Spinner("dots", text=f"{message} ({elapsed:.1f}s)", style="cyan")
            )
            time.sleep(0.1)

    return task.result()
