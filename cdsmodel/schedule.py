"""Thread scheduler: tracks which threads may run and picks the next one."""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from .thread_model import Thread, ThreadState

__all__ = ["EnabledType", "enabled_type_to_string", "Scheduler"]


class EnabledType(enum.IntEnum):
    """Scheduling status of a thread."""

    DISABLED = 0
    ENABLED = 1
    SLEEP_SET = 2


_NAMES = {
    EnabledType.DISABLED: "disabled",
    EnabledType.ENABLED: "enabled",
    EnabledType.SLEEP_SET: "sleep",
}


def enabled_type_to_string(e: EnabledType) -> str:
    """Return the printable name of a scheduling status."""
    try:
        return _NAMES[EnabledType(e)]
    except ValueError:
        raise ValueError(f"unknown enabled type: {e!r}") from None


def _tid(t: Union[Thread, int]) -> int:
    return t.id if isinstance(t, Thread) else int(t)


class Scheduler:
    """Keeps the enabled status of every thread and the running thread.

    The fuzzer registered with :meth:`register_engine` decides among the
    candidates; it must offer ``has_paused_threads()`` and
    ``select_thread(threadlist)`` returning a :class:`Thread`.
    """

    def __init__(self) -> None:
        self.fuzzer: Any = None
        self.enabled: list[EnabledType] = []
        self.curr_thread_index = 0
        self.current: Optional[Thread] = None

    def register_engine(self, fuzzer: Any) -> None:
        self.fuzzer = fuzzer

    def _set_enabled(self, t: Thread, status: EnabledType) -> None:
        tid = t.id
        if tid >= len(self.enabled):
            self.enabled.extend([EnabledType.DISABLED] * (tid + 1 - len(self.enabled)))
        self.enabled[tid] = status

    def _status(self, t: Union[Thread, int]) -> EnabledType:
        tid = _tid(t)
        if not 0 <= tid < len(self.enabled):
            raise IndexError(f"thread {tid} is unknown to the scheduler")
        return self.enabled[tid]

    def is_enabled(self, t: Union[Thread, int]) -> bool:
        """True if the thread is enabled or in the sleep set."""
        tid = _tid(t)
        if tid >= len(self.enabled):
            return False
        return self.enabled[tid] != EnabledType.DISABLED

    def is_sleep_set(self, t: Union[Thread, int]) -> bool:
        return self._status(t) == EnabledType.SLEEP_SET

    def get_enabled(self, t: Union[Thread, int]) -> EnabledType:
        return self._status(t)

    def all_threads_sleeping(self) -> bool:
        """True if no thread is enabled and at least one is asleep."""
        if EnabledType.ENABLED in self.enabled:
            return False
        return EnabledType.SLEEP_SET in self.enabled

    def add_sleep(self, t: Thread) -> None:
        self._set_enabled(t, EnabledType.SLEEP_SET)

    def remove_sleep(self, t: Thread) -> None:
        self._set_enabled(t, EnabledType.ENABLED)

    def add_thread(self, t: Thread) -> None:
        """Make a user thread available for scheduling."""
        if t.model_thread:
            raise ValueError("a model-checker thread cannot be scheduled")
        self._set_enabled(t, EnabledType.ENABLED)

    def remove_thread(self, t: Thread) -> None:
        if self.current is t:
            self.current = None
        self._set_enabled(t, EnabledType.DISABLED)

    def sleep(self, t: Thread) -> None:
        """Block ``t`` until :meth:`wake` is called for it."""
        self._set_enabled(t, EnabledType.DISABLED)
        t.set_state(ThreadState.BLOCKED)

    def wake(self, t: Thread) -> None:
        if t.model_thread:
            raise ValueError("a model-checker thread cannot be woken")
        self._set_enabled(t, EnabledType.ENABLED)
        t.set_state(ThreadState.READY)

    def select_next_thread(self) -> Optional[Thread]:
        """Pick the next thread to run, or None if nothing can run.

        When nothing is enabled but some threads sleep, one of them is woken.
        """
        if self.fuzzer is None:
            raise RuntimeError("no fuzzer registered with the scheduler")
        available = [i for i, s in enumerate(self.enabled) if s == EnabledType.ENABLED]
        sleeping = [i for i, s in enumerate(self.enabled) if s == EnabledType.SLEEP_SET]

        if not available and not self.fuzzer.has_paused_threads():
            if not sleeping:
                return None
            thread = self.fuzzer.select_thread(sleeping)
            self.remove_sleep(thread)
            thread.wakeup_state = True
            return thread
        return self.fuzzer.select_thread(available)

    def set_scheduler_thread(self, tid: int) -> None:
        self.curr_thread_index = int(tid)

    def set_current_thread(self, t: Optional[Thread]) -> None:
        if t is not None and t.model_thread:
            raise ValueError("a model-checker thread cannot run as a user thread")
        self.current = t

    def get_current_thread(self) -> Optional[Thread]:
        return self.current

    def format(self) -> str:
        """Describe the status of every known thread."""
        curr_id = self.current.id if self.current is not None else -1
        entries = "".join(
            f"[{i}: {'current, ' if i == curr_id else ''}{enabled_type_to_string(s)}]"
            for i, s in enumerate(self.enabled)
        )
        return f"Scheduler: {entries}\n"