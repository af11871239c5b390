"""Model-checker view of user threads and of the mutexes they wait on."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Optional

__all__ = ["ThreadState", "MutexType", "MutexState", "Thread"]

_JOIN_KINDS = frozenset({"THREAD_JOIN", "PTHREAD_JOIN"})
_LOCK_KIND = "ATOMIC_LOCK"


class ThreadState(enum.IntEnum):
    """Life-cycle state of a user thread."""

    CREATED = 0
    RUNNING = 1
    READY = 2
    BLOCKED = 3
    COMPLETED = 4
    FREED = 5


class MutexType(enum.IntEnum):
    """Kinds of mutex, numbered as the pthread constants."""

    NORMAL = 0
    RECURSIVE = 1
    ERRORCHECK = 2
    DEFAULT = 0


@dataclass
class MutexState:
    """Bookkeeping for one mutex: its holder, origin and recursion count."""

    locked: Optional["Thread"] = None
    alloc_tid: int = 0
    alloc_clock: int = 0
    type: int = MutexType.DEFAULT
    lock_count: int = 0


def _kind_of(action: Any) -> str:
    kind = getattr(action, "type", None)
    return getattr(kind, "name", kind)


class Thread:
    """A user thread as seen by the model checker.

    A thread built without a start routine is a model-checker thread, used
    for accounting only and never scheduled.  Pending actions are expected to
    carry ``type`` (an enum or string named ``THREAD_JOIN``, ``PTHREAD_JOIN``
    or ``ATOMIC_LOCK``), ``thread_operand`` for joins and ``mutex`` with a
    ``state`` of :class:`MutexState` for locks.
    """

    def __init__(self, tid: int, start_routine: Optional[Callable[[Any], Any]] = None,
                 arg: Any = None, parent: Optional["Thread"] = None):
        self.id = tid
        self.parent = parent
        self.start_routine = start_routine
        self.arg = arg
        self.model_thread = start_routine is None
        self.creation: Any = None
        self.pending: Any = None
        self.wakeup_state = False
        self.pthread_return: Any = None
        if self.model_thread:
            self._state = ThreadState.READY
            self.return_value: Any = 0
        else:
            self._state = ThreadState.CREATED
            self.return_value = None

    @property
    def state(self) -> ThreadState:
        return self._state

    def set_state(self, state: ThreadState) -> None:
        """Enter ``state``; a completed thread may only be set completed again."""
        state = ThreadState(state)
        if state != ThreadState.COMPLETED and self._state == ThreadState.COMPLETED:
            raise RuntimeError(f"thread {self.id} has already completed")
        self._state = state

    def is_complete(self) -> bool:
        return self._state in (ThreadState.COMPLETED, ThreadState.FREED)

    def is_freed(self) -> bool:
        return self._state == ThreadState.FREED

    def is_blocked(self) -> bool:
        return self._state == ThreadState.BLOCKED

    def complete(self) -> None:
        """Mark the thread finished."""
        if self.is_complete():
            raise RuntimeError(f"thread {self.id} has already completed")
        self._state = ThreadState.COMPLETED

    def free_resources(self) -> None:
        """Release the thread's resources and mark it freed."""
        self._state = ThreadState.FREED

    def run(self) -> Any:
        """Call the start routine with its argument and keep its result."""
        if self.start_routine is None:
            raise RuntimeError("a model-checker thread has nothing to run")
        self.pthread_return = self.start_routine(self.arg)
        return self.pthread_return

    def waiting_on(self) -> Optional["Thread"]:
        """Return the thread this one immediately waits for, if any."""
        if self.pending is None:
            return None
        kind = _kind_of(self.pending)
        if kind in _JOIN_KINDS:
            return self.pending.thread_operand
        if kind == _LOCK_KIND:
            return self.pending.mutex.state.locked
        return None

    def is_waiting_on(self, t: "Thread") -> bool:
        """True if this thread waits on ``t`` directly or through a chain."""
        waited = self.waiting_on()
        if waited is t and _kind_of(self.pending) == _LOCK_KIND:
            if self.pending.mutex.state.type == MutexType.RECURSIVE:
                return False

        seen: set[int] = set()
        while waited is not None and id(waited) not in seen:
            if waited is t:
                return True
            seen.add(id(waited))
            waited = waited.waiting_on()
        return False

    def __repr__(self) -> str:
        return f"Thread(id={self.id}, state={self._state.name})"