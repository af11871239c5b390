"""Records of which threads a thread waits for, and which wait for it.

A thread may wait for other threads to reach certain function nodes.  For
each such thread the record keeps the target nodes, the distance to each
target and a counter of actions taken while waiting.
"""

from __future__ import annotations

from typing import Any

from .hashset import LinkedHashSet

__all__ = ["WaitObj", "COUNTER_THRESHOLD"]

COUNTER_THRESHOLD = 1000


class WaitObj:
    """Waiting relations of one thread."""

    def __init__(self, tid: int):
        self.tid = tid
        self.waiting_for: LinkedHashSet[int] = LinkedHashSet()
        self.waited_by: LinkedHashSet[int] = LinkedHashSet()
        self._dist_maps: dict[int, dict[int, int]] = {}
        self._target_nodes: dict[int, LinkedHashSet[Any]] = {}
        self._action_counters: dict[int, int] = {}

    def _dist_map(self, tid: int) -> dict[int, int]:
        return self._dist_maps.setdefault(tid, {})

    def target_nodes(self, tid: int) -> LinkedHashSet[Any]:
        """Return the set of nodes thread ``tid`` is expected to reach."""
        nodes = self._target_nodes.get(tid)
        if nodes is None:
            nodes = self._target_nodes[tid] = LinkedHashSet(key=id)
        return nodes

    def add_waiting_for(self, other: int, node: Any, dist: int) -> None:
        """Wait for thread ``other`` to reach ``node``, ``dist`` steps away."""
        self.waiting_for.add(other)
        self._dist_map(other)[id(node)] = dist
        self.target_nodes(other).add(node)

    def add_waited_by(self, other: int) -> None:
        self.waited_by.add(other)

    def remove_waiting_for_node(self, other: int, node: Any) -> bool:
        """Stop waiting for ``other`` to reach ``node``.

        Returns True if ``other`` has no targets left and so is no longer
        waited for, False if only this target was dropped.
        """
        self._dist_map(other).pop(id(node), None)
        nodes = self.target_nodes(other)
        nodes.remove(node)
        if nodes.is_empty():
            self._action_counters[other] = 0
            self.waiting_for.remove(other)
            return True
        return False

    def remove_waiting_for(self, other: int) -> None:
        """Stop waiting for thread ``other`` altogether."""
        self.waiting_for.remove(other)
        self.target_nodes(other).reset()
        self._action_counters[other] = 0

    def remove_waited_by(self, other: int) -> None:
        self.waited_by.remove(other)

    def lookup_dist(self, tid: int, target: Any) -> int:
        """Distance from thread ``tid`` to ``target``, or -1 if not a target."""
        dist_map = self._dist_map(tid)
        if self.target_nodes(tid).contains(target) and id(target) in dist_map:
            return dist_map[id(target)]
        return -1

    def incr_counter(self, tid: int) -> bool:
        """Count one action of ``tid``; True (and reset) once past the threshold."""
        count = self._action_counters.get(tid, 0) + 1
        if count > COUNTER_THRESHOLD:
            self._action_counters[tid] = 0
            return True
        self._action_counters[tid] = count
        return False

    def action_count(self, tid: int) -> int:
        return self._action_counters.get(tid, 0)

    def clear_waiting_for(self) -> None:
        """Forget every thread waited for; the waited-by relation is kept."""
        for tid in self.waiting_for:
            self._action_counters[tid] = 0
            self.target_nodes(tid).reset()
        self.waiting_for.reset()

    def format_waiting_for(self, verbose: bool = False) -> str:
        """Describe the threads waited for; empty if there are none."""
        if not self.waiting_for:
            return ""
        parts = [f"thread {self.tid} is waiting for: "]
        parts.extend(f"{other} " for other in self.waiting_for)
        parts.append("\n")
        if verbose:
            parts.append("\t")
            for tid in sorted(self._target_nodes):
                nodes = self._target_nodes[tid]
                if nodes.is_empty():
                    continue
                dist_map = self._dist_map(tid)
                parts.append(f"[thread {tid}](")
                for node in nodes:
                    dist = dist_map.get(id(node), 0)
                    parts.append(f"node {getattr(node, 'func_id', node)}: {dist}, ")
                parts.append(") ")
            parts.append("\n")
        return "".join(parts)

    def format_waited_by(self) -> str:
        """Describe the threads waiting for this one; empty if there are none."""
        if not self.waited_by:
            return ""
        parts = [f"thread {self.tid} is waited by: "]
        parts.extend(f"{other} " for other in self.waited_by)
        parts.append("\n")
        return "".join(parts)

    def __repr__(self) -> str:
        return (f"WaitObj(tid={self.tid}, waiting_for={list(self.waiting_for)}, "
                f"waited_by={list(self.waited_by)})")