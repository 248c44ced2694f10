"""
Command queue drained by the tick loop.

Two kinds of work end up here:
- deferred commands (secondary-burst waves) ordered by simulation time;
- commands posted from other threads, which must never touch the pool
  directly and are run on the tick thread instead.
"""

import heapq
import itertools
from queue import Empty, Queue
from typing import Callable, List, Tuple

Command = Callable[[], object]


class CommandQueue:
    def __init__(self):
        self._deferred: List[Tuple[float, int, Command]] = []
        self._order = itertools.count()
        self._inbox: "Queue[Command]" = Queue()

    def post(self, command: Command):
        """Thread-safe: run ``command`` at the start of the next tick."""
        self._inbox.put(command)

    def schedule(self, due_ms: float, command: Command):
        """Run ``command`` on the first tick whose clock reaches ``due_ms``."""
        heapq.heappush(self._deferred, (due_ms, next(self._order), command))

    def drain(self, now_ms: float) -> int:
        """Run posted commands, then every deferred command that is due."""
        ran = 0
        while True:
            try:
                command = self._inbox.get_nowait()
            except Empty:
                break
            command()
            ran += 1

        while self._deferred and self._deferred[0][0] <= now_ms:
            _, _, command = heapq.heappop(self._deferred)
            command()
            ran += 1
        return ran

    def clear(self):
        """Drop everything still waiting (used on teardown)."""
        self._deferred = []
        while True:
            try:
                self._inbox.get_nowait()
            except Empty:
                break

    @property
    def pending(self) -> int:
        return len(self._deferred) + self._inbox.qsize()
