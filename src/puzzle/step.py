"""
Step Module - A single recorded move and the ordered queue of them.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, Iterator, Optional

from .move_dir import MoveDir


@dataclass(frozen=True)
class Step:
    """
    One move of a solution path.

    Attributes:
        index: Source cell index
        dir: Direction the source cell is moved in
    """
    index: int
    dir: MoveDir

    def __str__(self) -> str:
        return f"cell {self.index} -> {self.dir.name}"


class Steps:
    """
    FIFO queue of steps, oldest first.

    Steps are pushed while a path is recorded and popped from the front
    when the path is replayed.
    """

    def __init__(self, steps: Optional[Iterable[Step]] = None):
        self._queue: Deque[Step] = deque(steps or ())

    def push(self, index: int, dir: MoveDir) -> None:
        """
        Append a step to the end of the queue.

        Args:
            index: Source cell index
            dir: Move direction
        """
        self._queue.append(Step(index, dir))

    def pop_front(self) -> Optional[Step]:
        """
        Remove and return the oldest step.

        Returns:
            Oldest step, or None if the queue is empty
        """
        if not self._queue:
            return None
        return self._queue.popleft()

    def is_empty(self) -> bool:
        return not self._queue

    def copy(self) -> 'Steps':
        return Steps(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._queue)

    def __getitem__(self, index: int) -> Step:
        return self._queue[index]

    def __eq__(self, other):
        if not isinstance(other, Steps):
            return False
        return list(self._queue) == list(other._queue)

    def __repr__(self) -> str:
        return f"Steps({list(self._queue)!r})"
