from collections import deque
from typing import Deque, Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_HISTORY_LIMIT = 50


class History(Generic[T]):
    """
    Bounded undo/redo stack with a cursor.

    Pushing after an undo discards every snapshot past the cursor. When the
    bound is hit the oldest snapshot falls off and the next one becomes the
    undo floor.
    """

    def __init__(self, initial: T, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._snapshots: Deque[T] = deque([initial], maxlen=limit)
        self._cursor = 0

    @property
    def current(self) -> T:
        return self._snapshots[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def __len__(self) -> int:
        return len(self._snapshots)

    def push(self, snapshot: T) -> None:
        while len(self._snapshots) > self._cursor + 1:
            self._snapshots.pop()
        self._snapshots.append(snapshot)
        self._cursor = len(self._snapshots) - 1

    def undo(self) -> Optional[T]:
        if not self.can_undo:
            return None
        self._cursor -= 1
        return self.current

    def redo(self) -> Optional[T]:
        if not self.can_redo:
            return None
        self._cursor += 1
        return self.current
