"""
Movable Ratio Module - Live content of one occupied cell.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .ratio import Ratio


@dataclass(frozen=True)
class MovableRatio:
    """
    Value held by a cell plus its moved flag.

    A cell is flagged moved when it was the destination of a swap; it
    cannot be picked as a move source while the flag is set.

    Attributes:
        ratio: Cell value
        moved: True if the cell was just swapped into place
    """
    ratio: Ratio
    moved: bool = False

    @classmethod
    def from_int(cls, value: int) -> 'MovableRatio':
        return cls(ratio=Ratio.from_int(value))

    def mark_moved(self) -> 'MovableRatio':
        return replace(self, moved=True)

    def settled(self) -> 'MovableRatio':
        return replace(self, moved=False)

    def __str__(self) -> str:
        return f"{self.ratio}*" if self.moved else f"{self.ratio}"


# Board snapshot: one entry per cell, None once a cell was combined away
StageCells = Tuple[Optional[MovableRatio], ...]
