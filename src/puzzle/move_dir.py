"""
Move Direction Module - The eight directions a cell can be moved in.

Edge directions (UP, DOWN, LEFT, RIGHT) swap two cells. Diagonal
directions combine the source into the destination with the arithmetic
operation bound to them in COMBINE_OPERATIONS.
"""

from enum import Enum
from typing import Callable, Dict, Optional

from .ratio import Ratio


class Operation(Enum):
    """Arithmetic performed by a combine-class move: dest (op) src."""
    ADD = "+"
    SUB = "-"
    MUL = "×"
    DIV = "÷"

    @property
    def symbol(self) -> str:
        """Label shown next to the direction arrow."""
        return self.value

    def apply(self, dest: Ratio, src: Ratio) -> Optional[Ratio]:
        """
        Combine the source value into the destination value.

        Args:
            dest: Value already in the destination cell
            src: Value of the moving cell

        Returns:
            Combined value, or None if the operation has no result
            (division by a zero source)
        """
        return _APPLY[self](dest, src)


_APPLY: Dict[Operation, Callable[[Ratio, Ratio], Optional[Ratio]]] = {
    Operation.ADD: lambda d, s: d + s,
    Operation.SUB: lambda d, s: d - s,
    Operation.MUL: lambda d, s: d * s,
    Operation.DIV: lambda d, s: d.div(s),
}


class MoveDir(Enum):
    """
    Direction of a move, in canonical order.

    The order here is the order movable_dirs() reports directions in.
    """
    LEFT_UP = 0
    UP = 1
    RIGHT_UP = 2
    LEFT = 3
    RIGHT = 4
    LEFT_DOWN = 5
    DOWN = 6
    RIGHT_DOWN = 7

    @property
    def is_swap(self) -> bool:
        """True for edge directions that exchange two cells."""
        return self in (MoveDir.UP, MoveDir.DOWN, MoveDir.LEFT, MoveDir.RIGHT)

    @property
    def is_combine(self) -> bool:
        return not self.is_swap

    @property
    def operation(self) -> Optional[Operation]:
        """Arithmetic bound to a combine direction, None for swaps."""
        return COMBINE_OPERATIONS.get(self)

    def reverse(self) -> 'MoveDir':
        return _REVERSE[self]

    @property
    def label(self) -> str:
        """Short label for display: operation symbol or arrow name."""
        op = self.operation
        if op is not None:
            return op.symbol
        return self.name.lower()


# Single source of truth for which diagonal performs which operation
COMBINE_OPERATIONS: Dict[MoveDir, Operation] = {
    MoveDir.LEFT_UP: Operation.DIV,
    MoveDir.RIGHT_UP: Operation.MUL,
    MoveDir.LEFT_DOWN: Operation.SUB,
    MoveDir.RIGHT_DOWN: Operation.ADD,
}

_REVERSE: Dict[MoveDir, MoveDir] = {
    MoveDir.LEFT_UP: MoveDir.RIGHT_DOWN,
    MoveDir.UP: MoveDir.DOWN,
    MoveDir.RIGHT_UP: MoveDir.LEFT_DOWN,
    MoveDir.LEFT: MoveDir.RIGHT,
    MoveDir.RIGHT: MoveDir.LEFT,
    MoveDir.LEFT_DOWN: MoveDir.RIGHT_UP,
    MoveDir.DOWN: MoveDir.UP,
    MoveDir.RIGHT_DOWN: MoveDir.LEFT_UP,
}
