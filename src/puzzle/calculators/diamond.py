"""
Diamond Calculator - Four cells arranged as a diamond.

Layout (cell indices):

          1
       0     3
          2

Edge directions swap neighbors across the diamond, diagonals combine
cells that share a side.
"""

from typing import Dict, FrozenSet

from ..base import Calculator
from ..factory import register_calculator
from ..move_dir import MoveDir


# Index offset from source to destination per direction
DIAMOND_OFFSETS: Dict[MoveDir, int] = {
    MoveDir.LEFT_UP: -2,
    MoveDir.UP: -1,
    MoveDir.RIGHT_UP: 1,
    MoveDir.LEFT: -3,
    MoveDir.RIGHT: 3,
    MoveDir.LEFT_DOWN: -1,
    MoveDir.DOWN: 1,
    MoveDir.RIGHT_DOWN: 2,
}

# Source cells each direction may be played from
DIAMOND_SOURCES: Dict[MoveDir, FrozenSet[int]] = {
    MoveDir.UP: frozenset({2}),
    MoveDir.RIGHT_UP: frozenset({0, 2}),
    MoveDir.RIGHT: frozenset({0}),
    MoveDir.RIGHT_DOWN: frozenset({0, 1}),
    MoveDir.DOWN: frozenset({1}),
    MoveDir.LEFT_DOWN: frozenset({1, 3}),
    MoveDir.LEFT: frozenset({3}),
    MoveDir.LEFT_UP: frozenset({2, 3}),
}


@register_calculator
class DiamondCalculator(Calculator):
    """Topology of the 4-cell diamond board."""
    name = "diamond"
    description = "Diamond (4 cells) - left, top, bottom, right"
    stage_size = 4

    def dir_offset(self, dir: MoveDir) -> int:
        return DIAMOND_OFFSETS[dir]

    def allows(self, src_no: int, dir: MoveDir) -> bool:
        return src_no in DIAMOND_SOURCES[dir]
