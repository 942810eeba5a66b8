"""
Stage Module - The mutable puzzle board with snapshot history.

A Stage holds one snapshot (tuple of Optional[MovableRatio]) at a time.
Every applied move pushes the previous snapshot onto the undo stack, so
undo/redo restore whole snapshots instead of inverting arithmetic.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from .base import Calculator
from .factory import create_calculator
from .movable_ratio import MovableRatio, StageCells
from .move_dir import MoveDir
from .ratio import Ratio

logger = logging.getLogger(__name__)


class Stage:
    """
    Mutable board driven exclusively through move_cell().

    Example:
        stage = Stage.from_ints([1, 2, 3, 4])
        stage.move_cell(0, MoveDir.RIGHT_DOWN)   # 1 + 3 into cell 2
        stage.undo()
    """

    def __init__(self, ratios: Sequence[Ratio], calculator: Optional[Calculator] = None):
        """
        Initialize stage from initial cell values.

        Args:
            ratios: One value per cell, all start unmoved
            calculator: Board topology (default: registered default calculator)

        Raises:
            ValueError: If the number of values does not match the topology
        """
        self._calculator = calculator if calculator is not None else create_calculator()

        if len(ratios) != self._calculator.stage_size:
            raise ValueError(
                f"{self._calculator.name} stage needs {self._calculator.stage_size} "
                f"values, got {len(ratios)}"
            )

        self._initial: tuple = tuple(ratios)
        self._cells: StageCells = tuple(MovableRatio(r) for r in self._initial)
        self._undo_stack: List[StageCells] = []
        self._redo_stack: List[StageCells] = []

    @classmethod
    def from_ints(cls, values: Iterable[int], calculator: Optional[Calculator] = None) -> 'Stage':
        """Create a Stage from plain integers."""
        return cls([Ratio.from_int(v) for v in values], calculator)

    @property
    def calculator(self) -> Calculator:
        return self._calculator

    @property
    def initial_ratios(self) -> tuple:
        """Values the stage was created with."""
        return self._initial

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def value_count(self) -> int:
        """Number of occupied cells."""
        return sum(1 for cell in self._cells if cell is not None)

    def movable_ratios(self) -> StageCells:
        """Current snapshot (immutable)."""
        return self._cells

    def ratios(self) -> tuple:
        """Current cell values without moved flags."""
        return tuple(cell.ratio if cell is not None else None for cell in self._cells)

    def __getitem__(self, index: int) -> Optional[MovableRatio]:
        return self._cells[index]

    def __len__(self) -> int:
        return len(self._cells)

    def dist_no(self, src_no: int, dir: MoveDir) -> Optional[int]:
        return self._calculator.dist_no(src_no, dir)

    def can_move(self, src_no: int, dir: MoveDir) -> bool:
        return self._calculator.can_move(self._cells, src_no, dir)

    def movable_indices(self) -> List[int]:
        """Indices of occupied cells that are not flagged moved."""
        return [
            i for i, cell in enumerate(self._cells)
            if cell is not None and not cell.moved
        ]

    def movable_dirs(self, src_no: int) -> List[MoveDir]:
        """
        Legal directions from a cell, in canonical MoveDir order.

        Args:
            src_no: Source cell index

        Returns:
            Directions for which can_move() holds (empty if the cell
            is empty or moved)
        """
        return [dir for dir in MoveDir if self.can_move(src_no, dir)]

    def last_ratio(self) -> Optional[Ratio]:
        """
        Win-detection predicate.

        Returns:
            The surviving value if exactly one cell is occupied and no
            cell is flagged moved, else None
        """
        if any(cell is not None and cell.moved for cell in self._cells):
            return None

        remaining = [cell for cell in self._cells if cell is not None]
        if len(remaining) == 1:
            return remaining[0].ratio
        return None

    def failed(self) -> bool:
        """True if no cell can be selected as a move source."""
        return all(cell is None or cell.moved for cell in self._cells)

    def preview_move(self, src_no: int, dir: MoveDir) -> Optional[Ratio]:
        """
        Value the destination would hold after a move, without moving.

        Args:
            src_no: Source cell index
            dir: Move direction

        Returns:
            None if the source cell cannot move; the source value for
            swaps and empty or off-board destinations; otherwise the
            combined value (None if the operation has no result)
        """
        if not 0 <= src_no < len(self._cells):
            return None
        src = self._cells[src_no]
        if src is None or src.moved:
            return None

        dist_no = self.dist_no(src_no, dir)
        dist = self._cells[dist_no] if dist_no is not None else None
        op = dir.operation
        if dist is None or op is None:
            return src.ratio
        return op.apply(dist.ratio, src.ratio)

    def move_cell(self, src_no: int, dir: MoveDir) -> bool:
        """
        Apply a move if it is legal.

        Illegal moves and combines without a result leave the stage and
        its history untouched.

        Args:
            src_no: Source cell index
            dir: Move direction

        Returns:
            True if the stage changed
        """
        if not self.can_move(src_no, dir):
            logger.debug(f"Rejected move: cell {src_no} {dir.name}")
            return False

        dist_no = self.dist_no(src_no, dir)
        new_cells = self._apply(src_no, dist_no, dir)
        if new_cells is None:
            logger.debug(f"Combine has no result: cell {src_no} {dir.name}")
            return False

        self._undo_stack.append(self._cells)
        self._redo_stack.clear()
        self._cells = new_cells
        return True

    def undo(self) -> bool:
        """Restore the previous snapshot. Returns False if there is none."""
        if not self._undo_stack:
            return False
        self._redo_stack.append(self._cells)
        self._cells = self._undo_stack.pop()
        return True

    def redo(self) -> bool:
        """Re-apply the last undone snapshot. Returns False if there is none."""
        if not self._redo_stack:
            return False
        self._undo_stack.append(self._cells)
        self._cells = self._redo_stack.pop()
        return True

    def reset(self) -> None:
        """Return to the initial values and forget all history."""
        self._cells = tuple(MovableRatio(r) for r in self._initial)
        self._undo_stack.clear()
        self._redo_stack.clear()

    def _apply(self, src_no: int, dist_no: int, dir: MoveDir) -> Optional[StageCells]:
        """Compute the snapshot after a legal move (None if combine fails)."""
        cells = list(self._cells)
        src = cells[src_no]
        dist = cells[dist_no]
        op = dir.operation

        if op is None or dist is None:
            # Swap, or combine into an empty cell which degrades to a swap
            cells[src_no], cells[dist_no] = dist, src
            cells[dist_no] = cells[dist_no].mark_moved()
            return tuple(cells)

        combined = op.apply(dist.ratio, src.ratio)
        if combined is None:
            return None

        cells[dist_no] = MovableRatio(combined)
        cells[src_no] = None
        return tuple(cells)

    def __repr__(self) -> str:
        cells = ", ".join(str(c) if c is not None else "_" for c in self._cells)
        return f"Stage([{cells}], calculator={self._calculator.name!r})"
