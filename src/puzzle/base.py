"""
Base Calculator Module - Abstract topology policy for a stage.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .movable_ratio import StageCells
from .move_dir import MoveDir


class Calculator(ABC):
    """
    Abstract base class for board topologies.

    A calculator answers two questions for a fixed board shape: which
    cell a direction points at from a given cell, and whether a move is
    legal on a given snapshot. It never mutates anything.

    Subclasses must implement dir_offset() and allows() and define
    name, description and stage_size class attributes.

    Attributes:
        name: Short identifier used by the factory
        description: Human-readable description
        stage_size: Number of cells on the board
    """
    name: str = "base"
    description: str = "Base calculator"
    stage_size: int = 0

    @abstractmethod
    def dir_offset(self, dir: MoveDir) -> int:
        """
        Index offset from source to destination for a direction.

        Args:
            dir: Move direction

        Returns:
            Signed offset added to the source index
        """
        pass

    @abstractmethod
    def allows(self, src_no: int, dir: MoveDir) -> bool:
        """
        Topology gate: whether the board shape has a neighbor in this
        direction from src_no, regardless of cell content.

        Args:
            src_no: Source cell index
            dir: Move direction

        Returns:
            True if the direction exists from this cell
        """
        pass

    def dist_no(self, src_no: int, dir: MoveDir) -> Optional[int]:
        """
        Destination index for a move.

        Args:
            src_no: Source cell index
            dir: Move direction

        Returns:
            Destination index, or None if it falls outside the board
        """
        dist_no = src_no + self.dir_offset(dir)
        if 0 <= dist_no < self.stage_size:
            return dist_no
        return None

    def can_move(self, cells: StageCells, src_no: int, dir: MoveDir) -> bool:
        """
        Legality oracle for a move on a snapshot.

        Both gates must pass: the topology gate (allows) and the content
        gate (source occupied and not moved; a combine into an occupied
        destination must produce a value).

        Args:
            cells: Board snapshot
            src_no: Source cell index
            dir: Move direction

        Returns:
            True if the move can be applied
        """
        if not 0 <= src_no < len(cells):
            return False
        if not self.allows(src_no, dir):
            return False

        src = cells[src_no]
        if src is None or src.moved:
            return False

        dist_no = self.dist_no(src_no, dir)
        if dist_no is None or dist_no >= len(cells):
            return False

        dist = cells[dist_no]
        op = dir.operation
        if dist is None or op is None:
            return True
        return op.apply(dist.ratio, src.ratio) is not None
