"""
Puzzle Package - Arithmetic and state engine for the ratio diamond puzzle.

Four cells hold exact ratios. A move either swaps two cells or combines
one into another with +, -, × or ÷. The puzzle is solved when a single
unmoved cell holds the target value.

Public API:
    - Ratio: Exact rational number
    - MoveDir / Operation: Directions and the arithmetic bound to them
    - MovableRatio: Cell content with moved flag
    - Calculator: Abstract board topology
    - Stage: Mutable board with undo/redo
    - Step / Steps: Recorded moves
    - AnswerInfo / AnswerPlayback: Generated answer and its playback cursor
    - generate() / generate_puzzle(): Answer generation
    - create_calculator(): Factory function

Usage:
    from src.puzzle import generate_puzzle, Stage, MoveDir

    answer = generate_puzzle()
    stage = Stage(answer.initial)

    stage.move_cell(0, MoveDir.RIGHT_DOWN)
    if stage.last_ratio() == answer.ratio:
        print("Solved")
"""

# Core data structures
from .ratio import Ratio
from .move_dir import MoveDir, Operation, COMBINE_OPERATIONS
from .movable_ratio import MovableRatio, StageCells
from .step import Step, Steps
from .stage import Stage

# Topology framework
from .base import Calculator
from .factory import (
    create_calculator,
    get_calculator_names,
    get_default_calculator_name,
    register_calculator,
)

# Answer generation
from .context import GenerationContext
from .answer import AnswerInfo, AnswerPlayback, GenerationMetrics, replay_steps
from .generator import (
    GenerationCancelled,
    generate,
    generate_puzzle,
    generate_random_ratios,
)

# Import calculators to register them
from . import calculators

__all__ = [
    # Data structures
    "Ratio",
    "MoveDir",
    "Operation",
    "COMBINE_OPERATIONS",
    "MovableRatio",
    "StageCells",
    "Step",
    "Steps",
    "Stage",
    # Topology framework
    "Calculator",
    "create_calculator",
    "get_calculator_names",
    "get_default_calculator_name",
    "register_calculator",
    # Answer generation
    "GenerationContext",
    "AnswerInfo",
    "AnswerPlayback",
    "GenerationMetrics",
    "replay_steps",
    "GenerationCancelled",
    "generate",
    "generate_puzzle",
    "generate_random_ratios",
]
