"""
Answer Module - Result of answer generation and step-by-step playback.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .factory import create_calculator
from .ratio import Ratio
from .stage import Stage
from .step import Step, Steps

logger = logging.getLogger(__name__)


@dataclass
class GenerationMetrics:
    """
    Statistics for one generate() call.

    Attributes:
        attempts: Random walks started (the last one succeeded)
        steps_tried: Moves applied across all attempts
        computation_time_ms: Time taken in milliseconds
        calculator_name: Topology the answer was generated for
    """
    attempts: int = 0
    steps_tried: int = 0
    computation_time_ms: float = 0.0
    calculator_name: str = ""


@dataclass
class AnswerInfo:
    """
    A generated puzzle answer.

    Attributes:
        ratio: Target value (the single survivor of the recorded walk)
        steps: Moves leading from the initial values to the target
        initial: Initial cell values the steps apply to
        metrics: Generation statistics
    """
    ratio: Ratio
    steps: Steps
    initial: tuple = ()
    metrics: GenerationMetrics = field(default_factory=GenerationMetrics)

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def verify(self) -> bool:
        """
        Replay the steps on a fresh stage and compare the survivor.

        Returns:
            True if the replay ends with last_ratio() == ratio
        """
        stage = replay_steps(self.initial, self.steps, self.metrics.calculator_name or None)
        return stage.last_ratio() == self.ratio


def replay_steps(
    initial: Sequence[Ratio],
    steps: Steps,
    calculator_name: Optional[str] = None,
) -> Stage:
    """
    Apply recorded steps to a fresh stage.

    Args:
        initial: Initial cell values
        steps: Steps to apply in order (not consumed)
        calculator_name: Topology name (default calculator if None)

    Returns:
        Stage after the last step
    """
    stage = Stage(initial, create_calculator(calculator_name))
    for step in steps:
        if not stage.move_cell(step.index, step.dir):
            logger.warning(f"Replay step rejected: {step}")
    return stage


@dataclass
class AnswerPlayback:
    """
    Cursor over an answer's steps for demonstrating the solution.

    Attributes:
        answer: The answer being played back
        step_index: Position of the next step (0 = first step)
    """
    answer: AnswerInfo
    step_index: int = 0

    @property
    def current_step(self) -> Optional[Step]:
        """Next step to play, or None if exhausted."""
        if self.step_index < len(self.answer.steps):
            return self.answer.steps[self.step_index]
        return None

    @property
    def is_exhausted(self) -> bool:
        return self.step_index >= len(self.answer.steps)

    @property
    def steps_remaining(self) -> int:
        return max(0, len(self.answer.steps) - self.step_index)

    def advance(self) -> Optional[Step]:
        """
        Move to the next step in sequence.

        Returns:
            The step that was just consumed, or None if exhausted
        """
        if self.is_exhausted:
            return None
        step = self.current_step
        self.step_index += 1
        return step

    def peek_steps(self, count: int = 3) -> List[Step]:
        """
        Preview upcoming steps without advancing.

        Args:
            count: Number of steps to preview

        Returns:
            List of upcoming steps (may be shorter than count)
        """
        end = min(self.step_index + count, len(self.answer.steps))
        return [self.answer.steps[i] for i in range(self.step_index, end)]

    def rewind(self) -> None:
        self.step_index = 0
