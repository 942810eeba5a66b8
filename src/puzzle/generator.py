"""
Answer Generator Module - Random-walk search for a solvable puzzle.

Starting from the initial values, random legal moves are applied on a
throwaway stage until a single unmoved cell remains. A walk that runs out
of movable cells or directions first is thrown away and a new walk starts
from the same values. Without limits in the context this retries until it
succeeds.
"""

import logging
import random
import time
from typing import List, Optional, Sequence

from .answer import AnswerInfo, GenerationMetrics
from .base import Calculator
from .context import GenerationContext
from .factory import create_calculator
from .ratio import Ratio
from .stage import Stage
from .step import Steps

logger = logging.getLogger(__name__)

# Range the initial cell values are drawn from (inclusive)
VALUE_MIN = 1
VALUE_MAX = 10

# Attempts between progress reports
PROGRESS_INTERVAL = 100


class GenerationCancelled(RuntimeError):
    """Raised when generation stops before finding an answer."""

    def __init__(self, attempts: int):
        super().__init__(f"Answer generation stopped after {attempts} attempts")
        self.attempts = attempts


def generate_random_ratios(
    stage_size: int = 4,
    low: int = VALUE_MIN,
    high: int = VALUE_MAX,
    rng: Optional[random.Random] = None,
) -> List[Ratio]:
    """
    Draw distinct integer values for a new stage.

    Args:
        stage_size: Number of values to draw
        low: Smallest value (inclusive)
        high: Largest value (inclusive)
        rng: Random source (module random if None)

    Returns:
        stage_size distinct unit-denominator ratios

    Raises:
        ValueError: If the range holds fewer than stage_size values
    """
    rng = rng or random.Random()
    pool = list(range(low, high + 1))
    if len(pool) < stage_size:
        raise ValueError(
            f"Range {low}..{high} has {len(pool)} values, need {stage_size}"
        )

    rng.shuffle(pool)
    return [Ratio.from_int(pool.pop()) for _ in range(stage_size)]


def generate(
    ratios: Sequence[Ratio],
    calculator_name: Optional[str] = None,
    rng: Optional[random.Random] = None,
    context: Optional[GenerationContext] = None,
) -> AnswerInfo:
    """
    Find a target value and a step sequence reaching it.

    Args:
        ratios: Initial cell values
        calculator_name: Topology name (default calculator if None)
        rng: Random source (fresh random.Random if None)
        context: Optional limits and cancellation

    Returns:
        AnswerInfo with the target, the steps and generation metrics

    Raises:
        GenerationCancelled: If the context cancels or a limit is hit
        ValueError: If ratios do not fit the topology
    """
    start_time = time.perf_counter()
    rng = rng or random.Random()
    calculator = create_calculator(calculator_name)
    initial = tuple(ratios)

    attempts = 0
    steps_tried = 0
    while True:
        if context is not None and context.is_cancelled(attempts):
            logger.info(f"Generation cancelled after {attempts} attempts")
            raise GenerationCancelled(attempts)

        attempts += 1
        stage = Stage(initial, calculator)
        ratio, steps = _try_generate(stage, rng)
        steps_tried += len(steps)

        if ratio is not None:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.debug(
                f"Answer {ratio} found in {len(steps)} steps "
                f"after {attempts} attempts ({elapsed_ms:.1f}ms)"
            )
            return AnswerInfo(
                ratio=ratio,
                steps=steps,
                initial=initial,
                metrics=GenerationMetrics(
                    attempts=attempts,
                    steps_tried=steps_tried,
                    computation_time_ms=elapsed_ms,
                    calculator_name=calculator.name,
                ),
            )

        logger.debug(f"Attempt {attempts} dead-ended after {len(steps)} steps")
        if context is not None and attempts % PROGRESS_INTERVAL == 0:
            context.report_progress(attempts, f"{attempts} attempts")


def generate_puzzle(
    calculator_name: Optional[str] = None,
    low: int = VALUE_MIN,
    high: int = VALUE_MAX,
    rng: Optional[random.Random] = None,
    context: Optional[GenerationContext] = None,
) -> AnswerInfo:
    """
    Draw random initial values and generate an answer for them.

    Args:
        calculator_name: Topology name (default calculator if None)
        low: Smallest initial value
        high: Largest initial value
        rng: Random source
        context: Optional limits and cancellation

    Returns:
        AnswerInfo whose initial field holds the drawn values
    """
    rng = rng or random.Random()
    calculator: Calculator = create_calculator(calculator_name)
    ratios = generate_random_ratios(calculator.stage_size, low, high, rng)
    return generate(ratios, calculator.name, rng, context)


def _try_generate(stage: Stage, rng: random.Random):
    """
    Run one random walk on stage.

    Returns:
        (target, steps) on success, (None, steps) on a dead end
    """
    steps = Steps()
    while True:
        indices = stage.movable_indices()
        rng.shuffle(indices)
        if not indices:
            return None, steps
        cell_no = indices.pop()

        dirs = stage.movable_dirs(cell_no)
        rng.shuffle(dirs)
        if not dirs:
            return None, steps
        dir = dirs.pop()

        steps.push(cell_no, dir)
        stage.move_cell(cell_no, dir)

        ratio = stage.last_ratio()
        if ratio is not None:
            return ratio, steps
