"""
Generator Worker Module for Ratio Diamond

Provides a background QThread worker that generates a puzzle and its
answer off the caller's thread. Results are delivered via Qt signals.
"""

import logging
import random
from typing import Optional, Sequence

from PyQt5.QtCore import QThread, pyqtSignal

from src.puzzle import (
    GenerationCancelled, GenerationContext, Ratio,
    create_calculator, generate, generate_random_ratios,
)
from src.puzzle.generator import VALUE_MAX, VALUE_MIN


# Configure module logger
logger = logging.getLogger(__name__)


class GeneratorWorker(QThread):
    """
    Background worker thread for answer generation.

    Generation retries until it succeeds unless max_attempts is set, so
    callers that must stay responsive run it here and cancel with
    request_stop().

    Signals:
        status_changed(str): Emitted when worker status changes
        answer_ready(object): Emitted with the AnswerInfo on success
        error_occurred(str): Emitted when generation fails unexpectedly

    Example:
        worker = GeneratorWorker()
        worker.answer_ready.connect(session.load_answer)
        worker.start()
        # ...
        worker.request_stop()
        worker.wait()
    """

    # Signals for caller updates (thread-safe)
    status_changed = pyqtSignal(str)
    answer_ready = pyqtSignal(object)  # Emits AnswerInfo
    error_occurred = pyqtSignal(str)

    def __init__(self, calculator_name: Optional[str] = None,
                 ratios: Optional[Sequence[Ratio]] = None,
                 value_min: int = VALUE_MIN, value_max: int = VALUE_MAX,
                 max_attempts: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the generator worker.

        Args:
            calculator_name: Board topology (default calculator if None)
            ratios: Initial values to use (drawn at random if None)
            value_min: Smallest random initial value
            value_max: Largest random initial value
            max_attempts: Generation attempt cap (None = unbounded)
            rng: Random source
        """
        super().__init__()
        self.calculator_name = create_calculator(calculator_name).name
        self.ratios = list(ratios) if ratios is not None else None
        self.value_min = value_min
        self.value_max = value_max
        self.max_attempts = max_attempts
        self._rng = rng or random.Random()
        self._context: Optional[GenerationContext] = None

    def run(self):
        """
        Generate one answer. Called when thread starts.

        Emits answer_ready on success, status_changed when cancelled and
        error_occurred on any other failure.
        """
        # One context per run; request_stop() only reaches the current one
        self._context = GenerationContext(
            max_attempts=self.max_attempts,
            progress_callback=self._on_progress,
        )
        self.status_changed.emit("Generating")
        try:
            ratios = self.ratios
            if ratios is None:
                stage_size = create_calculator(self.calculator_name).stage_size
                ratios = generate_random_ratios(
                    stage_size, self.value_min, self.value_max, self._rng
                )

            answer = generate(ratios, self.calculator_name, self._rng, self._context)

        except GenerationCancelled as e:
            logger.info(f"Generation stopped: {e}")
            self.status_changed.emit("Cancelled")
            return
        except ValueError as e:
            logger.error(f"Generation failed: {e}")
            self.error_occurred.emit(str(e))
            return
        except Exception as e:
            logger.exception("Error in generator worker")
            self.error_occurred.emit(str(e))
            return

        logger.info(
            f"Generated {answer.ratio} in {answer.metrics.attempts} attempts "
            f"({answer.metrics.computation_time_ms:.1f}ms)"
        )
        self.answer_ready.emit(answer)
        self.status_changed.emit("Ready")

    def request_stop(self):
        """Request the running generation to stop. No-op before run()."""
        logger.info("Stop requested")
        if self._context is not None:
            self._context.cancel()

    def _on_progress(self, attempts: int, message: str):
        self.status_changed.emit(f"Generating ({message})")
