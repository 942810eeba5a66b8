"""
Game Session Module - Stage lifecycle state machine.

This module provides the GameSession which drives one player through a
series of stages: generating a puzzle, applying the player's moves,
detecting stage clear against the generated answer, counting clears up
to a game clear, and demonstrating the answer step by step.

For the puzzle arithmetic and board logic, see the src.puzzle package.
"""

from enum import Enum, auto
from typing import Callable, List, Optional
import logging
import random
import time

from src.puzzle import (
    AnswerInfo, AnswerPlayback, GenerationContext, MoveDir, Ratio, Stage, Step,
    create_calculator, generate_puzzle,
)
from src.puzzle.generator import VALUE_MAX, VALUE_MIN

logger = logging.getLogger(__name__)


__all__ = [
    "GAME_CLEAR_COUNT",
    "SessionState",
    "GameSession",
    "format_elapsed",
]

# Stages to clear for a game clear
GAME_CLEAR_COUNT = 5


class SessionState(Enum):
    """
    State machine states for a game session.

    States:
        PLAYING: Player can move cells
        STUCK: No cell can move and the stage is not solved
        MISSED: A single cell survived but it is not the answer
        STAGE_CLEARED: The answer was reached
        GAME_CLEARED: The answer was reached and the clear count is complete
        PLAYING_ANSWER: Generated steps are being demonstrated
        ANSWER_FINISHED: Demonstration reached the answer
    """
    PLAYING = auto()
    STUCK = auto()
    MISSED = auto()
    STAGE_CLEARED = auto()
    GAME_CLEARED = auto()
    PLAYING_ANSWER = auto()
    ANSWER_FINISHED = auto()


# States in which the player may still move, undo or redo
_PLAYER_STATES = (SessionState.PLAYING, SessionState.STUCK, SessionState.MISSED)


def format_elapsed(seconds: float) -> str:
    """
    Format a duration as HH:MM:SS.

    Args:
        seconds: Elapsed seconds

    Returns:
        Zero-padded hours, minutes and seconds
    """
    hours = int(seconds // 3600)
    minutes = int(seconds // 60 % 60)
    secs = int(seconds % 60)
    return f"{hours:02}:{minutes:02}:{secs:02}"


class GameSession:
    """
    One player's run through consecutive stages.

    State Flow:
        regenerate() -> PLAYING <-> STUCK / MISSED   (moves, undo, redo)
                           |
                     answer reached
                           |
             STAGE_CLEARED or GAME_CLEARED --next_stage()--> PLAYING

        start_answer_mode() -> PLAYING_ANSWER --steps exhausted--> ANSWER_FINISHED

    Clears reached while demonstrating the answer are never counted.
    """

    def __init__(self, calculator_name: Optional[str] = None,
                 game_clear_count: int = GAME_CLEAR_COUNT,
                 value_min: int = VALUE_MIN, value_max: int = VALUE_MAX,
                 max_attempts: Optional[int] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize game session. Call regenerate() or load_answer() to start.

        Args:
            calculator_name: Board topology (default calculator if None)
            game_clear_count: Stage clears needed for a game clear
            value_min: Smallest initial cell value
            value_max: Largest initial cell value
            max_attempts: Generation attempt cap (None = retry until success)
            rng: Random source for generation
            clock: Monotonic clock used by the stopwatch
        """
        self._calculator_name = create_calculator(calculator_name).name
        self.game_clear_count = game_clear_count
        self.value_min = value_min
        self.value_max = value_max
        self.max_attempts = max_attempts
        self._rng = rng or random.Random()
        self._clock = clock

        self._state = SessionState.PLAYING
        self._answer: Optional[AnswerInfo] = None
        self._stage: Optional[Stage] = None
        self._playback: Optional[AnswerPlayback] = None

        self._correct_answers = 0
        self._stopwatch_start = clock()
        self._cleared_time: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: dict, rng: Optional[random.Random] = None) -> 'GameSession':
        """Create a session from a settings dictionary (see src.settings)."""
        return cls(
            calculator_name=settings.get("calculator_name"),
            game_clear_count=settings.get("game_clear_count", GAME_CLEAR_COUNT),
            value_min=settings.get("value_min", VALUE_MIN),
            value_max=settings.get("value_max", VALUE_MAX),
            max_attempts=settings.get("max_attempts"),
            rng=rng,
        )

    @property
    def state(self) -> SessionState:
        """Get current state machine state."""
        return self._state

    @property
    def stage(self) -> Stage:
        """Get the stage the player is working on."""
        if self._stage is None:
            raise RuntimeError("No stage loaded, call regenerate() first")
        return self._stage

    @property
    def answer(self) -> Optional[Ratio]:
        """Target value of the current stage."""
        return self._answer.ratio if self._answer is not None else None

    @property
    def answer_info(self) -> Optional[AnswerInfo]:
        return self._answer

    @property
    def correct_answers(self) -> int:
        """Stages cleared since the last game clear."""
        return self._correct_answers

    @property
    def in_answer_mode(self) -> bool:
        return self._state in (SessionState.PLAYING_ANSWER, SessionState.ANSWER_FINISHED)

    @property
    def steps_remaining(self) -> int:
        """Steps left in the answer demonstration."""
        if self._playback is None:
            return 0
        return self._playback.steps_remaining

    def elapsed_text(self) -> str:
        """
        Stopwatch text for the current game.

        Frozen at the moment of a game clear until next_stage().
        """
        if self._cleared_time is not None:
            return self._cleared_time
        return format_elapsed(self._clock() - self._stopwatch_start)

    def regenerate(self) -> AnswerInfo:
        """
        Generate a new puzzle and start playing it.

        Returns:
            The generated answer

        Raises:
            GenerationCancelled: If max_attempts is set and exhausted
        """
        context = GenerationContext(max_attempts=self.max_attempts)
        answer = generate_puzzle(
            self._calculator_name, self.value_min, self.value_max, self._rng, context
        )
        self.load_answer(answer)
        logger.info(
            f"New stage: {', '.join(str(r) for r in answer.initial)} -> {answer.ratio} "
            f"({answer.step_count} steps)"
        )
        return answer

    def load_answer(self, answer: AnswerInfo) -> None:
        """
        Start playing a previously generated answer.

        Args:
            answer: Answer whose initial values form the new stage
        """
        self._answer = answer
        self.reset_stage()

    def reset_stage(self) -> None:
        """Rebuild the stage from the same initial values (retry)."""
        if self._answer is None:
            raise RuntimeError("No stage loaded, call regenerate() first")
        self._stage = Stage(self._answer.initial, create_calculator(self._calculator_name))
        self._playback = None
        self._state = SessionState.PLAYING
        logger.debug("Stage reset")

    def move_cell(self, index: int, dir: MoveDir) -> bool:
        """
        Apply a player move.

        Args:
            index: Source cell index
            dir: Move direction

        Returns:
            True if the stage changed
        """
        if self._state not in _PLAYER_STATES:
            logger.warning(f"Move ignored in state {self._state.name}")
            return False

        moved = self.stage.move_cell(index, dir)
        if moved:
            self._update_state()
        return moved

    def undo(self) -> bool:
        """Undo the last player move. Returns True if the stage changed."""
        if self._state not in _PLAYER_STATES:
            return False
        changed = self.stage.undo()
        if changed:
            self._update_state()
        return changed

    def redo(self) -> bool:
        """Redo the last undone move. Returns True if the stage changed."""
        if self._state not in _PLAYER_STATES:
            return False
        changed = self.stage.redo()
        if changed:
            self._update_state()
        return changed

    def next_stage(self) -> AnswerInfo:
        """
        Continue with a fresh puzzle.

        After a stage clear the counter is kept; after a game clear it
        wraps to zero and the stopwatch restarts. Called on an unsolved
        stage this gives up (see skip_stage()).

        Returns:
            The generated answer
        """
        if self._state not in (SessionState.STAGE_CLEARED, SessionState.GAME_CLEARED):
            return self.skip_stage()

        self._correct_answers %= self.game_clear_count
        if self._correct_answers == 0:
            self._stopwatch_start = self._clock()
        self._cleared_time = None
        return self.regenerate()

    def skip_stage(self) -> AnswerInfo:
        """
        Give up the current stage for a fresh puzzle.

        Giving up loses the clear streak: the counter drops to zero and
        the stopwatch restarts.

        Returns:
            The generated answer
        """
        if self._correct_answers:
            logger.info(f"Stage skipped, losing {self._correct_answers} clears")
        self._correct_answers = 0
        self._stopwatch_start = self._clock()
        self._cleared_time = None
        return self.regenerate()

    def start_answer_mode(self) -> None:
        """Reset the stage and prepare to demonstrate the generated steps."""
        self.reset_stage()
        self._playback = AnswerPlayback(self._answer)
        self._state = SessionState.PLAYING_ANSWER
        logger.info(f"Answer mode: {self._playback.steps_remaining} steps")

    def replay_answer(self) -> None:
        """Restart the demonstration from the initial values."""
        self.start_answer_mode()

    def play_next_step(self) -> Optional[Step]:
        """
        Apply the next demonstration step.

        Returns:
            The step applied, or None if not in answer mode or exhausted
        """
        if self._state != SessionState.PLAYING_ANSWER or self._playback is None:
            return None

        step = self._playback.advance()
        if step is None:
            return None

        self.stage.move_cell(step.index, step.dir)
        logger.debug(f"Answer step: {step}")

        if self._playback.is_exhausted:
            if self.stage.last_ratio() != self.answer:
                logger.warning("Answer demonstration did not reach the target")
            self._state = SessionState.ANSWER_FINISHED
        return step

    def peek_answer_steps(self, count: int = 3) -> List[Step]:
        if self._playback is None:
            return []
        return self._playback.peek_steps(count)

    def _update_state(self) -> None:
        """Re-evaluate the state after the stage changed."""
        last = self.stage.last_ratio()

        if last is not None and last == self.answer:
            self._correct_answers += 1
            if self._correct_answers >= self.game_clear_count:
                self._cleared_time = self.elapsed_text()
                self._state = SessionState.GAME_CLEARED
                logger.info(f"Game cleared in {self._cleared_time}")
            else:
                self._state = SessionState.STAGE_CLEARED
                logger.info(
                    f"Stage cleared ({self._correct_answers}/{self.game_clear_count})"
                )
        elif last is not None:
            self._state = SessionState.MISSED
        elif self.stage.failed():
            self._state = SessionState.STUCK
        else:
            self._state = SessionState.PLAYING
