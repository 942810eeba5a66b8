"""
Generation Context Module - Limits and cancellation for answer generation.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class GenerationContext:
    """
    Optional limits passed to generate().

    With the defaults generation retries until it succeeds. A caller
    running generation in the background can cancel it through
    cancel_flag or bound it with max_attempts / timeout_sec.

    Attributes:
        cancel_flag: Threading event for cancellation
        max_attempts: Attempts allowed before giving up (None = unbounded)
        timeout_sec: Maximum computation time in seconds (None = unbounded)
        start_time: When generation started
        progress_callback: Optional callback receiving (attempts, message)
    """
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    max_attempts: Optional[int] = None
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[int, str], None]] = None

    def is_cancelled(self, attempts: int = 0) -> bool:
        """
        Check if cancellation requested or a limit exceeded.

        Args:
            attempts: Attempts made so far

        Returns:
            True if generation should stop
        """
        if self.cancel_flag.is_set():
            return True
        if self.max_attempts is not None and attempts >= self.max_attempts:
            return True
        if self.timeout_sec is not None and self.elapsed_time() > self.timeout_sec:
            return True
        return False

    def cancel(self) -> None:
        self.cancel_flag.set()

    def report_progress(self, attempts: int, message: str = "") -> None:
        if self.progress_callback:
            self.progress_callback(attempts, message)

    def elapsed_time(self) -> float:
        """Seconds elapsed since generation started."""
        return time.time() - self.start_time
