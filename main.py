"""
Ratio Diamond - Entry Point

Generates one puzzle on the background generator worker and logs the
initial values, the target and the solution steps.

Example:
    python main.py
    python main.py --seed 42 --debug
    python main.py --values 3 5 7 9
"""

import sys
import logging
import argparse
import random
from typing import Optional

from PyQt5.QtCore import QCoreApplication

from src.generator_worker import GeneratorWorker
from src.puzzle import AnswerInfo, Ratio
from src.settings import load_settings


logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Log to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("puzzle.log", mode='w', encoding='utf-8')  # File output
        ]
    )


class Application:
    """
    Console application controller.

    Owns the generator worker and quits the Qt event loop once the
    worker has finished.
    """

    def __init__(self, app: QCoreApplication, settings: dict,
                 seed: Optional[int] = None, values: Optional[list] = None):
        """
        Initialize the application.

        Args:
            app: Running Qt core application
            settings: Loaded settings dictionary
            seed: Random seed for reproducible puzzles
            values: Fixed initial values (random if None)
        """
        self.app = app
        self.settings = settings
        self.answer: Optional[AnswerInfo] = None

        ratios = [Ratio.from_int(v) for v in values] if values else None
        self.worker = GeneratorWorker(
            calculator_name=settings["calculator_name"],
            ratios=ratios,
            value_min=settings["value_min"],
            value_max=settings["value_max"],
            max_attempts=settings["max_attempts"],
            rng=random.Random(seed),
        )

    def setup(self):
        """Connect worker signals."""
        self.worker.status_changed.connect(self._on_status)
        self.worker.answer_ready.connect(self._on_answer)
        self.worker.error_occurred.connect(self._on_error)
        self.worker.finished.connect(self.app.quit)

    def start(self):
        logger.info(f"Generating puzzle ({self.settings['calculator_name']})")
        self.worker.start()

    def _on_status(self, status: str):
        logger.debug(f"Worker status: {status}")

    def _on_error(self, error_msg: str):
        logger.error(f"Worker error: {error_msg}")

    def _on_answer(self, answer: AnswerInfo):
        self.answer = answer
        values = "  ".join(str(r) for r in answer.initial)
        logger.info(f"Cells:  {values}")
        logger.info(f"Target: {answer.ratio}")
        for i, step in enumerate(answer.steps):
            logger.info(f"  {i + 1}. cell {step.index} {step.dir.name} ({step.dir.label})")


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Ratio Diamond - Generate a puzzle and its answer"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for a reproducible puzzle"
    )
    parser.add_argument(
        "--values", "-v",
        type=int,
        nargs="+",
        default=None,
        help="Initial cell values (random if omitted)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args()


def main():
    """Generate and print one puzzle."""
    args = parse_args()
    settings = load_settings()
    configure_logging(args.debug or settings.get("debug_enabled", False))

    app = QCoreApplication(sys.argv)

    application = Application(app, settings, seed=args.seed, values=args.values)
    application.setup()
    application.start()

    app.exec_()
    sys.exit(0 if application.answer is not None else 1)


if __name__ == "__main__":
    main()
