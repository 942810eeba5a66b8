"""
Test script for answer generation

Uses fixed seeds so every walk is reproducible:
1. Random initial values
2. Generated answers replay to their target
3. Cancellation and attempt limits
4. Answer playback cursor

Usage:
    python tests/test_generator.py
"""

import random
import sys
import threading
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.puzzle import (
    AnswerInfo,
    AnswerPlayback,
    GenerationCancelled,
    GenerationContext,
    MoveDir,
    Ratio,
    Stage,
    Steps,
    generate,
    generate_puzzle,
    generate_random_ratios,
    replay_steps,
)


def ints(*values):
    return [Ratio.from_int(v) for v in values]


def test_random_ratios_are_distinct():
    rng = random.Random(1)
    for _ in range(50):
        ratios = generate_random_ratios(4, 1, 10, rng)
        assert len(ratios) == 4
        assert len(set(ratios)) == 4
        for r in ratios:
            assert r.denom == 1
            assert 1 <= r.numer <= 10


def test_random_ratios_range_too_small():
    with pytest.raises(ValueError):
        generate_random_ratios(4, 1, 3)

    # Exactly enough values uses all of them
    ratios = generate_random_ratios(4, 1, 4, random.Random(0))
    assert sorted(ratios) == ints(1, 2, 3, 4)


def test_generated_answer_replays_to_target():
    """For distinct small values, the recorded steps reach the target."""
    print("\n" + "=" * 60)
    print("TEST: Generated answers")
    print("=" * 60)

    rng = random.Random(2024)
    for values in [(1, 2, 3, 4), (3, 5, 7, 9), (10, 1, 6, 2), (8, 4, 2, 1)]:
        answer = generate(ints(*values), rng=rng)
        print(f"  {values} -> {answer.ratio} in {answer.step_count} steps "
              f"({answer.metrics.attempts} attempts)")

        assert isinstance(answer, AnswerInfo)
        assert answer.initial == tuple(ints(*values))
        # Three values must be combined away
        assert answer.step_count >= 3
        assert answer.metrics.attempts >= 1
        assert answer.metrics.calculator_name == "diamond"

        stage = Stage(answer.initial)
        for step in answer.steps:
            assert stage.move_cell(step.index, step.dir), f"illegal step {step}"
        assert stage.last_ratio() == answer.ratio
        assert answer.verify()


def test_replay_steps():
    steps = Steps()
    steps.push(0, MoveDir.RIGHT_DOWN)
    steps.push(1, MoveDir.RIGHT_DOWN)
    steps.push(3, MoveDir.LEFT_DOWN)

    stage = replay_steps(ints(1, 2, 3, 4), steps)
    assert stage.last_ratio() == Ratio.from_int(-2)
    # Replaying does not consume the queue
    assert len(steps) == 3


def test_generation_is_reproducible_with_seed():
    a = generate(ints(2, 5, 7, 9), rng=random.Random(99))
    b = generate(ints(2, 5, 7, 9), rng=random.Random(99))
    assert a.ratio == b.ratio
    assert a.steps == b.steps


def test_generate_puzzle_draws_values():
    answer = generate_puzzle(rng=random.Random(5))
    assert len(answer.initial) == 4
    assert len(set(answer.initial)) == 4
    assert answer.verify()


def test_cancelled_generation_raises():
    context = GenerationContext()
    context.cancel()
    with pytest.raises(GenerationCancelled) as excinfo:
        generate(ints(1, 2, 3, 4), context=context)
    assert excinfo.value.attempts == 0


def test_attempt_limit():
    with pytest.raises(GenerationCancelled):
        generate(ints(1, 2, 3, 4), context=GenerationContext(max_attempts=0))

    answer = generate(
        ints(1, 2, 3, 4),
        rng=random.Random(3),
        context=GenerationContext(max_attempts=10_000),
    )
    assert answer.metrics.attempts <= 10_000


def test_context_limits():
    context = GenerationContext(cancel_flag=threading.Event(), max_attempts=5)
    assert not context.is_cancelled(4)
    assert context.is_cancelled(5)

    context = GenerationContext(timeout_sec=10.0, start_time=0.0)
    assert context.is_cancelled()


def test_wrong_size_rejected():
    with pytest.raises(ValueError):
        generate(ints(1, 2, 3))


def test_steps_queue():
    steps = Steps()
    assert steps.is_empty()
    assert steps.pop_front() is None

    steps.push(2, MoveDir.UP)
    steps.push(0, MoveDir.RIGHT)
    copy = steps.copy()

    first = steps.pop_front()
    assert (first.index, first.dir) == (2, MoveDir.UP)
    assert len(steps) == 1
    assert len(copy) == 2


def test_answer_playback():
    steps = Steps()
    steps.push(0, MoveDir.RIGHT_DOWN)
    steps.push(1, MoveDir.RIGHT_DOWN)
    steps.push(3, MoveDir.LEFT_DOWN)
    answer = AnswerInfo(ratio=Ratio.from_int(-2), steps=steps, initial=tuple(ints(1, 2, 3, 4)))

    playback = AnswerPlayback(answer)
    assert playback.steps_remaining == 3
    assert [s.index for s in playback.peek_steps(2)] == [0, 1]

    stage = Stage(answer.initial)
    while not playback.is_exhausted:
        step = playback.advance()
        stage.move_cell(step.index, step.dir)

    assert playback.advance() is None
    assert playback.current_step is None
    assert stage.last_ratio() == answer.ratio

    playback.rewind()
    assert playback.steps_remaining == 3


def main():
    """Run all tests."""
    print("\n" + "#" * 60)
    print("# GENERATOR TESTS")
    print("#" * 60)

    tests = [
        (name, func) for name, func in sorted(globals().items())
        if name.startswith("test_") and callable(func)
    ]

    failed = 0
    for name, func in tests:
        try:
            func()
            print(f"  {name}: [PASS]")
        except AssertionError as e:
            failed += 1
            print(f"  {name}: [FAIL] {e}")

    print()
    if failed == 0:
        print("All tests PASSED!")
        return 0
    print(f"{failed} tests FAILED!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
