"""Multiple-choice star identification: distractor selection, grading, score.

Question lifecycle::

    IDLE --open_question--> ASKING --answer--> ANSWERED --close/timer--> IDLE
                              |
                              +--skip--> IDLE

Correctness is decided by star id, never by name (names may repeat).
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import math
import random
from collections.abc import Iterable, MutableSequence
from dataclasses import dataclass, field
from typing import TypeVar

from star_quiz.catalog import StarCatalog, StarRecord
from star_quiz.constants import (
    AUTO_CLOSE_DELAY_MS,
    DISTRACTOR_COUNT,
    NEARBY_POOL_SIZE,
    RANDOM_POOL_SIZE,
)
from star_quiz.scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

T = TypeVar('T')


def shuffle_in_place(items: MutableSequence[T], rng: random.Random) -> MutableSequence[T]:
    """Uniform Fisher-Yates shuffle, iterating from the last index down."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def planar_distance(a: StarRecord, b: StarRecord) -> float:
    """Euclidean distance in raw (RA hours, Dec degrees) units.

    Not an angular separation: the two axes have different units and RA is not
    scaled by cos(dec). It only ranks candidates for distractor selection.
    """
    return math.hypot(a.ra - b.ra, a.dec - b.dec)


def pick_distractors(
    stars: Iterable[StarRecord],
    target: StarRecord,
    count: int,
    max_magnitude: float,
    rng: random.Random,
    nearby_size: int = NEARBY_POOL_SIZE,
    random_size: int = RANDOM_POOL_SIZE,
) -> list[StarRecord]:
    """Choose up to count wrong answers for target.

    Eligible stars exclude the target (by id) and anything fainter than
    max_magnitude. The nearby_size closest (planar RA/Dec distance) form one
    pool; up to random_size of the rest, chosen at random, form another. The
    combined pool is shuffled and the first count returned, so answers lean
    toward plausible neighbours with some far-away variety.

    Parameters:
        stars: Candidate stars (catalog order).
        target: Correct answer.
        count: Number of distractors wanted.
        max_magnitude: Current magnitude filter (inclusive).
        rng: Random source.
        nearby_size: Size of the nearest-neighbour pool.
        random_size: Size of the random pool.

    Returns:
        min(count, eligible) distinct stars.
    """
    if count < 0:
        raise ValueError(f'count must be >= 0, got {count}')
    candidates = [s for s in stars if s.id != target.id and s.mag <= max_magnitude]
    # sorted() is stable: equal distances keep catalog order.
    candidates.sort(key=lambda s: planar_distance(s, target))
    nearby = candidates[:nearby_size]
    remainder = shuffle_in_place(candidates[nearby_size:], rng)
    pool = shuffle_in_place(nearby + list(remainder[:random_size]), rng)
    return list(pool[:count])


class QuizPhase(enum.Enum):
    """Where the current question is in its lifecycle."""

    IDLE = 'idle'
    ASKING = 'asking'
    ANSWERED = 'answered'


class OptionMark(enum.Enum):
    """Grading mark shown on an option after answering."""

    UNMARKED = 'unmarked'
    CORRECT = 'correct'
    INCORRECT = 'incorrect'


@dataclass(frozen=True)
class QuizOption:
    """One presented answer."""

    id: int
    name: str
    mark: OptionMark = OptionMark.UNMARKED


@dataclass
class Score:
    """Running tally; only restart() lowers it."""

    correct: int = 0
    total: int = 0

    @property
    def percentage(self) -> int:
        """Rounded percent correct (0 before any answer)."""
        if self.total == 0:
            return 0
        return round(100.0 * self.correct / self.total)

    def record(self, is_correct: bool) -> None:
        self.total += 1
        if is_correct:
            self.correct += 1

    def restart(self) -> None:
        self.correct = 0
        self.total = 0

    def snapshot(self) -> Score:
        """Independent copy."""
        return dataclasses.replace(self)


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of answering the current question."""

    selected_id: int
    correct_id: int
    correct_name: str
    is_correct: bool
    score: Score


@dataclass
class QuizState:
    """Session quiz state owned by QuizEngine."""

    phase: QuizPhase = QuizPhase.IDLE
    current_target: StarRecord | None = None
    options: tuple[QuizOption, ...] = ()
    score: Score = field(default_factory=Score)
    last_result: AnswerResult | None = None

    @property
    def active(self) -> bool:
        """True while a question is open; starfield clicks are ignored."""
        return self.phase is not QuizPhase.IDLE


class QuizEngine:
    """Builds questions for clicked stars and grades answers.

    Parameters:
        catalog: Source of distractors.
        rng: Random source for distractors and option order (default: new Random()).
        scheduler: Timer queue for the post-answer auto close (default: own Scheduler).
        distractor_count: Wrong answers per question.
        auto_close_ms: Delay after answering before the question closes itself.
    """

    def __init__(
        self,
        catalog: StarCatalog,
        rng: random.Random | None = None,
        scheduler: Scheduler | None = None,
        distractor_count: int = DISTRACTOR_COUNT,
        auto_close_ms: float = AUTO_CLOSE_DELAY_MS,
    ) -> None:
        self.catalog = catalog
        self.rng = rng if rng is not None else random.Random()
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.distractor_count = distractor_count
        self.auto_close_ms = auto_close_ms
        self.state = QuizState()
        self._close_task: ScheduledTask | None = None

    @property
    def active(self) -> bool:
        return self.state.active

    @property
    def score(self) -> Score:
        """Snapshot of the running score."""
        return self.state.score.snapshot()

    @property
    def options(self) -> tuple[QuizOption, ...]:
        return self.state.options

    def pick_distractors(self, target: StarRecord, count: int, max_magnitude: float) -> list[StarRecord]:
        """Distractors for target from this engine's catalog and random source."""
        return pick_distractors(self.catalog, target, count, max_magnitude, self.rng)

    def open_question(
        self, target: StarRecord, max_magnitude: float
    ) -> tuple[QuizOption, ...] | None:
        """Start a question about target (IDLE -> ASKING).

        Returns:
            Options in presentation order, or None if a question is already open.
        """
        if self.state.active:
            logger.debug('Question for %r ignored: quiz already active', target.name)
            return None
        choices = [target, *self.pick_distractors(target, self.distractor_count, max_magnitude)]
        shuffle_in_place(choices, self.rng)
        self.state.phase = QuizPhase.ASKING
        self.state.current_target = target
        self.state.options = tuple(QuizOption(s.id, s.name) for s in choices)
        self.state.last_result = None
        logger.debug('Asking about star %d (%s) with %d options', target.id, target.name, len(choices))
        return self.state.options

    def answer(self, selected: StarRecord | int) -> AnswerResult | None:
        """Grade a selected option (ASKING -> ANSWERED) and schedule the auto close.

        Answering when no question is awaiting an answer is a no-op.

        Returns:
            AnswerResult, or None if not in the ASKING phase.

        Raises:
            ValueError: selected is not one of the presented options.
        """
        target = self.state.current_target
        if self.state.phase is not QuizPhase.ASKING or target is None:
            logger.debug('Answer ignored: no open question')
            return None
        selected_id = selected if isinstance(selected, int) else selected.id
        if all(o.id != selected_id for o in self.state.options):
            raise ValueError(f'Star {selected_id} is not one of the presented options')
        is_correct = selected_id == target.id
        marked: list[QuizOption] = []
        for option in self.state.options:
            if option.id == selected_id:
                mark = OptionMark.CORRECT if is_correct else OptionMark.INCORRECT
            elif option.id == target.id:
                mark = OptionMark.CORRECT
            else:
                mark = OptionMark.UNMARKED
            marked.append(dataclasses.replace(option, mark=mark))
        self.state.options = tuple(marked)
        self.state.score.record(is_correct)
        self.state.phase = QuizPhase.ANSWERED
        result = AnswerResult(
            selected_id=selected_id,
            correct_id=target.id,
            correct_name=target.name,
            is_correct=is_correct,
            score=self.state.score.snapshot(),
        )
        self.state.last_result = result
        logger.info(
            'Answer for %s: %s (score %d/%d)',
            target.name,
            'correct' if is_correct else 'incorrect',
            result.score.correct,
            result.score.total,
        )
        self._cancel_close_task()
        self._close_task = self.scheduler.call_later(self.auto_close_ms, self.close)
        return result

    def close(self) -> bool:
        """Return to IDLE from ASKING or ANSWERED; cancels a pending auto close.

        Returns:
            True if the state changed, False if already idle.
        """
        self._cancel_close_task()
        if not self.state.active:
            return False
        self.state.phase = QuizPhase.IDLE
        self.state.current_target = None
        self.state.options = ()
        logger.debug('Question closed')
        return True

    def skip(self) -> bool:
        """Skip (before answering) or continue (after answering); score unchanged."""
        return self.close()

    def restart_score(self) -> None:
        """Reset the score to 0/0."""
        self.state.score.restart()

    def _cancel_close_task(self) -> None:
        if self._close_task is not None:
            self._close_task.cancel()
            self._close_task = None
