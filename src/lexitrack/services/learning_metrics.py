"""Learning metrics: accuracy, mastery, learning status and review scheduling."""
import logging
import math
from datetime import datetime, timedelta, UTC
from typing import Optional

from lexitrack.config import LearningSettings, TypingSettings, settings
from lexitrack.models.progress_models import LearningStatus, TypingResult

logger = logging.getLogger(__name__)

MAX_SCORE = 100
CONSECUTIVE_BONUS_PER_ANSWER = 2
MAX_CONSECUTIVE_BONUS = 10
SPEED_BONUS = 5
REVIEW_BONUS_PER_REVIEW = 0.5
MAX_REVIEW_BONUS = 5
FALLBACK_INTERVAL_DAYS = 1


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


class LearningMetricsCalculator:
    """Stateless calculator for a word's learning progress.

    Every method is a pure function of its arguments and the thresholds the
    calculator was created with. Inputs are not validated: callers supply
    consistent counters (``total_attempts >= correct_attempts >= 0``).
    """

    def __init__(
        self,
        learning: Optional[LearningSettings] = None,
        typing: Optional[TypingSettings] = None,
    ):
        """Initialize the calculator with learning and typing thresholds."""
        self.learning = learning or settings.learning
        self.typing = typing or settings.typing

    def calculate_accuracy(self, correct_attempts: int, total_attempts: int) -> int:
        """Calculate accuracy percentage."""
        if total_attempts == 0:
            return 0
        return round_half_up(correct_attempts * 100 / total_attempts)

    def calculate_mastery_score(
        self,
        accuracy: float,
        consecutive_correct: int,
        avg_response_time_ms: float,
        review_count: int,
    ) -> int:
        """Calculate a 0-100 mastery score.

        The score starts from accuracy and adds three individually capped
        bonuses: the current streak, answering within the speed threshold and
        the number of reviews.
        """
        score = accuracy

        score += min(consecutive_correct * CONSECUTIVE_BONUS_PER_ANSWER, MAX_CONSECUTIVE_BONUS)

        if avg_response_time_ms / 1000 <= self.learning.speed_bonus_threshold_seconds:
            score += SPEED_BONUS

        score += min(review_count * REVIEW_BONUS_PER_REVIEW, MAX_REVIEW_BONUS)

        return min(round_half_up(score), MAX_SCORE)

    def determine_learning_status(
        self,
        correct_attempts: int,
        total_attempts: int,
        consecutive_correct: int,
        mastery_score: float,
    ) -> LearningStatus:
        """Determine learning status from the counters.

        Rules are checked in order and the first match wins; both learned
        rules take precedence over the difficult rule.
        """
        rules = self.learning
        accuracy = self.calculate_accuracy(correct_attempts, total_attempts)

        # Mastery path
        if (
            mastery_score >= rules.min_mastery_score
            and consecutive_correct >= rules.min_consecutive_correct_for_mastery
        ):
            return LearningStatus.LEARNED

        # Standard learned path
        if (
            correct_attempts >= rules.min_correct_attempts_to_learn
            and accuracy >= rules.min_accuracy_for_learned
            and consecutive_correct >= rules.min_consecutive_correct
        ):
            return LearningStatus.LEARNED

        wrong_attempts = total_attempts - correct_attempts
        if wrong_attempts >= rules.max_wrong_attempts_before_difficult or (
            total_attempts > 0 and accuracy <= rules.max_accuracy_for_difficult
        ):
            return LearningStatus.DIFFICULT

        if total_attempts > 0:
            return LearningStatus.IN_PROGRESS

        return LearningStatus.NOT_STARTED

    def calculate_next_review_date(
        self,
        review_count: int,
        accuracy: float,
        last_review_date: Optional[datetime] = None,
    ) -> datetime:
        """Calculate the next review date based on spaced repetition."""
        if last_review_date is None:
            last_review_date = datetime.now(UTC)

        intervals = self.learning.repetition_intervals
        last_index = len(intervals) - 1
        interval_index = min(review_count, last_index)

        if accuracy < self.learning.low_accuracy_threshold:
            interval_index = max(0, interval_index - 1)  # Review sooner if struggling
        elif accuracy >= self.learning.high_accuracy_threshold:
            interval_index = min(last_index, interval_index + 1)  # Review later if doing well

        if 0 <= interval_index < len(intervals):
            days = intervals[interval_index]
        else:
            days = FALLBACK_INTERVAL_DAYS

        return last_review_date + timedelta(days=days)

    def is_typing_approximately_correct(
        self,
        user_input: str,
        correct_word: str,
        tolerance_percentage: Optional[float] = None,
    ) -> TypingResult:
        """Check whether a typed answer matches the word within a typo tolerance.

        Characters are compared position by position, so an inserted or
        dropped character makes every following position a mismatch.
        """
        if tolerance_percentage is None:
            tolerance_percentage = self.typing.typo_tolerance_percentage

        normalized_input = user_input.lower().strip()
        normalized_word = correct_word.lower().strip()

        if normalized_input == normalized_word:
            return TypingResult(is_correct=True, accuracy=100, partial_credit=False)

        max_length = max(len(normalized_input), len(normalized_word))
        matching_chars = sum(
            1
            for i in range(max_length)
            if i < len(normalized_input)
            and i < len(normalized_word)
            and normalized_input[i] == normalized_word[i]
        )

        accuracy = matching_chars * 100 / max_length
        is_correct = accuracy >= 100 - tolerance_percentage
        partial_credit = (
            self.typing.partial_credit_enabled
            and accuracy >= self.typing.min_accuracy_for_partial_credit
            and len(normalized_input) >= self.typing.min_characters_for_partial_credit
        )

        logger.debug(
            f"Typed '{normalized_input}' for '{normalized_word}': "
            f"{matching_chars}/{max_length} positions match"
        )
        return TypingResult(
            is_correct=is_correct,
            accuracy=round_half_up(accuracy),
            partial_credit=partial_credit,
        )
