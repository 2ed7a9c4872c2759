"""Service for scoring practice sessions and adjusting their difficulty."""
import logging
from typing import Dict, List, Optional, Sequence

from lexitrack import monitoring
from lexitrack.config import PracticeSessionSettings, settings
from lexitrack.models.progress_models import (
    DifficultyLevel,
    SessionAttempt,
    SessionSummary,
    TypingResult,
)
from lexitrack.services.learning_metrics import LearningMetricsCalculator, round_half_up

logger = logging.getLogger(__name__)

MIN_DIFFICULTY_LEVEL = 1
MAX_DIFFICULTY_LEVEL = 5

DIFFICULTY_LEVELS: Dict[int, DifficultyLevel] = {
    1: DifficultyLevel(1, "beginner", words_per_session=5, time_limit=45, allow_partial_credit=True, show_hints=True),
    2: DifficultyLevel(2, "easy", words_per_session=8, time_limit=35, allow_partial_credit=True, show_hints=True),
    3: DifficultyLevel(3, "medium", words_per_session=10, time_limit=30, allow_partial_credit=True, show_hints=False),
    4: DifficultyLevel(4, "hard", words_per_session=15, time_limit=25, allow_partial_credit=False, show_hints=False),
    5: DifficultyLevel(5, "expert", words_per_session=20, time_limit=20, allow_partial_credit=False, show_hints=False),
}

# Difficulty adjustment triggers
HIGH_ACCURACY_TRIGGER = 95
CONSECUTIVE_EXCELLENT_SESSIONS = 3
LOW_ACCURACY_TRIGGER = 50
CONSECUTIVE_POOR_SESSIONS = 2
MAX_TIMEOUTS = 3

# Achievement thresholds
QUICK_LEARNER_WORDS = 5
SPEED_DEMON_SECONDS = 300
SESSION_TIME_BONUS = 10


class SessionService:
    """Service for practice session scoring."""

    def __init__(
        self,
        practice: Optional[PracticeSessionSettings] = None,
        calculator: Optional[LearningMetricsCalculator] = None,
    ):
        """Initialize the service with practice settings and a metrics calculator."""
        self.practice = practice or settings.practice
        self.calculator = calculator or LearningMetricsCalculator()

    def calculate_attempt_points(self, feedback: TypingResult, response_time_ms: float) -> int:
        """Calculate the points earned by a single attempt.

        Correct answers earn full points plus a speed bonus, partial credit
        earns half points and anything else costs a penalty.
        """
        if feedback.is_correct:
            points = self.practice.points_per_correct_answer
            if response_time_ms <= self.practice.speed_bonus_threshold_seconds * 1000:
                points += self.practice.bonus_points_for_speed
            return points
        if feedback.partial_credit:
            return round_half_up(self.practice.points_per_correct_answer * 0.5)
        return -self.practice.points_penalty_per_wrong_attempt

    def score_attempt(self, feedback: TypingResult, response_time_ms: float) -> SessionAttempt:
        """Wrap an evaluated attempt together with its points."""
        return SessionAttempt(
            feedback=feedback,
            response_time_ms=response_time_ms,
            points=self.calculate_attempt_points(feedback, response_time_ms),
        )

    def summarize_session(
        self,
        attempts: Sequence[SessionAttempt],
        time_spent: float,
        words_learned: int = 0,
    ) -> SessionSummary:
        """Summarize a finished practice session.

        Args:
            attempts: Scored attempts in the order they were made.
            time_spent: Session duration in seconds.
            words_learned: Number of words that reached the learned status.
        """
        correct_answers = sum(1 for attempt in attempts if attempt.feedback.is_correct)
        incorrect_answers = len(attempts) - correct_answers
        accuracy = self.calculator.calculate_accuracy(correct_answers, len(attempts))

        time_bonus = SESSION_TIME_BONUS if time_spent < self.practice.session_time_limit_seconds else 0
        score = min(accuracy + time_bonus, 100)

        achievements: List[str] = []
        if accuracy >= 100:
            achievements.append("Perfect Score!")
        if accuracy >= 90:
            achievements.append("Excellence!")
        if words_learned >= QUICK_LEARNER_WORDS:
            achievements.append("Quick Learner!")
        if time_spent < SPEED_DEMON_SECONDS:
            achievements.append("Speed Demon!")

        summary = SessionSummary(
            total_words=len(attempts),
            correct_answers=correct_answers,
            incorrect_answers=incorrect_answers,
            accuracy=accuracy,
            score=score,
            points=sum(attempt.points for attempt in attempts),
            time_spent=round_half_up(time_spent),
            words_learned=words_learned,
            is_successful=accuracy >= self.practice.session_success_threshold,
            is_excellent=accuracy >= self.practice.session_excellent_threshold,
            achievements=achievements,
        )

        if summary.is_excellent:
            outcome = "excellent"
        elif summary.is_successful:
            outcome = "successful"
        else:
            outcome = "unsuccessful"
        monitoring.sessions_completed.labels(outcome=outcome).inc()
        logger.info(
            f"Session summarized: {correct_answers}/{len(attempts)} correct, "
            f"accuracy {accuracy}%, score {score}, {outcome}"
        )
        return summary

    def get_difficulty_level(self, level: Optional[int] = None) -> DifficultyLevel:
        """Get the configuration of a difficulty level, falling back to the default level."""
        if level is None:
            level = self.practice.default_difficulty_level
        if level not in DIFFICULTY_LEVELS:
            logger.warning(f"Unknown difficulty level {level}, using {self.practice.default_difficulty_level}")
            level = self.practice.default_difficulty_level
        return DIFFICULTY_LEVELS[level]

    def recommend_difficulty(
        self,
        current_level: int,
        recent_accuracies: Sequence[float],
        timeouts: int = 0,
    ) -> int:
        """Recommend the difficulty level for the next session.

        Args:
            current_level: Level of the sessions that were just played.
            recent_accuracies: Session accuracies, oldest first.
            timeouts: Number of answers that ran out of time in the last session.
        """
        poor = recent_accuracies[-CONSECUTIVE_POOR_SESSIONS:]
        excellent = recent_accuracies[-CONSECUTIVE_EXCELLENT_SESSIONS:]

        if timeouts >= MAX_TIMEOUTS or (
            len(poor) == CONSECUTIVE_POOR_SESSIONS and all(acc < LOW_ACCURACY_TRIGGER for acc in poor)
        ):
            new_level = current_level - 1
        elif len(excellent) == CONSECUTIVE_EXCELLENT_SESSIONS and all(
            acc > HIGH_ACCURACY_TRIGGER for acc in excellent
        ):
            new_level = current_level + 1
        else:
            new_level = current_level

        new_level = max(MIN_DIFFICULTY_LEVEL, min(MAX_DIFFICULTY_LEVEL, new_level))
        if new_level != current_level:
            logger.info(f"Difficulty adjusted from {current_level} to {new_level}")
        return new_level
