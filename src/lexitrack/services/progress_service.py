"""Service for applying practice attempts to persisted word progress."""
import logging
from dataclasses import replace
from datetime import datetime, UTC
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from lexitrack import monitoring
from lexitrack.models.models import WordProgress
from lexitrack.models.progress_models import (
    AttemptRecord,
    LearningStatus,
    ProgressUpdate,
    WordProgressSnapshot,
)
from lexitrack.services.learning_metrics import LearningMetricsCalculator

logger = logging.getLogger(__name__)


def as_utc(moment: Optional[datetime]) -> datetime:
    """Return the moment in UTC; naive datetimes are taken to be UTC already."""
    if moment is None:
        return datetime.now(UTC)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def apply_attempt(
    snapshot: WordProgressSnapshot,
    attempt: AttemptRecord,
    calculator: LearningMetricsCalculator,
    now: Optional[datetime] = None,
) -> ProgressUpdate:
    """Apply one attempt to a word's progress and return the updated counters.

    The next review is scheduled from the number of reviews completed before
    this attempt, so the first review of a word starts at the head of the
    interval schedule.
    """
    if now is None:
        now = datetime.now(UTC)

    feedback = calculator.is_typing_approximately_correct(attempt.user_input, attempt.target_word)
    is_correct = feedback.is_correct

    counted = replace(
        snapshot,
        correct_attempts=snapshot.correct_attempts + (1 if is_correct else 0),
        total_attempts=snapshot.total_attempts + 1,
        consecutive_correct=snapshot.consecutive_correct + 1 if is_correct else 0,
        review_count=snapshot.review_count + 1,
        total_response_time_ms=snapshot.total_response_time_ms + attempt.response_time_ms,
    )

    accuracy = calculator.calculate_accuracy(counted.correct_attempts, counted.total_attempts)
    mastery_score = calculator.calculate_mastery_score(
        accuracy,
        counted.consecutive_correct,
        counted.average_response_time_ms,
        counted.review_count,
    )
    learning_status = calculator.determine_learning_status(
        counted.correct_attempts, counted.total_attempts, counted.consecutive_correct, mastery_score
    )
    next_review_due = calculator.calculate_next_review_date(snapshot.review_count, accuracy, now)

    progress = replace(
        counted,
        mastery_score=mastery_score,
        last_reviewed_at=now,
        next_review_due=next_review_due,
        learning_status=learning_status,
    )
    return ProgressUpdate(
        progress=progress,
        feedback=feedback,
        accuracy=accuracy,
        previous_status=snapshot.learning_status,
    )


class ProgressService:
    """Service for reading and updating word progress rows."""

    def __init__(self, db: Session, calculator: Optional[LearningMetricsCalculator] = None):
        """Initialize the service with a database session."""
        self.db = db
        self.calculator = calculator or LearningMetricsCalculator()

    @staticmethod
    def _check_ids(user_id: int, word_id: int) -> None:
        if user_id is None or user_id < 1:
            raise ValueError(f"Invalid user id: {user_id}")
        if word_id is None or word_id < 1:
            raise ValueError(f"Invalid word id: {word_id}")

    def get_progress(self, user_id: int, word_id: int) -> Optional[WordProgress]:
        """Get the progress row of a word for a user."""
        self._check_ids(user_id, word_id)
        return (
            self.db.query(WordProgress)
            .filter(
                and_(
                    WordProgress.user_id == user_id,
                    WordProgress.word_id == word_id,
                )
            )
            .first()
        )

    def get_or_create_progress(self, user_id: int, word_id: int) -> WordProgress:
        """Get the progress row of a word, creating a not started one if missing."""
        progress = self.get_progress(user_id, word_id)
        if progress:
            return progress

        progress = WordProgress(
            user_id=user_id,
            word_id=word_id,
            correct_attempts=0,
            total_attempts=0,
            consecutive_correct=0,
            mastery_score=0,
            review_count=0,
            total_response_time_ms=0.0,
            learning_status=LearningStatus.NOT_STARTED,
        )
        self.db.add(progress)
        self.db.commit()
        self.db.refresh(progress)
        monitoring.db_operations.labels(operation_type="create").inc()
        logger.info(f"Started tracking word {word_id} for user {user_id}")
        return progress

    def record_attempt(
        self,
        user_id: int,
        word_id: int,
        attempt: AttemptRecord,
        now: Optional[datetime] = None,
    ) -> ProgressUpdate:
        """Evaluate an attempt and store the updated progress."""
        row = self.get_or_create_progress(user_id, word_id)
        update = apply_attempt(row.to_snapshot(), attempt, self.calculator, as_utc(now))

        row.apply_snapshot(update.progress)
        self.db.commit()
        monitoring.db_operations.labels(operation_type="update").inc()

        self._track_attempt(update, attempt)
        if update.status_changed:
            logger.info(
                f"Word {word_id} for user {user_id}: "
                f"{update.previous_status.value} -> {update.progress.learning_status.value}"
            )
        else:
            logger.debug(
                f"Word {word_id} for user {user_id} stays {update.progress.learning_status.value} "
                f"(score {update.progress.mastery_score})"
            )
        return update

    def get_due_words(self, user_id: int, now: Optional[datetime] = None) -> List[WordProgress]:
        """Get words whose next review is due."""
        if user_id is None or user_id < 1:
            raise ValueError(f"Invalid user id: {user_id}")
        now = as_utc(now)

        return (
            self.db.query(WordProgress)
            .filter(
                WordProgress.user_id == user_id,
                WordProgress.next_review_due.isnot(None),
                WordProgress.next_review_due <= now,
            )
            .order_by(WordProgress.next_review_due)
            .all()
        )

    @staticmethod
    def _track_attempt(update: ProgressUpdate, attempt: AttemptRecord) -> None:
        if update.feedback.is_correct:
            result = "correct"
        elif update.feedback.partial_credit:
            result = "partial"
        else:
            result = "incorrect"
        monitoring.attempts_evaluated.labels(result=result).inc()
        monitoring.response_time.observe(attempt.response_time_ms / 1000)

        if update.status_changed:
            monitoring.status_transitions.labels(
                from_status=update.previous_status.value,
                to_status=update.progress.learning_status.value,
            ).inc()
            if update.progress.learning_status == LearningStatus.LEARNED:
                monitoring.words_learned.inc()
