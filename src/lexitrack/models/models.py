"""Database models for persisted learning progress."""
from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    Float,
    Integer,
    UniqueConstraint,
)

from lexitrack.models.base import Base, TimestampMixin
from lexitrack.models.progress_models import LearningStatus, WordProgressSnapshot


class WordProgress(Base, TimestampMixin):
    """Per user, per word learning progress."""

    __tablename__ = "word_progress"
    __table_args__ = (UniqueConstraint("user_id", "word_id", name="uq_word_progress_user_word"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    word_id = Column(Integer, nullable=False, index=True)
    correct_attempts = Column(Integer, nullable=False, default=0)
    total_attempts = Column(Integer, nullable=False, default=0)
    consecutive_correct = Column(Integer, nullable=False, default=0)
    mastery_score = Column(Integer, nullable=False, default=0)  # 0-100
    review_count = Column(Integer, nullable=False, default=0)
    total_response_time_ms = Column(Float, nullable=False, default=0.0)
    last_reviewed_at = Column(DateTime(timezone=True), nullable=True)
    next_review_due = Column(DateTime(timezone=True), nullable=True)
    learning_status = Column(
        Enum(LearningStatus, values_callable=lambda statuses: [s.value for s in statuses]),
        nullable=False,
        default=LearningStatus.NOT_STARTED,
    )

    def to_snapshot(self) -> WordProgressSnapshot:
        """Return the row's counters as an immutable snapshot."""
        return WordProgressSnapshot(
            correct_attempts=self.correct_attempts or 0,
            total_attempts=self.total_attempts or 0,
            consecutive_correct=self.consecutive_correct or 0,
            mastery_score=self.mastery_score or 0,
            review_count=self.review_count or 0,
            total_response_time_ms=self.total_response_time_ms or 0.0,
            last_reviewed_at=self.last_reviewed_at,
            next_review_due=self.next_review_due,
            learning_status=self.learning_status or LearningStatus.NOT_STARTED,
        )

    def apply_snapshot(self, snapshot: WordProgressSnapshot) -> None:
        """Copy a snapshot's counters onto the row."""
        self.correct_attempts = snapshot.correct_attempts
        self.total_attempts = snapshot.total_attempts
        self.consecutive_correct = snapshot.consecutive_correct
        self.mastery_score = snapshot.mastery_score
        self.review_count = snapshot.review_count
        self.total_response_time_ms = snapshot.total_response_time_ms
        self.last_reviewed_at = snapshot.last_reviewed_at
        self.next_review_due = snapshot.next_review_due
        self.learning_status = snapshot.learning_status

    def __repr__(self) -> str:
        return (
            f"<WordProgress user={self.user_id} word={self.word_id} "
            f"status={self.learning_status} score={self.mastery_score}>"
        )
