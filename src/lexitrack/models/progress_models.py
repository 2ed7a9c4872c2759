"""Models for learning progress data structures."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class LearningStatus(str, Enum):
    """Learning status of a word for a single user."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DIFFICULT = "difficult"
    LEARNED = "learned"


@dataclass(frozen=True)
class AttemptRecord:
    """A single practice interaction with a word."""
    user_input: str
    target_word: str
    response_time_ms: float


@dataclass(frozen=True)
class TypingResult:
    """Feedback for a typed answer."""
    is_correct: bool
    accuracy: int
    partial_credit: bool


@dataclass(frozen=True)
class WordProgressSnapshot:
    """Immutable view of a user's progress counters for one word."""
    correct_attempts: int = 0
    total_attempts: int = 0
    consecutive_correct: int = 0
    mastery_score: int = 0
    review_count: int = 0
    total_response_time_ms: float = 0.0
    last_reviewed_at: Optional[datetime] = None
    next_review_due: Optional[datetime] = None
    learning_status: LearningStatus = LearningStatus.NOT_STARTED

    @property
    def incorrect_attempts(self) -> int:
        return self.total_attempts - self.correct_attempts

    @property
    def average_response_time_ms(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return self.total_response_time_ms / self.total_attempts


@dataclass(frozen=True)
class ProgressUpdate:
    """Result of applying one attempt to a word's progress."""
    progress: WordProgressSnapshot
    feedback: TypingResult
    accuracy: int
    previous_status: LearningStatus

    @property
    def status_changed(self) -> bool:
        return self.progress.learning_status != self.previous_status


@dataclass(frozen=True)
class SessionAttempt:
    """An evaluated attempt as recorded by a practice session."""
    feedback: TypingResult
    response_time_ms: float
    points: int = 0


@dataclass
class SessionSummary:
    """Summary of a completed practice session."""
    total_words: int
    correct_answers: int
    incorrect_answers: int
    accuracy: int
    score: int
    points: int
    time_spent: int  # in seconds
    words_learned: int
    is_successful: bool
    is_excellent: bool
    achievements: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DifficultyLevel:
    """Characteristics of a practice difficulty level."""
    level: int
    name: str
    words_per_session: int
    time_limit: int  # seconds per word
    allow_partial_credit: bool
    show_hints: bool
