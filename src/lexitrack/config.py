"""Configuration settings for the learning progress engine."""
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)

# Learning settings
SPACED_REPETITION_INTERVALS = [1, 3, 7, 14, 30, 60]  # days between reviews


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///lexitrack.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Thresholds that decide when a word is learned or difficult."""
    min_correct_attempts_to_learn: int = int(os.getenv("MIN_CORRECT_ATTEMPTS_TO_LEARN", "3"))
    min_consecutive_correct: int = int(os.getenv("MIN_CONSECUTIVE_CORRECT", "2"))
    min_accuracy_for_learned: int = int(os.getenv("MIN_ACCURACY_FOR_LEARNED", "80"))
    max_wrong_attempts_before_difficult: int = int(os.getenv("MAX_WRONG_ATTEMPTS_BEFORE_DIFFICULT", "3"))
    max_accuracy_for_difficult: int = int(os.getenv("MAX_ACCURACY_FOR_DIFFICULT", "40"))
    min_mastery_score: int = int(os.getenv("MIN_MASTERY_SCORE", "85"))
    min_consecutive_correct_for_mastery: int = int(os.getenv("MIN_CONSECUTIVE_CORRECT_FOR_MASTERY", "5"))
    low_accuracy_threshold: int = int(os.getenv("LOW_ACCURACY_THRESHOLD", "70"))
    high_accuracy_threshold: int = int(os.getenv("HIGH_ACCURACY_THRESHOLD", "90"))
    speed_bonus_threshold_seconds: float = float(os.getenv("SPEED_BONUS_THRESHOLD", "10"))
    repetition_intervals: list[int] = field(default_factory=lambda: list(SPACED_REPETITION_INTERVALS))


@dataclass
class TypingSettings:
    """Typo tolerance for typed answers."""
    typo_tolerance_percentage: int = int(os.getenv("TYPO_TOLERANCE_PERCENTAGE", "10"))
    partial_credit_enabled: bool = os.getenv("PARTIAL_CREDIT_ENABLED", "true").lower() == "true"
    min_accuracy_for_partial_credit: int = 50
    min_characters_for_partial_credit: int = int(os.getenv("MIN_CHARACTERS_FOR_PARTIAL_CREDIT", "3"))


@dataclass
class PracticeSessionSettings:
    """Practice session scoring settings."""
    points_per_correct_answer: int = int(os.getenv("POINTS_PER_CORRECT_ANSWER", "10"))
    points_penalty_per_wrong_attempt: int = int(os.getenv("POINTS_PENALTY_PER_WRONG_ATTEMPT", "2"))
    bonus_points_for_speed: int = int(os.getenv("BONUS_POINTS_FOR_SPEED", "5"))
    speed_bonus_threshold_seconds: float = float(os.getenv("SPEED_BONUS_THRESHOLD", "10"))
    session_time_limit_seconds: int = int(os.getenv("SESSION_TIME_LIMIT", "900"))
    session_success_threshold: int = int(os.getenv("SESSION_SUCCESS_THRESHOLD", "70"))
    session_excellent_threshold: int = int(os.getenv("SESSION_EXCELLENT_THRESHOLD", "90"))
    default_difficulty_level: int = int(os.getenv("DEFAULT_DIFFICULTY_LEVEL", "3"))


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_typing_settings() -> TypingSettings:
    """Get typing settings."""
    return TypingSettings()


def get_practice_settings() -> PracticeSessionSettings:
    """Get practice session settings."""
    return PracticeSessionSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    typing: TypingSettings = field(default_factory=get_typing_settings)
    practice: PracticeSessionSettings = field(default_factory=get_practice_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if not self.learning.repetition_intervals:
            raise ValueError("REPETITION_INTERVALS must not be empty")

        if any(days < 1 for days in self.learning.repetition_intervals):
            raise ValueError("REPETITION_INTERVALS must contain positive day counts")

        if self.learning.low_accuracy_threshold > self.learning.high_accuracy_threshold:
            raise ValueError("LOW_ACCURACY_THRESHOLD cannot be greater than HIGH_ACCURACY_THRESHOLD")

        if self.typing.typo_tolerance_percentage < 0 or self.typing.typo_tolerance_percentage > 100:
            raise ValueError("TYPO_TOLERANCE_PERCENTAGE must be between 0 and 100")

        if self.practice.session_success_threshold > self.practice.session_excellent_threshold:
            raise ValueError("SESSION_SUCCESS_THRESHOLD cannot be greater than SESSION_EXCELLENT_THRESHOLD")

        if self.practice.default_difficulty_level < 1 or self.practice.default_difficulty_level > 5:
            raise ValueError("DEFAULT_DIFFICULTY_LEVEL must be between 1 and 5")


# Create global settings instance
settings = Settings()
settings.validate()
