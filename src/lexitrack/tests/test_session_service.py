"""Tests for session service."""
import pytest

from lexitrack.config import LearningSettings, PracticeSessionSettings, TypingSettings, settings
from lexitrack.models.progress_models import SessionAttempt, TypingResult
from lexitrack.services.learning_metrics import LearningMetricsCalculator
from lexitrack.services.session_service import SessionService

CORRECT = TypingResult(is_correct=True, accuracy=100, partial_credit=False)
PARTIAL = TypingResult(is_correct=False, accuracy=80, partial_credit=True)
WRONG = TypingResult(is_correct=False, accuracy=20, partial_credit=False)


@pytest.fixture
def session_service() -> SessionService:
    """Create a session service with default settings."""
    calculator = LearningMetricsCalculator(LearningSettings(), TypingSettings())
    return SessionService(PracticeSessionSettings(), calculator)


def test_default_settings() -> None:
    """Test the service falls back to the configured settings."""
    service = SessionService()
    assert service.practice is settings.practice
    assert service.practice.points_per_correct_answer == 10
    assert isinstance(service.calculator, LearningMetricsCalculator)


def test_attempt_points(session_service: SessionService) -> None:
    """Test points for each kind of answer."""
    assert session_service.calculate_attempt_points(CORRECT, 2000) == 15
    assert session_service.calculate_attempt_points(CORRECT, 10000) == 15
    assert session_service.calculate_attempt_points(CORRECT, 12000) == 10
    assert session_service.calculate_attempt_points(PARTIAL, 2000) == 5
    assert session_service.calculate_attempt_points(WRONG, 2000) == -2


def test_score_attempt(session_service: SessionService) -> None:
    """Test scored attempts keep their feedback."""
    attempt = session_service.score_attempt(CORRECT, 12000)
    assert attempt == SessionAttempt(feedback=CORRECT, response_time_ms=12000, points=10)


def test_summarize_excellent_session(session_service: SessionService) -> None:
    """Test a fast session with one miss."""
    attempts = [session_service.score_attempt(CORRECT, 3000) for _ in range(9)]
    attempts.append(session_service.score_attempt(WRONG, 3000))

    summary = session_service.summarize_session(attempts, time_spent=250, words_learned=2)

    assert summary.total_words == 10
    assert summary.correct_answers == 9
    assert summary.incorrect_answers == 1
    assert summary.accuracy == 90
    assert summary.score == 100
    assert summary.points == 9 * 15 - 2
    assert summary.time_spent == 250
    assert summary.is_successful is True
    assert summary.is_excellent is True
    assert summary.achievements == ["Excellence!", "Speed Demon!"]


def test_summarize_perfect_session(session_service: SessionService) -> None:
    """Test every achievement but speed."""
    attempts = [session_service.score_attempt(CORRECT, 12000) for _ in range(5)]

    summary = session_service.summarize_session(attempts, time_spent=600, words_learned=5)

    assert summary.accuracy == 100
    assert summary.score == 100
    assert summary.achievements == ["Perfect Score!", "Excellence!", "Quick Learner!"]


def test_summarize_slow_unsuccessful_session(session_service: SessionService) -> None:
    """Test a session past the time limit gets no time bonus."""
    attempts = [
        session_service.score_attempt(CORRECT, 3000),
        session_service.score_attempt(PARTIAL, 3000),
        session_service.score_attempt(WRONG, 3000),
    ]

    summary = session_service.summarize_session(attempts, time_spent=1200)

    assert summary.accuracy == 33
    assert summary.score == 33
    assert summary.points == 15 + 5 - 2
    assert summary.is_successful is False
    assert summary.is_excellent is False
    assert summary.achievements == []


def test_summarize_empty_session(session_service: SessionService) -> None:
    """Test a session without attempts."""
    summary = session_service.summarize_session([], time_spent=1000)
    assert summary.total_words == 0
    assert summary.accuracy == 0
    assert summary.score == 0
    assert summary.points == 0


def test_difficulty_levels(session_service: SessionService) -> None:
    """Test difficulty level lookup."""
    hard = session_service.get_difficulty_level(4)
    assert hard.words_per_session == 15
    assert hard.time_limit == 25
    assert hard.allow_partial_credit is False

    beginner = session_service.get_difficulty_level(1)
    assert beginner.show_hints is True

    # Unknown and missing levels fall back to medium
    assert session_service.get_difficulty_level(9).level == 3
    assert session_service.get_difficulty_level().level == 3


@pytest.mark.parametrize(
    "current_level, accuracies, timeouts, expected",
    [
        (3, [96, 97, 99], 0, 4),
        (3, [96, 95, 99], 0, 3),
        (3, [97, 99], 0, 3),
        (5, [100, 100, 100], 0, 5),
        (3, [40, 45], 0, 2),
        (3, [80, 40], 0, 3),
        (3, [80], 3, 2),
        (1, [10, 10], 0, 1),
        (3, [], 0, 3),
    ],
)
def test_recommend_difficulty(
    session_service: SessionService,
    current_level: int,
    accuracies: list,
    timeouts: int,
    expected: int,
) -> None:
    """Test difficulty adjustment triggers."""
    assert session_service.recommend_difficulty(current_level, accuracies, timeouts) == expected


if __name__ == "__main__":
    pytest.main([__file__])
