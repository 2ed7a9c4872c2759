"""Tests for configuration settings."""
import pytest

from lexitrack.config import (
    SPACED_REPETITION_INTERVALS,
    LearningSettings,
    PracticeSessionSettings,
    Settings,
    TypingSettings,
    settings,
)


def test_settings_defaults():
    """Test default settings values."""
    assert settings.learning.repetition_intervals == [1, 3, 7, 14, 30, 60]
    assert settings.learning.min_correct_attempts_to_learn == 3
    assert settings.learning.min_consecutive_correct == 2
    assert settings.learning.min_accuracy_for_learned == 80
    assert settings.learning.max_wrong_attempts_before_difficult == 3
    assert settings.learning.max_accuracy_for_difficult == 40
    assert settings.learning.min_mastery_score == 85
    assert settings.learning.min_consecutive_correct_for_mastery == 5
    assert settings.typing.typo_tolerance_percentage == 10
    assert settings.typing.partial_credit_enabled is True
    assert settings.practice.points_per_correct_answer == 10
    assert settings.practice.session_time_limit_seconds == 900


def test_no_unused_path_settings():
    """Test the settings module only exposes the engine settings."""
    import lexitrack.config as config

    assert not hasattr(config, "BASE_DIR")


def test_intervals_are_copied():
    """Changing one settings instance leaves the defaults alone."""
    learning = LearningSettings()
    learning.repetition_intervals.append(120)
    assert SPACED_REPETITION_INTERVALS == [1, 3, 7, 14, 30, 60]


def test_validate_rejects_empty_intervals():
    """Test validation of the review schedule."""
    invalid = Settings(learning=LearningSettings(repetition_intervals=[]))
    with pytest.raises(ValueError, match="REPETITION_INTERVALS"):
        invalid.validate()


def test_validate_rejects_inverted_thresholds():
    """Test validation of accuracy thresholds."""
    invalid = Settings(learning=LearningSettings(low_accuracy_threshold=95, high_accuracy_threshold=90))
    with pytest.raises(ValueError, match="LOW_ACCURACY_THRESHOLD"):
        invalid.validate()

    invalid = Settings(practice=PracticeSessionSettings(session_success_threshold=95))
    with pytest.raises(ValueError, match="SESSION_SUCCESS_THRESHOLD"):
        invalid.validate()


def test_validate_rejects_bad_tolerance():
    """Test validation of the typo tolerance."""
    invalid = Settings(typing=TypingSettings(typo_tolerance_percentage=150))
    with pytest.raises(ValueError, match="TYPO_TOLERANCE_PERCENTAGE"):
        invalid.validate()


def test_validate_default_settings():
    """Test default settings are valid."""
    Settings().validate()


if __name__ == "__main__":
    pytest.main([__file__])
