"""Command line entry point: record a practice attempt for a word."""
import logging
import sys
from typing import List, Optional

from lexitrack.logging_config import setup_logging
from lexitrack.models.base import SessionLocal, init_db
from lexitrack.models.progress_models import AttemptRecord
from lexitrack.services.progress_service import ProgressService

logger = logging.getLogger(__name__)

USAGE = "usage: python -m lexitrack USER_ID WORD_ID TARGET_WORD USER_INPUT [RESPONSE_TIME_MS]"


def main(argv: Optional[List[str]] = None) -> int:
    """Record one attempt and print the feedback and updated progress."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) not in (4, 5):
        print(USAGE, file=sys.stderr)
        return 2

    try:
        user_id, word_id = int(argv[0]), int(argv[1])
        response_time_ms = float(argv[4]) if len(argv) == 5 else 0.0
    except ValueError:
        print(USAGE, file=sys.stderr)
        return 2

    init_db()
    db = SessionLocal()
    try:
        service = ProgressService(db)
        update = service.record_attempt(
            user_id,
            word_id,
            AttemptRecord(user_input=argv[3], target_word=argv[2], response_time_ms=response_time_ms),
        )
    except ValueError as e:
        logger.error(f"Could not record attempt: {e}")
        return 1
    finally:
        db.close()

    progress = update.progress
    print(
        f"correct={update.feedback.is_correct} accuracy={update.feedback.accuracy} "
        f"partial_credit={update.feedback.partial_credit}"
    )
    print(
        f"status={progress.learning_status.value} mastery={progress.mastery_score} "
        f"attempts={progress.correct_attempts}/{progress.total_attempts} "
        f"next_review={progress.next_review_due.isoformat()}"
    )
    return 0


if __name__ == "__main__":
    setup_logging("Starting LexiTrack ...")
    sys.exit(main())
