# FILE: services/aggregation_service.py
import math
from typing import Iterable, Optional

from flask import current_app

from errors import NotFoundError, ValidationError
from models import STATUS_COMPLETED, PracticeSession, SessionAnswer, db, utcnow
from services.usage_service import action_for, log_usage


def compute_overall_score(answers: Iterable[SessionAnswer]) -> Optional[int]:
    # Mean of the scored answers, rounded half up; unanswered slots don't count.
    scores = [float(answer.score) for answer in answers if answer.score is not None]
    if not scores:
        return None
    return int(math.floor(sum(scores) / len(scores) + 0.5))


def _close(session: PracticeSession, overall_score: int) -> None:
    session.status = STATUS_COMPLETED
    session.completed_at = utcnow()
    session.overall_score = overall_score
    log_usage(session.user_id, action_for(session.session_type))
    current_app.logger.info("Session %s completed with overall score %s", session.id, overall_score)


def maybe_complete_session(session: PracticeSession) -> bool:
    """
    Close the session once every slot has a score. Runs inside the caller's
    transaction and does not commit.
    """
    if session.is_completed:
        return False
    if not session.answers or not all(answer.is_scored for answer in session.answers):
        return False
    _close(session, compute_overall_score(session.answers))
    return True


def complete_session(session_id: int, user_id: Optional[str] = None) -> PracticeSession:
    """
    Finalize a session, possibly before every question is answered.

    Completing an already completed session returns it unchanged. A session
    with nothing scored cannot be completed.
    """
    session = db.session.get(PracticeSession, session_id)
    if session is None or (user_id is not None and session.user_id != user_id):
        raise NotFoundError("Session not found.", {"session_id": session_id})

    if session.is_completed:
        return session

    overall_score = compute_overall_score(session.answers)
    if overall_score is None:
        raise ValidationError(
            "Answer at least one question before completing the session.", {"session_id": session_id}
        )

    try:
        _close(session, overall_score)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return session
