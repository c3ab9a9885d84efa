# FILE: services/answer_service.py
from typing import List, Optional, Union

from flask import current_app
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm.exc import StaleDataError

from errors import ConflictError, NotFoundError, ValidationError
from models import STATUS_IN_PROGRESS, PracticeSession, SessionAnswer, db, utcnow
from schemas import Feedback


def _find_slot(session_id: int, question_id: Optional[int], answer_id: Optional[int]) -> Optional[SessionAnswer]:
    query = SessionAnswer.query.filter(SessionAnswer.session_id == session_id)
    if answer_id is not None:
        query = query.filter(SessionAnswer.id == answer_id)
    elif question_id is not None:
        query = query.filter(SessionAnswer.question_id == question_id)
    else:
        # Single-question sessions have exactly one slot.
        query = query.order_by(SessionAnswer.question_order)
    return query.first()


def list_session_answers(session_id: int) -> List[SessionAnswer]:
    return (
        SessionAnswer.query.filter(SessionAnswer.session_id == session_id)
        .order_by(SessionAnswer.question_order)
        .all()
    )


def record_user_answer(
    session_id: int,
    text: str,
    question_id: Optional[int] = None,
    answer_id: Optional[int] = None,
) -> SessionAnswer:
    """
    Persist the user's typed answer on its slot and commit.

    The text is committed on its own, ahead of scoring, so a failed scoring
    call never loses it. A previous score belongs to the previous text and is
    cleared in the same commit. The write is refused if the session is no
    longer in progress when it lands.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Please provide your answer text.", {"session_id": session_id})

    answer = _find_slot(session_id, question_id, answer_id)
    if answer is None:
        raise NotFoundError(
            "Could not find the specified question in this session.",
            {"session_id": session_id, "question_id": question_id, "answer_id": answer_id},
        )

    now = utcnow()
    try:
        claimed = PracticeSession.query.filter(
            PracticeSession.id == session_id,
            PracticeSession.status == STATUS_IN_PROGRESS,
        ).update({PracticeSession.last_activity_at: now}, synchronize_session=False)
        if not claimed:
            db.session.rollback()
            raise ConflictError("This session has already been completed.", {"session_id": session_id})

        if answer.is_scored:
            current_app.logger.info("Clearing score of answer %s before resubmission", answer.id)
        answer.user_answer = text.strip()
        answer.answered_at = now
        answer.score = None
        answer.feedback = None
        db.session.commit()
    except StaleDataError as exc:
        db.session.rollback()
        raise ConflictError("The answer was modified concurrently.", {"answer_id": answer.id}) from exc
    return answer


def record_score(answer_id: int, score: Union[int, float], feedback) -> SessionAnswer:
    """
    Set score and feedback together on one answer.

    Flushes but does not commit; the caller commits along with session
    aggregation. Re-scoring an answer overwrites the previous result.
    """
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not 0 <= score <= 100:
        raise ValidationError("Score must be a number between 0 and 100.", {"answer_id": answer_id, "score": score})

    try:
        validated = feedback if isinstance(feedback, Feedback) else Feedback.model_validate(feedback)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Feedback must contain overall, strengths and improvements.",
            {"answer_id": answer_id, "errors": exc.errors(include_url=False, include_context=False, include_input=False)},
        ) from exc

    answer = db.session.get(SessionAnswer, answer_id)
    if answer is None:
        raise NotFoundError("Session answer not found.", {"answer_id": answer_id})

    if answer.is_scored:
        current_app.logger.info("Overwriting score of answer %s (was %s)", answer_id, answer.score)

    answer.score = score
    answer.feedback = validated.model_dump()
    try:
        db.session.flush()
    except StaleDataError as exc:
        db.session.rollback()
        raise ConflictError("The answer was modified concurrently.", {"answer_id": answer_id}) from exc
    return answer
