# FILE: services/session_service.py
"""
Practice session lifecycle.

A session is either a single-question practice or a full mock interview. Both
kinds get every answer slot up front, ordered 1..N; afterwards they behave the
same: the user submits text per slot, the slot is scored, and the session
closes once every slot is scored or the user completes it explicitly.
"""
from typing import List, Optional

from flask import current_app

from errors import ConflictError, InsufficientDataError, NotFoundError, SchemaError, UpstreamError, ValidationError
from models import (
    SESSION_TYPE_FULL,
    SESSION_TYPE_SINGLE,
    STATUS_IN_PROGRESS,
    PracticeSession,
    SessionAnswer,
    db,
    utcnow,
)
from services import answer_service, question_service, scoring_service
from services.aggregation_service import maybe_complete_session
from services.usage_service import SUBSCRIPTION_FREE, check_daily_limit


def _create_session(user_id: str, session_type: str, question_ids: List[int]) -> PracticeSession:
    session = PracticeSession(
        user_id=user_id,
        session_type=session_type,
        number_of_questions=len(question_ids),
        status=STATUS_IN_PROGRESS,
        started_at=utcnow(),
    )
    for order, question_id in enumerate(question_ids, start=1):
        session.answers.append(SessionAnswer(question_id=question_id, question_order=order))

    db.session.add(session)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(
        "Started %s session %s for user %s with %d question(s)", session_type, session.id, user_id, len(question_ids)
    )
    return session


def _get_owned_session(session_id: int, user_id: str) -> PracticeSession:
    # Someone else's session looks exactly like a missing one.
    session = db.session.get(PracticeSession, session_id)
    if session is None or session.user_id != user_id:
        raise NotFoundError("Session not found.", {"session_id": session_id})
    return session


def _ensure_in_progress(session: PracticeSession) -> None:
    if session.is_completed:
        raise ConflictError("This session has already been completed.", {"session_id": session.id})


def _score_answer(session: PracticeSession, answer: SessionAnswer) -> SessionAnswer:
    question = answer.question
    try:
        result = scoring_service.score(question.content, question.sample_answer, answer.user_answer)
    except (UpstreamError, SchemaError) as exc:
        exc.details.update({"session_id": session.id, "answer_id": answer.id})
        current_app.logger.error(
            "Scoring failed for session %s answer %s (%s): %s", session.id, answer.id, exc.code, exc.message
        )
        raise

    try:
        answer_service.record_score(answer.id, result.score, result.feedback)
        maybe_complete_session(session)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return answer


def start_single_question_session(
    user_id: str, question_id: int, subscription_level: str = SUBSCRIPTION_FREE
) -> PracticeSession:
    check_daily_limit(user_id, SESSION_TYPE_SINGLE, subscription_level)
    question = question_service.select_for_practice(question_id)
    return _create_session(user_id, SESSION_TYPE_SINGLE, [question.id])


def start_full_interview_session(
    user_id: str,
    category_ids,
    difficulty_levels,
    number_of_questions: int,
    subscription_level: str = SUBSCRIPTION_FREE,
) -> PracticeSession:
    max_questions = current_app.config.get("MAX_INTERVIEW_QUESTIONS", 10)
    if (
        isinstance(number_of_questions, bool)
        or not isinstance(number_of_questions, int)
        or not 1 <= number_of_questions <= max_questions
    ):
        raise ValidationError(
            f"Number of questions must be between 1 and {max_questions}.",
            {"number_of_questions": number_of_questions},
        )

    check_daily_limit(user_id, SESSION_TYPE_FULL, subscription_level)

    question_ids = question_service.select_for_interview(category_ids, difficulty_levels, number_of_questions)
    if len(question_ids) < number_of_questions:
        raise InsufficientDataError(
            "Could not find enough questions matching your criteria. Please try a broader selection.",
            {"requested": number_of_questions, "available": len(question_ids)},
        )
    return _create_session(user_id, SESSION_TYPE_FULL, question_ids)


def get_session(session_id: int, user_id: str) -> PracticeSession:
    return _get_owned_session(session_id, user_id)


def list_user_sessions(user_id: str) -> List[PracticeSession]:
    return (
        PracticeSession.query.filter(PracticeSession.user_id == user_id)
        .order_by(PracticeSession.started_at.desc(), PracticeSession.id.desc())
        .all()
    )


def submit_single_answer(session_id: int, user_id: str, text: str) -> SessionAnswer:
    session = _get_owned_session(session_id, user_id)
    if session.session_type != SESSION_TYPE_SINGLE:
        raise ValidationError("This is not a single-question practice session.", {"session_id": session_id})
    _ensure_in_progress(session)

    answer = answer_service.record_user_answer(session.id, text)
    return _score_answer(session, answer)


def submit_interview_answer(session_id: int, user_id: str, question_id: Optional[int], text: str) -> SessionAnswer:
    session = _get_owned_session(session_id, user_id)
    if question_id is None:
        raise ValidationError("questionId is required.", {"session_id": session_id})
    _ensure_in_progress(session)

    answer = answer_service.record_user_answer(session.id, text, question_id=question_id)
    return _score_answer(session, answer)


def rescore_answer(session_id: int, user_id: str, answer_id: int) -> SessionAnswer:
    """Run only the scoring step again for an answer whose text is already saved."""
    session = _get_owned_session(session_id, user_id)
    answer = next((item for item in session.answers if item.id == answer_id), None)
    if answer is None:
        raise NotFoundError("Session answer not found.", {"session_id": session_id, "answer_id": answer_id})
    if not answer.user_answer:
        raise ValidationError("This question has not been answered yet.", {"answer_id": answer_id})
    _ensure_in_progress(session)

    return _score_answer(session, answer)
