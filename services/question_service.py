# FILE: services/question_service.py
from typing import Iterable, List, Optional

from flask import current_app

from errors import InsufficientDataError, NotFoundError
from models import DIFFICULTY_LEVELS, Category, Question, db


def _normalize_difficulties(levels: Optional[Iterable[str]]) -> List[str]:
    # Case-insensitive match against the known levels; unknown values are dropped.
    known = {level.lower(): level for level in DIFFICULTY_LEVELS}
    parsed = []
    for raw in levels or []:
        level = known.get(str(raw).strip().lower())
        if level and level not in parsed:
            parsed.append(level)
    return parsed


def get_active_question_by_id(question_id: int) -> Optional[Question]:
    question = db.session.get(Question, question_id)
    if question is None or not question.is_active:
        return None
    return question


def find_active_questions(
    category_ids: Optional[Iterable[int]] = None,
    difficulty_levels: Optional[Iterable[str]] = None,
    limit: Optional[int] = None,
) -> List[Question]:
    query = Question.query.filter(Question.is_active.is_(True))

    category_ids = [int(cid) for cid in (category_ids or [])]
    if category_ids:
        query = query.filter(Question.categories.any(Category.id.in_(category_ids)))

    difficulties = _normalize_difficulties(difficulty_levels)
    if difficulties:
        query = query.filter(Question.difficulty_level.in_(difficulties))

    query = query.order_by(Question.id)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def select_for_practice(question_id: int) -> Question:
    question = get_active_question_by_id(question_id)
    if question is None:
        raise NotFoundError("Question not found.", {"question_id": question_id})
    return question


def select_for_interview(category_ids, difficulty_levels, count: int) -> List[int]:
    """
    Pick up to ``count`` distinct active question ids matching the filters.

    Categories and difficulty levels are each OR-ed; an empty list means no
    filter on that dimension. Order is stable (ascending question id) so the
    same filters always give the same selection.
    """
    questions = find_active_questions(category_ids, difficulty_levels, limit=count)
    if not questions:
        raise InsufficientDataError(
            "No questions match the selected categories and difficulty levels.",
            {"category_ids": list(category_ids or []), "difficulty_levels": list(difficulty_levels or [])},
        )
    current_app.logger.debug("Selected %d question(s) for interview: %s", len(questions), [q.id for q in questions])
    return [question.id for question in questions]
