import pytest

from errors import InsufficientDataError, NotFoundError
from services import question_service


@pytest.fixture
def bank(make_question):
    return {
        "py_easy": make_question("List vs tuple?", "Easy", ["Python"]),
        "py_hard": make_question("Explain the GIL.", "Hard", ["Python"]),
        "db_medium": make_question("What is an index?", "Medium", ["Databases"]),
        "both_easy": make_question("ORM trade-offs?", "Easy", ["Python", "Databases"]),
        "inactive": make_question("Old question", "Easy", ["Python"], active=False),
    }


def test_select_for_practice_returns_active_question(bank):
    assert question_service.select_for_practice(bank["py_easy"].id).id == bank["py_easy"].id


def test_select_for_practice_rejects_inactive_and_missing(bank):
    with pytest.raises(NotFoundError):
        question_service.select_for_practice(bank["inactive"].id)
    with pytest.raises(NotFoundError):
        question_service.select_for_practice(9999)


def test_select_for_interview_without_filters_uses_all_active(bank):
    ids = question_service.select_for_interview([], [], 10)
    assert ids == sorted(q.id for key, q in bank.items() if key != "inactive")


def test_select_for_interview_categories_are_ored_and_distinct(bank, make_question):
    python = make_question.categories["Python"].id
    databases = make_question.categories["Databases"].id

    ids = question_service.select_for_interview([python, databases], [], 10)

    assert len(ids) == len(set(ids)) == 4
    assert bank["inactive"].id not in ids


def test_select_for_interview_difficulty_is_case_insensitive(bank):
    ids = question_service.select_for_interview([], ["easy", "HARD"], 10)
    assert ids == sorted([bank["py_easy"].id, bank["py_hard"].id, bank["both_easy"].id])


def test_select_for_interview_ignores_unknown_difficulty(bank):
    assert len(question_service.select_for_interview([], ["Impossible"], 10)) == 4


def test_select_for_interview_combines_filters(bank, make_question):
    databases = make_question.categories["Databases"].id
    ids = question_service.select_for_interview([databases], ["Easy"], 10)
    assert ids == [bank["both_easy"].id]


def test_select_for_interview_is_stable_and_limited(bank):
    first = question_service.select_for_interview([], [], 2)
    second = question_service.select_for_interview([], [], 2)
    assert first == second
    assert len(first) == 2


def test_select_for_interview_no_match(bank, make_question):
    databases = make_question.categories["Databases"].id
    with pytest.raises(InsufficientDataError):
        question_service.select_for_interview([databases], ["Hard"], 3)
