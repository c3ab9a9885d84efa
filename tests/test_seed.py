from models import Category, Question
from seed import STARTER_QUESTIONS


def test_seed_questions_command_is_repeatable(app):
    runner = app.test_cli_runner()
    expected = sum(len(items) for items in STARTER_QUESTIONS.values())

    result = runner.invoke(args=["seed-questions"])
    assert result.exit_code == 0
    assert f"Inserted {expected} question(s)." in result.output
    assert Question.query.count() == expected
    assert Category.query.count() == len(STARTER_QUESTIONS)

    again = runner.invoke(args=["seed-questions"])
    assert "Inserted 0 question(s)." in again.output
    assert Question.query.count() == expected
