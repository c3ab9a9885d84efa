import json
from types import SimpleNamespace

import pytest

from app import create_app
from config import TestingConfig
from models import Category, Question, db
from services import scoring_service


def scoring_payload(score=80, overall="Solid answer.", strengths=None, improvements=None) -> str:
    return json.dumps(
        {
            "score": score,
            "feedback": {
                "overall": overall,
                "strengths": ["Clear structure."] if strengths is None else strengths,
                "improvements": ["Add an example."] if improvements is None else improvements,
            },
        }
    )


class FakeModels:
    """Stands in for ``genai.Client().models``; replays queued responses in order."""

    def __init__(self):
        self.responses = []
        self.calls = []

    def respond(self, *items):
        self.responses.extend(items)
        return self

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        item = self.responses.pop(0) if self.responses else scoring_payload()
        if isinstance(item, Exception):
            raise item
        return SimpleNamespace(text=item)


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def scorer(monkeypatch: pytest.MonkeyPatch) -> FakeModels:
    models = FakeModels()
    monkeypatch.setattr(
        scoring_service, "_make_client", lambda api_key, timeout_seconds: SimpleNamespace(models=models)
    )
    return models


@pytest.fixture
def make_question(app):
    categories = {}

    def _make(content="Explain REST.", difficulty="Medium", category_names=("Backend",), active=True, sample_answer=None):
        question = Question(
            content=content,
            sample_answer=sample_answer,
            difficulty_level=difficulty,
            is_active=active,
        )
        for name in category_names:
            if name not in categories:
                category = Category(name=name)
                db.session.add(category)
                categories[name] = category
            question.categories.append(categories[name])
        db.session.add(question)
        db.session.commit()
        return question

    _make.categories = categories
    return _make
