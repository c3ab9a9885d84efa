import json

import pytest

from conftest import scoring_payload
from errors import SchemaError, UpstreamError
from services import scoring_service


def test_parse_scoring_payload_valid():
    result = scoring_service.parse_scoring_payload(
        scoring_payload(score=72, overall="Good.", strengths=["Clear"], improvements=[])
    )
    assert result.score == 72
    assert result.feedback.overall == "Good."
    assert result.feedback.strengths == ["Clear"]
    assert result.feedback.improvements == []


def test_parse_scoring_payload_strips_code_fences():
    text = "```json\n" + scoring_payload(score=40) + "\n```"
    assert scoring_service.parse_scoring_payload(text).score == 40


@pytest.mark.parametrize(
    "raw",
    [
        "Great answer, 8/10!",
        json.dumps({"score": 80}),
        json.dumps({"score": 80, "feedback": {"overall": "ok", "strengths": []}}),
        json.dumps({"score": 80, "feedback": {"overall": "ok", "improvements": []}}),
        json.dumps({"score": 80, "feedback": {"overall": "ok", "strengths": [], "improvements": []}, "extra": 1}),
        json.dumps({"score": 130, "feedback": {"overall": "ok", "strengths": [], "improvements": []}}),
        json.dumps({"score": 80, "feedback": {"overall": "ok", "strengths": "clear", "improvements": []}}),
    ],
)
def test_parse_scoring_payload_rejects_malformed(raw):
    with pytest.raises(SchemaError):
        scoring_service.parse_scoring_payload(raw)


def test_score_returns_result_and_sends_prompt(app, scorer):
    scorer.respond(scoring_payload(score=91))

    result = scoring_service.score("What is a deadlock?", "Two threads wait on each other.", "  Circular wait.  ")

    assert result.score == 91
    call = scorer.calls[0]
    assert call["model"] == app.config["GEMINI_MODEL"]
    assert "What is a deadlock?" in call["contents"]
    assert "Two threads wait on each other." in call["contents"]
    assert "Your answer: Circular wait." in call["contents"]
    assert call["config"]["response_mime_type"] == "application/json"


def test_score_without_sample_answer_omits_reference(app, scorer):
    scoring_service.score("What is a deadlock?", None, "Circular wait.")
    assert "Reference answer" not in scorer.calls[0]["contents"]


def test_score_timeout_is_upstream_error(app, scorer):
    scorer.respond(TimeoutError("read timed out"))
    with pytest.raises(UpstreamError):
        scoring_service.score("Q", None, "A")


def test_score_empty_response_is_upstream_error(app, scorer):
    scorer.respond("")
    with pytest.raises(UpstreamError):
        scoring_service.score("Q", None, "A")


def test_score_malformed_response_is_schema_error(app, scorer):
    scorer.respond("not json at all")
    with pytest.raises(SchemaError):
        scoring_service.score("Q", None, "A")


def test_score_without_api_key_is_upstream_error(app, scorer):
    app.config["GEMINI_API_KEY"] = ""
    with pytest.raises(UpstreamError):
        scoring_service.score("Q", None, "A")
    assert scorer.calls == []


def test_parse_scoring_payload_accepts_empty_lists():
    raw = json.dumps({"score": 0, "feedback": {"overall": "No answer.", "strengths": [], "improvements": []}})
    result = scoring_service.parse_scoring_payload(raw)
    assert result.feedback.strengths == [] and result.feedback.improvements == []
