# FILE: routes/practice_routes.py
from flask import Blueprint, abort, jsonify, request

from errors import ValidationError
from services import answer_service, session_service
from services.aggregation_service import complete_session
from services.usage_service import SUBSCRIPTION_FREE


practice_bp = Blueprint("practice", __name__, url_prefix="/practice")


def _current_user() -> str:
    # Identity is established upstream; the gateway forwards the user id.
    user_id = request.headers.get("X-User-Id", "").strip()
    if not user_id:
        abort(401, description="User is not authenticated.")
    return user_id


def _subscription_level() -> str:
    return request.headers.get("X-Subscription-Level", SUBSCRIPTION_FREE).strip().lower() or SUBSCRIPTION_FREE


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return body


def _int_field(body: dict, key: str, required: bool = True):
    value = body.get(key)
    if value is None and not required:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{key} must be an integer.", {key: value})
    return value


def _list_field(body: dict, key: str) -> list:
    value = body.get(key) or []
    if not isinstance(value, list):
        raise ValidationError(f"{key} must be a list.", {key: value})
    return value


def _answer_result(answer):
    return {"sessionAnswerId": answer.id, "score": answer.score, "feedback": answer.feedback}


@practice_bp.route("/start-single", methods=["POST"])
def start_single():
    user_id = _current_user()
    body = _json_body()
    session = session_service.start_single_question_session(
        user_id, _int_field(body, "questionId"), _subscription_level()
    )
    return jsonify(session.to_dict()), 201


@practice_bp.route("/start-full", methods=["POST"])
def start_full():
    user_id = _current_user()
    body = _json_body()
    category_ids = _list_field(body, "categoryIds")
    if any(isinstance(cid, bool) or not isinstance(cid, int) for cid in category_ids):
        raise ValidationError("categoryIds must be a list of integers.", {"categoryIds": category_ids})
    session = session_service.start_full_interview_session(
        user_id,
        category_ids,
        _list_field(body, "difficultyLevels"),
        body.get("numberOfQuestions"),
        _subscription_level(),
    )
    return jsonify(session.to_dict()), 201


@practice_bp.route("/sessions", methods=["GET"])
def history():
    sessions = session_service.list_user_sessions(_current_user())
    return jsonify([session.to_dict(include_answers=False) for session in sessions])


@practice_bp.route("/sessions/<int:session_id>", methods=["GET"])
def get_session(session_id: int):
    session = session_service.get_session(session_id, _current_user())
    return jsonify(session.to_dict())


@practice_bp.route("/sessions/<int:session_id>/answers", methods=["GET"])
def list_answers(session_id: int):
    session = session_service.get_session(session_id, _current_user())
    return jsonify([answer.to_dict() for answer in answer_service.list_session_answers(session.id)])


@practice_bp.route("/sessions/<int:session_id>/submit-single", methods=["POST"])
def submit_single(session_id: int):
    user_id = _current_user()
    body = _json_body()
    answer = session_service.submit_single_answer(session_id, user_id, body.get("userAnswer"))
    return jsonify(_answer_result(answer))


@practice_bp.route("/sessions/<int:session_id>/submit-answer", methods=["POST"])
def submit_answer(session_id: int):
    user_id = _current_user()
    body = _json_body()
    answer = session_service.submit_interview_answer(
        session_id, user_id, _int_field(body, "questionId", required=False), body.get("userAnswer")
    )
    return jsonify(_answer_result(answer))


@practice_bp.route("/sessions/<int:session_id>/answers/<int:answer_id>/rescore", methods=["POST"])
def rescore(session_id: int, answer_id: int):
    answer = session_service.rescore_answer(session_id, _current_user(), answer_id)
    return jsonify(_answer_result(answer))


@practice_bp.route("/sessions/<int:session_id>/complete", methods=["POST"])
def complete(session_id: int):
    session = complete_session(session_id, _current_user())
    return jsonify(session.to_dict())
