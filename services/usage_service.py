# FILE: services/usage_service.py
from datetime import datetime, time

from flask import current_app

from errors import QuotaExceededError
from models import SESSION_TYPE_FULL, SESSION_TYPE_SINGLE, UsageLog, db, utcnow


SUBSCRIPTION_FREE = "free"
SUBSCRIPTION_PREMIUM = "premium"

ACTION_COMPLETE_SINGLE = "CompleteSingleQuestion"
ACTION_COMPLETE_FULL = "CompleteFullMockInterview"

# session type -> (usage action, config key holding the daily limit)
_LIMITS = {
    SESSION_TYPE_SINGLE: (ACTION_COMPLETE_SINGLE, "FREE_USER_QUESTION_DAILY_LIMIT"),
    SESSION_TYPE_FULL: (ACTION_COMPLETE_FULL, "FREE_USER_SESSION_DAILY_LIMIT"),
}


def action_for(session_type: str) -> str:
    return _LIMITS[session_type][0]


def count_usage(user_id: str, action_type: str, since: datetime) -> int:
    return UsageLog.query.filter(
        UsageLog.user_id == user_id,
        UsageLog.action_type == action_type,
        UsageLog.usage_timestamp >= since,
    ).count()


def check_daily_limit(user_id: str, session_type: str, subscription_level: str = SUBSCRIPTION_FREE) -> None:
    """
    Raise QuotaExceededError when a free-tier user has already completed
    today's allowance of sessions of this type. Days are UTC days.
    """
    if (subscription_level or SUBSCRIPTION_FREE).lower() != SUBSCRIPTION_FREE:
        return

    action_type, limit_key = _LIMITS[session_type]
    daily_limit = int(current_app.config.get(limit_key, 0))
    today_start = datetime.combine(utcnow().date(), time.min)
    used = count_usage(user_id, action_type, today_start)
    if used >= daily_limit:
        noun = "practice questions" if session_type == SESSION_TYPE_SINGLE else "full mock interviews"
        raise QuotaExceededError(
            f"You have reached your daily limit of {daily_limit} completed {noun}.",
            {"user_id": user_id, "limit": daily_limit, "used": used},
        )


def log_usage(user_id: str, action_type: str) -> UsageLog:
    # Added to the caller's transaction; committed with the session completion.
    log = UsageLog(user_id=user_id, action_type=action_type, usage_timestamp=utcnow())
    db.session.add(log)
    return log
