# FILE: models.py
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


SESSION_TYPE_SINGLE = "single"
SESSION_TYPE_FULL = "full"

STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"

DIFFICULTY_LEVELS = ("Easy", "Medium", "Hard")


def utcnow() -> datetime:
    # Naive UTC, the way sqlite hands DateTime columns back.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _iso(value):
    return value.isoformat() if value else None


question_categories = db.Table(
    "question_categories",
    db.Column("question_id", db.Integer, db.ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True),
    db.Column("category_id", db.Integer, db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def to_dict(self):
        return {"id": self.id, "name": self.name}


class Question(db.Model):
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)
    sample_answer = db.Column(db.Text, nullable=True)
    difficulty_level = db.Column(db.String(10), default="Medium", nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    categories = db.relationship("Category", secondary=question_categories, lazy="selectin")

    def to_dict(self):
        return {
            "id": self.id,
            "content": self.content,
            "difficultyLevel": self.difficulty_level,
            "categories": [category.to_dict() for category in self.categories],
        }


class PracticeSession(db.Model):
    __tablename__ = "practice_sessions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    session_type = db.Column(db.String(10), nullable=False)
    number_of_questions = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), default=STATUS_IN_PROGRESS, nullable=False, index=True)
    # Whole points only; set if and only if the session is completed.
    overall_score = db.Column(db.Integer, nullable=True)
    started_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    completed_at = db.Column(db.DateTime, nullable=True)
    # Touched by every answer write, guarded on status.
    last_activity_at = db.Column(db.DateTime, nullable=True)

    answers = db.relationship(
        "SessionAnswer",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionAnswer.question_order",
    )

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    def to_dict(self, include_answers: bool = True):
        data = {
            "id": self.id,
            "userId": self.user_id,
            "sessionType": self.session_type,
            "status": self.status,
            "numberOfQuestions": self.number_of_questions,
            "overallScore": self.overall_score,
            "startedAt": _iso(self.started_at),
            "completedAt": _iso(self.completed_at),
        }
        if include_answers:
            data["answers"] = [answer.to_dict() for answer in self.answers]
        return data


class SessionAnswer(db.Model):
    __tablename__ = "session_answers"
    __table_args__ = (
        db.UniqueConstraint("session_id", "question_order", name="uq_session_answer_order"),
    )

    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(
        db.Integer, db.ForeignKey("practice_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id"), nullable=False, index=True)
    question_order = db.Column(db.Integer, nullable=False)
    user_answer = db.Column(db.Text, nullable=True)
    score = db.Column(db.Numeric(5, 2, asdecimal=False), nullable=True)
    # {"overall": str, "strengths": [str], "improvements": [str]}, validated before write.
    feedback = db.Column(db.JSON, nullable=True)
    answered_at = db.Column(db.DateTime, nullable=True)
    version = db.Column(db.Integer, nullable=False)

    session = db.relationship("PracticeSession", back_populates="answers")
    question = db.relationship("Question", lazy="joined")

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_scored(self) -> bool:
        return self.score is not None

    def to_dict(self):
        return {
            "id": self.id,
            "questionId": self.question_id,
            "questionOrder": self.question_order,
            "question": self.question.to_dict() if self.question else None,
            "userAnswer": self.user_answer,
            "score": self.score,
            "feedback": self.feedback,
            "answeredAt": _iso(self.answered_at),
        }


class UsageLog(db.Model):
    __tablename__ = "usage_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    action_type = db.Column(db.String(50), nullable=False)
    usage_timestamp = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
