# FILE: config.py
import os

from dotenv import load_dotenv


load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///practice.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    SCORING_TEMPERATURE = float(os.getenv("SCORING_TEMPERATURE", "0.3"))
    SCORING_TIMEOUT_SECONDS = float(os.getenv("SCORING_TIMEOUT_SECONDS", "30"))
    SCORING_MAX_OUTPUT_TOKENS = int(os.getenv("SCORING_MAX_OUTPUT_TOKENS", "1500"))

    MAX_INTERVIEW_QUESTIONS = int(os.getenv("MAX_INTERVIEW_QUESTIONS", "10"))
    FREE_USER_QUESTION_DAILY_LIMIT = int(os.getenv("FREE_USER_QUESTION_DAILY_LIMIT", "5"))
    FREE_USER_SESSION_DAILY_LIMIT = int(os.getenv("FREE_USER_SESSION_DAILY_LIMIT", "2"))


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    GEMINI_API_KEY = "test-key"
    SCORING_TIMEOUT_SECONDS = 1.0
