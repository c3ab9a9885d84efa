# FILE: app.py
import click
from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import Config
from errors import PracticeError
from models import db
from routes.practice_routes import practice_bp
from seed import seed_question_bank

load_dotenv()


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(PracticeError)
    def handle_practice_error(exc: PracticeError):
        if exc.status_code >= 500:
            app.logger.error("%s: %s %s", exc.code, exc.message, exc.details)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        payload = {"error": exc.name.upper().replace(" ", "_"), "message": exc.description, "details": {}}
        return jsonify(payload), exc.code


def register_commands(app: Flask) -> None:
    @app.cli.command("seed-questions")
    def seed_questions_command():
        """Fill the question bank with a starter set of categories and questions."""
        inserted = seed_question_bank()
        click.echo(f"Inserted {inserted} question(s).")


def create_app(config_object=Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    app.register_blueprint(practice_bp)
    register_error_handlers(app)
    register_commands(app)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    with app.app_context():
        db.create_all()

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
