from __future__ import annotations

from typing import Optional

from flask import Flask
from flask_cors import CORS

from resume_builder.api import auth as auth_api
from resume_builder.api import profile as profile_api
from resume_builder.api import resumes as resumes_api
from resume_builder.api.errors import handle_app_error, handle_unexpected_error
from resume_builder.core.config import Settings
from resume_builder.core.config import settings as default_settings
from resume_builder.core.database import Database
from resume_builder.core.errors import AppError
from resume_builder.core.logging import setup_logging


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> Flask:
    """Build the Flask app around an explicitly constructed settings object and database handle."""
    settings = settings or default_settings
    logger = setup_logging(settings.LOG_LEVEL)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["DEBUG"] = settings.DEBUG
    app.extensions["database"] = database or Database(settings.DATABASE_URL, pool_pre_ping=True)

    CORS(app)

    app.register_blueprint(auth_api.bp, url_prefix="/api/auth")
    app.register_blueprint(profile_api.bp, url_prefix="/api/profile")
    app.register_blueprint(resumes_api.bp, url_prefix="/api/resumes")

    app.register_error_handler(AppError, handle_app_error)
    app.register_error_handler(Exception, handle_unexpected_error)

    @app.get("/")
    def index():
        return {"message": "AI Resume Builder API"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    logger.info("Resume builder API ready")
    return app


if __name__ == "__main__":
    create_app().run(host=default_settings.API_HOST, port=default_settings.API_PORT, debug=default_settings.DEBUG)
