from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from resume_builder.api.errors import message_error
from resume_builder.core.errors import AuthenticationError, ConflictError
from resume_builder.repositories.user_repository import UserRepository
from resume_builder.schemas.auth import SigninRequest, SignupRequest
from resume_builder.services.auth_service import AuthService

bp = Blueprint("auth", __name__)

SIGNUP_FIELDS = ("email", "password", "firstName", "lastName")


def _service() -> AuthService:
    return AuthService(
        UserRepository(current_app.extensions["database"]),
        current_app.config["SETTINGS"],
    )


@bp.post("/signup")
def signup():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict) or any(not data.get(field) for field in SIGNUP_FIELDS):
        return message_error("Missing required fields", 400)

    try:
        payload = SignupRequest.model_validate(data)
    except PydanticValidationError:
        return message_error("Invalid signup data", 400)

    try:
        result = _service().signup(payload)
    except ConflictError as exc:
        return message_error(exc.message, 400)
    return jsonify({"success": True, "data": result}), 201


@bp.post("/signin")
def signin():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict) or not data.get("email") or not data.get("password"):
        return message_error("Missing email or password", 400)

    try:
        payload = SigninRequest.model_validate(data)
        result = _service().signin(payload)
    except (PydanticValidationError, AuthenticationError):
        return message_error("Invalid email or password", 401)
    return jsonify({"success": True, "data": result})
