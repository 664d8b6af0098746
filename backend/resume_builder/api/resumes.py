from __future__ import annotations

import logging

from flask import Blueprint, current_app, g, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from resume_builder.api.errors import coded_error, message_error
from resume_builder.core.errors import AppError, AuthenticationError, ValidationError
from resume_builder.core.security import require_auth
from resume_builder.repositories.resume_repository import ResumeRepository
from resume_builder.schemas.resume import CreateResumeRequest
from resume_builder.services.resume_service import ResumeService, resume_detail

bp = Blueprint("resumes", __name__)

# resumes.id is a 32-bit INTEGER column
MAX_RESUME_ID = 2**31 - 1

logger = logging.getLogger(__name__)


def _service() -> ResumeService:
    return ResumeService(ResumeRepository(current_app.extensions["database"]))


@bp.errorhandler(AppError)
def _app_error(exc: AppError):
    # 401s keep the auth envelope
    if isinstance(exc, AuthenticationError):
        return message_error(exc.message, 401)
    if exc.status_code >= 500:
        logger.error("Unhandled %s: %s", type(exc).__name__, exc.message)
        return coded_error("Internal server error", "INTERNAL_ERROR", 500)
    return coded_error(exc.message, exc.code, exc.status_code)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@bp.get("")
@require_auth
def get_user_resumes():
    try:
        summaries = _service().get_user_resumes(g.current_user.user_id)
    except Exception:
        logger.exception("Error getting user resumes")
        return coded_error("Failed to retrieve resumes", "GET_RESUMES_ERROR", 500)
    return jsonify({"status": True, "data": [s.to_dict() for s in summaries]})


@bp.get("/<resume_id>")
@require_auth
def get_resume(resume_id: str):
    try:
        resume_id_int = int(resume_id)
    except ValueError:
        return coded_error("Invalid resume ID", "INVALID_ID", 400)
    if not 1 <= resume_id_int <= MAX_RESUME_ID:
        return coded_error("Invalid resume ID", "INVALID_ID", 400)

    try:
        result = _service().get_resume_by_id(resume_id_int, g.current_user.user_id)
    except Exception:
        logger.exception("Error getting resume %s", resume_id_int)
        return coded_error("Failed to retrieve resume", "GET_RESUME_ERROR", 500)

    if result["resume"] is None:
        return coded_error("Resume not found", "RESUME_NOT_FOUND", 404)
    return jsonify({"status": True, "data": resume_detail(result["resume"])})


@bp.post("")
@require_auth
def create_resume():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict) or not str(data.get("title") or "").strip():
        return coded_error("Resume title is required", "MISSING_REQUIRED_FIELDS", 400)

    try:
        payload = CreateResumeRequest.model_validate(data)
    except PydanticValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        return coded_error(f"Invalid resume payload: {', '.join(fields)}", "INVALID_RESUME_PAYLOAD", 400)

    try:
        summary = _service().create_resume(g.current_user.user_id, payload)
    except ValidationError as exc:
        return coded_error(exc.message, exc.code, 400)
    except Exception:
        logger.exception("Error creating resume")
        return coded_error("Failed to create resume", "CREATE_RESUME_ERROR", 500)
    return jsonify({"status": True, "data": summary.to_dict()}), 201
