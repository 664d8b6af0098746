"""
JSON error envelopes.

Auth and profile routes answer ``{"success": false, "message": ...}``; résumé
routes answer ``{"status": false, "error": {"message": ..., "code": ...}}``.
"""
from __future__ import annotations

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from resume_builder.core.errors import AppError

logger = logging.getLogger(__name__)


def message_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def coded_error(message: str, code: str, status: int):
    return jsonify({"status": False, "error": {"message": message, "code": code}}), status


def handle_app_error(exc: AppError):
    if exc.status_code >= 500:
        logger.error("Unhandled %s: %s", type(exc).__name__, exc.message)
        return message_error("Internal server error", 500)
    return message_error(exc.message, exc.status_code)


def handle_unexpected_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    logger.exception("Unhandled error")
    return message_error("Internal server error", 500)
