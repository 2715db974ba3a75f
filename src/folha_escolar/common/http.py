from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, DomainError, ValidationError

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data: Any = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        body: dict = {"erro": str(e) or "Erro"}
        if isinstance(e, ValidationError) and e.field:
            body["campo"] = e.field

        response = jsonify(body)
        response.status_code = e.status_code
        if isinstance(e, AuthenticationError):
            response.headers["WWW-Authenticate"] = "Bearer"
        if e.status_code >= 500:
            logger.error("%s on %s %s: %s", type(e).__name__, request.method, request.path, e)
        return response

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        response = jsonify({"erro": e.description or e.name})
        response.status_code = e.code or 500
        return response

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        response = jsonify({"erro": "Erro interno"})
        response.status_code = 500
        return response
