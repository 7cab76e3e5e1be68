"""Uniform JSON envelope and error mapping for the Flask controllers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type, int] = {
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    QuotaExceededError: 409,
    ValidationError: 400,
    InvalidTransitionError: 400,
    InvalidStateError: 400,
}


@dataclass(frozen=True)
class CurrentIdentity:
    """What the external auth layer stores into the Flask session."""

    identity_id: str
    role: Role


def success(data: Any = None, message: str = "Success", status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def failure(message: str = "Error", status: int = 400, data: Any = None):
    return jsonify({"success": False, "message": message, "data": data}), status


def status_for(exc: DomainError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 400


def current_identity() -> CurrentIdentity:
    user_id = session.get("user_id")
    role = session.get("role")
    if not user_id or not role:
        raise AuthenticationError("Unauthorized")
    try:
        return CurrentIdentity(identity_id=str(user_id), role=Role(str(role).upper()))
    except ValueError:
        raise AuthenticationError("Unauthorized")


def json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def api_view(view):
    """Translate domain errors into the envelope; hide unexpected failures."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            status = status_for(e)
            logger.info("%s %s rejected (%s): %s", request.method, request.path, status, e)
            data = {"fields": e.fields} if isinstance(e, ValidationError) and e.fields else None
            return failure(str(e), status, data)
        except Exception:
            logger.exception("%s %s failed", request.method, request.path)
            return failure("Internal server error", 500)

    return wrapper


def current_scope(resolver):
    """Resolve the Scope of the session identity; recomputed on every request."""
    ident = current_identity()
    return resolver.resolve(ident.identity_id, ident.role)


def query_arg(name: str):
    value = request.args.get(name)
    return value.strip() if value and value.strip() else None
