"""Helpers shared by the Flask controllers.

JSON routes answer ``{"error": ...}`` bodies with 400/401/500; HTML routes
redirect to sign-in when there is no session.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, redirect, request, session, url_for

from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from .authorization import Actor


def current_actor() -> Optional[Actor]:
    """The signed-in user with roles as currently stored, not as at sign-in."""
    user_id = session.get("user_id")
    if user_id is None:
        return None
    user = current_app.extensions["container"].users_repo.get_by_id(int(user_id))
    if user is None or not user.roles:
        return None

    roles = sorted(r.value for r in user.roles)
    if session.get("roles") != roles:
        session["roles"] = roles
    return Actor(user_id=user.user_id, roles=user.roles)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def error_body(exc: Exception) -> dict[str, Any]:
    body: dict[str, Any] = {"error": str(exc)}
    if isinstance(exc, ConflictError):
        body.update({_camel(k): v for k, v in exc.details.items()})
    return body


def json_endpoint(failure_message: str):
    """Translate domain errors to JSON responses for an API view.

    Anything unexpected is logged and answered with ``failure_message`` so
    internal details never reach the client.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except (AuthenticationError, AuthorizationError) as e:
                return jsonify(error_body(e)), 401
            except (ValidationError, ConflictError) as e:
                return jsonify(error_body(e)), 400
            except Exception:
                current_app.logger.exception("%s (%s %s)", failure_message, request.method, request.path)
                return jsonify({"error": failure_message}), 500

        return wrapper

    return decorator


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper
