from __future__ import annotations

import uuid
from typing import Optional

from flask import Flask, jsonify, redirect, request, session, url_for

from ..common.http import json_endpoint, login_required
from ..core.exceptions import AuthorizationError, ValidationError
from .queue import NotificationCenter, NotificationQueue

UI_SESSION_KEY = "ui_session"


def start_ui_session(center: NotificationCenter) -> NotificationQueue:
    session[UI_SESSION_KEY] = uuid.uuid4().hex
    return center.for_session(session[UI_SESSION_KEY])


def end_ui_session(center: NotificationCenter) -> None:
    ui_session = session.pop(UI_SESSION_KEY, None)
    if ui_session:
        center.discard(ui_session)


def session_queue(center: NotificationCenter) -> Optional[NotificationQueue]:
    """The queue of the current browser session, if one is active."""
    ui_session = session.get(UI_SESSION_KEY)
    if not ui_session:
        return None
    return center.for_session(ui_session)


def register(app: Flask, container) -> None:
    center = container.notifications

    def _require_queue() -> NotificationQueue:
        queue = session_queue(center)
        if queue is None:
            raise AuthorizationError("Unauthorized")
        return queue

    @app.route("/api/notifications", methods=["GET"], endpoint="api_notifications")
    @json_endpoint("Failed to fetch notifications")
    def list_notifications():
        queue = _require_queue()
        return jsonify([t.to_dict() for t in queue.toasts])

    @app.route("/api/notifications", methods=["DELETE"], endpoint="api_dismiss_notification")
    @json_endpoint("Failed to dismiss notification")
    def dismiss_notification():
        queue = _require_queue()
        toast_id = request.args.get("id")
        if not toast_id:
            raise ValidationError("Notification ID is required")
        queue.dismiss(toast_id)
        return jsonify({"success": True})

    @app.route("/notifications/<toast_id>/dismiss", methods=["POST"], endpoint="dismiss_toast")
    @login_required
    def dismiss_toast(toast_id: str):
        queue = session_queue(center)
        if queue is not None:
            queue.dismiss(toast_id)
        target = request.form.get("next") or ""
        # local paths only
        if not target.startswith("/") or target.startswith("//"):
            target = url_for("timesheet_page")
        return redirect(target)
