from __future__ import annotations

from flask import Flask, jsonify

from ..common.authorization import require_capability
from ..common.http import current_actor, json_body, json_endpoint
from ..core.enums import Capability
from ..timesheet.periods import generate_period_options


def register(app: Flask, container) -> None:
    service = container.settings_service

    @app.route("/api/admin/settings", methods=["GET"], endpoint="api_get_settings")
    @json_endpoint("Failed to fetch settings")
    def get_settings():
        return jsonify(service.get_settings(current_actor()).to_dict())

    @app.route("/api/admin/settings", methods=["PUT"], endpoint="api_update_settings")
    @json_endpoint("Failed to update settings")
    def update_settings():
        actor = current_actor()
        body = json_body()
        settings = service.update_settings(
            actor,
            oldest_editable_period=body.get("oldestEditablePeriod"),
            latest_editable_period=body.get("latestEditablePeriod"),
        )
        return jsonify(settings.to_dict())

    @app.route("/api/admin/periods", methods=["GET"], endpoint="api_period_options")
    @json_endpoint("Failed to fetch periods")
    def period_options():
        require_capability(current_actor(), Capability.MANAGE_SETTINGS)
        return jsonify([o.to_dict() for o in generate_period_options()])
