from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_actor, json_body, json_endpoint


def register(app: Flask, container) -> None:
    service = container.charge_code_service

    @app.route("/api/admin/charge-codes", methods=["GET"], endpoint="api_list_charge_codes")
    @json_endpoint("Failed to fetch charge codes")
    def list_charge_codes():
        codes = service.list_charge_codes(current_actor())
        return jsonify([c.to_dict() for c in codes])

    @app.route("/api/admin/charge-codes", methods=["POST"], endpoint="api_create_charge_code")
    @json_endpoint("Failed to create charge code")
    def create_charge_code():
        actor = current_actor()
        body = json_body()
        code = service.create_charge_code(
            actor,
            code=body.get("code"),
            description=body.get("description"),
            is_active=body.get("isActive"),
        )
        return jsonify(code.to_dict()), 201

    @app.route("/api/admin/charge-codes", methods=["PUT"], endpoint="api_update_charge_code")
    @json_endpoint("Failed to update charge code")
    def update_charge_code():
        actor = current_actor()
        body = json_body()
        code = service.update_charge_code(
            actor,
            charge_code_id=body.get("id"),
            code=body.get("code"),
            description=body.get("description"),
            is_active=body.get("isActive"),
        )
        return jsonify(code.to_dict())

    @app.route("/api/admin/charge-codes", methods=["DELETE"], endpoint="api_delete_charge_code")
    @json_endpoint("Failed to delete charge code")
    def delete_charge_code():
        service.delete_charge_code(current_actor(), charge_code_id=request.args.get("id"))
        return jsonify({"success": True})
