from __future__ import annotations

from flask import Flask, current_app, jsonify, redirect, render_template, request, url_for

from ..common.http import current_actor, json_body, json_endpoint, login_required
from ..core.enums import Capability, ToastVariant
from ..core.exceptions import DomainError
from ..notifications.controller import session_queue
from ..notifications.queue import notify


def register(app: Flask, container) -> None:
    service = container.timesheet_service

    @app.route("/api/timesheet", methods=["GET"], endpoint="api_timesheet")
    @json_endpoint("Failed to fetch timesheet")
    def get_timesheet():
        sheet = service.get_period(current_actor(), request.args.get("period"))
        return jsonify(sheet.to_dict())

    @app.route("/api/timesheet/entries", methods=["PUT"], endpoint="api_set_hours")
    @json_endpoint("Failed to save hours")
    def set_hours():
        actor = current_actor()
        body = json_body()
        entry = service.set_hours(
            actor,
            charge_code_id=body.get("chargeCodeId"),
            work_date=body.get("workDate"),
            hours=body.get("hours"),
        )
        if entry is None:
            return jsonify({"success": True, "entry": None})
        return jsonify({"success": True, "entry": entry.to_dict()})

    @app.route("/timesheet", methods=["GET"], endpoint="timesheet_page")
    @login_required
    def timesheet_page():
        actor = current_actor()
        queue = session_queue(container.notifications)
        if actor is None or not actor.can(Capability.ENTER_HOURS):
            return render_template("403.html", toasts=queue.toasts if queue else []), 403

        try:
            sheet = service.get_period(actor, request.args.get("period"))
        except DomainError as e:
            notify(queue, title="Error", description=str(e), variant=ToastVariant.DESTRUCTIVE)
            return redirect(url_for("timesheet_page"))

        return render_template(
            "timesheet/period.html",
            sheet=sheet,
            toasts=queue.toasts if queue else [],
            active_page="timesheet",
        )

    @app.route("/timesheet/cell", methods=["POST"], endpoint="timesheet_set_cell")
    @login_required
    def set_cell():
        queue = session_queue(container.notifications)
        period = request.form.get("period", "")
        action = request.form.get("action", "save")
        hours = None if action == "clear" else request.form.get("hours", "")

        try:
            entry = service.set_hours(
                current_actor(),
                charge_code_id=request.form.get("charge_code_id"),
                work_date=request.form.get("work_date"),
                hours=hours,
            )
            if entry is None:
                notify(queue, title="Success", description="Hours cleared")
            else:
                notify(queue, title="Success", description=f"{entry.hours}h saved for {entry.work_date:%b %d}")
        except DomainError as e:
            notify(queue, title="Error", description=str(e), variant=ToastVariant.DESTRUCTIVE)
        except Exception:
            current_app.logger.exception("saving hours failed")
            notify(queue, title="Error", description="Failed to save hours", variant=ToastVariant.DESTRUCTIVE)

        return redirect(url_for("timesheet_page", period=period or None))
