from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, redirect, render_template, request, session, url_for

from ..common.http import current_actor, login_required
from ..core.enums import Capability, Role, ToastVariant
from ..core.exceptions import DomainError
from ..core.sentinels import NO_RESTRICTION
from ..notifications.controller import session_queue
from ..notifications.queue import notify
from ..timesheet.periods import generate_period_options

TABS = ("employees", "charge-codes", "settings")


def register(app: Flask, container) -> None:
    center = container.notifications

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return redirect(url_for("login"))

            actor = current_actor()
            if actor is None or not actor.can(Capability.MANAGE_USERS):
                queue = session_queue(center)
                return render_template("403.html", toasts=queue.toasts if queue else []), 403

            return view(*args, **kwargs)

        return wrapper

    def _back(tab: str):
        return redirect(url_for("admin_manage", tab=tab))

    def _run(tab: str, success: str, failure: str, action):
        """Run one admin action and report it as a toast."""
        queue = session_queue(center)
        try:
            action()
            notify(queue, title="Success", description=success)
        except DomainError as e:
            notify(queue, title="Error", description=str(e), variant=ToastVariant.DESTRUCTIVE)
        except Exception:
            current_app.logger.exception(failure)
            notify(queue, title="Error", description=failure, variant=ToastVariant.DESTRUCTIVE)
        return _back(tab)

    @app.route("/admin/manage", methods=["GET"], endpoint="admin_manage")
    @login_required
    @admin_required
    def manage():
        actor = current_actor()
        tab = request.args.get("tab", TABS[0])
        if tab not in TABS:
            tab = TABS[0]

        queue = session_queue(center)
        settings = container.settings_service.get_settings(actor)
        return render_template(
            "admin/manage.html",
            tab=tab,
            tabs=TABS,
            users=container.user_service.list_users(actor),
            charge_codes=container.charge_code_service.list_charge_codes(actor),
            settings=settings,
            no_restriction=NO_RESTRICTION,
            period_options=generate_period_options(),
            roles=list(Role),
            me=actor.user_id,
            toasts=queue.toasts if queue else [],
            active_page="admin_manage",
        )

    @app.route("/admin/users/save", methods=["POST"], endpoint="admin_save_user")
    @login_required
    @admin_required
    def save_user():
        actor = current_actor()
        form = request.form
        user_id = form.get("user_id")
        roles = form.getlist("roles")
        fields = dict(email=form.get("email"), fmno=form.get("fmno"), name=form.get("name"), roles=roles)

        if user_id:
            return _run(
                "employees",
                "User updated",
                "Failed to save user",
                lambda: container.user_service.update_user(actor, user_id=user_id, **fields),
            )
        return _run(
            "employees",
            "User created",
            "Failed to save user",
            lambda: container.user_service.create_user(actor, **fields),
        )

    @app.route("/admin/users/<int:user_id>/delete", methods=["POST"], endpoint="admin_delete_user")
    @login_required
    @admin_required
    def delete_user(user_id: int):
        actor = current_actor()
        return _run(
            "employees",
            "User deleted",
            "Failed to delete user",
            lambda: container.user_service.delete_user(actor, user_id=user_id),
        )

    @app.route("/admin/charge-codes/save", methods=["POST"], endpoint="admin_save_charge_code")
    @login_required
    @admin_required
    def save_charge_code():
        actor = current_actor()
        form = request.form
        charge_code_id = form.get("charge_code_id")
        is_active = form.get("is_active") is not None

        if charge_code_id:
            return _run(
                "charge-codes",
                "Charge code updated",
                "Failed to save charge code",
                lambda: container.charge_code_service.update_charge_code(
                    actor,
                    charge_code_id=charge_code_id,
                    description=form.get("description"),
                    is_active=is_active,
                ),
            )
        return _run(
            "charge-codes",
            "Charge code created",
            "Failed to save charge code",
            lambda: container.charge_code_service.create_charge_code(
                actor,
                code=form.get("code"),
                description=form.get("description"),
                is_active=is_active,
            ),
        )

    @app.route("/admin/charge-codes/<int:charge_code_id>/delete", methods=["POST"], endpoint="admin_delete_charge_code")
    @login_required
    @admin_required
    def delete_charge_code(charge_code_id: int):
        actor = current_actor()
        return _run(
            "charge-codes",
            "Charge code deleted",
            "Failed to delete charge code",
            lambda: container.charge_code_service.delete_charge_code(actor, charge_code_id=charge_code_id),
        )

    @app.route("/admin/settings/save", methods=["POST"], endpoint="admin_save_settings")
    @login_required
    @admin_required
    def save_settings():
        actor = current_actor()
        return _run(
            "settings",
            "Settings saved",
            "Failed to save settings",
            lambda: container.settings_service.update_settings(
                actor,
                oldest_editable_period=request.form.get("oldest_editable_period") or None,
                latest_editable_period=request.form.get("latest_editable_period") or None,
            ),
        )
