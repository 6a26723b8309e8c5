from __future__ import annotations

from flask import Flask, current_app, flash, jsonify, redirect, render_template, request, session, url_for

from ..common.http import current_actor, json_body, json_endpoint
from ..core.enums import Capability
from ..core.exceptions import AuthenticationError
from ..notifications.controller import end_ui_session, start_ui_session


def register(app: Flask, container) -> None:
    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "user_id" in session:
            return redirect(url_for("home"))

        if request.method == "POST":
            email = request.form.get("email", "")
            fmno = request.form.get("fmno", "")
            remember = request.form.get("remember_me")

            try:
                user = container.auth_service.authenticate(email, fmno)

                session.clear()
                session.permanent = bool(remember)

                session["user_id"] = user.user_id
                session["name"] = user.display_name
                session["roles"] = sorted(r.value for r in user.roles)

                queue = start_ui_session(container.notifications)
                queue.success(f"Signed in as {user.display_name}")
                return redirect(url_for("home"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception:
                current_app.logger.exception("sign-in failed")
                flash("Unexpected error while signing in", "danger")

        return render_template("login.html")

    @app.route("/home", endpoint="home")
    def home():
        actor = current_actor()
        if actor is None:
            # account removed or left without roles since sign-in
            end_ui_session(container.notifications)
            session.clear()
            return redirect(url_for("login"))
        if actor.can(Capability.ENTER_HOURS):
            return redirect(url_for("timesheet_page"))
        return redirect(url_for("admin_manage"))

    @app.route("/logout", endpoint="logout")
    def logout():
        end_ui_session(container.notifications)
        session.clear()
        flash("Signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/api/admin/users", methods=["GET"], endpoint="api_list_users")
    @json_endpoint("Failed to fetch users")
    def list_users():
        users = container.user_service.list_users(current_actor())
        return jsonify([u.to_dict() for u in users])

    @app.route("/api/admin/users", methods=["POST"], endpoint="api_create_user")
    @json_endpoint("Failed to create user")
    def create_user():
        actor = current_actor()
        body = json_body()
        user = container.user_service.create_user(
            actor,
            email=body.get("email"),
            fmno=body.get("fmno"),
            name=body.get("name"),
            roles=body.get("roles"),
        )
        return jsonify(user.to_dict()), 201

    @app.route("/api/admin/users", methods=["PUT"], endpoint="api_update_user")
    @json_endpoint("Failed to update user")
    def update_user():
        actor = current_actor()
        body = json_body()
        user = container.user_service.update_user(
            actor,
            user_id=body.get("id"),
            email=body.get("email"),
            fmno=body.get("fmno"),
            name=body.get("name"),
            roles=body.get("roles"),
        )
        return jsonify(user.to_dict())

    @app.route("/api/admin/users", methods=["DELETE"], endpoint="api_delete_user")
    @json_endpoint("Failed to delete user")
    def delete_user():
        container.user_service.delete_user(current_actor(), user_id=request.args.get("id"))
        return jsonify({"success": True})
