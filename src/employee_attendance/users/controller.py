from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import current_user_id, error_response, internal_error, login_required
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

            session.clear()
            session.permanent = bool(data.get("remember_me"))
            app.permanent_session_lifetime = timedelta(days=7)

            session["user_id"] = s_user.user_id
            session["name"] = s_user.name
            session["email"] = s_user.email
            session["role"] = s_user.role.value

            logger.info("User logged in: %s", s_user.email)
            return jsonify(
                {
                    "success": True,
                    "message": "Login successful",
                    "data": {
                        "id": s_user.user_id,
                        "name": s_user.name,
                        "email": s_user.email,
                        "role": s_user.role.value,
                    },
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Login failed")
            return internal_error("Login failed")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "success": True,
                "data": {
                    "id": current_user_id(),
                    "name": session.get("name"),
                    "email": session.get("email"),
                    "role": session.get("role"),
                },
            }
        )
