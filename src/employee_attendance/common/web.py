"""Shared Flask helpers: session guards and JSON responses."""

from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import DomainError


def error_response(err: DomainError):
    body = {"success": False, "code": err.code, "message": str(err)}
    return jsonify(body), err.status_code


def internal_error(message: str):
    return jsonify({"success": False, "code": "internal_error", "message": message}), 500


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> str:
    return str(session.get("role") or "")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "code": "unauthorized", "message": "Unauthorized"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "code": "unauthorized", "message": "Unauthorized"}), 401
        if current_role() != Role.ADMIN.value:
            return jsonify({"success": False, "code": "forbidden", "message": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def employee_required(view):
    """Allow only employee (non-admin) accounts.

    Admins manage data but never check in or out themselves.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "code": "unauthorized", "message": "Unauthorized"}), 401
        if current_role() == Role.ADMIN.value:
            return jsonify(
                {
                    "success": False,
                    "code": "forbidden",
                    "message": "Admin cannot perform attendance. This feature is for employees only.",
                }
            ), 403
        return view(*args, **kwargs)

    return wrapper
