from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.pagination import clamp_page
from ..common.web import admin_required, current_user_id, employee_required, error_response, internal_error
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)

_EDITABLE = ("name", "position", "department", "salary", "join_date")


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @admin_required
    def employees_list():
        try:
            page, limit = clamp_page(request.args.get("page"), request.args.get("limit"))
            result = employees.list_employees(page=page, limit=limit)
            return jsonify(
                {
                    "success": True,
                    "data": [e.to_dict() for e in result.items],
                    "pagination": result.meta(),
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to list employees")
            return internal_error("Failed to load employees")

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @admin_required
    def employees_create():
        data = request.get_json(silent=True) or {}
        try:
            created = employees.create_with_account(
                name=data.get("name", ""),
                position=data.get("position", ""),
                department=data.get("department", ""),
                salary=data.get("salary"),
                join_date=data.get("join_date") or None,
                email=data.get("email"),
                created_by=current_user_id(),
            )
            return jsonify(
                {
                    "success": True,
                    "message": "Employee created",
                    "data": created.employee.to_dict(),
                    # Shown once so the admin can hand the credentials over
                    "account": {"email": created.email, "password": created.password},
                }
            ), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to create employee")
            return internal_error("Failed to create employee")

    @app.route("/api/employees/profile", methods=["GET"], endpoint="employees_profile")
    @employee_required
    def employees_profile():
        try:
            employee = employees.get_for_user(current_user_id())
            return jsonify({"success": True, "data": employee.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to load employee profile")
            return internal_error("Failed to load profile")

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_detail")
    @admin_required
    def employees_detail(employee_id: int):
        try:
            return jsonify({"success": True, "data": employees.get(employee_id).to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to load employee %s", employee_id)
            return internal_error("Failed to load employee")

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @admin_required
    def employees_update(employee_id: int):
        data = request.get_json(silent=True) or {}
        try:
            employee = employees.update(employee_id, **{k: data[k] for k in _EDITABLE if k in data})
            return jsonify({"success": True, "message": "Employee updated", "data": employee.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to update employee %s", employee_id)
            return internal_error("Failed to update employee")

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @admin_required
    def employees_delete(employee_id: int):
        try:
            employees.delete(employee_id)
            return jsonify({"success": True, "message": "Employee deleted"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to delete employee %s", employee_id)
            return internal_error("Failed to delete employee")
