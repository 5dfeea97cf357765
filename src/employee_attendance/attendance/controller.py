from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.pagination import clamp_page
from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    employee_required,
    error_response,
    internal_error,
    login_required,
)
from ..core.enums import Role
from ..core.exceptions import DomainError, IsHolidayError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    employees = container.employee_service

    def _notes_from_body():
        data = request.get_json(silent=True) or {}
        return data.get("notes")

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @employee_required
    def attendance_today():
        try:
            employee = employees.get_for_user(current_user_id())
            data = attendance.today_overview(employee.employee_id)
            return jsonify({"success": True, "data": data})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to load today's attendance")
            return internal_error("Failed to load today's attendance")

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @employee_required
    def attendance_check_in():
        try:
            employee = employees.get_for_user(current_user_id())
            record = attendance.check_in(employee.employee_id, _notes_from_body())
            message = "Check-in successful"
            if record.late_minutes:
                message = f"Check-in successful (late by {record.late_minutes} minutes)"
            return jsonify({"success": True, "message": message, "data": record.to_dict(attendance.tz)}), 201
        except IsHolidayError as e:
            body = {"success": False, "code": e.code, "message": str(e)}
            if e.holiday is not None:
                body["holiday"] = e.holiday.to_dict()
            return jsonify(body), e.status_code
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Check-in failed")
            return internal_error("Failed to check in")

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @employee_required
    def attendance_check_out():
        try:
            employee = employees.get_for_user(current_user_id())
            record = attendance.check_out(employee.employee_id, _notes_from_body())
            return jsonify({"success": True, "message": "Check-out successful", "data": record.to_dict(attendance.tz)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Check-out failed")
            return internal_error("Failed to check out")

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        try:
            page, limit = clamp_page(request.args.get("page"), request.args.get("limit"))
            employee_id = request.args.get("employee_id", type=int)
            if current_role() != Role.ADMIN.value:
                # Employees only ever see their own records
                employee_id = employees.get_for_user(current_user_id()).employee_id

            result = attendance.history(
                employee_id=employee_id,
                start_date=request.args.get("start_date"),
                end_date=request.args.get("end_date"),
                status=request.args.get("status"),
                page=page,
                limit=limit,
            )
            return jsonify({"success": True, "data": list(result.items), "pagination": result.meta()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to list attendance")
            return internal_error("Failed to load attendance records")

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_detail")
    @login_required
    def attendance_detail(attendance_id: int):
        try:
            viewer = None
            if current_role() != Role.ADMIN.value:
                viewer = employees.get_for_user(current_user_id()).employee_id
            record = attendance.get_record(attendance_id, viewer_employee_id=viewer)
            return jsonify({"success": True, "data": record.to_dict(attendance.tz)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to load attendance %s", attendance_id)
            return internal_error("Failed to load attendance record")

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @admin_required
    def dashboard():
        try:
            return jsonify({"success": True, "data": attendance.dashboard()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to build dashboard")
            return internal_error("Failed to load dashboard")
