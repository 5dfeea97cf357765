from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.pagination import clamp_page
from ..common.validators import require_date, require_year
from ..common.web import admin_required, current_user_id, error_response, internal_error, login_required
from ..core.constants import DEFAULT_UPCOMING_HOLIDAYS
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    holidays = container.holiday_service
    importer = container.holiday_import_service

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    @login_required
    def holidays_list():
        try:
            page, limit = clamp_page(request.args.get("page"), request.args.get("limit"))
            year = request.args.get("year", type=int)
            month = request.args.get("month", type=int)
            if month is not None and year is None:
                raise ValidationError("Month filter requires a year")

            result = holidays.list_holidays(
                year=year,
                month=month,
                type=request.args.get("type") or None,
                page=page,
                limit=limit,
            )
            return jsonify(
                {
                    "success": True,
                    "data": [h.to_dict() for h in result.items],
                    "pagination": result.meta(),
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to list holidays")
            return internal_error("Failed to load holidays")

    @app.route("/api/holidays/upcoming", methods=["GET"], endpoint="holidays_upcoming")
    @login_required
    def holidays_upcoming():
        try:
            limit = request.args.get("limit", DEFAULT_UPCOMING_HOLIDAYS, type=int)
            items = holidays.upcoming(max(1, min(limit, 50)))
            return jsonify({"success": True, "data": [h.to_dict() for h in items]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to load upcoming holidays")
            return internal_error("Failed to load upcoming holidays")

    @app.route("/api/holidays/check", methods=["GET"], endpoint="holidays_check")
    @login_required
    def holidays_check():
        try:
            raw = request.args.get("date")
            day = require_date(raw, "Date") if raw else container.clock.today()
            holiday = holidays.holiday_on(day)
            return jsonify(
                {
                    "success": True,
                    "data": {
                        "date": day.isoformat(),
                        "is_holiday": holiday is not None,
                        "holiday": holiday.to_dict() if holiday else None,
                    },
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to check holiday")
            return internal_error("Failed to check holiday")

    @app.route("/api/holidays/<int:holiday_id>", methods=["GET"], endpoint="holidays_detail")
    @login_required
    def holidays_detail(holiday_id: int):
        try:
            return jsonify({"success": True, "data": holidays.get(holiday_id).to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to load holiday %s", holiday_id)
            return internal_error("Failed to load holiday")

    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_create")
    @admin_required
    def holidays_create():
        data = request.get_json(silent=True) or {}
        try:
            holiday = holidays.create(
                name=data.get("name", ""),
                holiday_date=data.get("date", ""),
                type=data.get("type", ""),
                is_recurring=bool(data.get("is_recurring", False)),
                description=data.get("description"),
                created_by=current_user_id(),
            )
            return jsonify({"success": True, "message": "Holiday created", "data": holiday.to_dict()}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to create holiday")
            return internal_error("Failed to create holiday")

    @app.route("/api/holidays/<int:holiday_id>", methods=["PUT"], endpoint="holidays_update")
    @admin_required
    def holidays_update(holiday_id: int):
        data = request.get_json(silent=True) or {}
        changes = {k: data[k] for k in ("name", "date", "type", "is_recurring", "description") if k in data}
        try:
            holiday = holidays.update(holiday_id, **changes)
            return jsonify({"success": True, "message": "Holiday updated", "data": holiday.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to update holiday %s", holiday_id)
            return internal_error("Failed to update holiday")

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    @admin_required
    def holidays_delete(holiday_id: int):
        try:
            holidays.delete(holiday_id)
            return jsonify({"success": True, "message": "Holiday deleted"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Failed to delete holiday %s", holiday_id)
            return internal_error("Failed to delete holiday")

    @app.route("/api/holidays/import", methods=["POST"], endpoint="holidays_import")
    @admin_required
    def holidays_import():
        data = request.get_json(silent=True) or {}
        country = str(data.get("country") or container.settings.holiday_country).upper()
        try:
            year = require_year(data.get("year") or container.settings.holiday_import_year)
        except ValidationError as e:
            return error_response(e)

        try:
            summary = importer.import_holidays(country, year, current_user_id())
            if not summary.success:
                return jsonify(
                    {
                        "success": False,
                        "message": f"No holidays found for {country} {year}",
                        "data": summary.to_dict(),
                    }
                ), 404
            message = (
                f"Imported {summary.imported} holidays, skipped {summary.skipped} already present"
                f" ({summary.total} total)"
            )
            return jsonify({"success": True, "message": message, "data": summary.to_dict()})
        except DomainError as e:
            logger.error("Holiday import %s %s failed: %s", country, year, e)
            return error_response(e)
        except Exception:
            logger.exception("Holiday import failed")
            return internal_error("Failed to import holidays")
