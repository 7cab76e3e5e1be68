from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.http import api_view, current_scope, json_body, query_arg, success
from ..common.validators import require_enum, require_non_empty
from ..container import Container
from ..core.enums import AttendanceStatus


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _scope():
        return current_scope(container.scope_resolver)

    @app.route("/attendance", methods=["GET"], endpoint="list_attendance")
    @api_view
    def list_attendance():
        rows = service.list_attendance(
            _scope(),
            course_id=query_arg("courseId"),
            student_id=query_arg("studentId"),
        )
        return success([r.to_dict() for r in rows])

    @app.route("/attendance", methods=["POST"], endpoint="mark_attendance")
    @api_view
    def mark_attendance():
        scope = _scope()
        body = json_body()
        record = service.record_attendance(
            scope,
            student_id=require_non_empty(body.get("studentId"), "studentId"),
            course_id=require_non_empty(body.get("courseId"), "courseId"),
            status=require_enum(body.get("status"), AttendanceStatus, "status"),
            on_date=parse_iso_date(body["date"]) if body.get("date") is not None else None,
        )
        return success(record.to_dict(), "Attendance marked", 201)

    @app.route("/attendance/<attendance_id>", methods=["GET"], endpoint="get_attendance")
    @api_view
    def get_attendance(attendance_id: str):
        record = service.get_attendance(_scope(), attendance_id=attendance_id)
        return success(record.to_dict())

    @app.route("/attendance/<attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @api_view
    def update_attendance(attendance_id: str):
        scope = _scope()
        body = json_body()
        record = service.update_attendance(
            scope,
            attendance_id=attendance_id,
            status=require_enum(body["status"], AttendanceStatus, "status") if body.get("status") is not None else None,
            on_date=parse_iso_date(body["date"]) if body.get("date") is not None else None,
        )
        return success(record.to_dict(), "Attendance updated")

    @app.route("/attendance/<attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @api_view
    def delete_attendance(attendance_id: str):
        service.delete_attendance(_scope(), attendance_id=attendance_id)
        return success(None, "Attendance deleted")
