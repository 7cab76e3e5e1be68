from __future__ import annotations

from flask import Flask

from ..common.http import api_view, current_scope, json_body, query_arg, success
from ..common.validators import optional_text, require_int_range, require_non_empty
from ..container import Container
from ..core.constants import MAX_SEMESTER, MIN_SEMESTER
from .service import UNCHANGED


def register(app: Flask, container: Container) -> None:
    reports = container.report_service
    builder = container.report_builder

    def _scope():
        return current_scope(container.scope_resolver)

    @app.route("/reports", methods=["GET"], endpoint="list_reports")
    @api_view
    def list_reports():
        semester = query_arg("semester")
        rows = reports.list_reports(
            _scope(),
            student_id=query_arg("studentId"),
            semester=require_int_range(semester, "semester", MIN_SEMESTER, MAX_SEMESTER) if semester else None,
        )
        return success([r.to_dict() for r in rows])

    @app.route("/reports", methods=["POST"], endpoint="generate_report")
    @api_view
    def generate_report():
        scope = _scope()
        body = json_body()
        report, created = reports.generate(
            scope,
            student_id=require_non_empty(body.get("studentId"), "studentId"),
            semester=body.get("semester"),
            remarks=optional_text(body.get("remarks"), "remarks"),
        )
        if created:
            return success(report.to_dict(), "Report generated", 201)
        return success(report.to_dict(), "Report updated")

    @app.route("/reports/<report_id>", methods=["GET"], endpoint="get_report")
    @api_view
    def get_report(report_id: str):
        return success(reports.get_report(_scope(), report_id=report_id).to_dict())

    @app.route("/reports/<report_id>", methods=["PUT"], endpoint="update_report")
    @api_view
    def update_report(report_id: str):
        scope = _scope()
        body = json_body()
        report = reports.update_report(
            scope,
            report_id=report_id,
            gpa=body.get("gpa"),
            remarks=optional_text(body["remarks"], "remarks") if "remarks" in body else UNCHANGED,
            semester=body.get("semester"),
        )
        return success(report.to_dict(), "Report updated")

    @app.route("/reports/courses", methods=["GET"], endpoint="course_report")
    @api_view
    def course_report():
        return success(builder.course_report(_scope()))

    @app.route("/reports/students", methods=["GET"], endpoint="student_report")
    @api_view
    def student_report():
        return success(builder.student_report(_scope()))

    @app.route("/reports/admin/attendance", methods=["GET"], endpoint="admin_attendance_report")
    @api_view
    def admin_attendance_report():
        data = builder.organization_report(
            _scope(),
            course_id=query_arg("courseId"),
            student_id=query_arg("studentId"),
        )
        return success(data)

    @app.route("/reports/gpa/<student_id>", methods=["GET"], endpoint="student_gpa")
    @api_view
    def student_gpa(student_id: str):
        data = reports.student_gpa(_scope(), student_id=student_id, course_id=query_arg("courseId"))
        return success(data)

    @app.route("/reports/admin/grades", methods=["GET"], endpoint="admin_grades_report")
    @api_view
    def admin_grades_report():
        return success(builder.grades_report(_scope()))

    @app.route("/reports/student/<student_id>", methods=["GET"], endpoint="student_performance_report")
    @api_view
    def student_performance_report(student_id: str):
        semester = query_arg("semester")
        data = builder.student_performance(
            _scope(),
            student_id=student_id,
            semester=require_int_range(semester, "semester", MIN_SEMESTER, MAX_SEMESTER) if semester else None,
        )
        return success(data)
