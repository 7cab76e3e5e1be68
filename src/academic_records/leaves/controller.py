from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.http import api_view, current_scope, json_body, query_arg, success
from ..common.validators import optional_text, require_enum
from ..container import Container
from ..core.enums import LeaveStatus


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    def _scope():
        return current_scope(container.scope_resolver)

    @app.route("/leaves", methods=["GET"], endpoint="list_leaves")
    @api_view
    def list_leaves():
        status = query_arg("status")
        rows = service.list_leaves(
            _scope(),
            status=require_enum(status, LeaveStatus, "status") if status else None,
            requester_id=query_arg("requesterId"),
        )
        return success([r.to_dict() for r in rows])

    @app.route("/leaves", methods=["POST"], endpoint="submit_leave")
    @api_view
    def submit_leave():
        scope = _scope()
        body = json_body()
        leave = service.submit(
            scope,
            leave_type=body.get("type"),
            from_date=parse_iso_date(body.get("fromDate"), "fromDate"),
            to_date=parse_iso_date(body.get("toDate"), "toDate"),
            reason=body.get("reason"),
        )
        return success(leave.to_dict(), "Leave request submitted", 201)

    @app.route("/leaves/<leave_id>", methods=["GET"], endpoint="get_leave")
    @api_view
    def get_leave(leave_id: str):
        return success(service.get_leave(_scope(), leave_id=leave_id).to_dict())

    @app.route("/leaves/<leave_id>", methods=["PUT"], endpoint="decide_leave")
    @api_view
    def decide_leave(leave_id: str):
        scope = _scope()
        body = json_body()
        leave = service.decide(
            scope,
            leave_id=leave_id,
            new_status=require_enum(body.get("status"), LeaveStatus, "status"),
            remarks=optional_text(body.get("remarks"), "remarks"),
        )
        return success(leave.to_dict(), f"Leave request {leave.status.value.lower()}")

    @app.route("/leaves/<leave_id>", methods=["DELETE"], endpoint="delete_leave")
    @api_view
    def delete_leave(leave_id: str):
        service.delete(_scope(), leave_id=leave_id)
        return success(None, "Leave request deleted")
