from __future__ import annotations

from flask import Flask

from ..common.http import api_view, current_identity, query_arg, success
from ..common.validators import require_int_range
from ..container import Container
from ..core.constants import MAX_NOTIFICATION_LIMIT


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.route("/notifications", methods=["GET"], endpoint="list_notifications")
    @api_view
    def list_notifications():
        ident = current_identity()
        limit = query_arg("limit")
        data = service.list_for(
            ident.identity_id,
            unread_only=(query_arg("unreadOnly") or "").lower() == "true",
            category=query_arg("category"),
            limit=require_int_range(limit, "limit", 1, MAX_NOTIFICATION_LIMIT) if limit else None,
        )
        return success(data)

    @app.route("/notifications/read-all", methods=["PUT"], endpoint="mark_all_notifications_read")
    @api_view
    def mark_all_read():
        ident = current_identity()
        count = service.mark_all_read(ident.identity_id)
        return success({"updated": count}, "All notifications marked as read")

    @app.route("/notifications/<notification_id>", methods=["PUT"], endpoint="mark_notification_read")
    @api_view
    def mark_read(notification_id: str):
        ident = current_identity()
        notification = service.mark_read(ident.identity_id, notification_id)
        return success(notification.to_dict(), "Notification marked as read")
