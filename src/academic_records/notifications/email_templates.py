"""HTML bodies for leave-related emails."""

from __future__ import annotations

from datetime import date
from html import escape
from typing import Optional

_LAYOUT = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <style>
      body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
      .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
      .header {{ background-color: {color}; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0; }}
      .content {{ background-color: #f9fafb; padding: 20px; border-radius: 0 0 8px 8px; }}
      .details {{ background-color: white; padding: 15px; margin: 15px 0; border-radius: 4px; border-left: 4px solid {color}; }}
      .footer {{ text-align: center; margin-top: 20px; color: #6b7280; font-size: 12px; }}
    </style>
  </head>
  <body>
    <div class="container">
      <div class="header"><h2>{heading}</h2></div>
      <div class="content">{content}</div>
      <div class="footer"><p>Academic Records - Automated Notification</p></div>
    </div>
  </body>
</html>
"""


def _fmt(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def leave_submitted_email(requester_name: str, leave_type: str, from_date: date, to_date: date, reason: str) -> str:
    content = (
        "<p>Hello,</p>"
        f"<p><strong>{escape(requester_name)}</strong> has submitted a leave request.</p>"
        '<div class="details">'
        f"<p><strong>Type:</strong> {escape(leave_type)}</p>"
        f"<p><strong>From:</strong> {_fmt(from_date)}</p>"
        f"<p><strong>To:</strong> {_fmt(to_date)}</p>"
        f"<p><strong>Reason:</strong> {escape(reason)}</p>"
        "</div>"
        "<p>Please review and respond to this request.</p>"
    )
    return _LAYOUT.format(color="#3b82f6", heading="Leave Request Submitted", content=content)


def leave_status_email(
    requester_name: str,
    leave_type: str,
    status: str,
    from_date: date,
    to_date: date,
    remarks: Optional[str] = None,
) -> str:
    approved = status == "APPROVED"
    label = "Approved" if approved else "Rejected"
    content = (
        f"<p>Hello {escape(requester_name)},</p>"
        f"<p>Your leave request has been <strong>{label.lower()}</strong>.</p>"
        '<div class="details">'
        f"<p><strong>Type:</strong> {escape(leave_type)}</p>"
        f"<p><strong>From:</strong> {_fmt(from_date)}</p>"
        f"<p><strong>To:</strong> {_fmt(to_date)}</p>"
        + (f"<p><strong>Remarks:</strong> {escape(remarks)}</p>" if remarks else "")
        + "</div>"
    )
    return _LAYOUT.format(color="#10b981" if approved else "#ef4444", heading=f"Leave Request {label}", content=content)
