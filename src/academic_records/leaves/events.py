from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .model import LeaveRequest


@dataclass(frozen=True)
class LeaveSubmitted:
    leave: LeaveRequest


@dataclass(frozen=True)
class LeaveDecided:
    leave: LeaveRequest
    actor_id: str
    remarks: Optional[str] = None
