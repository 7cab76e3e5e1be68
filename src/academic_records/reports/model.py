from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Report:
    """Stored GPA snapshot for one (student, semester)."""

    report_id: str
    student_id: str
    semester: int
    gpa: float
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "studentId": self.student_id,
            "semester": self.semester,
            "gpa": self.gpa,
            "remarks": self.remarks,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
