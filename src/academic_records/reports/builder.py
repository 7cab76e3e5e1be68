"""Role-appropriate report views composed from the aggregator and the GPA service.

Every row passes through the caller's Scope before it is returned.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.aggregator import aggregate, overall_percentage, percentage, summarize
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.enums import GroupBy
from ..core.exceptions import AuthorizationError, NotFoundError
from ..courses.repository import CourseRepository
from ..grading.distribution import average, grade_distribution, round2
from ..grading.model import Submission
from ..grading.repository import SubmissionRepository
from ..grading.service import GpaService
from ..scope.model import Scope
from ..users.repository import IdentityRepository
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class ReportBuilder:
    def __init__(
        self,
        attendance: AttendanceRepository,
        courses: CourseRepository,
        identities: IdentityRepository,
        reports: ReportRepository,
        submissions: SubmissionRepository,
        gpa: GpaService,
    ):
        self._attendance = attendance
        self._courses = courses
        self._identities = identities
        self._reports = reports
        self._submissions = submissions
        self._gpa = gpa

    def _scoped_records(self, scope: Scope) -> list[AttendanceRecord]:
        course_ids, student_ids = scope.attendance_filter()
        rows = self._attendance.list_records(course_ids=course_ids, student_ids=student_ids)
        return [r for r in rows if scope.can_view_attendance(r.course_id, r.student_id)]

    def _visible_student_ids(self, scope: Scope, records: Sequence[AttendanceRecord]) -> list[str]:
        if scope.is_admin:
            ids = set(self._identities.list_student_ids()) | {r.student_id for r in records}
        else:
            ids = set(scope.student_ids)
        return sorted(scope.filter_students(ids))

    def _visible_course_ids(self, scope: Scope, records: Sequence[AttendanceRecord]) -> list[str]:
        if scope.is_admin:
            return sorted(set(self._courses.list_ids()) | {r.course_id for r in records})
        if scope.is_teacher:
            return sorted(scope.course_ids)
        # Students see the courses they have attendance in.
        return sorted({r.course_id for r in records})

    def _course_rows(self, course_ids: list[str], records: Sequence[AttendanceRecord]) -> list[dict]:
        stats = aggregate(records, GroupBy.COURSE)
        courses = {c.course_id: c for c in self._courses.get_many(course_ids)}
        rows = []
        for course_id in course_ids:
            course = courses.get(course_id)
            summary = stats.get(course_id) or summarize(course_id, [])
            rows.append(
                {
                    "courseId": course_id,
                    "title": course.title if course else None,
                    "code": course.code if course else None,
                    "attendance": summary.to_dict(),
                }
            )
        return rows

    def _student_rows(self, student_ids: list[str], records: Sequence[AttendanceRecord]) -> list[dict]:
        stats = aggregate(records, GroupBy.STUDENT)
        profiles = {s.student_id: s for s in self._identities.get_students(student_ids)}
        latest = self._reports.latest_for_students(student_ids)
        rows = []
        for student_id in student_ids:
            summary = stats.get(student_id) or summarize(student_id, [])
            report = latest.get(student_id)
            if report:
                gpa, source = report.gpa, "report"
            else:
                gpa, source = self._gpa.compute_gpa(student_id), "live"
            profile = profiles.get(student_id)
            rows.append(
                {
                    "studentId": student_id,
                    "enrollmentNo": profile.enrollment_no if profile else None,
                    "semester": profile.semester if profile else None,
                    "attendance": summary.to_dict(),
                    "gpa": gpa,
                    "gpaSource": source,
                }
            )
        return rows

    def course_report(self, scope: Scope) -> list[dict]:
        records = self._scoped_records(scope)
        course_ids = self._visible_course_ids(scope, records)
        return self._course_rows(course_ids, records)

    def student_report(self, scope: Scope) -> list[dict]:
        records = self._scoped_records(scope)
        student_ids = self._visible_student_ids(scope, records)
        return self._student_rows(student_ids, records)

    def organization_report(
        self,
        scope: Scope,
        *,
        course_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> dict:
        if not scope.is_admin:
            raise AuthorizationError("Admin access required")

        records = list(self._attendance.list_records())
        if course_id:
            records = [r for r in records if r.course_id == course_id]
        if student_id:
            records = [r for r in records if r.student_id == student_id]

        course_ids = [course_id] if course_id else self._visible_course_ids(scope, records)
        student_ids = [student_id] if student_id else self._visible_student_ids(scope, records)
        overall = summarize("*", records)

        logger.info("Organization report: %d records, %d courses, %d students", overall.total, len(course_ids), len(student_ids))
        return {
            "overall": {
                "total": overall.total,
                "present": overall.present,
                "absent": overall.absent,
                "late": overall.late,
                "percentage": overall_percentage(records),
            },
            "courses": self._course_rows(course_ids, records),
            "students": self._student_rows(student_ids, records),
        }

    def grades_report(self, scope: Scope) -> dict:
        """Average grade and A-F distribution, overall and per course."""
        if not scope.is_admin:
            raise AuthorizationError("Admin access required")

        graded = list(self._submissions.list_graded())
        by_course: dict[str, list[Submission]] = {}
        for s in graded:
            by_course.setdefault(s.course_id or "", []).append(s)
        courses = {c.course_id: c for c in self._courses.get_many(sorted(by_course))}

        rows = []
        for course_id in sorted(by_course):
            items = by_course[course_id]
            grades = [s.grade for s in items]
            course = courses.get(course_id)
            rows.append(
                {
                    "courseId": course_id,
                    "courseName": course.title if course else None,
                    "courseCode": course.code if course else None,
                    "totalSubmissions": len(grades),
                    "uniqueStudents": len({s.student_id for s in items}),
                    "averageGrade": average(grades),
                    "distribution": grade_distribution(grades),
                }
            )

        grades = [s.grade for s in graded]
        return {
            "overall": {
                "totalSubmissions": len(grades),
                "averageGrade": average(grades),
                "distribution": grade_distribution(grades),
            },
            "byCourse": rows,
        }

    def student_performance(self, scope: Scope, *, student_id: str, semester: Optional[int] = None) -> dict:
        """Stored GPA history plus attendance and assignment figures for one student.

        Teachers get the attendance and grade rows of their own courses only.
        """
        profiles = self._identities.get_students([student_id])
        if not profiles:
            raise NotFoundError("Student not found")
        if not scope.can_view_student(student_id):
            raise AuthorizationError("You can only view reports for students in your scope")
        profile = profiles[0]
        identity = self._identities.get_by_id(profile.identity_id)

        reports = sorted(
            self._reports.list_reports(student_ids=[student_id], semester=semester),
            key=lambda r: r.semester,
        )
        records = [
            r
            for r in self._attendance.list_records(student_ids=[student_id])
            if scope.can_view_attendance(r.course_id, r.student_id)
        ]
        submissions = [
            s for s in self._submissions.list_for_student(student_id) if scope.can_view_grade(s.course_id, s.student_id)
        ]

        summary = summarize(student_id, records)
        grades = [s.grade for s in submissions if s.grade is not None]

        return {
            "studentId": student_id,
            "name": identity.name if identity else None,
            "enrollmentNo": profile.enrollment_no,
            "reports": [r.to_dict() for r in reversed(reports)],
            "overallGpa": average(r.gpa for r in reports),
            "gpaTrend": [{"semester": r.semester, "gpa": r.gpa} for r in reports],
            "attendance": {
                "totalClasses": summary.total,
                "presentCount": summary.present,
                "absentCount": summary.absent,
                "lateCount": summary.late,
                "attendanceRate": round2(summary.present / summary.total * 100) if summary.total else 0.0,
                "trend": self._monthly_trend(records),
            },
            "assignments": {
                "totalSubmissions": len(submissions),
                "completedAssignments": len(grades),
                "pendingAssignments": len(submissions) - len(grades),
                "averageScore": average(grades),
            },
            "coursePerformance": self._course_performance(records, submissions),
        }

    @staticmethod
    def _monthly_trend(records: Sequence[AttendanceRecord]) -> list[dict]:
        months: dict[str, list[AttendanceRecord]] = {}
        for r in records:
            months.setdefault(r.attended_on.strftime("%Y-%m"), []).append(r)
        trend = []
        for month in sorted(months):
            summary = summarize(month, months[month])
            trend.append(
                {
                    "month": month,
                    "attendance": percentage(summary.present, summary.total),
                    "totalClasses": summary.total,
                    "presentCount": summary.present,
                }
            )
        return trend

    def _course_performance(self, records: Sequence[AttendanceRecord], submissions: Sequence[Submission]) -> list[dict]:
        stats = aggregate(records, GroupBy.COURSE)
        grades: dict[str, list[float]] = {}
        for s in submissions:
            bucket = grades.setdefault(s.course_id or "", [])
            if s.grade is not None:
                bucket.append(s.grade)

        course_ids = sorted(set(stats) | set(grades))
        courses = {c.course_id: c for c in self._courses.get_many(course_ids)}
        rows = []
        for course_id in course_ids:
            summary = stats.get(course_id) or summarize(course_id, [])
            course = courses.get(course_id)
            course_grades = grades.get(course_id, [])
            rows.append(
                {
                    "courseId": course_id,
                    "courseName": course.title if course else None,
                    "courseCode": course.code if course else None,
                    "averageGrade": average(course_grades),
                    "attendancePercentage": round2(summary.present / summary.total * 100) if summary.total else 0.0,
                    "totalAssignments": len(course_grades),
                    "totalClasses": summary.total,
                }
            )
        return rows
