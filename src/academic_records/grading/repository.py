from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Submission


class SubmissionRepository(Protocol):
    def list_for_student(self, student_id: str, course_id: Optional[str] = None) -> Sequence[Submission]:
        """Submissions of one student, optionally restricted to one course's assignments."""

        raise NotImplementedError

    def list_graded(self, course_ids: Optional[Iterable[str]] = None) -> Sequence[Submission]:
        """Every graded submission; ``course_ids=None`` means all courses."""

        raise NotImplementedError
