from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Course


class CourseRepository(Protocol):
    def get_by_id(self, course_id: str) -> Optional[Course]:
        raise NotImplementedError

    def list_ids_for_teacher(self, teacher_id: str) -> Sequence[str]:
        raise NotImplementedError

    def list_ids(self) -> Sequence[str]:
        raise NotImplementedError

    def get_many(self, course_ids: Iterable[str]) -> Sequence[Course]:
        raise NotImplementedError
