"""
Mark Record - One student's row extracted from a marks sheet.

Only `student_id` is guaranteed; every other field is None when it could not
be located in the row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union


RECORD_COLUMNS = ["id", "name", "father", "practical", "theoretical", "total"]

FlatValue = Union[int, str, None]


@dataclass(frozen=True)
class MarkRecord:
    """Student marks for a single subject."""
    student_id: int  # 5 digits, 10000..59999
    student_name: Optional[str] = None  # may include the father's name on some sheets
    student_father_name: Optional[str] = None
    practical_mark: Optional[int] = None  # usually out of 20 or 30
    theoretical_mark: Optional[int] = None  # usually out of 80 or 70
    exam_mark: Optional[int] = None  # out of 100

    def flatten(self) -> List[FlatValue]:
        return [
            self.student_id,
            self.student_name,
            self.student_father_name,
            self.practical_mark,
            self.theoretical_mark,
            self.exam_mark,
        ]


def flatten_records(records: List[MarkRecord]) -> List[List[FlatValue]]:
    return [r.flatten() for r in records]
