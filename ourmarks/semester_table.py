"""
Semester Table - Combine per-subject mark records into one row per student

Each subject (one PDF of exam results) contributes its exam marks; student
names are reconciled across subjects by keeping the longest one seen.

Tie resolution depends on the order subjects are added, so callers wanting
reproducible output must add subjects in a stable order (e.g. sorted file
names).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .mark_record import FlatValue, MarkRecord
from .marks_exporter import write_table_csv, write_table_xlsx


SEMESTER_BASE_COLUMNS = ["id", "name", "father"]

# Students without a mark in a subject get this value in the table.
MISSING_MARK = 0


def _longer(current: Optional[str], candidate: Optional[str]) -> Optional[str]:
    if candidate is None:
        return current
    if len(candidate) > len(current or ""):
        return candidate
    return current


@dataclass
class StudentEntry:
    student_id: int
    name: Optional[str] = None
    father_name: Optional[str] = None


@dataclass
class SemesterTable:
    """Explicit student-id keyed aggregate of several subjects."""
    students: Dict[int, StudentEntry] = field(default_factory=dict)
    subject_marks: Dict[str, Dict[int, int]] = field(default_factory=dict)

    @property
    def subjects(self) -> List[str]:
        return list(self.subject_marks.keys())

    def add_subject(self, subject_name: str, records: Iterable[MarkRecord]) -> None:
        """
        Add (or replace) a subject's marks.

        Args:
            subject_name: Column title, usually the PDF file stem
            records: Records extracted from that subject's document
        """
        marks: Dict[int, int] = {}

        for record in records:
            entry = self.students.get(record.student_id)
            if entry is None:
                entry = StudentEntry(student_id=record.student_id)
                self.students[record.student_id] = entry

            entry.name = _longer(entry.name, record.student_name)
            entry.father_name = _longer(entry.father_name, record.student_father_name)

            if record.exam_mark is not None:
                marks[record.student_id] = record.exam_mark

        self.subject_marks[subject_name] = marks

    def student_ids(self) -> List[int]:
        return sorted(self.students.keys())

    def header(self) -> List[str]:
        return SEMESTER_BASE_COLUMNS + self.subjects

    def rows(self) -> List[List[FlatValue]]:
        out: List[List[FlatValue]] = []
        for student_id in self.student_ids():
            entry = self.students[student_id]
            row: List[FlatValue] = [student_id, entry.name, entry.father_name]
            for subject in self.subjects:
                row.append(self.subject_marks[subject].get(student_id, MISSING_MARK))
            out.append(row)
        return out

    def export(self, output_path: Path) -> Path:
        """Write the table as .xlsx or .csv depending on the path suffix."""
        if Path(output_path).suffix.lower() == ".xlsx":
            return write_table_xlsx(output_path, self.header(), self.rows(), sheet_title="semester")
        return write_table_csv(output_path, self.header(), self.rows())
