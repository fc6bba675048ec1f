"""
Record Extractor - Apply the marks row grammar to reconstructed rows

A data row reads, right to left:

    student ID | name | [father name] | [practical  theoretical] | total

Anything that does not start with a valid student ID (headers, footers,
page numbers) is dropped. Missing fields degrade the record, they never
reject it.
"""

import re
from typing import List, Optional, Sequence

from .mark_record import MarkRecord
from .settings import DEFAULT_MAX_TOKEN_LENGTH
from .text_fragment import TextFragment


# 10000..59999
_STUDENT_ID_RE = re.compile(r"[1-5][0-9]{4}")
_MARK_RE = re.compile(r"[0-9]{1,3}")

MAX_MARKS_PER_ROW = 3


def parse_student_id(fragment: Optional[TextFragment]) -> Optional[int]:
    if fragment is None or fragment.is_rtl:
        return None
    if _STUDENT_ID_RE.fullmatch(fragment.value) is None:
        return None
    return int(fragment.value)


def extract_record_from_row(row: Sequence[TextFragment],
                            max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH) -> Optional[MarkRecord]:
    """
    Extract a mark record from one row.

    Args:
        row: Fragments of the row, rightmost first
        max_token_length: Longer fragments are ignored as malformed runs

    Returns:
        MarkRecord, or None when the row has no valid leading student ID
    """
    id_fragment = row[0] if row else None
    student_id = parse_student_id(id_fragment)
    if student_id is None:
        return None

    names: List[str] = []
    marks: List[int] = []

    for fragment in row[1:]:
        value = fragment.value
        if len(value) > max_token_length:
            continue

        # Names only come before the marks.
        if fragment.is_rtl and not marks and len(names) < 2:
            names.append(value.strip())

        if not fragment.is_rtl and len(marks) < MAX_MARKS_PER_ROW and _MARK_RE.fullmatch(value):
            marks.append(int(value))

    practical = theoretical = exam = None
    if len(marks) == 1:
        exam = marks[0]
    elif len(marks) == 3:
        practical, theoretical, exam = marks

    return MarkRecord(
        student_id=student_id,
        student_name=names[0] if names else None,
        student_father_name=names[1] if len(names) > 1 else None,
        practical_mark=practical,
        theoretical_mark=theoretical,
        exam_mark=exam,
    )


def extract_records_from_rows(rows: Sequence[Sequence[TextFragment]],
                              max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH) -> List[MarkRecord]:
    """Extract records from every row that passes the student ID gate."""
    records: List[MarkRecord] = []

    for row in rows:
        record = extract_record_from_row(row, max_token_length)
        if record is not None:
            records.append(record)

    return records
