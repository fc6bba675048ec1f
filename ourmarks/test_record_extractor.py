import sys
import unittest
from pathlib import Path


# Allow `import ourmarks.*` when running from repo root.
APP_ROOT = Path(__file__).resolve().parents[1]
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))


from ourmarks.mark_record import MarkRecord  # noqa: E402
from ourmarks.record_extractor import extract_record_from_row, extract_records_from_rows  # noqa: E402
from ourmarks.text_fragment import TextFragment  # noqa: E402


def _row(*cells):
    """cells: (value, is_rtl) pairs, rightmost first."""
    x = 500.0
    row = []
    for value, rtl in cells:
        row.append(TextFragment(value=value, is_rtl=rtl, x=x, y=100.0, width=20.0, height=10.0))
        x -= 40.0
    return row


class TestRecordExtractor(unittest.TestCase):
    def test_full_row(self) -> None:
        row = _row(("10234", False), ("محمد", True), ("علي", True), ("15", False), ("70", False), ("85", False))
        self.assertEqual(
            extract_record_from_row(row),
            MarkRecord(student_id=10234, student_name="محمد", student_father_name="علي",
                       practical_mark=15, theoretical_mark=70, exam_mark=85),
        )

    def test_id_out_of_range_rejects_row(self) -> None:
        self.assertIsNone(extract_record_from_row(_row(("99999", False), ("محمد", True), ("50", False))))
        self.assertIsNone(extract_record_from_row(_row(("09999", False), ("50", False))))
        self.assertIsNone(extract_record_from_row(_row(("60000", False), ("50", False))))

    def test_id_must_be_first_and_ltr(self) -> None:
        self.assertIsNone(extract_record_from_row(_row(("محمد", True), ("10234", False))))
        self.assertIsNone(extract_record_from_row(_row(("10234", True), ("50", False))))
        self.assertIsNone(extract_record_from_row(_row(("1023", False), ("50", False))))
        self.assertIsNone(extract_record_from_row(_row(("102345", False))))
        self.assertIsNone(extract_record_from_row([]))

    def test_id_bounds(self) -> None:
        self.assertEqual(extract_record_from_row(_row(("10000", False))).student_id, 10000)
        self.assertEqual(extract_record_from_row(_row(("59999", False))).student_id, 59999)

    def test_two_marks_leave_all_marks_absent(self) -> None:
        rec = extract_record_from_row(_row(("20001", False), ("سارة", True), ("18", False), ("62", False)))
        self.assertEqual(rec.student_id, 20001)
        self.assertEqual(rec.student_name, "سارة")
        self.assertIsNone(rec.practical_mark)
        self.assertIsNone(rec.theoretical_mark)
        self.assertIsNone(rec.exam_mark)

    def test_single_mark_is_exam_mark(self) -> None:
        rec = extract_record_from_row(_row(("30001", False), ("ليلى", True), ("77", False)))
        self.assertIsNone(rec.practical_mark)
        self.assertIsNone(rec.theoretical_mark)
        self.assertEqual(rec.exam_mark, 77)

    def test_only_first_three_marks_are_used(self) -> None:
        rec = extract_record_from_row(_row(("30002", False), ("1", False), ("2", False), ("3", False), ("4", False)))
        self.assertEqual((rec.practical_mark, rec.theoretical_mark, rec.exam_mark), (1, 2, 3))

    def test_names_after_marks_are_ignored(self) -> None:
        rec = extract_record_from_row(_row(("40001", False), ("50", False), ("محمد", True), ("علي", True)))
        self.assertIsNone(rec.student_name)
        self.assertIsNone(rec.student_father_name)
        self.assertEqual(rec.exam_mark, 50)

    def test_third_name_is_ignored_and_names_trimmed(self) -> None:
        rec = extract_record_from_row(_row(("40002", False), ("  محمد ", True), ("علي ", True), ("حسن", True)))
        self.assertEqual(rec.student_name, "محمد")
        self.assertEqual(rec.student_father_name, "علي")

    def test_non_marks_are_skipped(self) -> None:
        row = _row(("40003", False), ("1000", False), ("ab", False), ("١٢", False), ("12.5", False), ("9", False))
        rec = extract_record_from_row(row)
        self.assertEqual(rec.exam_mark, 9)

    def test_rtl_digits_are_not_marks(self) -> None:
        rec = extract_record_from_row(_row(("40004", False), ("45", True)))
        self.assertEqual(rec.student_name, "45")
        self.assertIsNone(rec.exam_mark)

    def test_oversized_fragment_is_skipped(self) -> None:
        rec = extract_record_from_row(_row(("40005", False), ("ب" * 256, True), ("محمد", True)))
        self.assertEqual(rec.student_name, "محمد")

        rec = extract_record_from_row(_row(("40005", False), ("ب" * 255, True)))
        self.assertEqual(rec.student_name, "ب" * 255)

    def test_practical_and_theoretical_go_together(self) -> None:
        rows = [
            _row(("50001", False)),
            _row(("50002", False), ("1", False)),
            _row(("50003", False), ("1", False), ("2", False)),
            _row(("50004", False), ("1", False), ("2", False), ("3", False)),
        ]
        for rec in extract_records_from_rows(rows):
            self.assertTrue(10000 <= rec.student_id <= 59999)
            self.assertEqual(rec.practical_mark is None, rec.theoretical_mark is None)

    def test_extract_records_skips_non_data_rows(self) -> None:
        rows = [
            _row(("الرقم", True), ("الاسم", True)),
            _row(("10234", False), ("85", False)),
            _row(("Page", False), ("1", False)),
            _row(("10235", False), ("90", False)),
        ]
        self.assertEqual([r.student_id for r in extract_records_from_rows(rows)], [10234, 10235])


if __name__ == "__main__":
    unittest.main()
