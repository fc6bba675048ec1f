"""
Marks Exporter - Write mark records and semester tables to CSV / Excel

CSV files are written as UTF-8 with a BOM so spreadsheet tools pick the right
encoding for Arabic names. Absent values become empty cells.
"""

import csv
from pathlib import Path
from typing import List, Sequence

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from .mark_record import RECORD_COLUMNS, FlatValue, MarkRecord, flatten_records


HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")

CSV_ENCODING = "utf-8-sig"


def _csv_cell(value: FlatValue):
    return "" if value is None else value


def write_table_csv(output_path: Path, header: Sequence[str], rows: Sequence[Sequence[FlatValue]]) -> Path:
    """Write a header + rows table; strings are quoted, numbers are not."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding=CSV_ENCODING) as f:
        writer = csv.writer(f, quoting=csv.QUOTE_NONNUMERIC)
        writer.writerow(list(header))
        for row in rows:
            writer.writerow([_csv_cell(v) for v in row])

    return output_path


def write_table_xlsx(output_path: Path, header: Sequence[str], rows: Sequence[Sequence[FlatValue]],
                     sheet_title: str = "marks") -> Path:
    """Write a header + rows table to a single-sheet Excel workbook."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_title[:31]  # Excel sheet names max 31 chars

    for col_idx, col_name in enumerate(header, start=1):
        cell = ws.cell(row=1, column=col_idx, value=col_name)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center")

    for row_idx, row in enumerate(rows, start=2):
        for col_idx, value in enumerate(row, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    # Auto-fit column widths (approximate)
    for col_idx in range(1, len(header) + 1):
        max_len = len(str(header[col_idx - 1]))
        for row in rows:
            if col_idx <= len(row) and row[col_idx - 1] is not None:
                max_len = max(max_len, min(60, len(str(row[col_idx - 1]))))
        ws.column_dimensions[get_column_letter(col_idx)].width = max_len + 3

    ws.freeze_panes = "A2"

    wb.save(str(output_path))
    return output_path


def write_records_csv(output_path: Path, records: List[MarkRecord]) -> Path:
    return write_table_csv(output_path, RECORD_COLUMNS, flatten_records(records))


def write_records_xlsx(output_path: Path, records: List[MarkRecord]) -> Path:
    return write_table_xlsx(output_path, RECORD_COLUMNS, flatten_records(records))


def write_records(output_path: Path, records: List[MarkRecord]) -> Path:
    """Write records as .xlsx or .csv depending on the path suffix."""
    if Path(output_path).suffix.lower() == ".xlsx":
        return write_records_xlsx(output_path, records)
    return write_records_csv(output_path, records)
