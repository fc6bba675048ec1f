#!/usr/bin/env python3
"""
OurMarks Extraction Pipeline - CLI Entry Point

Extracts per-student mark records from exam result PDFs:
1. Read positioned text runs from each page (PyMuPDF)
2. Drop rotated, vertical, empty and invisible runs
3. Re-join runs split by the PDF producer
4. Rebuild table rows from vertical overlap
5. Parse each row into ID, names and marks

Usage:
    python run_extraction.py <pdf_path> [options]
    python run_extraction.py <directory> [options]  # Process all PDFs in directory

Options:
    --output DIR        Output directory (default: out/marks)
    --pages N,M,K       Specific pages to process (1-indexed)
    --xlsx              Also write an Excel workbook per PDF
    --semester FILE     Write a combined semester table (.csv or .xlsx)
    --debug             Write overlay images and per-stage dumps
    --verbose           Verbose output

Examples:
    # Process single PDF
    python run_extraction.py programming-3.pdf

    # Process directory and build the semester table
    python run_extraction.py ./documents --semester out/semester_marks.csv

    # Inspect how the first page was parsed
    python run_extraction.py programming-3.pdf --pages 1 --debug
"""

import sys
import argparse
from dataclasses import replace
from pathlib import Path
from typing import List

from ourmarks.batch_processor import process_pdf_batch
from ourmarks.semester_table import SemesterTable
from ourmarks.settings import load_settings


def parse_pages(pages_str: str) -> List[int]:
    """
    Parse page string into list of 0-indexed page numbers.

    Examples:
        "1,2,3" -> [0, 1, 2]
        "1-3" -> [0, 1, 2]
        "1,3-5,7" -> [0, 2, 3, 4, 6]
    """
    pages = []

    for part in pages_str.split(','):
        if '-' in part:
            start, end = part.split('-')
            pages.extend(range(int(start) - 1, int(end)))
        else:
            pages.append(int(part) - 1)

    return pages


def find_pdfs(directory: Path) -> List[Path]:
    """Find all PDF files in directory."""
    return sorted(directory.glob('*.pdf'))


def main(argv: List[str] = None) -> int:
    parser = argparse.ArgumentParser(
        description='OurMarks Extraction Pipeline',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument('input', type=str,
                        help='PDF file or directory containing PDFs')
    parser.add_argument('--output', type=str, default='out/marks',
                        help='Output directory (default: out/marks)')
    parser.add_argument('--pages', type=str,
                        help='Comma-separated page numbers (1-indexed), e.g., "1,2,3" or "1-5"')
    parser.add_argument('--xlsx', action='store_true',
                        help='Also write an Excel workbook per PDF')
    parser.add_argument('--semester', type=str,
                        help='Write a combined semester table to this .csv or .xlsx file')
    parser.add_argument('--debug', action='store_true',
                        help='Write overlay images and per-stage dumps under <output>/debug')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)

    input_path = Path(args.input)
    output_dir = Path(args.output)

    if not input_path.exists():
        print(f"Error: Input not found: {input_path}")
        return 1

    # Determine PDFs to process
    if input_path.is_file():
        pdf_paths = [input_path]
    elif input_path.is_dir():
        pdf_paths = find_pdfs(input_path)
        if not pdf_paths:
            print(f"Error: No PDF files found in {input_path}")
            return 1
    else:
        print("Error: Input must be PDF file or directory")
        return 1

    pages = None
    if args.pages:
        pages = parse_pages(args.pages)

    settings = load_settings()
    if args.xlsx:
        settings = replace(settings, export_xlsx=True)

    if args.verbose:
        print("OurMarks Extraction Pipeline")
        print(f"Output: {output_dir}")
        print(f"Processing {len(pdf_paths)} PDF(s)...")

    results = process_pdf_batch(
        pdf_paths,
        output_dir=output_dir,
        settings=settings,
        pages=pages,
        debug=args.debug,
        verbose=args.verbose,
    )

    if args.semester:
        table = SemesterTable()
        for pdf_path in pdf_paths:
            if pdf_path.name in results:
                table.add_subject(pdf_path.stem, results[pdf_path.name])
        semester_path = table.export(Path(args.semester))
        if args.verbose:
            print(f"\nSemester table: {len(table.students)} students, "
                  f"{len(table.subjects)} subjects -> {semester_path}")

    if args.verbose:
        total = sum(len(r) for r in results.values())
        print(f"\n{'='*60}")
        print(f"Extraction complete! {total} records from {len(results)}/{len(pdf_paths)} PDF(s)")
        print(f"Output saved to: {output_dir}")
        print('='*60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
