"""
Batch Processor - Marks extraction pipeline orchestrator

Coordinates, per page:
1. Text layer read (PyMuPDF)
2. Fragment normalization
3. Fragment merging
4. Row reconstruction
5. Record extraction
6. Optional debug export

and, per document, CSV / Excel output of the collected records.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence
import traceback

from . import text_layer
from . import fragment_normalizer
from . import fragment_merger
from . import row_reconstructor
from . import record_extractor
from . import marks_exporter
from . import debug_exporter
from .mark_record import MarkRecord
from .settings import PipelineSettings, load_settings


def sort_records(records: Sequence[MarkRecord]) -> List[MarkRecord]:
    """Order records by student ID so output is deterministic."""
    return sorted(records, key=lambda r: r.student_id)


def extract_marks_from_items(items: Sequence[Dict],
                             settings: Optional[PipelineSettings] = None) -> List[MarkRecord]:
    """Run the four core stages over the raw text items of one page."""
    settings = settings or PipelineSettings()
    fragments = fragment_normalizer.filter_and_simplify_text_items(items)
    merged = fragment_merger.merge_close_fragments(fragments, settings.merge_tolerance_ratio)
    rows = row_reconstructor.group_into_rows(merged)
    return record_extractor.extract_records_from_rows(rows, settings.max_token_length)


class MarksPipeline:
    """Main marks extraction pipeline."""

    def __init__(self, settings: Optional[PipelineSettings] = None):
        """
        Initialize the pipeline.

        Args:
            settings: Pipeline settings (default: read from OURMARKS_* env vars)
        """
        self.settings = settings if settings is not None else load_settings()

    def process_page(self, page, page_num: int,
                     debug_dir: Optional[Path] = None,
                     verbose: bool = False) -> Dict:
        """
        Process a single page.

        Args:
            page: PyMuPDF page
            page_num: Page number (0-indexed)
            debug_dir: When set, intermediate stages are exported there
            verbose: Print progress

        Returns:
            Dict with page, items, fragments, merged, rows and records
        """
        s = self.settings

        items = text_layer.get_text_items(page, s.rtl_ratio)
        fragments = fragment_normalizer.filter_and_simplify_text_items(items)
        merged = fragment_merger.merge_close_fragments(fragments, s.merge_tolerance_ratio)
        rows = row_reconstructor.group_into_rows(merged)
        records = record_extractor.extract_records_from_rows(rows, s.max_token_length)

        if verbose:
            print(f"  - Text items: {len(items)}, kept {len(fragments)}")
            print(f"  - Merged {len(fragments)} -> {len(merged)} fragments")
            print(f"  - Rows: {len(rows)}, records: {len(records)}")

        if debug_dir is not None:
            if verbose:
                print("  - Exporting debug output...")
            debug_exporter.export_page_debug(
                page, page_num, debug_dir,
                items=items, fragments=fragments, merged=merged, rows=rows,
                record_count=len(records), dpi=s.debug_dpi,
            )

        return {
            'page': page_num + 1,
            'items': items,
            'fragments': fragments,
            'merged': merged,
            'rows': rows,
            'records': records,
        }

    def process_pdf(self, pdf_path: Path,
                    pages: Optional[List[int]] = None,
                    output_dir: Optional[Path] = None,
                    debug: bool = False,
                    verbose: bool = False) -> List[MarkRecord]:
        """
        Extract mark records from every (or selected) page of a PDF.

        A document that cannot be opened raises; no partial output is written.

        Args:
            pdf_path: Path to PDF file
            pages: Page numbers to process (0-indexed), None for all
            output_dir: When set, write <stem>.csv (and .xlsx if enabled) there
            debug: Export debug output under output_dir/debug/<stem>/
            verbose: Print progress

        Returns:
            Records in page/row order
        """
        pdf_path = Path(pdf_path)
        debug_dir = None
        if debug and output_dir is not None:
            debug_dir = Path(output_dir) / "debug" / pdf_path.stem

        records: List[MarkRecord] = []
        doc = text_layer.open_document(pdf_path)
        try:
            page_count = doc.page_count
            if pages is not None and verbose:
                skipped = [p + 1 for p in pages if not 0 <= p < page_count]
                if skipped:
                    print(f"Skipping out-of-range pages: {skipped}")

            for page_num, page in text_layer.iter_pages(doc, pages):
                if verbose:
                    print(f"Processing page {page_num + 1}/{page_count}...")
                result = self.process_page(page, page_num, debug_dir, verbose)
                records.extend(result['records'])
        finally:
            doc.close()

        if output_dir is not None:
            output_dir = Path(output_dir)
            csv_path = marks_exporter.write_records_csv(output_dir / f"{pdf_path.stem}.csv", records)
            if verbose:
                print(f"  - Wrote {len(records)} records to {csv_path}")
            if self.settings.export_xlsx:
                marks_exporter.write_records_xlsx(output_dir / f"{pdf_path.stem}.xlsx", records)

        return records


def process_pdf_batch(pdf_paths: List[Path], output_dir: Optional[Path] = None,
                      settings: Optional[PipelineSettings] = None,
                      pages: Optional[List[int]] = None,
                      debug: bool = False,
                      verbose: bool = False) -> Dict[str, List[MarkRecord]]:
    """
    Process multiple PDFs.

    A failing document is reported and skipped; the batch continues.

    Returns:
        Records per PDF file name, in input order (failed documents absent)
    """
    pipeline = MarksPipeline(settings)
    results: Dict[str, List[MarkRecord]] = {}

    for pdf_path in pdf_paths:
        pdf_path = Path(pdf_path)
        try:
            if verbose:
                print(f"\n{'='*60}")
                print(f"Processing: {pdf_path.name}")
                print('='*60)

            results[pdf_path.name] = pipeline.process_pdf(
                pdf_path, pages=pages, output_dir=output_dir, debug=debug, verbose=verbose
            )
        except Exception as e:
            print(f"Error processing {pdf_path.name}: {e}")
            if verbose:
                traceback.print_exc()

    return results
