"""
OurMarks Extraction Pipeline

Reconstructs per-student mark records from the text layer of exam result
PDFs. Each page goes through four pure stages:

    raw text items -> normalize -> merge -> rows -> records

Modules:
- text_fragment: TextFragment value and RTL detection
- mark_record: MarkRecord value and row flattening
- fragment_normalizer: Filter raw text items into TextFragments
- fragment_merger: Re-join fragments split by the layout engine
- row_reconstructor: Cluster fragments into table rows
- record_extractor: Apply the row grammar to produce MarkRecords
- text_layer: PyMuPDF page -> raw text items
- batch_processor: Page/document pipeline and batch runs
- semester_table: Aggregate subjects into a per-student table
- marks_exporter: CSV and Excel output
- debug_exporter: Overlay images and per-stage dumps
- settings: Environment configuration
"""

__version__ = "1.0.0"
__all__ = [
    "text_fragment",
    "mark_record",
    "fragment_normalizer",
    "fragment_merger",
    "row_reconstructor",
    "record_extractor",
    "text_layer",
    "batch_processor",
    "semester_table",
    "marks_exporter",
    "debug_exporter",
    "settings",
]
