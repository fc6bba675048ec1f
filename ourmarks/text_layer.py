"""
Text Layer - Read positioned text runs from PDF pages with PyMuPDF

Produces raw text items in the shape fragment_normalizer expects. PyMuPDF
reports coordinates with a top-left origin; items are converted to a
bottom-left origin anchored at the run's baseline, and the run's writing
direction is encoded in an affine transform:

    [size*cos, size*sin, -size*sin, size*cos, x, y]
"""

from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

import fitz  # PyMuPDF

from .settings import DEFAULT_RTL_RATIO
from .text_fragment import detect_direction


def open_document(pdf_path: Union[str, Path]) -> "fitz.Document":
    """Open a PDF; failures propagate to the caller."""
    return fitz.open(str(pdf_path))


def page_size(page: "fitz.Page") -> Tuple[float, float]:
    rect = page.rect
    return float(rect.width), float(rect.height)


def iter_pages(doc: "fitz.Document", pages: Optional[List[int]] = None) -> Iterator[Tuple[int, "fitz.Page"]]:
    """
    Yield (page_num, page) pairs, page_num 0-indexed.

    Out-of-range page numbers are skipped.
    """
    page_nums = range(doc.page_count) if pages is None else pages
    for page_num in page_nums:
        if 0 <= page_num < doc.page_count:
            yield page_num, doc.load_page(page_num)


def span_to_text_item(span: Dict, line_dir: Tuple[float, float], page_height: float,
                      rtl_ratio: float = DEFAULT_RTL_RATIO) -> Dict:
    """
    Convert one PyMuPDF span to a raw text item.

    Args:
        span: Span dict from page.get_text("dict")
        line_dir: Writing direction (cos, sin) of the span's line, y pointing down
        page_height: Page height used to flip the y axis
        rtl_ratio: Share of RTL characters that marks the run as 'rtl'
    """
    text = str(span.get("text", ""))
    size = float(span.get("size", 0.0))
    cos, sin = float(line_dir[0]), -float(line_dir[1])  # flip to y-up

    origin = span.get("origin") or (0.0, 0.0)
    x = float(origin[0])
    y = page_height - float(origin[1])

    bbox = span.get("bbox") or (0.0, 0.0, 0.0, 0.0)
    width = abs(float(bbox[2]) - float(bbox[0]))

    if abs(cos) < 1e-6:
        direction = "ttb"
    else:
        direction = detect_direction(text, rtl_ratio)

    return {
        "str": text,
        "dir": direction,
        "transform": [size * cos, size * sin, -size * sin, size * cos, x, y],
        "width": width,
        "height": size,
    }


def get_text_items(page: "fitz.Page", rtl_ratio: float = DEFAULT_RTL_RATIO) -> List[Dict]:
    """
    Get the raw text items of a page in content-stream order.

    Image blocks are ignored. No filtering happens here.
    """
    _, page_height = page_size(page)
    text_dict = page.get_text("dict")

    items: List[Dict] = []
    for block in text_dict.get("blocks", []):
        if block.get("type", -1) != 0:
            continue
        for line in block.get("lines", []):
            line_dir = line.get("dir", (1.0, 0.0))
            for span in line.get("spans", []):
                items.append(span_to_text_item(span, line_dir, page_height, rtl_ratio))

    return items
