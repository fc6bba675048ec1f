"""
Debug Exporter - Visual and tabular dumps of the intermediate pipeline stages

Per page:
- page_{n}_unmerged.png: rendered page with normalized fragments outlined
- page_{n}_merged.png: merged fragments outlined, reconstructed rows shaded
- page_{n}_level_1.csv: normalized fragments
- page_{n}_level_2.csv: merged fragments
- page_{n}_level_3.csv: reconstructed rows (values only)
- page_{n}_page.json: stage counts

Outlines are red for RTL fragments and blue for LTR ones.
"""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import cv2
import fitz  # PyMuPDF
import numpy as np

from .text_fragment import TextFragment


RTL_COLOR = (0, 0, 255)  # BGR
LTR_COLOR = (255, 0, 0)
ROW_COLOR = (3, 98, 252)
ROW_OPACITY = 0.15
ROW_PADDING = 1.0  # page units

RAW_ITEM_COLUMNS = ["string", "direction", "width", "height",
                    "a (scale x)", "b (skew)", "c (skew)", "d (scale y)",
                    "e (translate x)", "f (translate y)"]
FRAGMENT_COLUMNS = ["value", "rtl", "x", "y", "width", "height"]


def _write_csv(path: Path, header: Optional[List[str]], rows: List[List]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.writer(f, quoting=csv.QUOTE_NONNUMERIC)
        if header:
            writer.writerow(header)
        writer.writerows(rows)
    return path


def write_raw_items_csv(path: Path, items: Sequence[Dict]) -> Path:
    rows = []
    for item in items:
        transform = list(item.get("transform") or [])[:6]
        transform += [""] * (6 - len(transform))
        rows.append([item.get("str", ""), item.get("dir", ""),
                     item.get("width", ""), item.get("height", "")] + transform)
    return _write_csv(Path(path), RAW_ITEM_COLUMNS, rows)


def write_fragments_csv(path: Path, fragments: Sequence[TextFragment]) -> Path:
    rows = [[f.value, "true" if f.is_rtl else "false", f.x, f.y, f.width, f.height]
            for f in fragments]
    return _write_csv(Path(path), FRAGMENT_COLUMNS, rows)


def write_rows_csv(path: Path, rows: Sequence[Sequence[TextFragment]]) -> Path:
    return _write_csv(Path(path), None, [[f.value for f in row] for row in rows])


def render_page_image(page: "fitz.Page", dpi: int) -> np.ndarray:
    """Render a page to a BGR image."""
    zoom = dpi / 72.0
    pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
    img = np.frombuffer(pix.samples, dtype=np.uint8).reshape(pix.height, pix.width, pix.n)
    if pix.n == 1:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    return cv2.cvtColor(img, cv2.COLOR_RGB2BGR)


def _to_px(x: float, y: float, page_height: float, zoom: float) -> tuple:
    # Page units (bottom-left origin) -> pixels (top-left origin)
    return int(round(x * zoom)), int(round((page_height - y) * zoom))


def draw_rows(img: np.ndarray, rows: Sequence[Sequence[TextFragment]],
              page_height: float, zoom: float) -> np.ndarray:
    """Shade each row's bounding band with a translucent fill."""
    overlay = img.copy()
    for row in rows:
        if not row:
            continue
        x0 = min(f.x for f in row) - ROW_PADDING
        x1 = max(f.right for f in row) + ROW_PADDING
        y0 = min(f.y for f in row) - ROW_PADDING
        y1 = max(f.top for f in row) + ROW_PADDING
        cv2.rectangle(overlay, _to_px(x0, y1, page_height, zoom),
                      _to_px(x1, y0, page_height, zoom), ROW_COLOR, thickness=-1)
    return cv2.addWeighted(overlay, ROW_OPACITY, img, 1.0 - ROW_OPACITY, 0)


def draw_fragments(img: np.ndarray, fragments: Sequence[TextFragment],
                   page_height: float, zoom: float) -> np.ndarray:
    for f in fragments:
        color = RTL_COLOR if f.is_rtl else LTR_COLOR
        thickness = max(1, int(round(f.height / 10.0 * zoom)))
        cv2.rectangle(img, _to_px(f.x, f.top, page_height, zoom),
                      _to_px(f.right, f.y, page_height, zoom), color, thickness)
    return img


def render_overlay(page: "fitz.Page", fragments: Sequence[TextFragment],
                   rows: Optional[Sequence[Sequence[TextFragment]]] = None,
                   dpi: int = 144) -> np.ndarray:
    """
    Render a page with fragment outlines and optional row bands.

    Args:
        page: Source PDF page
        fragments: Fragments to outline
        rows: Reconstructed rows to shade (drawn under the outlines)
        dpi: Render DPI

    Returns:
        BGR image
    """
    zoom = dpi / 72.0
    page_height = float(page.rect.height)
    img = render_page_image(page, dpi)
    if rows:
        img = draw_rows(img, rows, page_height, zoom)
    return draw_fragments(img, fragments, page_height, zoom)


def export_page_debug(
    page: "fitz.Page",
    page_num: int,
    output_dir: Path,
    *,
    items: Sequence[Dict],
    fragments: Sequence[TextFragment],
    merged: Sequence[TextFragment],
    rows: Sequence[Sequence[TextFragment]],
    record_count: int,
    dpi: int = 144,
) -> Path:
    """
    Export the intermediate stages of one page.

    Args:
        page: Source PDF page
        page_num: Page number (0-indexed)
        output_dir: Debug output directory
        items: Raw text items
        fragments: Normalized fragments
        merged: Merged fragments
        rows: Reconstructed rows
        record_count: Records extracted from the page
        dpi: Overlay render DPI

    Returns:
        Path to the page JSON summary
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    n = page_num + 1

    write_raw_items_csv(output_dir / f"page_{n}_level_0.csv", items)
    write_fragments_csv(output_dir / f"page_{n}_level_1.csv", fragments)
    write_fragments_csv(output_dir / f"page_{n}_level_2.csv", merged)
    write_rows_csv(output_dir / f"page_{n}_level_3.csv", rows)

    cv2.imwrite(str(output_dir / f"page_{n}_unmerged.png"), render_overlay(page, fragments, dpi=dpi))
    cv2.imwrite(str(output_dir / f"page_{n}_merged.png"), render_overlay(page, merged, rows, dpi=dpi))

    page_json = {
        'page': n,
        'dpi': dpi,
        'timestamp': datetime.now().isoformat(),
        'counts': {
            'items': len(items),
            'fragments': len(fragments),
            'merged': len(merged),
            'rows': len(rows),
            'records': record_count,
        },
    }
    output_file = output_dir / f"page_{n}_page.json"
    with open(output_file, 'w') as f:
        json.dump(page_json, f, indent=2)

    return output_file
