"""
Fragment Normalizer - Filter raw text items down to usable TextFragments

Raw items come from the text layer (see text_layer.get_text_items) as dicts:

    {"str": "...", "dir": "ltr" | "rtl" | "ttb",
     "transform": [a, b, c, d, e, f], "width": w, "height": h}

Only horizontal, unskewed, visible, non-empty items are kept.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from .text_fragment import TextFragment


def _transform(item: Mapping) -> Optional[Sequence[float]]:
    transform = item.get("transform")
    if transform is None or len(transform) < 6:
        return None
    return transform


def is_usable_text_item(item: Mapping) -> bool:
    """
    Check whether a raw text item survives normalization.

    Rejects:
    - vertical ('ttb') runs
    - rotated or skewed runs (off-diagonal transform terms b, c non-zero)
    - empty strings
    - items placed at x == 0 or y == 0 (invisible placeholders)
    """
    if item.get("dir") == "ttb":
        return False

    transform = _transform(item)
    if transform is None:
        return False
    if transform[1] != 0 or transform[2] != 0:
        return False

    if not item.get("str"):
        return False

    return transform[4] != 0 and transform[5] != 0


def simplify_text_item(item: Mapping) -> TextFragment:
    """Map a single raw text item to a TextFragment (no filtering)."""
    transform = item["transform"]
    return TextFragment(
        value=str(item["str"]),
        is_rtl=item.get("dir") == "rtl",
        x=float(transform[4]),
        y=float(transform[5]),
        width=float(item.get("width") or 0.0),
        height=float(item.get("height") or 0.0),
    )


def filter_and_simplify_text_items(items: Sequence[Dict]) -> List[TextFragment]:
    """
    Filter and simplify the raw text items of one page.

    Args:
        items: Raw text items in layout-engine order

    Returns:
        New list of TextFragments, one per surviving item, same order
    """
    return [simplify_text_item(item) for item in items if is_usable_text_item(item)]
