"""
Text Fragment - Minimal geometric + text representation of a text run.

Coordinates are page units with the origin at the bottom-left corner of the
page; (x, y) is the bottom-left corner of the fragment.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass


# Bidi classes of strong right-to-left characters (Hebrew, Arabic, Syriac...)
_RTL_BIDI_CLASSES = {"R", "AL"}


@dataclass(frozen=True)
class TextFragment:
    value: str
    is_rtl: bool
    x: float
    y: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width


def spans_intersect(a: TextFragment, b: TextFragment) -> bool:
    """Whether the closed vertical spans [y, y + height] of two fragments meet."""
    if b.y <= a.y <= b.top:
        return True
    if a.y <= b.y <= a.top:
        return True
    return False


def rtl_char_ratio(text: str) -> float:
    if not text:
        return 0.0
    rtl = sum(1 for ch in text if unicodedata.bidirectional(ch) in _RTL_BIDI_CLASSES)
    return rtl / float(len(text))


def detect_direction(text: str, rtl_ratio: float = 0.3) -> str:
    """
    Classify a horizontal run as 'rtl' or 'ltr'.

    A run with no strong RTL characters is always 'ltr'; otherwise it is
    'rtl' once the RTL share reaches `rtl_ratio`.
    """
    ratio = rtl_char_ratio(text)
    if ratio <= 0.0:
        return "ltr"
    return "rtl" if ratio >= rtl_ratio else "ltr"
