"""
Fragment Merger - Re-join text runs the layout engine split apart

PDF producers frequently emit one word (especially right-to-left words) as
several runs on the same baseline. The downstream row grammar assumes one
fragment per visual token, so runs sharing an exact baseline, font size and
touching horizontally are folded back into one fragment.

Runs are walked left to right and each merged run's text is prepended, which
restores reading order for right-to-left runs emitted in increasing x.
"""

import re
from dataclasses import replace
from typing import Iterator, List, Sequence

from .settings import DEFAULT_MERGE_TOLERANCE_RATIO
from .text_fragment import TextFragment


# Student IDs are never merged into surrounding text.
_PROTECTED_RE = re.compile(r"[0-9]{5}")


def is_protected(fragment: TextFragment) -> bool:
    return _PROTECTED_RE.fullmatch(fragment.value) is not None


def iter_baseline_groups(fragments: Sequence[TextFragment]) -> Iterator[List[TextFragment]]:
    """
    Yield maximal runs of fragments sharing an identical y.

    Fragments are sorted ascending by (y, x) first, so each group comes out
    ordered left to right.
    """
    ordered = sorted(fragments, key=lambda f: (f.y, f.x))

    group: List[TextFragment] = []
    for fragment in ordered:
        if group and fragment.y != group[0].y:
            yield group
            group = []
        group.append(fragment)

    if group:
        yield group


def should_merge(left: TextFragment, right: TextFragment,
                 tolerance_ratio: float = DEFAULT_MERGE_TOLERANCE_RATIO) -> bool:
    """
    Decide whether `right` continues `left`.

    Args:
        left: Accumulated fragment (lower x)
        right: Candidate fragment (higher or equal x)
        tolerance_ratio: Allowed gap as a fraction of `left.height`
    """
    if left.height != right.height:
        return False
    if is_protected(left) or is_protected(right):
        return False

    tolerance = left.height * tolerance_ratio
    return right.x <= left.x + left.width + tolerance


def merge_pair(left: TextFragment, right: TextFragment) -> TextFragment:
    """Fold `right` into `left`, keeping left's anchor position."""
    return replace(
        left,
        value=right.value + left.value,
        is_rtl=left.is_rtl or right.is_rtl,
        width=right.x + right.width - left.x,
    )


def merge_close_fragments(fragments: Sequence[TextFragment],
                          tolerance_ratio: float = DEFAULT_MERGE_TOLERANCE_RATIO) -> List[TextFragment]:
    """
    Merge close fragments on the same baseline into single fragments.

    The input is left untouched. Output order follows baseline groups
    (ascending y) and, inside a group, ascending x.
    """
    merged: List[TextFragment] = []

    for group in iter_baseline_groups(fragments):
        current = group[0]
        for candidate in group[1:]:
            if should_merge(current, candidate, tolerance_ratio):
                current = merge_pair(current, candidate)
            else:
                merged.append(current)
                current = candidate
        merged.append(current)

    return merged
