"""
Row Reconstructor - Cluster fragments into table rows

Cells of one table row rarely share an exact baseline, so rows are built from
vertical span overlap instead: two fragments belong to the same row when
their spans [y, y + height] intersect, directly or through a chain of other
fragments in the row.

Rows are returned top to bottom, and each row right to left (rightmost
fragment first) to match right-to-left sheets where the student ID is the
rightmost cell.
"""

from typing import List, Sequence

from .text_fragment import TextFragment


Row = List[TextFragment]


def _cluster_by_vertical_overlap(fragments: Sequence[TextFragment]) -> List[Row]:
    """
    Connected components of the vertical-overlap relation.

    After a stable sort by bottom edge, a 1D interval component is a
    contiguous run: a fragment joins the open cluster iff its bottom edge does
    not rise above the highest top edge seen in that cluster.
    """
    ordered = sorted(fragments, key=lambda f: f.y)

    clusters: List[Row] = []
    current: Row = []
    reach = 0.0

    for fragment in ordered:
        if current and fragment.y <= reach:
            current.append(fragment)
            reach = max(reach, fragment.top)
            continue
        if current:
            clusters.append(current)
        current = [fragment]
        reach = fragment.top

    if current:
        clusters.append(current)

    return clusters


def group_into_rows(fragments: Sequence[TextFragment]) -> List[Row]:
    """
    Group fragments into table rows.

    Args:
        fragments: Merged fragments of one page, in any order

    Returns:
        Rows ordered top to bottom, each ordered by descending x
    """
    clusters = _cluster_by_vertical_overlap(fragments)
    clusters.sort(key=lambda row: max(f.top for f in row), reverse=True)
    return [sorted(row, key=lambda f: f.x, reverse=True) for row in clusters]
