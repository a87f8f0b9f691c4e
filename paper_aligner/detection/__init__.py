"""
Sheet outline detection: boundary tracing, quadrilateral selection and
corner ordering.
"""

from paper_aligner.detection.contours import (
    find_boundaries,
    is_convex,
    perimeter,
    polygon_area,
    simplify_polygon,
)
from paper_aligner.detection.corner_ordering import order_corners
from paper_aligner.detection.quad_selector import (
    SelectionResult,
    detect_quadrilateral,
    reduce_to_quadrilateral,
    select_quadrilateral,
)

__all__ = [
    "find_boundaries",
    "perimeter",
    "polygon_area",
    "simplify_polygon",
    "is_convex",
    "SelectionResult",
    "select_quadrilateral",
    "detect_quadrilateral",
    "reduce_to_quadrilateral",
    "order_corners",
]
