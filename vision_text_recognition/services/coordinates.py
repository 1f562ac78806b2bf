"""
Conversion of backend-native boxes into normalized top-left boxes
"""
from collections.abc import Sequence
from numbers import Real
from typing import Optional, Tuple

from vision_text_recognition.core.enums import CoordinateUnits, OriginConvention
from vision_text_recognition.models.domain import BoundingBox

NativeBox = Tuple[float, float, float, float]  # x, y, width, height


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def normalize_box(
    native_box: NativeBox,
    origin: OriginConvention = OriginConvention.TOP_LEFT,
    units: CoordinateUnits = CoordinateUnits.NORMALIZED,
    reference_dims: Tuple[int, int] = (1, 1),
    clamp: bool = True,
) -> BoundingBox:
    """
    Convert a native box into fractions of the image, top-left origin

    Args:
        native_box: (x, y, width, height) as reported by the backend
        origin: Origin convention of the backend
        units: Pixels or fractions of the image size
        reference_dims: Image (width, height), used for pixel boxes
        clamp: Keep every value inside [0, 1]

    Returns:
        BoundingBox in the canonical coordinate system

    Raises:
        ValueError: Pixel box with a non-positive reference dimension
    """
    x, y, width, height = (float(v) for v in native_box)

    if units == CoordinateUnits.PIXELS:
        ref_width, ref_height = reference_dims
        if ref_width <= 0 or ref_height <= 0:
            raise ValueError(f"Invalid reference dimensions: {reference_dims}")
        x, width = x / ref_width, width / ref_width
        y, height = y / ref_height, height / ref_height

    if origin == OriginConvention.BOTTOM_LEFT:
        y = 1.0 - y - height

    if clamp:
        x, y = _clamp(x), _clamp(y)
        width, height = _clamp(width), _clamp(height)
        # in-range boxes must come back bit-for-bit
        if x + width > 1.0:
            width = 1.0 - x
        if y + height > 1.0:
            height = 1.0 - y

    return BoundingBox(x=x, y=y, width=width, height=height)


def polygon_to_box(points: object) -> Optional[NativeBox]:
    """
    Reduce a polygon or a corner box to (x, y, width, height)

    Accepts quadrilaterals like [[x1, y1], ..., [x4, y4]] (numpy arrays
    too) and flat [x0, y0, x1, y1] boxes. Returns None for anything else.
    """
    tolist = getattr(points, "tolist", None)
    if callable(tolist):
        points = tolist()

    if isinstance(points, (str, bytes)) or not isinstance(points, Sequence) or not points:
        return None

    if all(isinstance(v, Real) for v in points):
        if len(points) != 4:
            return None
        x0, y0, x1, y1 = (float(v) for v in points)
        xs, ys = [x0, x1], [y0, y1]
    else:
        xs, ys = [], []
        for point in points:
            point_tolist = getattr(point, "tolist", None)
            if callable(point_tolist):
                point = point_tolist()
            if isinstance(point, (str, bytes)) or not isinstance(point, Sequence) or len(point) < 2:
                return None
            xs.append(float(point[0]))
            ys.append(float(point[1]))

    left, top = min(xs), min(ys)
    return left, top, max(xs) - left, max(ys) - top
