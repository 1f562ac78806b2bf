import numpy as np
import pytest

from vision_text_recognition.core.enums import CoordinateUnits, OriginConvention
from vision_text_recognition.services.coordinates import normalize_box, polygon_to_box


def test_bottom_left_origin_is_flipped() -> None:
    box = normalize_box(
        (0.2, 0.1, 0.3, 0.2),
        origin=OriginConvention.BOTTOM_LEFT,
        units=CoordinateUnits.NORMALIZED,
        reference_dims=(1, 1),
    )

    assert box.x == pytest.approx(0.2)
    assert box.y == pytest.approx(0.7)
    assert box.width == pytest.approx(0.3)
    assert box.height == pytest.approx(0.2)


def test_pixel_boxes_are_divided_by_image_size() -> None:
    box = normalize_box(
        (20, 10, 60, 20),
        origin=OriginConvention.TOP_LEFT,
        units=CoordinateUnits.PIXELS,
        reference_dims=(200, 100),
    )

    assert (box.x, box.y, box.width, box.height) == pytest.approx((0.1, 0.1, 0.3, 0.2))


def test_pixel_boxes_with_bottom_left_origin() -> None:
    box = normalize_box(
        (20, 10, 60, 20),
        origin=OriginConvention.BOTTOM_LEFT,
        units=CoordinateUnits.PIXELS,
        reference_dims=(200, 100),
    )

    assert box.y == pytest.approx(0.7)


@pytest.mark.parametrize(
    "native",
    [(0.0, 0.0, 1.0, 1.0), (0.25, 0.5, 0.5, 0.25), (0.1, 0.2, 0.3, 0.4), (1.0, 1.0, 0.0, 0.0)],
)
def test_top_left_normalized_box_is_unchanged(native: tuple) -> None:
    box = normalize_box(native)

    assert (box.x, box.y, box.width, box.height) == native


def test_in_range_boxes_are_returned_exactly() -> None:
    steps = [i / 100 for i in range(101)]
    changed = []
    for x in steps:
        for width in steps:
            if x + width > 1.0:
                continue
            box = normalize_box((x, x, width, width))
            if (box.x, box.y, box.width, box.height) != (x, x, width, width):
                changed.append((x, width))

    assert changed == []


def test_out_of_range_values_are_clamped() -> None:
    box = normalize_box(
        (180, 90, 50, 30),
        units=CoordinateUnits.PIXELS,
        reference_dims=(200, 100),
    )

    assert box.x == pytest.approx(0.9)
    assert box.y == pytest.approx(0.9)
    assert box.width == pytest.approx(0.1)
    assert box.height == pytest.approx(0.1)


def test_negative_values_are_clamped() -> None:
    box = normalize_box((-0.2, -0.1, 0.5, 0.5))

    assert box.x == 0.0
    assert box.y == 0.0
    assert box.width == pytest.approx(0.5)


def test_clamping_can_be_disabled() -> None:
    box = normalize_box(
        (180, 90, 50, 30),
        units=CoordinateUnits.PIXELS,
        reference_dims=(200, 100),
        clamp=False,
    )

    assert box.width == pytest.approx(0.25)
    assert box.height == pytest.approx(0.3)


def test_pixel_boxes_need_positive_reference_dims() -> None:
    with pytest.raises(ValueError):
        normalize_box((1, 1, 1, 1), units=CoordinateUnits.PIXELS, reference_dims=(0, 100))


def test_polygon_to_box_from_quadrilateral() -> None:
    assert polygon_to_box([[10, 20], [50, 22], [52, 40], [8, 38]]) == (8.0, 20.0, 44.0, 20.0)


def test_polygon_to_box_from_numpy_points() -> None:
    points = [np.array([10, 10]), np.array([30, 10]), np.array([30, 20]), np.array([10, 20])]

    assert polygon_to_box(points) == (10.0, 10.0, 20.0, 10.0)
    assert polygon_to_box(np.array(points)) == (10.0, 10.0, 20.0, 10.0)


def test_polygon_to_box_from_corner_box() -> None:
    assert polygon_to_box([40, 30, 10, 5]) == (10.0, 5.0, 30.0, 25.0)


@pytest.mark.parametrize("value", [None, "box", [], [1, 2, 3], [[1], [2]], 42])
def test_polygon_to_box_rejects_garbage(value: object) -> None:
    assert polygon_to_box(value) is None
