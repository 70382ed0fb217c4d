"""Tests for pointer/image coordinate conversion."""

import pytest

from roiPicker.core.coordinate_mapper import CoordinateMapper, PixelPoint
from roiPicker.core.display_metrics import (
    ContainerGeometry,
    ImageDimensions,
    compute_display_metrics,
)


def make_mapper(image, container) -> CoordinateMapper:
    dims = ImageDimensions(*image)
    return CoordinateMapper(dims, compute_display_metrics(dims, ContainerGeometry(*container)))


@pytest.fixture
def uniform_mapper():
    return make_mapper((800, 600), (400, 300))


@pytest.fixture
def letterboxed_mapper():
    return make_mapper((1000, 500), (400, 400))


def test_pointer_maps_to_pixel_and_normalized(uniform_mapper):
    pixel = uniform_mapper.to_image_point(100, 150)
    normalized = uniform_mapper.to_normalized_point(pixel)

    assert pixel == PixelPoint(200, 300)
    assert normalized.x == pytest.approx(0.25)
    assert normalized.y == pytest.approx(0.5)


def test_letterbox_offset_is_subtracted(letterboxed_mapper):
    assert letterboxed_mapper.to_image_point(50, 100) == PixelPoint(125, 0)


def test_far_edge_is_clamped_to_last_pixel(uniform_mapper):
    assert uniform_mapper.to_image_point(400, 300) == PixelPoint(799, 599)


@pytest.mark.parametrize(
    "pointer",
    [
        (-1e9, -1e9),
        (1e9, 1e9),
        (-5, 250),
        (250, 10_000),
        (float("-inf"), 0),
        (0, float("inf")),
    ],
)
def test_out_of_bounds_pointer_is_clamped_into_image(letterboxed_mapper, pointer):
    pixel = letterboxed_mapper.to_image_point(*pointer)

    assert 0 <= pixel.x <= 999
    assert 0 <= pixel.y <= 499


def test_within_rendered_bounds_excludes_letterbox(letterboxed_mapper):
    assert letterboxed_mapper.is_within_rendered_bounds(50, 100)
    assert letterboxed_mapper.is_within_rendered_bounds(400, 300)
    assert not letterboxed_mapper.is_within_rendered_bounds(50, 50)
    assert not letterboxed_mapper.is_within_rendered_bounds(50, 300.5)
    assert not letterboxed_mapper.is_within_rendered_bounds(-0.1, 200)


def test_clamp_to_rendered_returns_relative_position(letterboxed_mapper):
    assert letterboxed_mapper.clamp_to_rendered(50, 150) == (50, 50)
    assert letterboxed_mapper.clamp_to_rendered(-20, 20) == (0, 0)
    assert letterboxed_mapper.clamp_to_rendered(500, 500) == (400, 200)


def test_rounding_is_half_up():
    mapper = make_mapper((10, 10), (20, 20))

    assert mapper.to_image_point(5, 3) == PixelPoint(3, 2)


def test_to_display_point_inverts_projection(letterboxed_mapper):
    point = letterboxed_mapper.to_display_point(125, 0)

    assert point.x == pytest.approx(50)
    assert point.y == pytest.approx(100)


@pytest.mark.parametrize(
    "image, container",
    [((1000, 500), (400, 400)), ((640, 480), (1024, 700)), ((333, 777), (512, 512))],
)
def test_display_round_trip_within_one_source_pixel(image, container):
    mapper = make_mapper(image, container)
    metrics = mapper.metrics
    pixel_width = metrics.rendered_width / image[0]
    pixel_height = metrics.rendered_height / image[1]

    steps = 17
    for i in range(steps + 1):
        for j in range(steps + 1):
            px = metrics.offset_x + metrics.rendered_width * i / steps
            py = metrics.offset_y + metrics.rendered_height * j / steps
            back = mapper.to_display_point(*_as_tuple(mapper.to_image_point(px, py)))
            assert abs(back.x - px) <= pixel_width + 1e-9
            assert abs(back.y - py) <= pixel_height + 1e-9


def _as_tuple(point: PixelPoint) -> tuple[int, int]:
    return point.x, point.y


def test_missing_image_maps_to_origin():
    mapper = make_mapper((0, 0), (400, 300))

    pixel = mapper.to_image_point(120, 80)
    normalized = mapper.to_normalized_point(pixel)

    assert pixel == PixelPoint(0, 0)
    assert normalized.x == 0.0
    assert normalized.y == 0.0


def test_collapsed_container_never_divides_by_zero():
    mapper = make_mapper((800, 600), (0, 0))

    assert mapper.to_image_point(10, 10) == PixelPoint(0, 0)
    point = mapper.to_display_point(100, 100)
    assert (point.x, point.y) == (0.0, 0.0)
