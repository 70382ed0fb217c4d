"""Tests for the rectangle selection state machine."""

from unittest.mock import MagicMock

import pytest

from roiPicker.core.coordinate_mapper import PixelPoint
from roiPicker.core.display_metrics import ContainerGeometry, ImageDimensions
from roiPicker.core.selection import Rectangle, SelectionController, SelectionState


def drag(controller, start, end):
    controller.on_pointer_down(*start)
    controller.on_pointer_move(*end)
    controller.on_pointer_up()


def test_drag_produces_committed_selection_box(make_controller):
    controller = make_controller()

    drag(controller, (50, 50), (150, 120))

    assert controller.state is SelectionState.COMMITTED
    box = controller.committed_selection()
    assert (box.top, box.left, box.right, box.bottom) == (50, 50, 150, 120)
    assert (box.width, box.height) == (100, 70)
    assert box.normalized.top == pytest.approx(0.167, abs=1e-3)
    assert box.normalized.left == pytest.approx(0.167, abs=1e-3)
    assert box.normalized.right == pytest.approx(0.5)
    assert box.normalized.bottom == pytest.approx(0.4)


def test_drag_towards_origin_keeps_edges_ordered(make_controller):
    controller = make_controller()

    drag(controller, (150, 120), (50, 50))

    rect = controller.rectangle
    assert rect == Rectangle(50, 50, 150, 120)
    box = controller.committed_selection()
    assert (box.left, box.top, box.right, box.bottom) == (50, 50, 150, 120)


def test_selection_is_live_while_dragging(make_controller):
    controller = make_controller()

    controller.on_pointer_down(10, 10)
    controller.on_pointer_move(60, 40)

    assert controller.state is SelectionState.DRAGGING
    assert controller.committed_selection() is None
    live = controller.selection_box()
    assert (live.width, live.height) == (50, 30)


def test_repeated_move_is_idempotent(make_controller):
    controller = make_controller()
    controller.on_pointer_down(20, 30)

    controller.on_pointer_move(120, 90)
    first_rect = controller.rectangle
    first_box = controller.selection_box()
    for _ in range(5):
        controller.on_pointer_move(120, 90)

    assert controller.rectangle == first_rect
    assert controller.selection_box() == first_box


def test_click_without_drag_commits_empty_box(make_controller):
    controller = make_controller()

    controller.on_pointer_down(75, 75)
    controller.on_pointer_up()

    box = controller.committed_selection()
    assert controller.state is SelectionState.COMMITTED
    assert box.width == 0
    assert box.height == 0
    assert box.is_empty
    assert box.normalized.width == 0.0
    assert box.normalized.left == pytest.approx(0.25)


def test_pointer_down_ignored_outside_selection_mode(make_controller):
    controller = make_controller(selecting=False)

    assert controller.on_pointer_down(50, 50) is False
    controller.on_pointer_move(100, 100)

    assert controller.state is SelectionState.IDLE
    assert controller.rectangle is None


def test_pointer_down_in_letterbox_keeps_previous_selection(make_controller):
    controller = make_controller(image=(1000, 500), container=(400, 400))
    drag(controller, (50, 150), (100, 200))
    before = controller.committed_selection()

    assert controller.on_pointer_down(50, 20) is False

    assert controller.state is SelectionState.COMMITTED
    assert controller.committed_selection() == before


def test_pointer_down_without_image_is_ignored():
    controller = SelectionController()
    controller.set_container(ContainerGeometry(400, 300))
    controller.enter_selection_mode()

    assert controller.on_pointer_down(10, 10) is False
    assert controller.state is SelectionState.IDLE


def test_new_drag_replaces_committed_rectangle(make_controller):
    controller = make_controller()
    drag(controller, (10, 10), (100, 100))

    controller.on_pointer_down(200, 200)

    assert controller.state is SelectionState.DRAGGING
    assert controller.rectangle == Rectangle(200, 200, 200, 200)


def test_drag_past_image_edge_is_clamped(make_controller):
    controller = make_controller()

    drag(controller, (50, 50), (1000, -100))

    assert controller.rectangle == Rectangle(50, 0, 300, 50)
    box = controller.committed_selection()
    assert (box.left, box.top, box.right, box.bottom) == (50, 0, 299, 50)


def test_drag_in_letterboxed_surface_maps_to_image_space(make_controller):
    controller = make_controller(image=(1000, 500), container=(400, 400))

    drag(controller, (40, 120), (200, 260))

    box = controller.committed_selection()
    assert (box.left, box.top, box.right, box.bottom) == (100, 50, 500, 400)
    assert box.normalized.right == pytest.approx(0.5)
    assert box.normalized.bottom == pytest.approx(0.8)


def test_pointer_leave_finalizes_drag(make_controller):
    controller = make_controller()
    controller.on_pointer_down(10, 10)
    controller.on_pointer_move(50, 50)

    controller.on_pointer_leave()

    assert controller.state is SelectionState.COMMITTED
    assert controller.committed_selection().width == 40
    assert controller.hover is None


def test_moves_after_commit_do_not_change_rectangle(make_controller):
    controller = make_controller()
    drag(controller, (10, 10), (50, 50))

    controller.on_pointer_move(250, 250)

    assert controller.rectangle == Rectangle(10, 10, 50, 50)


def test_pointer_up_when_idle_is_noop(make_controller):
    controller = make_controller()

    controller.on_pointer_up()
    controller.on_pointer_leave()

    assert controller.state is SelectionState.IDLE


def test_clear_returns_to_idle(make_controller):
    controller = make_controller()
    drag(controller, (10, 10), (50, 50))

    controller.clear()

    assert controller.state is SelectionState.IDLE
    assert controller.rectangle is None
    assert controller.committed_selection() is None
    assert controller.selection_box() is None


def test_exit_selection_mode_discards_rectangle(make_controller):
    controller = make_controller()
    controller.on_pointer_down(10, 10)
    controller.on_pointer_move(40, 40)

    controller.exit_selection_mode()

    assert not controller.is_selection_mode()
    assert controller.state is SelectionState.IDLE
    assert controller.rectangle is None
    assert controller.on_pointer_down(10, 10) is False


def test_hover_reading_tracks_pointer_in_any_mode(make_controller):
    controller = make_controller(image=(800, 600), container=(400, 300), selecting=False)

    controller.on_pointer_move(100, 150)

    hover = controller.hover
    assert hover.within_bounds
    assert hover.pixel == PixelPoint(200, 300)
    assert hover.normalized.x == pytest.approx(0.25)
    assert hover.normalized.y == pytest.approx(0.5)


def test_hover_outside_rendered_area(make_controller):
    controller = make_controller(image=(1000, 500), container=(400, 400), selecting=False)

    controller.on_pointer_move(200, 20)

    assert controller.hover.within_bounds is False
    assert controller.hover.pixel is None


def test_callbacks_receive_selection_updates(make_controller):
    on_selection = MagicMock()
    on_hover = MagicMock()
    controller = make_controller(
        on_selection_changed=on_selection,
        on_hover_changed=on_hover,
    )

    drag(controller, (50, 50), (150, 120))
    controller.clear()

    boxes = [call.args[0] for call in on_selection.call_args_list]
    assert boxes[0].width == 0
    assert boxes[-2].width == 100
    assert boxes[-1] is None
    on_hover.assert_called()


def test_new_image_resets_selection(make_controller):
    controller = make_controller()
    drag(controller, (10, 10), (50, 50))

    controller.set_image(ImageDimensions(640, 480))

    assert controller.state is SelectionState.IDLE
    assert controller.rectangle is None
    assert controller.is_selection_mode()


def test_resize_keeps_selected_image_region(make_controller):
    controller = make_controller()
    drag(controller, (50, 50), (150, 120))
    before = controller.committed_selection()

    controller.set_container(ContainerGeometry(600, 600))

    assert controller.rectangle == Rectangle(100, 100, 300, 240)
    assert controller.committed_selection() == before


def test_resize_to_letterboxed_surface_keeps_region(make_controller):
    controller = make_controller()
    drag(controller, (30, 60), (240, 180))
    before = controller.committed_selection()

    controller.set_container(ContainerGeometry(900, 450))

    metrics = controller.metrics
    assert metrics.offset_x == pytest.approx(225)
    assert controller.committed_selection() == before
