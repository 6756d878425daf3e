from PySide6.QtCore import QPointF
from PySide6.QtWidgets import QGraphicsScene

from models.geometry import Point2D
from models.path_model import Path, edit_waypoint
from models.spline import SplineKind
from tests.conftest import make_waypoint
from ui.canvas.constants import SUBCHILD_COLORS
from ui.canvas.items.splines import SplineCurveItem, SplineGroup
from ui.canvas.view import PathCanvasView


def _curve_items(scene):
    return [item for item in scene.items() if isinstance(item, SplineCurveItem)]


def test_group_tracks_path_splines(qapp, three_point_path: Path):
    scene = QGraphicsScene()
    group = SplineGroup(scene)

    three_point_path.add_to_group(group, 0.1)
    assert len(_curve_items(scene)) == 2

    three_point_path.insert_after(0)
    assert len(_curve_items(scene)) == 3

    three_point_path.remove_waypoint(three_point_path.waypoints[1])
    three_point_path.remove_waypoint(three_point_path.waypoints[1])
    assert len(_curve_items(scene)) == 1

    three_point_path.remove_from_group(group)
    assert _curve_items(scene) == []


def test_curve_item_follows_waypoint_edits(qapp, straight_path: Path):
    scene = QGraphicsScene()
    group = SplineGroup(scene)
    straight_path.add_to_group(group)
    item = group.item_for(straight_path.splines[0])

    edit_waypoint(straight_path.waypoints[1], position=(10.0, 4.0))

    painter_path = item.path()
    assert painter_path.elementCount() == 4
    end = painter_path.elementAt(3)
    assert (end.x, end.y) == (10.0, 4.0)
    control2 = painter_path.elementAt(2)
    assert (control2.x, control2.y) == (8.0, 4.0)


def test_subchild_selector_restyles_curve(qapp, straight_path: Path):
    scene = QGraphicsScene()
    group = SplineGroup(scene)
    straight_path.add_to_group(group, 0.2)
    spline = straight_path.splines[0]

    spline.enable_subchild_selector(3)

    pen = group.item_for(spline).pen()
    assert pen.color() == SUBCHILD_COLORS[3]
    assert pen.widthF() == 0.2


def test_swapping_spline_renders_active_child(qapp):
    scene = QGraphicsScene()
    group = SplineGroup(scene)
    path = Path(
        [make_waypoint(0, 0, 3, 0), make_waypoint(10, 0, 3, 0)],
        spline_kind=SplineKind.SWAPPING,
    )
    path.add_to_group(group)
    composite = path.splines[0]

    assert group.item_for(composite.quick_spline) is not None
    composite.use_full()
    assert group.item_for(composite.quick_spline) is None
    assert group.item_for(composite.full_spline) is not None
    assert len(_curve_items(scene)) == 1


def test_canvas_view_maps_field_coordinates(qapp, straight_path: Path):
    view = PathCanvasView(field_length_m=16.0, field_width_m=8.0)
    view.set_path(straight_path)

    assert view._scene_from_model(1.0, 2.0) == QPointF(1.0, 6.0)
    assert view._model_from_scene(1.0, 6.0) == (1.0, 2.0)
    assert len(view.waypoint_items()) == 2
    assert straight_path.selection is view.selection


def test_canvas_live_drag_edits_model(qapp, straight_path: Path):
    view = PathCanvasView(field_length_m=16.0, field_width_m=8.0)
    view.set_path(straight_path)
    b = straight_path.waypoints[1]

    view.item_for(b).setPos(view._scene_from_model(12.0, 3.0))

    assert b.position == Point2D(12.0, 3.0)
    assert straight_path.splines[0].point_at(1.0) == Point2D(12.0, 3.0)


def test_canvas_delete_and_reverse(qapp, three_point_path: Path):
    view = PathCanvasView()
    view.set_path(three_point_path)
    rejected = []
    view.editRejected.connect(rejected.append)
    a, b, c = three_point_path.waypoints

    view._on_waypoint_clicked(b)
    view.delete_selected_waypoint()
    assert three_point_path.waypoints == (a, c)
    assert len(view.waypoint_items()) == 2

    view.reverse_path()
    assert three_point_path.waypoints == (c, a)
    assert rejected == []


def test_canvas_reports_rejected_removal(qapp):
    wp = make_waypoint(1.0, 1.0)
    path = Path([wp])
    view = PathCanvasView()
    view.set_path(path)
    rejected = []
    view.editRejected.connect(rejected.append)

    view._on_waypoint_clicked(wp)
    view.delete_selected_waypoint()

    assert path.waypoints == (wp,)
    assert len(rejected) == 1


def test_double_click_on_spline_inserts_and_selects(qapp, straight_path: Path):
    view = PathCanvasView()
    view.set_path(straight_path)

    view.spline_group.spline_activated(straight_path.splines[0])

    assert len(straight_path.waypoints) == 3
    assert view.selection.current_waypoint is straight_path.waypoints[1]
    assert len(view.waypoint_items()) == 3
