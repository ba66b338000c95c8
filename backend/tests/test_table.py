import pytest

from motion_tracker.measurement import (
    CoordinateSystem,
    GraphType,
    MeasurementSession,
    Point2D,
    ScaleUnit,
    TableColumn,
    TrackedPoint,
    assemble_table,
    column_pairs,
)


def _calibrated(distance: float = 1.0) -> CoordinateSystem:
    return CoordinateSystem(
        scale_point1=Point2D(0.0, 0.0),
        scale_point2=Point2D(100.0, 0.0),
        scale_distance=distance,
    )


@pytest.fixture()
def accelerating_session() -> MeasurementSession:
    """x = t²/2 metres, sampled once per second, added out of frame order."""
    session = MeasurementSession(coordinates=_calibrated())
    for frame in [3, 0, 4, 1, 2]:
        session.points.add(frame, float(frame), frame * frame * 50.0, 0.0)
    return session


def test_rows_sorted_and_numbered(accelerating_session) -> None:
    rows = accelerating_session.table()
    assert [r.frame_number for r in rows] == [0, 1, 2, 3, 4]
    assert [r.row_number for r in rows] == [1, 2, 3, 4, 5]


def test_world_and_derivatives(accelerating_session) -> None:
    rows = accelerating_session.table()

    assert [r.world_x for r in rows] == pytest.approx([0.0, 0.5, 2.0, 4.5, 8.0])
    assert rows[0].vx is None and rows[4].vx is None
    assert [r.vx for r in rows[1:4]] == pytest.approx([1.0, 2.0, 3.0])
    assert rows[2].speed == pytest.approx(2.0)
    assert rows[2].ax == pytest.approx(1.0)
    assert rows[2].ay == pytest.approx(0.0)
    assert all(r.ax is None for i, r in enumerate(rows) if i != 2)


def test_uncalibrated_rows_are_kept_with_nulls() -> None:
    points = [
        TrackedPoint(id=str(i), frame_number=i, time=i * 0.1, pixel_x=10.0 * i, pixel_y=0.0)
        for i in range(4)
    ]
    rows = assemble_table(points, CoordinateSystem())

    assert len(rows) == 4
    for row in rows:
        assert row.world_x is None and row.world_y is None
        assert row.vx is None and row.vy is None and row.speed is None
        assert row.ax is None and row.ay is None
        assert row.pixel_x is not None


def test_recalibration_changes_only_derived_columns(accelerating_session) -> None:
    before = accelerating_session.table()
    points_before = accelerating_session.points.points

    accelerating_session.coordinates.set_scale_distance(2.0)
    accelerating_session.coordinates.set_rotation(90.0)
    after = accelerating_session.table()

    assert accelerating_session.points.points == points_before
    for old, new in zip(before, after):
        assert (new.id, new.frame_number, new.time, new.pixel_x, new.pixel_y) == \
            (old.id, old.frame_number, old.time, old.pixel_x, old.pixel_y)
    assert after[4].world_x == pytest.approx(0.0, abs=1e-9)
    assert after[4].world_y == pytest.approx(16.0)


def test_duplicate_times_never_borrow_derivatives() -> None:
    points = [
        TrackedPoint(id="a", frame_number=0, time=0.0, pixel_x=0.0, pixel_y=0.0),
        TrackedPoint(id="b", frame_number=1, time=1.0, pixel_x=100.0, pixel_y=0.0),
        TrackedPoint(id="c", frame_number=1, time=1.0, pixel_x=120.0, pixel_y=0.0),
        TrackedPoint(id="d", frame_number=2, time=2.0, pixel_x=200.0, pixel_y=0.0),
    ]
    rows = assemble_table(points, _calibrated())

    # Stable sort keeps b before c; b's neighbours a and c give a velocity
    assert [r.id for r in rows] == ["a", "b", "c", "d"]
    assert rows[1].vx == pytest.approx(1.2)
    assert rows[2].vx == pytest.approx(1.0)


def test_column_pairs_skip_nulls(accelerating_session) -> None:
    rows = accelerating_session.table()
    pairs = column_pairs(rows, TableColumn.TIME, TableColumn.VX)
    assert pairs == [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]


def test_regression_over_columns(accelerating_session) -> None:
    fit = accelerating_session.regression(TableColumn.TIME, TableColumn.VX)
    assert fit.slope == pytest.approx(1.0)
    assert fit.intercept == pytest.approx(0.0)
    assert fit.r_squared == pytest.approx(1.0)

    assert accelerating_session.regression(TableColumn.TIME, TableColumn.AX) is None


def test_graph_presets(accelerating_session) -> None:
    assert GraphType.Y_X.columns == (TableColumn.WORLD_X, TableColumn.WORLD_Y)
    assert GraphType("vx-t").display_name == "Velocity X vs Time"

    fit = accelerating_session.graph_regression(GraphType.Y_T)
    assert fit.slope == pytest.approx(0.0)
    assert fit.r_squared == 1.0


def test_column_labels_carry_unit() -> None:
    assert TableColumn.WORLD_X.label(ScaleUnit.CENTIMETER) == "x (cm)"
    assert TableColumn.AY.label(ScaleUnit.METER) == "ay (m/s²)"
    assert TableColumn.TIME.label(ScaleUnit.FOOT) == "t (s)"


def test_session_from_stored() -> None:
    stored = [TrackedPoint(id="p1", frame_number=0, time=0.0, pixel_x=50.0, pixel_y=0.0)]
    session = MeasurementSession.from_stored(
        {"scale_point1": {"x": 0, "y": 0}, "scale_point2": {"x": 0, "y": 50},
         "scale_distance": 0.5, "scale_unit": "cm"},
        stored,
    )

    assert session.coordinates.pixels_per_unit == pytest.approx(100.0)
    assert session.coordinates.scale_unit is ScaleUnit.CENTIMETER
    assert not session.points.can_undo
    assert session.table()[0].world_x == pytest.approx(0.5)
