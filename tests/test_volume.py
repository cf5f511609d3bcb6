import pytest

from dungeon_bsp.generators.bsp import SplitAxis, Volume


def test_center_extents_round_trip():
    v = Volume.from_center_extents((1.0, 2.0, 3.0), (4.0, 5.0, 6.0))
    assert v.minimum == (-3.0, -3.0, -3.0)
    assert v.maximum == (5.0, 7.0, 9.0)
    assert v.center == (1.0, 2.0, 3.0)
    assert v.extents == (4.0, 5.0, 6.0)
    assert v.size == (8.0, 10.0, 12.0)
    assert v.volume == pytest.approx(960.0)


def test_from_center_size():
    v = Volume.from_center_size((0.0, 0.0, 0.0), (2.0, 4.0, 6.0))
    assert v.extents == (1.0, 2.0, 3.0)


def test_inverted_corners_rejected():
    with pytest.raises(ValueError):
        Volume((1.0, 0.0, 0.0), (0.0, 1.0, 1.0))


def test_aspect_ratio_is_width_over_depth():
    v = Volume((0.0, 0.0, 0.0), (10.0, 1.0, 2.0))
    assert v.aspect_ratio == pytest.approx(5.0)


def test_union_is_order_independent():
    a = Volume((-10.0, 0.0, -3.0), (4.0, 2.0, 1.0))
    b = Volume((-2.0, -1.0, 0.0), (12.0, 1.0, 8.0))
    assert a.union(b) == b.union(a)
    assert a.union(b) == Volume((-10.0, -1.0, -3.0), (12.0, 2.0, 8.0))


def test_overlap_excludes_touching_faces():
    a = Volume((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    touching = Volume((1.0, 0.0, 0.0), (2.0, 1.0, 1.0))
    crossing = Volume((0.5, 0.5, 0.5), (2.0, 2.0, 2.0))
    assert not a.overlaps(touching)
    assert a.overlaps(crossing)


def test_contains():
    outer = Volume((0.0, 0.0, 0.0), (10.0, 10.0, 10.0))
    assert outer.contains(Volume((1.0, 1.0, 1.0), (9.0, 10.0, 9.0)))
    assert not outer.contains(Volume((1.0, 1.0, 1.0), (11.0, 9.0, 9.0)))
    assert outer.contains_point((10.0, 0.0, 5.0))
    assert not outer.contains_point((10.5, 0.0, 5.0))


@pytest.mark.parametrize("axis", [SplitAxis.X, SplitAxis.Z])
def test_halve_reconstructs_volume(axis):
    cell = Volume.from_center_extents((3.0, 0.0, -7.0), (25.0, 5.0, 12.5))
    lower, upper = cell.halve(axis)

    assert not lower.overlaps(upper)
    assert lower.union(upper) == cell
    assert lower.volume + upper.volume == pytest.approx(cell.volume)
    assert lower.maximum[axis.value] == upper.minimum[axis.value]
    # Only the chosen axis changes
    other = axis.perpendicular.value
    assert lower.interval(other) == cell.interval(other)
    assert lower.interval(1) == cell.interval(1)


def test_split_axis_helpers():
    assert SplitAxis.X.perpendicular is SplitAxis.Z
    assert SplitAxis.Z.perpendicular is SplitAxis.X
    assert SplitAxis.X.unit() == (1.0, 0.0, 0.0)
    assert SplitAxis.Z.unit(-1.0) == (0.0, 0.0, -1.0)
