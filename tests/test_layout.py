import pytest

from drawguess.layout import (
    LAYOUT_30_45,
    LAYOUT_40_220,
    LAYOUT_40_90,
    LAYOUT_45_110,
    LAYOUT_450_450,
    LayoutSpec,
    Rect,
)

ALL_SPECS = [LAYOUT_30_45, LAYOUT_40_220, LAYOUT_40_90, LAYOUT_45_110, LAYOUT_450_450]


def test_base_window_gives_nominal_geometry():
    assert LAYOUT_450_450.place(800, 600, 20, 60) == Rect(20, 60, 450, 450)
    assert LAYOUT_45_110.place(800, 500, 350, 300) == Rect(350, 300, 110, 45)
    assert LAYOUT_40_220.place(400, 300, 100, 10) == Rect(100, 10, 220, 40)


@pytest.mark.parametrize("spec", ALL_SPECS)
def test_doubling_window_doubles_geometry(spec):
    base = spec.place(spec.base_width, spec.base_height, 20, 60)
    big = spec.place(spec.base_width * 2, spec.base_height * 2, 20, 60)
    assert big == Rect(base.x * 2, base.y * 2, base.width * 2, base.height * 2)


def test_axes_scale_independently():
    wide = LAYOUT_40_90.place(1600, 600, 20, 525)
    base = LAYOUT_40_90.place(800, 600, 20, 525)
    assert wide.height == base.height
    assert wide.y == base.y
    assert wide.width == base.width * 2


def test_fractional_sizes_are_truncated():
    assert LAYOUT_30_45.place(799, 599, 0, 0).height == 29


def test_invalid_base_size():
    with pytest.raises(ValueError):
        LayoutSpec(width=10, height=10, base_width=0, base_height=600)