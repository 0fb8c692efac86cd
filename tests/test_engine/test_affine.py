"""Tests for the affine path transformer."""

from __future__ import annotations

import numpy as np
import pytest
from svgpathtools import Arc

from glyphnorm.engine.affine import transform_path
from glyphnorm.engine.commands import CommandType
from glyphnorm.engine.geometry import SourceFrame, Transform
from glyphnorm.engine.path_parser import parse_path
from glyphnorm.errors import CoordinateOverflow, GlyphNormError
from tests.conftest import ellipse_residual


def _frame_transform(min_x, min_y, w, h, size=24) -> Transform:
    return Transform.from_frame(SourceFrame(min_x, min_y, w, h), size)


def _arc_samples(start: tuple[float, float], operands: tuple[float, ...], n: int = 200) -> np.ndarray:
    """Dense points along an arc, evaluated independently with svgpathtools."""
    rx, ry, rotation, large_arc, sweep, ex, ey = operands
    arc = Arc(complex(*start), complex(rx, ry), rotation, bool(large_arc), bool(sweep), complex(ex, ey))
    pts = [arc.point(t) for t in np.linspace(0.0, 1.0, n)]
    return np.array([[p.real, p.imag] for p in pts])


def _map(points: np.ndarray, t: Transform) -> np.ndarray:
    return np.column_stack([
        (points[:, 0] - t.translate_x) * t.scale_x,
        (points[:, 1] - t.translate_y) * t.scale_y,
    ])


class TestPairs:
    def test_scale_correctness(self):
        out = transform_path(parse_path("M0 0L48 48"), _frame_transform(0, 0, 48, 48))
        assert out[1].type is CommandType.LINE_TO
        assert out[1].operands == (24.0, 24.0)

    def test_origin_correctness(self):
        out = transform_path(parse_path("M20 20"), _frame_transform(10, 10, 20, 20))
        assert out[0].operands == pytest.approx((12.0, 12.0))

    def test_relative_pairs_are_only_scaled(self):
        t = Transform(scale_x=2.0, scale_y=3.0, translate_x=100.0, translate_y=100.0)
        out = transform_path(parse_path("M110 110l1 1c1 2 3 4 5 6"), t)
        assert out[0].operands == (20.0, 30.0)
        assert out[1].operands == (2.0, 3.0)
        assert out[2].operands == (2.0, 6.0, 6.0, 12.0, 10.0, 18.0)

    def test_absolute_curves_translate_every_pair(self):
        t = Transform(scale_x=0.5, scale_y=2.0, translate_x=2.0, translate_y=1.0)
        out = transform_path(parse_path("M2 1C4 3 6 5 8 7S10 11 12 13Q2 1 4 2T6 3"), t)
        assert out[1].operands == (1.0, 4.0, 2.0, 8.0, 3.0, 12.0)
        assert out[2].operands == (4.0, 20.0, 5.0, 24.0)
        assert out[3].operands == (0.0, 0.0, 1.0, 2.0)
        assert out[4].operands == (2.0, 4.0)

    def test_leading_relative_moveto_is_translated(self):
        t = _frame_transform(10, 10, 20, 20)
        out = transform_path(parse_path("m20 20l5 0zm5 5"), t)
        assert out[0].relative
        assert out[0].operands == pytest.approx((12.0, 12.0))
        assert out[1].operands == pytest.approx((6.0, 0.0))
        # Later relative movetos are displacements
        assert out[3].operands == pytest.approx((6.0, 6.0))

    def test_single_axis(self):
        t = Transform(scale_x=2.0, scale_y=0.5, translate_x=1.0, translate_y=4.0)
        out = transform_path(parse_path("M1 4H3h3V8v2"), t)
        assert [c.operands for c in out[1:]] == [(4.0,), (6.0,), (2.0,), (1.0,)]

    def test_structure_preserved(self):
        d = "M0 0L1 1H2V3C1 2 3 4 5 6S7 8 9 10Q1 2 3 4T5 6A5 5 0 1 0 10 10Zm1 1z"
        src = parse_path(d)
        out = transform_path(src, Transform(scale_x=0.3, scale_y=1.7, translate_x=-4.0, translate_y=2.5))
        assert len(out) == len(src)
        assert [(c.type, c.relative, len(c.operands)) for c in out] == [
            (c.type, c.relative, len(c.operands)) for c in src
        ]
        assert out[-3] == src[-3]  # Z
        assert out[-1] == src[-1]  # z

    def test_identity_is_exact(self):
        src = parse_path("M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0A2 2 0 0 1 15 3v9h-1.25z")
        assert transform_path(src, Transform()) == src

    def test_input_not_mutated(self):
        src = parse_path("M1 1L2 2")
        before = list(src)
        transform_path(src, Transform(scale_x=5.0, scale_y=5.0))
        assert src == before


class TestArcs:
    def test_circle_uniform_scale(self):
        out = transform_path(parse_path("M0 0A10 10 30 0 1 20 0"), Transform(scale_x=0.5, scale_y=0.5))
        rx, ry, rotation, large_arc, sweep, x, y = out[1].operands
        assert rx == pytest.approx(5.0)
        assert ry == pytest.approx(5.0)
        assert rotation == 30.0
        assert (large_arc, sweep) == (0.0, 1.0)
        assert (x, y) == (10.0, 0.0)

    def test_rotated_ellipse_uniform_scale_keeps_rotation(self):
        out = transform_path(parse_path("M0 0A8 4 120 1 0 6 3"), Transform(scale_x=3.0, scale_y=3.0))
        rx, ry, rotation = out[1].operands[:3]
        assert rotation == 120.0
        assert ry / rx == pytest.approx(0.5)

    def test_axis_aligned_anisotropic(self):
        out = transform_path(parse_path("M0 0A10 5 0 0 1 20 0"), Transform(scale_x=2.0, scale_y=0.5))
        assert out[1].operands == pytest.approx((20.0, 2.5, 0.0, 0.0, 1.0, 40.0, 0.0))

    @pytest.mark.parametrize(
        "d,transform",
        [
            ("M10 10A8 4 30 0 1 20 18", Transform(scale_x=1.5, scale_y=0.5, translate_x=2.0, translate_y=3.0)),
            ("M10 10A8 4 30 1 1 20 18", Transform(scale_x=0.25, scale_y=2.0)),
            ("M5 5a12 3 -50 0 0 10-4", Transform(scale_x=3.0, scale_y=0.7, translate_x=1.0)),
            ("M0 0A6 2 75 1 0 3 4", Transform(scale_x=-1.0, scale_y=1.0)),
            ("M0 0A6 2 75 0 1 3 4", Transform(scale_x=2.0, scale_y=-0.5, translate_y=5.0)),
            ("M0 0A6 2 75 0 1 3 4", Transform(scale_x=-2.0, scale_y=-0.5)),
        ],
    )
    def test_shape_preserved_under_transform(self, d, transform):
        src = parse_path(d)
        out = transform_path(src, transform)

        start = src[0].operands
        src_end = (start[0] + src[1].operands[5], start[1] + src[1].operands[6]) if src[1].relative else src[1].operands[5:]
        new_start = transform.apply_point(*start)
        new_ops = list(out[1].operands)
        if out[1].relative:
            new_ops[5] += new_start[0]
            new_ops[6] += new_start[1]

        original = _arc_samples(tuple(start), src[1].operands[:5] + tuple(src_end))
        expected = _map(original, transform)
        actual = _arc_samples(new_start, tuple(new_ops), n=2000)

        # Every mapped source point lies on the new ellipse...
        arc = Arc(complex(*new_start), complex(new_ops[0], new_ops[1]), new_ops[2],
                  bool(new_ops[3]), bool(new_ops[4]), complex(new_ops[5], new_ops[6]))
        residual = ellipse_residual(expected, arc.center.real, arc.center.imag,
                                    arc.radius.real, arc.radius.imag, arc.rotation)
        assert residual.max() < 1e-6

        # ...and on the same side of the chord as the new arc
        span = float(np.ptp(actual, axis=0).max())
        for point in expected[::10]:
            assert np.min(np.hypot(*(actual - point).T)) < 0.01 * span

    def test_sweep_flips_when_one_axis_mirrored(self):
        src = parse_path("M0 0A6 2 75 0 1 3 4")
        assert transform_path(src, Transform(scale_x=-1.0, scale_y=1.0))[1].operands[4] == 0.0
        assert transform_path(src, Transform(scale_x=-1.0, scale_y=-1.0))[1].operands[4] == 1.0
        assert transform_path(src, Transform(scale_x=1.0, scale_y=2.0))[1].operands[4] == 1.0

    def test_large_arc_flag_preserved(self):
        out = transform_path(parse_path("M0 0A6 2 75 1 0 3 4"), Transform(scale_x=-3.0, scale_y=0.2))
        assert out[1].operands[3] == 1.0

    def test_out_of_range_radii_are_corrected(self):
        out = transform_path(parse_path("M0 0A1 1 0 0 1 20 0"), Transform(scale_x=0.5, scale_y=0.5))
        assert out[1].operands[:2] == pytest.approx((5.0, 5.0))

    def test_zero_radius_arc(self):
        out = transform_path(parse_path("M0 0A0 5 0 0 1 20 0"), Transform(scale_x=2.0, scale_y=3.0))
        assert out[1].operands == (0.0, 15.0, 0.0, 0.0, 1.0, 40.0, 0.0)

    def test_arc_after_closepath_uses_subpath_start(self):
        # The arc starts back at (0, 0) after z, so its radii are in range and untouched
        out = transform_path(parse_path("M0 0L100 100zA10 10 0 0 1 20 0"), Transform())
        assert out[3].operands[:2] == (10.0, 10.0)

    def test_subnormal_chord_keeps_radii(self):
        out = transform_path(parse_path("M0 0A1 1 0 0 1 1e-200 0"), Transform(scale_x=0.5, scale_y=0.5))
        assert out[1].operands[:2] == (0.5, 0.5)
        assert out[1].operands[5] == pytest.approx(5e-201)


class TestOverflow:
    def test_scaled_coordinate_overflows(self):
        t = Transform(scale_x=2.4e301, scale_y=2.4e301)
        with pytest.raises(CoordinateOverflow, match="Command 0"):
            transform_path(parse_path("M1e10 1L2 2"), t)

    def test_relative_displacement_overflows(self):
        t = Transform(scale_x=1e300, scale_y=1.0)
        with pytest.raises(CoordinateOverflow, match=r"Command 1 \(h\)"):
            transform_path(parse_path("M0 0h1e10"), t)

    def test_arc_radius_overflows(self):
        t = Transform(scale_x=1e200, scale_y=1e200)
        with pytest.raises(CoordinateOverflow):
            transform_path(parse_path("M0 0A1e200 1e200 0 0 1 0 0"), t)

    def test_is_glyphnorm_error(self):
        assert issubclass(CoordinateOverflow, GlyphNormError)
