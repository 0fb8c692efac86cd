"""Shared test fixtures."""

from __future__ import annotations

import math

import numpy as np
import pytest

from glyphnorm.utils.ellipse import ArcCenter


# Sample icons in a variety of source coordinate systems

GRID_48_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 48 48" fill="none" stroke="currentColor" stroke-width="4">
  <path d="M0 0L48 48"/>
</svg>'''

OFFSET_VIEWBOX_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="10 10 20 20">
  <path d="M20 20"/>
</svg>'''

PIXEL_SIZE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="48px" height="96px">
  <path d="M0 0H48V96z"/>
</svg>'''

NO_DIMENSIONS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <path d="M0 0L10 10"/>
</svg>'''

MIXED_PATHS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 48 48">
  <path d="M4 4L44 44" fill="red"/>
  <path d="M4 4L44" fill="blue"/>
</svg>'''

# Lucide "house" on a 48 grid: arcs, relative commands, shorthand H/V
HOME_48_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="48" height="48" viewBox="0 0 48 48" fill="none" stroke="currentColor" stroke-width="4" stroke-linecap="round">
  <!-- house -->
  <path d="M30 42v-16a2 2 0 0 0-2-2h-8a2 2 0 0 0-2 2v16"/>
  <path d="M6 20a4 4 0 0 1 1.418-3.056l14-11.998a4 4 0 0 1 5.164 0l14 11.998A4 4 0 0 1 42 20v18a4 4 0 0 1-4 4H10a4 4 0 0 1-4-4z"/>
  <circle cx="24" cy="30" r="2"/>
</svg>'''

SMILEY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
  <path d='M8 14s1.5 2 4 2 4-2 4-2'/>
  <path d="M9 9h.01"/>
  <path d="M15 9h.01"/>
</svg>'''


@pytest.fixture
def grid_48_svg() -> str:
    return GRID_48_SVG


@pytest.fixture
def home_48_svg() -> str:
    return HOME_48_SVG


@pytest.fixture
def mixed_paths_svg() -> str:
    return MIXED_PATHS_SVG


def arc_points(arc: ArcCenter, n: int = 32) -> np.ndarray:
    """n points along a center-parameterized arc, start to end, as an Nx2 array."""
    phi = math.radians(arc.rotation)
    thetas = arc.theta + arc.delta * np.linspace(0.0, 1.0, n)
    ex, ey = arc.rx * np.cos(thetas), arc.ry * np.sin(thetas)
    return np.column_stack([
        arc.cx + math.cos(phi) * ex - math.sin(phi) * ey,
        arc.cy + math.sin(phi) * ex + math.cos(phi) * ey,
    ])


def ellipse_residual(points: np.ndarray, cx: float, cy: float, rx: float, ry: float, rotation: float) -> np.ndarray:
    """|(u/rx)^2 + (v/ry)^2 - 1| per point, in the ellipse's own frame."""
    phi = math.radians(rotation)
    dx, dy = points[:, 0] - cx, points[:, 1] - cy
    u = math.cos(phi) * dx + math.sin(phi) * dy
    v = -math.sin(phi) * dx + math.cos(phi) * dy
    return np.abs((u / rx) ** 2 + (v / ry) ** 2 - 1.0)
