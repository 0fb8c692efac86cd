"""Elliptical arc geometry — endpoint/center conversion and conic transforms.

Arcs in path data use endpoint parameterization (start, end, radii, rotation,
two flags). Re-projecting an arc under a non-uniform scale needs the ellipse
itself, so this module converts to center parameterization and pushes the
ellipse's quadratic form through the linear map.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

# Eigenvalues closer than this (relative) are treated as a circle.
_CIRCLE_RTOL = 1e-9

# Radius-correction factor above 1 that is still floating-point noise
# (half-circle arcs land on exactly 1.0 in exact arithmetic).
_LAMBDA_EPS = 1e-12

# Axis ratio and scale ratio bound that keeps every conic entry below 1e300;
# past it the ellipse is scaled per axis like a zero-radius one.
_MIN_RATIO = 1e-75


@dataclass(frozen=True)
class ArcCenter:
    """Center parameterization of an elliptical arc (SVG implementation notes F.6.5)."""

    cx: float
    cy: float
    rx: float
    ry: float
    # Rotation of the ellipse x-axis, degrees
    rotation: float
    # Start angle and signed sweep, radians
    theta: float
    delta: float


def endpoint_to_center(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    rx: float,
    ry: float,
    rotation: float,
    large_arc: bool,
    sweep: bool,
) -> ArcCenter | None:
    """Convert an arc from endpoint to center parameterization.

    Radii too small to span the endpoints are scaled up the way SVG renderers
    do. Returns None for degenerate arcs (coincident endpoints or a zero
    radius), which render as nothing or as a straight line, and for arcs
    whose center cannot be represented in floating point.
    """
    if x1 == x2 and y1 == y2:
        return None
    rx, ry = abs(rx), abs(ry)
    if rx == 0 or ry == 0:
        return None

    phi = math.radians(rotation)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    # Step 1: midpoint in the ellipse-aligned frame
    dx2 = (x1 - x2) / 2.0
    dy2 = (y1 - y2) / 2.0
    x1p = cos_phi * dx2 + sin_phi * dy2
    y1p = -sin_phi * dx2 + cos_phi * dy2

    # Out-of-range radii
    ux, uy = x1p / rx, y1p / ry
    lam = ux * ux + uy * uy
    if not math.isfinite(lam):
        return None
    if lam > 1.0 + _LAMBDA_EPS:
        root = math.sqrt(lam)
        rx *= root
        ry *= root

    # Step 2: center in the aligned frame
    rx2, ry2 = rx * rx, ry * ry
    num = rx2 * ry2 - rx2 * y1p * y1p - ry2 * x1p * x1p
    den = rx2 * y1p * y1p + ry2 * x1p * x1p
    # Endpoints a subnormal distance apart underflow to a zero chord
    if den == 0 or not (math.isfinite(num) and math.isfinite(den)):
        return None
    coef = math.sqrt(max(num, 0.0) / den)
    if large_arc == sweep:
        coef = -coef
    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx

    # Step 3: back to user space
    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2.0
    if not (math.isfinite(cx) and math.isfinite(cy)):
        return None

    # Step 4: angles
    ux, uy = (x1p - cxp) / rx, (y1p - cyp) / ry
    vx, vy = (-x1p - cxp) / rx, (-y1p - cyp) / ry
    theta = math.atan2(uy, ux)
    delta = math.atan2(ux * vy - uy * vx, ux * vx + uy * vy)
    if sweep and delta < 0:
        delta += 2.0 * math.pi
    elif not sweep and delta > 0:
        delta -= 2.0 * math.pi

    return ArcCenter(cx=cx, cy=cy, rx=rx, ry=ry, rotation=rotation, theta=theta, delta=delta)


def scale_ellipse(
    rx: float,
    ry: float,
    rotation: float,
    scale_x: float,
    scale_y: float,
) -> tuple[float, float, float]:
    """Radii and rotation of an ellipse after the linear map diag(scale_x, scale_y).

    The ellipse is the conic p^T Q p = 1 with Q = R diag(1/rx^2, 1/ry^2) R^T.
    Under p' = M p it becomes Q' = M^-T Q M^-1, whose eigenvectors are the new
    principal axes and whose eigenvalues are 1/r'^2. The returned rotation
    follows the image of the original x-axis so it stays continuous with the
    input (unchanged for circles and for uniform scales).

    The conic is solved for the unit-major ellipse under diag(1, scale_y/|scale_x|)
    and the radii multiplied back, so very large or very small inputs stay in
    float range.
    """
    rx, ry = abs(rx), abs(ry)
    ax, ay = abs(scale_x), abs(scale_y)

    if rx == 0 or ry == 0:
        return rx * ax, ry * ay, rotation

    # Uniform scales and axis-aligned ellipses have exact answers
    if ax == ay:
        return rx * ax, ry * ax, rotation
    quarter_turns = rotation / 90.0
    if quarter_turns == int(quarter_turns):
        if int(quarter_turns) % 2 == 0:
            return rx * ax, ry * ay, rotation
        return rx * ay, ry * ax, rotation

    major = max(rx, ry)
    rx_n, ry_n = rx / major, ry / major
    ratio = scale_y / ax
    if min(rx_n, ry_n) < _MIN_RATIO or not _MIN_RATIO <= abs(ratio) <= 1.0 / _MIN_RATIO:
        return rx * ax, ry * ay, rotation

    phi = math.radians(rotation)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)
    rot = np.array([[cos_phi, -sin_phi], [sin_phi, cos_phi]])
    quad = rot @ np.diag([1.0 / (rx_n * rx_n), 1.0 / (ry_n * ry_n)]) @ rot.T
    inv = np.diag([math.copysign(1.0, scale_x), 1.0 / ratio])
    quad_t = inv.T @ quad @ inv

    eigvals, eigvecs = np.linalg.eigh(quad_t)
    radii = major * ax / np.sqrt(eigvals)
    if math.isclose(float(eigvals[0]), float(eigvals[1]), rel_tol=_CIRCLE_RTOL):
        r = float(radii[0])
        return r, r, rotation

    # Pick the principal axis nearest the image of the original x-axis
    image = np.array([math.copysign(cos_phi, scale_x), ratio * sin_phi])
    dots = eigvecs.T @ image
    k = int(np.argmax(np.abs(dots)))
    axis = eigvecs[:, k] if dots[k] >= 0 else -eigvecs[:, k]

    angle = math.degrees(math.atan2(float(axis[1]), float(axis[0])))
    angle += 360.0 * round((rotation - angle) / 360.0)
    return float(radii[k]), float(radii[1 - k]), angle
