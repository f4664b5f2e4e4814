"""2D geometry kernel: points, sizes, rectangles, transforms and decidegree math.

Lengths are in board native units (mils); angles are integer decidegrees
(1/10 degree, 3600 per turn). Operations that move points return new values;
the only in-place operations are ``Rect.normalize`` and ``Rect.inflate``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .constants import FULL_CIRCLE
from .exceptions import InvalidTransformError

# ── Angles ─────────────────────────────────────────────────────────


def decideg_to_rad(angle: float) -> float:
    """Convert decidegrees to radians."""
    return angle * math.pi / 1800


def rad_to_decideg(rad: float) -> float:
    """Convert radians to decidegrees."""
    return rad * 1800 / math.pi


def normalize_angle_pos(angle: float) -> float:
    """Normalize an angle into ``[0, 3600)``."""
    angle = angle % FULL_CIRCLE
    # float modulo can round up to the modulus for tiny negative inputs
    if angle >= FULL_CIRCLE:
        angle -= FULL_CIRCLE
    return angle


def add_angles(angle1: float, angle2: float) -> float:
    """Add two angles and normalize the result."""
    return normalize_angle_pos(angle1 + angle2)


def arc_tangente(dy: float, dx: float) -> float:
    """Return the angle of vector ``(dx, dy)`` in decidegrees.

    Axis-aligned and 45 degree diagonal directions are answered exactly so
    that rotated geometry does not pick up trigonometric drift.
    """
    if dx == 0 and dy == 0:
        return 0

    if dy == 0:
        return 0 if dx >= 0 else -1800

    if dx == 0:
        return 900 if dy >= 0 else -900

    if dx == dy:
        return 450 if dx >= 0 else -1800 + 450

    if dx == -dy:
        return -450 if dx >= 0 else 1800 - 450

    return rad_to_decideg(math.atan2(dy, dx))


def mm_to_mil(mm: float) -> float:
    return mm / 0.0254


def mil_to_mm(mil: float) -> float:
    return mil * 0.0254


def clamp(lower: float, value: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``, checking the lower bound first."""
    if value < lower:
        return lower
    if upper < value:
        return upper
    return value


# ── Value types ────────────────────────────────────────────────────


@dataclass
class Point:
    """2D coordinate in board units."""

    x: float = 0
    y: float = 0

    def copy(self) -> Point:
        return Point(self.x, self.y)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}


@dataclass
class Size:
    """Width/height pair in board units."""

    width: float = 0
    height: float = 0

    def copy(self) -> Size:
        return Size(self.width, self.height)

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height}


class Rect:
    """Rectangle spanned by two corners, not necessarily ordered."""

    def __init__(self, pos1x: float, pos1y: float, pos2x: float, pos2y: float) -> None:
        self.pos1 = Point(pos1x, pos1y)
        self.pos2 = Point(pos2x, pos2y)

    def __repr__(self) -> str:
        return f"Rect({self.pos1.x}, {self.pos1.y}, {self.pos2.x}, {self.pos2.y})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return self.pos1 == other.pos1 and self.pos2 == other.pos2

    @property
    def width(self) -> float:
        return self.pos2.x - self.pos1.x

    @property
    def height(self) -> float:
        return self.pos2.y - self.pos1.y

    def normalize(self) -> Rect:
        """Sort the corners in place so pos1 is the min corner. Returns self."""
        x1, x2 = sorted((self.pos1.x, self.pos2.x))
        y1, y2 = sorted((self.pos1.y, self.pos2.y))
        self.pos1 = Point(x1, y1)
        self.pos2 = Point(x2, y2)
        return self

    def merge(self, other: Rect) -> Rect:
        """Return the bounding rectangle of both rectangles."""
        xs = (self.pos1.x, self.pos2.x, other.pos1.x, other.pos2.x)
        ys = (self.pos1.y, self.pos2.y, other.pos1.y, other.pos2.y)
        return Rect(min(xs), min(ys), max(xs), max(ys))

    def inflate(self, n: float) -> Rect:
        """Grow the rectangle in place by ``n`` on every side. Returns self."""
        self.pos1 = Point(self.pos1.x - n, self.pos1.y - n)
        self.pos2 = Point(self.pos2.x + n, self.pos2.y + n)
        return self


def euclidean_norm(v: Point | Size) -> float:
    if isinstance(v, Size):
        return math.hypot(v.width, v.height)
    return math.hypot(v.x, v.y)


def get_line_length(p1: Point, p2: Point) -> float:
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


# ── Rotation ───────────────────────────────────────────────────────


def rotate_point(p: Point, angle: float) -> Point:
    """Rotate ``p`` about the origin by ``angle`` decidegrees.

    Quarter turns swap and negate coordinates directly, so integer input
    stays exact. Returns a new point.
    """
    angle = normalize_angle_pos(angle)
    if angle == 0:
        return p.copy()
    if angle == 900:  # sin = 1, cos = 0
        return Point(p.y, -p.x)
    if angle == 1800:  # sin = 0, cos = -1
        return Point(-p.x, -p.y)
    if angle == 2700:  # sin = -1, cos = 0
        return Point(-p.y, p.x)

    fangle = decideg_to_rad(angle)
    sinus = math.sin(fangle)
    cosinus = math.cos(fangle)
    return Point(
        p.y * sinus + p.x * cosinus,
        p.y * cosinus - p.x * sinus,
    )


def rotate_point_with_center(p: Point, center: Point, angle: float) -> Point:
    """Rotate ``p`` about ``center``. Returns a new point."""
    return rotate_point(p - center, angle) + center


# ── Affine transform ───────────────────────────────────────────────


@dataclass(frozen=True)
class Transform:
    """Affine map ``x' = x1*x + y1*y + tx``, ``y' = x2*x + y2*y + ty``.

    The field defaults are KiCad's default transform, which flips y.
    """

    x1: float = 1
    x2: float = 0
    y1: float = 0
    y2: float = -1
    tx: float = 0
    ty: float = 0

    @classmethod
    def default(cls) -> Transform:
        return cls(1, 0, 0, -1, 0, 0)

    @classmethod
    def identity(cls) -> Transform:
        return cls(1, 0, 0, 1, 0, 0)

    @classmethod
    def translation(cls, tx: float, ty: float) -> Transform:
        return cls(1, 0, 0, 1, tx, ty)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> Transform:
        return cls(sx, 0, 0, sy, 0, 0)

    @classmethod
    def rotation(cls, radian: float) -> Transform:
        s = math.sin(radian)
        c = math.cos(radian)
        return cls(c, s, -s, c, 0, 0)

    def translate(self, tx: float, ty: float) -> Transform:
        return Transform.translation(tx, ty).multiply(self)

    def scale(self, sx: float, sy: float) -> Transform:
        """Return this transform preceded by a scale of ``(sx, sy)``.

        Raises:
            InvalidTransformError: if ``|sx| != |sy|``; a stroke width has no
                single meaning under anisotropic scale.
        """
        if abs(sx) != abs(sy):
            raise InvalidTransformError(
                f"Non-uniform scale ({sx}, {sy}) is not supported", sx=sx, sy=sy
            )
        return Transform.scaling(sx, sy).multiply(self)

    def rotate(self, radian: float) -> Transform:
        return Transform.rotation(radian).multiply(self)

    def multiply(self, b: Transform) -> Transform:
        """Matrix product: apply ``self`` first, then ``b``."""
        a = self
        return Transform(
            a.x1 * b.x1 + a.x2 * b.y1,
            a.x1 * b.x2 + a.x2 * b.y2,
            a.y1 * b.x1 + a.y2 * b.y1,
            a.y1 * b.x2 + a.y2 * b.y2,
            a.tx * b.x1 + a.ty * b.y1 + b.tx,
            a.tx * b.x2 + a.ty * b.y2 + b.ty,
        )

    def transform_coordinate(self, p: Point) -> Point:
        return Point(
            self.x1 * p.x + self.y1 * p.y + self.tx,
            self.x2 * p.x + self.y2 * p.y + self.ty,
        )

    def transform_scalar(self, n: float) -> float:
        """Scale a magnitude such as a stroke width through the matrix."""
        return (
            abs(n * self.x1) + abs(n * self.x2) + abs(n * self.y1) + abs(n * self.y2)
        ) / 2

    def map_angles(self, angle1: float, angle2: float) -> tuple[float, float, bool]:
        """Map an arc's start/end angles through the matrix.

        Returns the mapped ``(start, end, swapped)``; the angles are swapped
        when the mapped span would otherwise exceed 180 degrees (a mirrored
        transform reverses the arc direction).
        """
        swap = False
        delta = angle2 - angle1
        if delta >= 1800:
            angle1 -= 1
            angle2 += 1

        angle1 = self._map_angle(angle1)
        angle2 = self._map_angle(angle2)

        angle1 = normalize_angle_pos(angle1)
        angle2 = normalize_angle_pos(angle2)
        if angle2 < angle1:
            angle2 += FULL_CIRCLE

        if angle2 - angle1 > 1800:
            angle1, angle2 = normalize_angle_pos(angle2), normalize_angle_pos(angle1)
            if angle2 < angle1:
                angle2 += FULL_CIRCLE
            swap = True

        if delta >= 1800:
            angle1 += 1
            angle2 -= 1

        return angle1, angle2, swap

    def _map_angle(self, angle: float) -> float:
        x = math.cos(decideg_to_rad(angle))
        y = math.sin(decideg_to_rad(angle))
        mx = x * self.x1 + y * self.y1
        my = x * self.x2 + y * self.y2
        return round(rad_to_decideg(math.atan2(my, mx)))
