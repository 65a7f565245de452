"""Curve normalization: rewrite cubic segments as quadratics.

TrueType outlines only support quadratic curves, so every cubic is
approximated by a quadratic spline within a fixed error bound.
"""

from fontTools.cu2qu import curve_to_quadratic
from fontTools.pens.basePen import decomposeQuadraticSegment

from iconsmith.domain import CommandType, Coordinate, Outline
from iconsmith.exceptions import OutlineSequenceError

DEFAULT_TOLERANCE = 0.1


def cubic_to_quadratics(
    start: Coordinate,
    c1: Coordinate,
    c2: Coordinate,
    end: Coordinate,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[tuple[Coordinate, Coordinate]]:
    """Approximate one cubic Bezier by single quadratic segments.

    Args:
        start: Current point (start of the cubic)
        c1: First control point
        c2: Second control point
        end: End point
        tolerance: Maximum distance between cubic and approximation

    Returns:
        List of (control, end) pairs; the last end equals ``end``
    """
    spline = curve_to_quadratic((start, c1, c2, end), tolerance)
    # spline[0] is the start point; the rest is a TrueType-style quadratic run
    segments = decomposeQuadraticSegment(spline[1:])
    return [(tuple(control), tuple(pt)) for control, pt in segments]


class CurveNormalizer:
    """Converts outlines to moveTo/lineTo/qCurveTo/closePath only.

    Example:
        normalizer = CurveNormalizer(tolerance=0.1)
        quadratic = normalizer.normalize(outline)
        assert not quadratic.has_cubics()
    """

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE) -> None:
        self.tolerance = tolerance

    def normalize(self, outline: Outline) -> Outline:
        """Return a copy of ``outline`` with every cubic made quadratic.

        Args:
            outline: Input outline

        Returns:
            Outline without cubic commands

        Raises:
            OutlineSequenceError: If a drawing command precedes the first moveTo
        """
        out = Outline()
        subpath_start: Coordinate | None = None
        current: Coordinate | None = None

        for cmd in outline:
            if cmd.command is CommandType.MOVE_TO:
                out.commands.append(cmd)
                subpath_start = current = cmd.points[0]
                continue

            if current is None:
                raise OutlineSequenceError(cmd.command.value)

            if cmd.command is CommandType.CURVE_TO:
                c1, c2, end = cmd.points
                for control, pt in cubic_to_quadratics(current, c1, c2, end, self.tolerance):
                    out.quad_to(control, pt)
                    current = pt
            elif cmd.command is CommandType.CLOSE:
                out.commands.append(cmd)
                current = subpath_start
            else:
                out.commands.append(cmd)
                current = cmd.points[-1]

        return out
