"""Core geometric types for outline representation.

This module defines the fundamental geometric types used throughout iconsmith:
- CommandType: Enum for path drawing commands
- PathCommand: One drawing command with its points
- Outline: An ordered sequence of path commands
- ViewBox: A document's declared coordinate frame
- ParsedVector: An outline together with its optional view box
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fontTools.misc.transform import Transform
from fontTools.pens.basePen import decomposeQuadraticSegment, decomposeSuperBezierSegment
from fontTools.pens.boundsPen import BoundsPen

Coordinate = tuple[float, float]


class CommandType(Enum):
    """Path drawing command.

    Values match the fontTools segment pen method names so commands can be
    replayed into any pen.
    """

    MOVE_TO = "moveTo"
    LINE_TO = "lineTo"
    QUAD_TO = "qCurveTo"
    CURVE_TO = "curveTo"
    CLOSE = "closePath"


@dataclass(frozen=True, slots=True)
class PathCommand:
    """A single drawing command.

    Attributes:
        command: Command type
        points: Control and end points; the last point is the command's end
            point. Empty for CLOSE.
    """

    command: CommandType
    points: tuple[Coordinate, ...] = ()

    @property
    def end_point(self) -> Coordinate | None:
        """Point the pen sits on after this command (None for CLOSE)."""
        return self.points[-1] if self.points else None

    def transformed(self, transform: Transform) -> "PathCommand":
        """Return a copy with every point mapped through ``transform``."""
        return PathCommand(
            self.command,
            tuple(transform.transformPoint(p) for p in self.points),
        )


@dataclass
class Outline:
    """An ordered sequence of path commands forming one glyph outline.

    Attributes:
        commands: Drawing commands in order
    """

    commands: list[PathCommand] = field(default_factory=list)

    def move_to(self, pt: Coordinate) -> None:
        self.commands.append(PathCommand(CommandType.MOVE_TO, (pt,)))

    def line_to(self, pt: Coordinate) -> None:
        self.commands.append(PathCommand(CommandType.LINE_TO, (pt,)))

    def quad_to(self, control: Coordinate, pt: Coordinate) -> None:
        self.commands.append(PathCommand(CommandType.QUAD_TO, (control, pt)))

    def curve_to(self, c1: Coordinate, c2: Coordinate, pt: Coordinate) -> None:
        self.commands.append(PathCommand(CommandType.CURVE_TO, (c1, c2, pt)))

    def close(self) -> None:
        self.commands.append(PathCommand(CommandType.CLOSE))

    def extend(self, other: "Outline") -> None:
        """Append all commands of another outline."""
        self.commands.extend(other.commands)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def is_empty(self) -> bool:
        """Check if the outline has no drawing commands."""
        return not self.commands

    def has_cubics(self) -> bool:
        """Check if any cubic segment remains in the outline."""
        return any(cmd.command is CommandType.CURVE_TO for cmd in self.commands)

    def contour_count(self) -> int:
        """Number of subpaths (one per moveTo)."""
        return sum(1 for cmd in self.commands if cmd.command is CommandType.MOVE_TO)

    def draw(self, pen: Any, close_open_contours: bool = False) -> None:
        """Replay the outline into a fontTools segment pen.

        Args:
            pen: Any object implementing the fontTools AbstractPen protocol
            close_open_contours: Close subpaths that were left open instead of
                ending them; font contours are always closed
        """
        open_contour = False
        for cmd in self.commands:
            if cmd.command is CommandType.MOVE_TO:
                if open_contour:
                    _finish(pen, close_open_contours)
                pen.moveTo(cmd.points[0])
                open_contour = True
            elif cmd.command is CommandType.LINE_TO:
                pen.lineTo(cmd.points[0])
            elif cmd.command is CommandType.QUAD_TO:
                pen.qCurveTo(*cmd.points)
            elif cmd.command is CommandType.CURVE_TO:
                pen.curveTo(*cmd.points)
            elif open_contour:
                pen.closePath()
                open_contour = False
        if open_contour:
            _finish(pen, close_open_contours)

    def bounding_box(self) -> tuple[float, float, float, float] | None:
        """Calculate the exact bounding box, curve extrema included.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y), or None for an empty outline
        """
        pen = BoundsPen(None)
        self.draw(pen)
        return pen.bounds

    def transformed(self, transform: Transform) -> "Outline":
        """Return a new outline with every point mapped through ``transform``."""
        return Outline([cmd.transformed(transform) for cmd in self.commands])

    @classmethod
    def from_recording(cls, recording: Iterable[tuple[str, tuple[Any, ...]]]) -> "Outline":
        """Build an outline from a RecordingPen-style command list.

        Multi-point ``qCurveTo`` splines and poly-cubic ``curveTo`` segments
        are split into single segments. ``endPath`` leaves the subpath open.

        Args:
            recording: List of (method name, points) tuples

        Returns:
            Outline instance

        Raises:
            ValueError: If an unsupported command or an on-curve-less
                quadratic contour is found
        """
        outline = cls()
        for command, args in recording:
            if command == "moveTo":
                outline.move_to(tuple(args[0]))
            elif command == "lineTo":
                outline.line_to(tuple(args[0]))
            elif command == "qCurveTo":
                if args[-1] is None:
                    raise ValueError("qCurveTo without on-curve points is not supported")
                for control, pt in decomposeQuadraticSegment(args):
                    outline.quad_to(tuple(control), tuple(pt))
            elif command == "curveTo":
                for c1, c2, pt in decomposeSuperBezierSegment(args):
                    outline.curve_to(tuple(c1), tuple(c2), tuple(pt))
            elif command == "closePath":
                outline.close()
            elif command == "endPath":
                continue
            else:
                raise ValueError(f"Unsupported drawing command: {command}")
        return outline


def _finish(pen: Any, close: bool) -> None:
    if close:
        pen.closePath()
    else:
        pen.endPath()


@dataclass(frozen=True, slots=True)
class ViewBox:
    """A document's declared coordinate frame.

    Attributes:
        x: Left edge in user units
        y: Top edge in user units
        width: Frame width, always > 0
        height: Frame height, always > 0
    """

    x: float
    y: float
    width: float
    height: float

    def is_usable(self, min_dimension: float) -> bool:
        """Check that both sides exceed ``min_dimension``."""
        return self.width > min_dimension and self.height > min_dimension


@dataclass
class ParsedVector:
    """An extracted outline and the view box it was drawn in.

    Attributes:
        outline: Flattened outline of every visible path
        view_box: Declared view box, or None when absent or malformed
    """

    outline: Outline
    view_box: ViewBox | None = None
