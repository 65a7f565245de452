"""Vector extraction: glyph markup to a single flattened outline.

The extractor normalizes the three accepted input shapes (bare path data,
inner markup, full document) into one SVG document, hands it to a
VectorDocumentParser, and concatenates the fill and stroke outlines of every
visible path in document order.
"""

import math
import re

import pathops
from fontTools.misc.transform import Identity, Transform
from fontTools.pens.recordingPen import RecordingPen

from iconsmith.domain import Outline, ParsedVector, ViewBox
from iconsmith.exceptions import GeometryError
from iconsmith.io.markup import SVG_NAMESPACE, format_number
from iconsmith.io.svg_parser import (
    PaintOrder,
    StrokeStyle,
    SvgDocumentParser,
    VectorDocumentParser,
    VectorPath,
)

_VIEW_BOX_RE = re.compile(r"viewBox=")
_DOCUMENT_MARKERS = ("<svg", "<?xml", "<!DOCTYPE")

_LINE_CAPS = {
    "butt": pathops.LineCap.BUTT_CAP,
    "round": pathops.LineCap.ROUND_CAP,
    "square": pathops.LineCap.SQUARE_CAP,
}
_LINE_JOINS = {
    "miter": pathops.LineJoin.MITER_JOIN,
    "round": pathops.LineJoin.ROUND_JOIN,
    "bevel": pathops.LineJoin.BEVEL_JOIN,
}


def wrap_markup(source: str, default_size: float = 24.0) -> str:
    """Turn any accepted glyph source into a complete SVG document.

    - No ``<`` at all: bare path data, wrapped as a path's ``d`` attribute.
    - Markup without a document root: wrapped as inner content.
    - Anything else is returned unchanged.

    Args:
        source: Glyph source text
        default_size: View box width and height for wrapped sources

    Returns:
        Complete SVG document
    """
    trimmed = source.strip()
    size = format_number(default_size)
    header = f'<svg xmlns="{SVG_NAMESPACE}" viewBox="0 0 {size} {size}">'

    if "<" not in trimmed:
        return f'{header}<path d="{trimmed}"/></svg>'
    if trimmed.startswith(_DOCUMENT_MARKERS):
        return source
    return f"{header}{source}</svg>"


def extract_view_box(svg: str) -> ViewBox | None:
    """Find the first ``viewBox`` attribute and parse it.

    Values are read literally: four numbers separated by whitespace or
    commas. A missing, malformed or non-positive box yields None.

    Args:
        svg: SVG document text

    Returns:
        ViewBox, or None
    """
    match = _VIEW_BOX_RE.search(svg)
    if match is None:
        return None

    rest = svg[match.end():].lstrip()
    if not rest or rest[0] not in ('"', "'"):
        return None
    end = rest.find(rest[0], 1)
    if end == -1:
        return None

    values: list[float] = []
    for token in re.split(r"[\s,]+", rest[1:end]):
        if not token:
            continue
        try:
            value = float(token)
        except ValueError:
            continue
        if math.isfinite(value):
            values.append(value)
        if len(values) == 4:
            break

    if len(values) < 4:
        return None
    x, y, width, height = values
    if width <= 0 or height <= 0:
        return None
    return ViewBox(x, y, width, height)


def resolution_scale(transform: Transform) -> float:
    """Scale factor at which a stroke should be flattened.

    The larger of the transform's two axis lengths, so a stroke drawn in a
    small coordinate system and scaled up is not visibly faceted.
    """
    sx = math.hypot(transform.xx, transform.xy)
    sy = math.hypot(transform.yx, transform.yy)
    scale = max(sx, sy)
    if math.isfinite(scale) and scale > 0:
        return scale
    return 1.0


def stroke_outline(outline: Outline, stroke: StrokeStyle, res_scale: float = 1.0) -> Outline:
    """Compute the filled outline of a stroked path.

    The path is stroked ``res_scale`` times larger and scaled back so the
    stroker's curve flattening matches the final rendering size.

    Args:
        outline: Path geometry in element space
        stroke: Stroke parameters
        res_scale: Resolution scale (see resolution_scale)

    Returns:
        Outline of the stroke area in element space

    Raises:
        GeometryError: If the stroker cannot outline the path
    """
    pen = RecordingPen()
    try:
        path = pathops.Path()
        outline.transformed(Identity.scale(res_scale)).draw(path.getPen())
        path.stroke(
            stroke.width * res_scale,
            _LINE_CAPS[stroke.line_cap],
            _LINE_JOINS[stroke.line_join],
            stroke.miter_limit,
        )
        # Round caps and joins come back as conics, which pens cannot draw
        path.convertConicsToQuads()
        path.draw(pen)
    except pathops.PathOpsError as e:
        raise GeometryError(f"cannot outline stroke: {e}") from e

    return Outline.from_recording(pen.value).transformed(Identity.scale(1.0 / res_scale))


class VectorExtractor:
    """Extracts one flattened outline per glyph from SVG markup.

    Example:
        extractor = VectorExtractor()
        parsed = extractor.extract("M0 0 L24 0 L24 24 Z")
        print(parsed.view_box)  # ViewBox(x=0.0, y=0.0, width=24.0, height=24.0)
    """

    def __init__(
        self,
        parser: VectorDocumentParser | None = None,
        default_view_box_size: float = 24.0,
    ) -> None:
        """Initialize the extractor.

        Args:
            parser: Document parser (SvgDocumentParser if None)
            default_view_box_size: View box size used when wrapping
        """
        self.parser = parser if parser is not None else SvgDocumentParser()
        self.default_view_box_size = default_view_box_size

    def extract(self, source: str) -> ParsedVector:
        """Extract the outline and view box of a glyph source.

        Args:
            source: Bare path data, inner markup or a full SVG document

        Returns:
            ParsedVector with the concatenated outline of all visible paths

        Raises:
            VectorParseError: If the document cannot be parsed
        """
        svg = wrap_markup(source, self.default_view_box_size)
        view_box = extract_view_box(svg)

        root = self.parser.parse(svg.encode("utf-8"))

        outline = Outline()
        for path in root.iter_paths():
            if path.visible:
                outline.extend(self._path_outline(path))

        return ParsedVector(outline=outline, view_box=view_box)

    def _path_outline(self, path: VectorPath) -> Outline:
        transform = path.transform
        fill = path.outline if path.has_fill else None
        stroke = None
        if path.stroke is not None:
            stroke = stroke_outline(path.outline, path.stroke, resolution_scale(transform))

        parts = [fill, stroke]
        if path.paint_order is PaintOrder.STROKE_AND_FILL:
            parts.reverse()

        result = Outline()
        for part in parts:
            if part is None:
                continue
            if transform != Identity:
                part = part.transformed(transform)
            result.extend(part)
        return result
