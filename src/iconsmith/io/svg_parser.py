"""SVG document parser.

This module turns SVG markup into a small render tree of groups and paths,
resolving what a font outline needs and nothing more: geometry, absolute
transforms, fill and stroke presence, stroke parameters, paint order and
visibility. Local ``<use>`` references (including ``<symbol>`` targets) are
expanded in place. Full CSS and paint servers are out of scope.

Key classes:
- VectorDocumentParser: Protocol any parser implementation satisfies
- SvgDocumentParser: Default implementation built on ElementTree and
  fontTools.svgLib
"""

import math
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol
from xml.etree import ElementTree

from fontTools.misc.transform import Identity, Transform
from fontTools.pens.recordingPen import RecordingPen
from fontTools.svgLib.path import parse_path
from fontTools.svgLib.path.shapes import PathBuilder

from iconsmith.domain.outline import Outline
from iconsmith.exceptions import VectorParseError

_NUMBER_RE = re.compile(r"[-+]?(?:\d*\.\d+|\d+\.?)(?:[eE][-+]?\d+)?")
_TRANSFORM_RE = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")

_SHAPE_TAGS = frozenset({"rect", "circle", "ellipse", "line", "polyline", "polygon"})
_CONTAINER_TAGS = frozenset({"svg", "g", "a", "switch"})
_XLINK_HREF = "{http://www.w3.org/1999/xlink}href"

# Elements whose content is never rendered directly
_SKIPPED_TAGS = frozenset(
    {
        "defs",
        "clipPath",
        "mask",
        "pattern",
        "symbol",
        "marker",
        "linearGradient",
        "radialGradient",
        "filter",
        "style",
        "title",
        "desc",
        "metadata",
        "text",
        "image",
        "foreignObject",
    }
)

_INHERITED_PROPERTIES = (
    "fill",
    "stroke",
    "stroke-width",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-miterlimit",
    "visibility",
    "paint-order",
)


class PaintOrder(Enum):
    """Order in which a path's fill and stroke are painted."""

    FILL_AND_STROKE = "fill-and-stroke"
    STROKE_AND_FILL = "stroke-and-fill"


@dataclass(frozen=True, slots=True)
class StrokeStyle:
    """Stroke parameters of a path.

    Attributes:
        width: Stroke width in user units (> 0)
        line_cap: One of "butt", "round", "square"
        line_join: One of "miter", "round", "bevel"
        miter_limit: Miter length limit (>= 1)
    """

    width: float
    line_cap: str = "butt"
    line_join: str = "miter"
    miter_limit: float = 4.0


@dataclass
class VectorPath:
    """A renderable path with resolved presentation.

    Attributes:
        outline: Path geometry in the element's own coordinate system
        transform: Absolute transform from element space to document space
        visible: False when ``visibility`` hides the path
        has_fill: True when a fill paint is present
        stroke: Stroke parameters, or None when no stroke paint is present
        paint_order: Whether fill or stroke is painted first
    """

    outline: Outline
    transform: Transform = Identity
    visible: bool = True
    has_fill: bool = True
    stroke: StrokeStyle | None = None
    paint_order: PaintOrder = PaintOrder.FILL_AND_STROKE


@dataclass
class VectorGroup:
    """A container node in the render tree.

    Attributes:
        children: Child groups and paths in document order
        transform: Absolute transform of the group
    """

    children: list["VectorGroup | VectorPath"] = field(default_factory=list)
    transform: Transform = Identity

    def iter_paths(self) -> Iterator[VectorPath]:
        """Yield every path depth-first, in document order."""
        for child in self.children:
            if isinstance(child, VectorGroup):
                yield from child.iter_paths()
            else:
                yield child


class VectorDocumentParser(Protocol):
    """Capability that parses vector markup into a render tree."""

    def parse(self, data: bytes) -> VectorGroup:
        """Parse a complete document.

        Raises:
            VectorParseError: If the document cannot be parsed
        """
        ...


class SvgDocumentParser:
    """Parses SVG documents into VectorGroup trees.

    Example:
        parser = SvgDocumentParser()
        root = parser.parse(b'<svg xmlns="http://www.w3.org/2000/svg">...</svg>')
        for path in root.iter_paths():
            print(path.has_fill, path.stroke)
    """

    def __init__(self, max_depth: int = 256) -> None:
        """Initialize the parser.

        Args:
            max_depth: Deepest element nesting accepted
        """
        self.max_depth = max_depth

    def parse(self, data: bytes) -> VectorGroup:
        """Parse SVG bytes into a render tree.

        Args:
            data: UTF-8 encoded SVG document

        Returns:
            Root group of the document

        Raises:
            VectorParseError: If the XML is malformed, the root is not <svg>,
                or a path cannot be parsed
        """
        try:
            root = ElementTree.fromstring(data)
        except ElementTree.ParseError as e:
            raise VectorParseError(str(e)) from e

        if _local_name(root.tag) != "svg":
            raise VectorParseError(f"root element is <{_local_name(root.tag)}>, expected <svg>")

        ids = {
            element.attrib["id"]: element
            for element in root.iter()
            if isinstance(element.tag, str) and "id" in element.attrib
        }
        style = _resolve_style(root, _default_style())
        return self._parse_group(root, Identity, style, 0, ids)

    def _parse_group(
        self,
        element: ElementTree.Element,
        transform: Transform,
        style: dict[str, str],
        depth: int,
        ids: dict[str, ElementTree.Element],
    ) -> VectorGroup:
        self._check_depth(depth)
        group = VectorGroup(transform=transform)
        for child in element:
            self._parse_child(child, group, transform, style, depth, ids)
        return group

    def _parse_child(
        self,
        child: ElementTree.Element,
        group: VectorGroup,
        transform: Transform,
        style: dict[str, str],
        depth: int,
        ids: dict[str, ElementTree.Element],
        referenced: bool = False,
    ) -> None:
        if not isinstance(child.tag, str):
            return  # comments and processing instructions
        tag = _local_name(child.tag)
        # A <symbol> renders only when a <use> points at it
        if tag in _SKIPPED_TAGS and not (referenced and tag == "symbol"):
            return

        child_style = _resolve_style(child, style)
        if child_style.get("display") == "none":
            return

        child_transform = transform
        if "transform" in child.attrib:
            child_transform = transform.transform(parse_transform(child.attrib["transform"]))

        if tag == "use":
            self._check_depth(depth + 1)
            target = _use_target(child, ids)
            offset = child_transform.translate(
                _parse_length(child.attrib.get("x"), 0.0),
                _parse_length(child.attrib.get("y"), 0.0),
            )
            self._parse_child(target, group, offset, child_style, depth + 1, ids, referenced=True)
        elif tag in _CONTAINER_TAGS or tag == "symbol":
            group.children.append(
                self._parse_group(child, child_transform, child_style, depth + 1, ids)
            )
        elif tag == "path" or tag in _SHAPE_TAGS:
            path = _build_path(child, tag, child_transform, child_style)
            if path is not None:
                group.children.append(path)

    def _check_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            raise VectorParseError(f"element nesting deeper than {self.max_depth} levels")


def _use_target(
    element: ElementTree.Element,
    ids: dict[str, ElementTree.Element],
) -> ElementTree.Element:
    """Resolve the element a ``<use>`` points at.

    Raises:
        VectorParseError: If the reference is missing, external or unknown
    """
    href = element.attrib.get("href") or element.attrib.get(_XLINK_HREF, "")
    href = href.strip()
    if not href.startswith("#") or len(href) < 2:
        raise VectorParseError(f"<use> needs a local '#id' reference (got '{href}')")
    target = ids.get(href[1:])
    if target is None:
        raise VectorParseError(f"<use> references unknown element '{href}'")
    return target


def _build_path(
    element: ElementTree.Element,
    tag: str,
    transform: Transform,
    style: dict[str, str],
) -> VectorPath | None:
    pen = RecordingPen()
    try:
        if tag == "path":
            path_data = element.attrib.get("d", "")
        else:
            # Transforms are composed by the caller; PathBuilder only reads matrix()
            geometry = ElementTree.Element(
                element.tag, {k: v for k, v in element.attrib.items() if k != "transform"}
            )
            builder = PathBuilder()
            if not builder.add_path_from_element(geometry) or not builder.paths:
                return None
            path_data = builder.paths[-1]

        if not path_data.strip():
            return None

        parse_path(path_data, pen)
        outline = Outline.from_recording(pen.value)
    except (ValueError, TypeError, IndexError) as e:
        raise VectorParseError(f"invalid path data in <{tag}>: {e}") from e

    if outline.is_empty():
        return None

    return VectorPath(
        outline=outline,
        transform=transform,
        visible=style.get("visibility", "visible") not in ("hidden", "collapse"),
        has_fill=_has_paint(style.get("fill")),
        stroke=_stroke_style(style),
        paint_order=_paint_order(style.get("paint-order", "normal")),
    )


def _default_style() -> dict[str, str]:
    return {
        "fill": "black",
        "stroke": "none",
        "stroke-width": "1",
        "stroke-linecap": "butt",
        "stroke-linejoin": "miter",
        "stroke-miterlimit": "4",
        "visibility": "visible",
        "paint-order": "normal",
    }


def _resolve_style(element: ElementTree.Element, parent: dict[str, str]) -> dict[str, str]:
    """Compute an element's presentation from its parent's and its own.

    Presentation attributes apply first, then ``style`` declarations.
    ``display`` is not inherited.
    """
    style = {key: parent[key] for key in _INHERITED_PROPERTIES if key in parent}

    declared: dict[str, str] = {}
    for key in (*_INHERITED_PROPERTIES, "display"):
        if key in element.attrib:
            declared[key] = element.attrib[key].strip()
    for declaration in element.attrib.get("style", "").split(";"):
        key, sep, value = declaration.partition(":")
        if sep:
            declared[key.strip()] = value.replace("!important", "").strip()

    for key, value in declared.items():
        if value == "inherit":
            if key in parent:
                style[key] = parent[key]
        else:
            style[key] = value

    return style


def _has_paint(value: str | None) -> bool:
    return value is not None and value.strip().lower() != "none"


def _stroke_style(style: dict[str, str]) -> StrokeStyle | None:
    if not _has_paint(style.get("stroke")):
        return None

    width = _parse_length(style.get("stroke-width"), 1.0)
    if width <= 0 or not math.isfinite(width):
        return None

    line_cap = style.get("stroke-linecap", "butt")
    if line_cap not in ("butt", "round", "square"):
        line_cap = "butt"
    line_join = style.get("stroke-linejoin", "miter")
    if line_join == "miter-clip":
        line_join = "miter"
    elif line_join not in ("miter", "round", "bevel"):
        line_join = "miter"

    return StrokeStyle(
        width=width,
        line_cap=line_cap,
        line_join=line_join,
        miter_limit=max(1.0, _parse_length(style.get("stroke-miterlimit"), 4.0)),
    )


def _paint_order(value: str) -> PaintOrder:
    tokens = [t for t in value.split() if t in ("fill", "stroke", "markers")]
    for token in ("fill", "stroke", "markers"):
        if token not in tokens:
            tokens.append(token)
    if tokens.index("stroke") < tokens.index("fill"):
        return PaintOrder.STROKE_AND_FILL
    return PaintOrder.FILL_AND_STROKE


def _parse_length(value: str | None, default: float) -> float:
    if not value:
        return default
    match = _NUMBER_RE.match(value.strip())
    if match is None:
        return default
    return float(match.group(0))


def parse_transform(value: str) -> Transform:
    """Parse an SVG ``transform`` attribute.

    Transform functions apply right to left, matching SVG semantics.
    Unknown or malformed functions are ignored.

    Args:
        value: Attribute value, e.g. "translate(2 3) rotate(45)"

    Returns:
        Combined transform
    """
    result = Identity
    for name, raw_args in _TRANSFORM_RE.findall(value):
        args = [float(n) for n in _NUMBER_RE.findall(raw_args)]
        if name == "matrix" and len(args) == 6:
            result = result.transform(args)
        elif name == "translate" and args:
            result = result.translate(args[0], args[1] if len(args) > 1 else 0.0)
        elif name == "scale" and args:
            result = result.scale(args[0], args[1] if len(args) > 1 else args[0])
        elif name == "rotate" and args:
            angle = math.radians(args[0])
            if len(args) == 3:
                cx, cy = args[1], args[2]
                result = result.translate(cx, cy).rotate(angle).translate(-cx, -cy)
            else:
                result = result.rotate(angle)
        elif name == "skewX" and args:
            result = result.skew(math.radians(args[0]), 0)
        elif name == "skewY" and args:
            result = result.skew(0, math.radians(args[0]))
    return result


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
