"""Em-space mapping of extracted outlines.

SVG user space is y-down with an arbitrary scale; font space is y-up with
``units_per_em`` units per em. When the document declares a view box, the
view box (not the geometry's bounding box) is what gets mapped onto the em,
so padding the icon designer put around the shape is kept.
"""

import math

from fontTools.misc.transform import Identity, Transform

from iconsmith.domain import Outline, ViewBox
from iconsmith.exceptions import DegenerateGeometryError

MIN_DIMENSION = 1e-6


def view_box_transform(view_box: ViewBox, units_per_em: int) -> Transform:
    """Transform mapping a view box onto the em square.

    Translate the view box origin to zero, scale uniformly by
    ``units_per_em / height`` with the y axis flipped, then shift up by one
    em so the top of the view box lands on the ascender.
    """
    scale = units_per_em / view_box.height
    return (
        Identity.translate(0, units_per_em)
        .scale(scale, -scale)
        .translate(-view_box.x, -view_box.y)
    )


def fit_transform(
    bbox: tuple[float, float, float, float],
    max_width: float,
    max_height: float,
    min_dimension: float = MIN_DIMENSION,
) -> Transform:
    """Transform fitting a bounding box into ``max_width`` x ``max_height``.

    Raises:
        DegenerateGeometryError: If the resulting scale is not finite or not
            above ``min_dimension``
    """
    x_min, y_min, x_max, y_max = bbox
    width = x_max - x_min
    height = y_max - y_min
    scale = min(max_width / width, max_height / height)
    if not math.isfinite(scale) or scale <= min_dimension:
        raise DegenerateGeometryError(f"cannot scale outline to target box (scale {scale})")

    return (
        Identity.translate(0, scale * height)
        .scale(scale, -scale)
        .translate(-x_min, -y_min)
    )


class EmSpaceMapper:
    """Maps outlines from SVG user space into font units.

    Example:
        mapper = EmSpaceMapper(units_per_em=1000, max_width=1000, max_height=1000)
        em_outline = mapper.map(outline, ViewBox(0, 0, 24, 24))
    """

    def __init__(
        self,
        units_per_em: int = 1000,
        max_width: float = 1000.0,
        max_height: float = 1000.0,
        min_dimension: float = MIN_DIMENSION,
    ) -> None:
        self.units_per_em = units_per_em
        self.max_width = max_width
        self.max_height = max_height
        self.min_dimension = min_dimension

    def map(self, outline: Outline, view_box: ViewBox | None = None) -> Outline:
        """Map an outline into em space.

        Args:
            outline: Outline in SVG user units
            view_box: Declared view box, preferred when usable

        Returns:
            New outline in font units, y axis up

        Raises:
            DegenerateGeometryError: If the outline's bounding box is too small
                or no usable scale exists
        """
        bbox = outline.bounding_box()
        if bbox is None:
            raise DegenerateGeometryError("outline is empty")

        width = bbox[2] - bbox[0]
        height = bbox[3] - bbox[1]
        if not (width > self.min_dimension and height > self.min_dimension):
            raise DegenerateGeometryError(
                f"outline dimensions are too small ({width:g} x {height:g})"
            )

        if view_box is not None and view_box.is_usable(self.min_dimension):
            transform = view_box_transform(view_box, self.units_per_em)
        else:
            transform = fit_transform(bbox, self.max_width, self.max_height, self.min_dimension)

        return outline.transformed(transform)
