"""Glyph assembly: canonical ordering and codepoint assignment.

The assembler walks every glyph definition in ascending ``order``, runs the
extraction, normalization and mapping steps, converts the result into a
TrueType simple glyph, and hands out glyph ids and Private Use Area
codepoints from an explicit AssignmentContext.

Key components:
- canonical_order: Stable sort of definitions by their global order
- AssignmentContext: Glyph-id and codepoint counters for one pass
- build_simple_glyph: Outline to fontTools glyph with zeroed minimums
- GlyphAssembler: Runs the per-glyph pipeline
"""

import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from itertools import groupby
from typing import Any

from fontTools.cu2qu.errors import Error as Cu2QuError
from fontTools.pens.ttGlyphPen import TTGlyphPen

from iconsmith.config import PUA_END, PUA_START
from iconsmith.core.extractor import VectorExtractor
from iconsmith.core.mapper import EmSpaceMapper
from iconsmith.core.normalizer import CurveNormalizer
from iconsmith.domain import GlyphDefinition, GlyphRecord, Outline
from iconsmith.exceptions import (
    BlankGlyphSourceError,
    CapacityExceededError,
    GlyphProcessingError,
    IconsmithError,
)
from iconsmith.utils import SynthesisLogger


def flatten_collections(
    buckets: Mapping[str, Sequence[GlyphDefinition]],
) -> list[GlyphDefinition]:
    """Flatten collection buckets into one list, in bucket iteration order."""
    return [definition for bucket in buckets.values() for definition in bucket]


def canonical_order(definitions: Iterable[GlyphDefinition]) -> list[GlyphDefinition]:
    """Sort definitions by their global ``order`` field.

    Collections play no part in the ordering. Ties keep their input
    sequence (the sort is stable).

    Args:
        definitions: Glyph definitions in any order

    Returns:
        New list in canonical order
    """
    return sorted(definitions, key=lambda d: d.order)


def duplicate_orders(definitions: Sequence[GlyphDefinition]) -> dict[int, list[str]]:
    """Find order values shared by more than one definition.

    Args:
        definitions: Definitions in canonical order

    Returns:
        Mapping of order value to the identifiers sharing it
    """
    duplicates: dict[int, list[str]] = {}
    for order, group in groupby(definitions, key=lambda d: d.order):
        members = [d.identifier for d in group]
        if len(members) > 1:
            duplicates[order] = members
    return duplicates


@dataclass
class AssignmentContext:
    """Counters threaded through a single synthesis pass.

    Attributes:
        next_glyph_id: Glyph id for the next glyph (0 is .notdef)
        next_codepoint: Codepoint for the next glyph
        last_codepoint: Highest codepoint that may be handed out
    """

    next_glyph_id: int = 1
    next_codepoint: int = PUA_START
    last_codepoint: int = PUA_END

    def __post_init__(self) -> None:
        self._first_codepoint = self.next_codepoint

    @property
    def capacity(self) -> int:
        """Total number of codepoints this context can hand out."""
        return self.last_codepoint - self._first_codepoint + 1

    def claim(self, identifier: str) -> tuple[int, int]:
        """Take the next (glyph id, codepoint) pair and advance both counters.

        Raises:
            CapacityExceededError: If the codepoint range is exhausted
        """
        if self.next_codepoint > self.last_codepoint:
            raise CapacityExceededError(identifier, self.capacity)
        pair = (self.next_glyph_id, self.next_codepoint)
        self.next_glyph_id += 1
        self.next_codepoint += 1
        return pair


def build_simple_glyph(outline: Outline) -> Any:
    """Convert an em-space quadratic outline into a TrueType simple glyph.

    Open subpaths are closed. Bounds are recalculated from the rounded
    coordinates, then xMin and yMin are forced to zero so the glyph is
    anchored at the origin rather than at its ink.

    Args:
        outline: Quadratic-only outline in font units

    Returns:
        fontTools ``Glyph`` object

    Raises:
        ValueError: If the outline produces no contours
    """
    pen = TTGlyphPen(None)
    outline.draw(pen, close_open_contours=True)
    glyph = pen.glyph()

    if glyph.numberOfContours <= 0:
        raise ValueError("outline produced no contours")

    glyph.recalcBounds(None)
    glyph.xMin = 0
    glyph.yMin = 0
    return glyph


class GlyphAssembler:
    """Builds glyph records for a full glyph set in canonical order.

    Example:
        assembler = GlyphAssembler(VectorExtractor(), CurveNormalizer(), EmSpaceMapper())
        records = assembler.assemble(definitions, AssignmentContext())
    """

    def __init__(
        self,
        extractor: VectorExtractor,
        normalizer: CurveNormalizer,
        mapper: EmSpaceMapper,
        synthesis_logger: SynthesisLogger | None = None,
    ) -> None:
        self.extractor = extractor
        self.normalizer = normalizer
        self.mapper = mapper
        self.synthesis_logger = synthesis_logger

    def assemble(
        self,
        definitions: Iterable[GlyphDefinition],
        context: AssignmentContext | None = None,
    ) -> list[GlyphRecord]:
        """Assemble every definition, in canonical order.

        Args:
            definitions: Glyph definitions in any order
            context: Counters to draw ids and codepoints from (fresh if None)

        Returns:
            Glyph records in canonical order, ids and codepoints ascending

        Raises:
            BlankGlyphSourceError: If a definition has no source text
            CapacityExceededError: If the codepoint range runs out
            GlyphProcessingError: If any glyph fails to convert
        """
        if context is None:
            context = AssignmentContext()

        ordered = canonical_order(definitions)
        if self.synthesis_logger is not None:
            for order, identifiers in duplicate_orders(ordered).items():
                self.synthesis_logger.log_duplicate_order(order, identifiers)

        return [self.assemble_one(definition, context) for definition in ordered]

    def assemble_one(self, definition: GlyphDefinition, context: AssignmentContext) -> GlyphRecord:
        """Run the full pipeline for one definition.

        Args:
            definition: Glyph definition with its SVG source
            context: Counters to draw the glyph id and codepoint from

        Returns:
            GlyphRecord for the definition
        """
        start_time = time.perf_counter()
        if self.synthesis_logger is not None:
            self.synthesis_logger.log_glyph_start(
                definition.identifier, definition.collection, definition.order
            )

        source = definition.text.strip()
        if not source:
            raise BlankGlyphSourceError(definition.identifier)

        glyph_id, codepoint = context.claim(definition.identifier)

        try:
            parsed = self.extractor.extract(source)
            # TrueType only supports quadratic curves
            quadratic = self.normalizer.normalize(parsed.outline)
            em_outline = self.mapper.map(quadratic, parsed.view_box)
            glyph = build_simple_glyph(em_outline)
        except (IconsmithError, ValueError, Cu2QuError) as e:
            if self.synthesis_logger is not None:
                self.synthesis_logger.log_glyph_error(definition.identifier, e)
            raise GlyphProcessingError(definition.identifier, definition.collection, str(e)) from e

        if self.synthesis_logger is not None:
            self.synthesis_logger.log_glyph_complete(
                definition.identifier,
                codepoint=codepoint,
                glyph_id=glyph_id,
                contours=glyph.numberOfContours,
                points=len(glyph.coordinates),
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )

        return GlyphRecord(
            glyph_id=glyph_id,
            codepoint=codepoint,
            identifier=definition.identifier,
            collection=definition.collection,
            order=definition.order,
            outline=em_outline,
            glyph=glyph,
        )
