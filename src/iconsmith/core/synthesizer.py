"""Font synthesis orchestration.

This module sequences the whole pipeline for one glyph set:

    markup -> outline -> quadratic outline -> em-space outline
           -> glyph record -> font tables -> bytes

Key components:
- FontSynthesizer: The single entry point used by collaborators
"""

import time
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

import structlog

from iconsmith.config import IconsmithSettings, get_default_settings
from iconsmith.core.assembler import (
    AssignmentContext,
    GlyphAssembler,
    canonical_order,
    flatten_collections,
)
from iconsmith.core.extractor import VectorExtractor
from iconsmith.core.mapper import EmSpaceMapper
from iconsmith.core.normalizer import CurveNormalizer
from iconsmith.core.tables import FontTableBuilder
from iconsmith.domain import GlyphDefinition, SynthesisResult
from iconsmith.io.svg_parser import SvgDocumentParser, VectorDocumentParser
from iconsmith.io.writer import FontWriter, font_output_path, module_leaf
from iconsmith.utils import SynthesisLogger, SynthesisStats, get_logger

GlyphSet = Iterable[GlyphDefinition] | Mapping[str, Sequence[GlyphDefinition]]


class FontSynthesizer:
    """Turns a glyph set into a TrueType icon font.

    Example:
        synthesizer = FontSynthesizer()
        result = synthesizer.synthesize("icons", definitions)
        Path("icons.ttf").write_bytes(result.font_bytes)
    """

    def __init__(
        self,
        settings: IconsmithSettings | None = None,
        parser: VectorDocumentParser | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the synthesizer.

        Args:
            settings: Application settings (defaults if None)
            parser: SVG document parser (SvgDocumentParser if None)
            logger: structlog logger (the "iconsmith" logger if None)
        """
        self.settings = settings if settings is not None else get_default_settings()
        self.parser = (
            parser
            if parser is not None
            else SvgDocumentParser(max_depth=self.settings.outline.max_group_depth)
        )
        self.logger = logger if logger is not None else get_logger()
        self._stats = SynthesisStats()

    @property
    def stats(self) -> SynthesisStats:
        """Statistics of the most recent synthesis pass."""
        return self._stats

    def synthesize(
        self,
        module_name: str,
        glyphs: GlyphSet,
        context: AssignmentContext | None = None,
    ) -> SynthesisResult:
        """Build the font for a glyph set.

        On success every definition's ``text`` is replaced by its assigned
        character. On failure nothing is mutated and no bytes are produced.

        Args:
            module_name: Family name written to the name table
            glyphs: Definitions, flat or bucketed by collection
            context: Starting glyph id and codepoint (U+E000 / 1 if None)

        Returns:
            SynthesisResult with font bytes and ordered assignments

        Raises:
            IconsmithError: Any glyph or table failure; the build is aborted
        """
        if isinstance(glyphs, Mapping):
            definitions = flatten_collections(glyphs)
        else:
            definitions = list(glyphs)
        ordered = canonical_order(definitions)

        font_cfg = self.settings.font
        if context is None:
            context = AssignmentContext(
                next_codepoint=font_cfg.first_codepoint,
                last_codepoint=font_cfg.last_codepoint,
            )

        synthesis_logger = SynthesisLogger(self.logger)
        self._stats = synthesis_logger.stats
        self._stats.start_time = time.time()
        synthesis_logger.log_synthesis_start(module_name, len(ordered))

        outline_cfg = self.settings.outline
        assembler = GlyphAssembler(
            extractor=VectorExtractor(
                parser=self.parser,
                default_view_box_size=outline_cfg.default_view_box_size,
            ),
            normalizer=CurveNormalizer(tolerance=outline_cfg.cubic_tolerance),
            mapper=EmSpaceMapper(
                units_per_em=font_cfg.units_per_em,
                max_width=float(font_cfg.advance_width),
                max_height=font_cfg.max_height,
                min_dimension=outline_cfg.min_dimension,
            ),
            synthesis_logger=synthesis_logger,
        )
        records = assembler.assemble(ordered, context)

        table_builder = FontTableBuilder(
            font_config=font_cfg,
            naming=self.settings.naming,
            synthesis_logger=synthesis_logger,
        )
        font_bytes = table_builder.build(module_name, records)

        # Codepoint side channel: each definition now carries its character
        for definition, record in zip(ordered, records, strict=True):
            definition.text = chr(record.codepoint)

        self._stats.end_time = time.time()
        synthesis_logger.log_synthesis_complete(module_name, len(font_bytes))

        return SynthesisResult(
            font_bytes=font_bytes,
            assignments=tuple(record.assignment() for record in records),
        )

    def build(
        self,
        manifest_path: Path,
        module: str,
        glyphs: GlyphSet,
        writer: FontWriter | None = None,
    ) -> tuple[Path, SynthesisResult]:
        """Synthesize and write ``<module-basename>.ttf`` next to the manifest.

        Args:
            manifest_path: Path of the manifest the glyphs came from
            module: Module path, e.g. "app::icons" or "app.icons"
            glyphs: Definitions, flat or bucketed by collection
            writer: Font writer (FontWriter if None)

        Returns:
            Tuple of (written font path, synthesis result)
        """
        output_path = font_output_path(manifest_path, module)
        result = self.synthesize(module_leaf(module), glyphs)

        writer = writer if writer is not None else FontWriter()
        writer.write(output_path, result.font_bytes)
        self.logger.info("Font written", path=str(output_path), bytes=len(result.font_bytes))

        return output_path, result
