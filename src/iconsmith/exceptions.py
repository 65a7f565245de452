"""Exception hierarchy for Iconsmith."""


class IconsmithError(Exception):
    """Base exception for all Iconsmith errors."""

    pass


class ManifestError(IconsmithError):
    """Error loading or validating a glyph manifest."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid manifest '{path}': {reason}")


class GlyphError(IconsmithError):
    """Errors related to a single glyph."""

    pass


class BlankGlyphSourceError(GlyphError):
    """Glyph source text is empty after trimming."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Glyph '{identifier}' has an empty SVG source")


class GlyphProcessingError(GlyphError):
    """Error turning a glyph source into a font outline."""

    def __init__(self, identifier: str, collection: str, reason: str) -> None:
        self.identifier = identifier
        self.collection = collection
        self.reason = reason
        super().__init__(
            f"Error processing glyph '{identifier}' (collection '{collection}'): {reason}"
        )


class VectorParseError(IconsmithError):
    """The SVG document could not be parsed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"SVG parse failed: {reason}")


class GeometryError(IconsmithError):
    """Errors in outline geometry."""

    pass


class DegenerateGeometryError(GeometryError):
    """Outline is too small to be mapped into em space."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class OutlineSequenceError(GeometryError):
    """A drawing command appeared before any moveTo."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"{command} before moveTo in input path")


class CapacityExceededError(IconsmithError):
    """More glyphs than the Private Use Area can hold."""

    def __init__(self, identifier: str, capacity: int) -> None:
        self.identifier = identifier
        self.capacity = capacity
        super().__init__(
            f"Cannot assign a codepoint to '{identifier}': "
            f"the Private Use Area holds only {capacity} glyphs"
        )


class FontTableError(IconsmithError):
    """Error building one of the binary font tables."""

    def __init__(self, table: str, reason: str) -> None:
        self.table = table
        self.reason = reason
        super().__init__(f"Failed to build '{table}' table: {reason}")


class FontWriteError(IconsmithError):
    """Error writing the font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write font '{path}': {reason}")


class FontReadError(IconsmithError):
    """Error loading a font file for inspection."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read font '{path}': {reason}")
