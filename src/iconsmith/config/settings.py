"""Configuration settings for Iconsmith."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

PUA_START = 0xE000
PUA_END = 0xF8FF


class FontConfig(BaseModel):
    """Font-wide metrics and codepoint range.

    Icon fonts are monospaced: every glyph shares one advance width and
    sits on the baseline with no descent.
    """

    units_per_em: int = Field(
        default=1000,
        ge=16,
        le=16384,
        description="Units per em of the generated font",
    )
    ascent: int = Field(
        default=1000,
        description="Font ascender in font units",
    )
    descent: int = Field(
        default=0,
        le=0,
        description="Font descender in font units (zero or negative)",
    )
    advance_width: int = Field(
        default=1000,
        gt=0,
        description="Uniform advance width for every glyph",
    )
    first_codepoint: int = Field(
        default=PUA_START,
        ge=PUA_START,
        le=PUA_END,
        description="Codepoint assigned to the first glyph",
    )
    last_codepoint: int = Field(
        default=PUA_END,
        ge=PUA_START,
        le=PUA_END,
        description="Highest codepoint that may be assigned",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "FontConfig":
        if self.last_codepoint < self.first_codepoint:
            raise ValueError("last_codepoint must not be below first_codepoint")
        return self

    @property
    def max_height(self) -> float:
        """Height available to an outline mapped without a view box."""
        return float(self.ascent - self.descent)

    @property
    def capacity(self) -> int:
        """Number of glyphs that can receive a codepoint."""
        return self.last_codepoint - self.first_codepoint + 1


class OutlineConfig(BaseModel):
    """Configuration for outline extraction and conversion."""

    cubic_tolerance: float = Field(
        default=0.1,
        gt=0.0,
        le=10.0,
        description="Maximum cubic-to-quadratic deviation in SVG user units",
    )
    min_dimension: float = Field(
        default=1e-6,
        gt=0.0,
        description="Smallest bounding box side accepted for mapping",
    )
    default_view_box_size: float = Field(
        default=24.0,
        gt=0.0,
        description="View box width and height used when wrapping bare path data",
    )
    max_group_depth: int = Field(
        default=256,
        ge=1,
        description="Deepest group nesting accepted in an SVG document",
    )


class NamingConfig(BaseModel):
    """Fixed strings written to the name table."""

    copyright_notice: str = Field(
        default="Contains third-party icons under their original licenses.",
    )
    version: str = Field(default="Version 1.000")
    description: str = Field(default="Auto generated icon collection")
    vendor_url: str | None = Field(
        default=None,
        description="Vendor URL (name ID 11), omitted when unset",
    )
    style_name: str = Field(default="Regular")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class IconsmithSettings(BaseModel):
    """Main application settings."""

    font: FontConfig = Field(default_factory=FontConfig)
    outline: OutlineConfig = Field(default_factory=OutlineConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> IconsmithSettings:
    """Get default application settings."""
    return IconsmithSettings()
