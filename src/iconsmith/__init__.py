"""Iconsmith - Build embeddable icon fonts from SVG glyphs.

Iconsmith turns a set of named vector icons into a single TrueType font and
assigns each icon a stable codepoint in the Unicode Private Use Area
(U+E000 onwards), in the order the icons are declared.

Example:
    $ iconsmith build icons.toml

This will create icons.ttf next to the manifest, with one glyph per icon.
"""

__version__ = "0.1.0"
__author__ = "Iconsmith contributors"

__all__ = ["__author__", "__version__"]
