"""Font writer for saving synthesized fonts.

This module resolves where a module's font belongs and writes the font
bytes (and, on request, the codepoint map) to disk.
"""

import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from iconsmith.domain import CodepointAssignment
from iconsmith.exceptions import FontWriteError

FONT_SUFFIX = ".ttf"


def module_leaf(module: str) -> str:
    """Return the last non-empty segment of a module path.

    Both ``::`` and ``.`` separate segments:
        "app::icons" -> "icons"
        "app.ui.icons" -> "icons"
        "app::icons::" -> "icons"
    """
    segments = [
        part.strip()
        for chunk in module.split("::")
        for part in chunk.split(".")
        if part.strip()
    ]
    return segments[-1] if segments else module


def font_output_path(manifest_path: Path, module: str) -> Path:
    """Resolve the font path for a module: ``<module-basename>.ttf`` beside the manifest.

    Args:
        manifest_path: Path of the manifest file
        module: Module path declared by the manifest

    Returns:
        Path of the font file
    """
    return manifest_path.parent / f"{module_leaf(module)}{FONT_SUFFIX}"


class FontWriter:
    """Writes font bytes to disk atomically.

    The bytes go to a temporary file in the target directory first and are
    then renamed over the target, so readers never see a partial font.

    Example:
        writer = FontWriter()
        writer.write(Path("icons.ttf"), result.font_bytes)
    """

    def write(self, path: Path, data: bytes) -> None:
        """Write ``data`` to ``path``.

        Raises:
            FontWriteError: If the file cannot be written
        """
        directory = path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=directory
            )
        except OSError as e:
            raise FontWriteError(str(path), str(e)) from e

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_path, path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise FontWriteError(str(path), str(e)) from e


def codepoint_map(assignments: Iterable[CodepointAssignment]) -> dict[str, str]:
    """Map each identifier to its ``U+XXXX`` label, in canonical order."""
    return {a.identifier: a.label for a in assignments}


def write_codepoint_map(path: Path, assignments: Iterable[CodepointAssignment]) -> None:
    """Export the identifier to codepoint mapping as JSON.

    Raises:
        FontWriteError: If the file cannot be written
    """
    payload = json.dumps(codepoint_map(assignments), indent=2, ensure_ascii=True) + "\n"
    FontWriter().write(path, payload.encode("utf-8"))


def stamp_path(font_path: Path) -> Path:
    """Path of the digest stamp kept beside a font: ``icons.ttf.sha256``."""
    return font_path.with_name(f"{font_path.name}.sha256")


def is_up_to_date(font_path: Path, digest: str) -> bool:
    """True when the font exists and its stamp records ``digest``."""
    stamp = stamp_path(font_path)
    if not font_path.is_file() or not stamp.is_file():
        return False
    try:
        return stamp.read_text(encoding="ascii").strip() == digest
    except (OSError, UnicodeDecodeError):
        return False


def write_stamp(font_path: Path, digest: str) -> None:
    """Record the digest the font at ``font_path`` was built from."""
    FontWriter().write(stamp_path(font_path), f"{digest}\n".encode("ascii"))
