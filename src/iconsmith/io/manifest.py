"""Glyph manifest loading.

A manifest is a TOML file naming the module the font belongs to and the
glyphs it carries:

    module = "app::icons"

    [glyphs]              # identifier = "collection::icon"
    home = "mdi::home"

    [local_assets]        # identifier = "<stem>" -> <assets>/<stem>.svg
    logo = "brand-logo"

    [inline]              # identifier = "<path data or markup>"
    dot = "M0 0h4v4H0z"

Every entry becomes a GlyphDefinition with a global ``order``: glyph entries
first, then local assets, then inline entries, each in file order.

Key components:
- ManifestModel: pydantic schema of the TOML document
- IconResolver: Protocol for turning "collection::icon" into SVG markup
- IconSetResolver: Resolver reading Iconify-format JSON icon sets from disk
- load_manifest: Read, validate and resolve a manifest
"""

import hashlib
import json
import keyword
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from iconsmith.domain import GlyphDefinition
from iconsmith.exceptions import ManifestError
from iconsmith.io.markup import wrap_icon_body

COLLECTION_SEPARATOR = "::"
LOCAL_COLLECTION = "local"
INLINE_COLLECTION = "inline"
ASSET_SUFFIX = ".svg"

# Iconify's default icon box when an icon set omits its size
ICON_SET_DEFAULT_SIZE = 16.0


def upper_first(name: str) -> str:
    """Uppercase the first character: "arrowLeft" -> "ArrowLeft"."""
    return name[:1].upper() + name[1:]


def validate_identifier(name: str) -> str:
    """Validate a manifest key and return the glyph identifier it declares.

    Raises:
        ValueError: If the key is not an identifier or is a reserved word
    """
    if not name.isidentifier():
        raise ValueError(f"'{name}' is not a valid identifier")
    identifier = upper_first(name)
    if keyword.iskeyword(name) or keyword.iskeyword(identifier):
        raise ValueError(f"reserved word used: '{name}'")
    return identifier


def split_icon_reference(reference: str) -> tuple[str, str]:
    """Split "collection::icon" into its two trimmed parts.

    Raises:
        ValueError: If either part is missing
    """
    collection, separator, icon = reference.partition(COLLECTION_SEPARATOR)
    collection, icon = collection.strip(), icon.strip()
    if not separator or not collection or not icon:
        raise ValueError(f"expected 'collection::icon' syntax (got '{reference}')")
    return collection, icon


class ManifestModel(BaseModel):
    """Schema of a manifest TOML document."""

    module: str = Field(
        min_length=1,
        description="Module path of the generated bindings, e.g. 'app::icons'",
    )
    glyphs: dict[str, str] = Field(
        default_factory=dict,
        description="Identifier to 'collection::icon' reference",
    )
    local_assets: dict[str, str] = Field(
        default_factory=dict,
        description="Identifier to SVG file stem inside the assets directory",
    )
    inline: dict[str, str] = Field(
        default_factory=dict,
        description="Identifier to inline path data or SVG markup",
    )

    @field_validator("module")
    @classmethod
    def _check_module(cls, value: str) -> str:
        if not value.strip(" :."):
            raise ValueError("module must name at least one segment")
        return value

    @field_validator("glyphs")
    @classmethod
    def _check_references(cls, value: dict[str, str]) -> dict[str, str]:
        for name, reference in value.items():
            try:
                split_icon_reference(reference)
            except ValueError as e:
                raise ValueError(f"glyph '{name}': {e}") from e
        return value

    @field_validator("local_assets")
    @classmethod
    def _check_assets(cls, value: dict[str, str]) -> dict[str, str]:
        for name, stem in value.items():
            if not stem.strip():
                raise ValueError(f"local asset for '{name}' must not be empty")
        return value

    @model_validator(mode="after")
    def _check_identifiers(self) -> "ManifestModel":
        seen: set[str] = set()
        for section in (self.glyphs, self.local_assets, self.inline):
            for name in section:
                identifier = validate_identifier(name)
                if identifier in seen:
                    raise ValueError(f"identifier '{identifier}' is declared more than once")
                seen.add(identifier)
        return self


class IconResolver(Protocol):
    """Turns icon names of one collection into SVG documents."""

    def resolve(self, collection: str, icons: Sequence[str]) -> Mapping[str, str]:
        """Return the SVG document of each requested icon, keyed by icon name.

        Icons the collection does not have are left out of the result.
        """
        ...


class IconifyIcon(BaseModel):
    body: str
    width: float | None = None
    height: float | None = None


class IconifyIconSet(BaseModel):
    prefix: str
    icons: dict[str, IconifyIcon] = Field(default_factory=dict)
    width: float = ICON_SET_DEFAULT_SIZE
    height: float = ICON_SET_DEFAULT_SIZE


class IconSetResolver:
    """Resolves icons from Iconify-format JSON icon sets on disk.

    Each collection is read from ``<root>/<collection>.json``. Icon bodies
    are inner markup; they are wrapped in an ``<svg>`` root whose view box is
    the icon's own size, falling back to the set's size.

    Example:
        resolver = IconSetResolver(Path("node_modules/@iconify/json/json"))
        svgs = resolver.resolve("mdi", ["home", "account"])
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def resolve(self, collection: str, icons: Sequence[str]) -> dict[str, str]:
        """Read the collection's icon set and wrap the requested icons.

        Raises:
            ManifestError: If the icon set cannot be read or is malformed
        """
        path = self.root / f"{collection}.json"
        try:
            icon_set = IconifyIconSet.model_validate_json(path.read_bytes())
        except OSError as e:
            raise ManifestError(str(path), f"cannot read icon set: {e}") from e
        except ValidationError as e:
            raise ManifestError(str(path), _format_validation_error(e)) from e

        if icon_set.prefix != collection:
            raise ManifestError(
                str(path),
                f"icon set prefix mismatch: requested '{collection}', got '{icon_set.prefix}'",
            )

        resolved: dict[str, str] = {}
        for name in icons:
            icon = icon_set.icons.get(name)
            if icon is None:
                continue
            resolved[name] = wrap_icon_body(
                icon.body,
                icon.width if icon.width is not None else icon_set.width,
                icon.height if icon.height is not None else icon_set.height,
            )
        return resolved


@dataclass
class Manifest:
    """A loaded manifest with every glyph source resolved.

    Attributes:
        path: Location of the manifest file
        module: Declared module path
        definitions: Glyph definitions in declaration order
        digest: Content hash of the manifest document
    """

    path: Path
    module: str
    definitions: list[GlyphDefinition]
    digest: str

    def collections(self) -> dict[str, list[GlyphDefinition]]:
        """Bucket the definitions by collection, buckets sorted by name."""
        buckets: dict[str, list[GlyphDefinition]] = {}
        for definition in self.definitions:
            buckets.setdefault(definition.collection, []).append(definition)
        return dict(sorted(buckets.items()))


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        message = detail["msg"]
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def manifest_digest(model: ManifestModel, definitions: Sequence[GlyphDefinition]) -> str:
    """Uppercase SHA-256 over the manifest content and every resolved source.

    Resolved sources are included so that an edited asset file changes the
    digest even when the manifest itself does not.
    """
    payload = {
        "manifest": model.model_dump(),
        "sources": [[d.identifier, d.collection, d.text] for d in definitions],
    }
    serialized = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(serialized).hexdigest().upper()


def parse_manifest(path: Path) -> ManifestModel:
    """Read and validate a manifest document without resolving any source.

    Raises:
        ManifestError: If the file is unreadable, not TOML, or invalid
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(str(path), f"cannot read file: {e}") from e

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(str(path), f"invalid TOML: {e}") from e

    try:
        return ManifestModel.model_validate(data)
    except ValidationError as e:
        raise ManifestError(str(path), _format_validation_error(e)) from e


def load_manifest(
    path: Path,
    assets_dir: Path | None = None,
    resolver: IconResolver | None = None,
) -> Manifest:
    """Load a manifest and resolve every glyph source.

    Args:
        path: Manifest file
        assets_dir: Directory holding local SVG assets (manifest directory if None)
        resolver: Resolver for "collection::icon" glyph entries

    Returns:
        Manifest with definitions in declaration order

    Raises:
        ManifestError: If the manifest is invalid or a source cannot be resolved
    """
    model = parse_manifest(path)
    if assets_dir is None:
        assets_dir = path.parent

    definitions: list[GlyphDefinition] = []
    definitions.extend(_resolve_glyphs(path, model.glyphs, resolver))

    offset = len(definitions)
    for index, (name, stem) in enumerate(model.local_assets.items()):
        asset_path = (assets_dir / stem.strip()).with_suffix(ASSET_SUFFIX)
        try:
            svg = asset_path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ManifestError(str(path), f"cannot read local asset '{asset_path}': {e}") from e
        if not svg:
            raise ManifestError(str(path), f"local asset '{asset_path}' is empty")
        definitions.append(
            GlyphDefinition(
                identifier=upper_first(name),
                text=svg,
                order=offset + index,
                collection=LOCAL_COLLECTION,
            )
        )

    offset = len(definitions)
    for index, (name, source) in enumerate(model.inline.items()):
        definitions.append(
            GlyphDefinition(
                identifier=upper_first(name),
                text=source,
                order=offset + index,
                collection=INLINE_COLLECTION,
            )
        )

    return Manifest(
        path=path,
        module=model.module,
        definitions=definitions,
        digest=manifest_digest(model, definitions),
    )


def _resolve_glyphs(
    path: Path,
    glyphs: Mapping[str, str],
    resolver: IconResolver | None,
) -> list[GlyphDefinition]:
    if not glyphs:
        return []
    if resolver is None:
        raise ManifestError(
            str(path), "[glyphs] entries need an icon resolver (e.g. --icon-sets)"
        )

    references = [(name, *split_icon_reference(ref)) for name, ref in glyphs.items()]

    wanted: dict[str, list[str]] = {}
    for _, collection, icon in references:
        icons = wanted.setdefault(collection, [])
        if icon not in icons:
            icons.append(icon)

    documents = {
        collection: resolver.resolve(collection, icons) for collection, icons in wanted.items()
    }

    definitions = []
    for order, (name, collection, icon) in enumerate(references):
        svg = documents[collection].get(icon)
        if svg is None:
            raise ManifestError(
                str(path), f"collection '{collection}' has no icon '{icon}' (glyph '{name}')"
            )
        definitions.append(
            GlyphDefinition(
                identifier=upper_first(name),
                text=svg,
                order=order,
                collection=collection,
            )
        )
    return definitions
