"""SVG markup helpers shared by the manifest loader and the extractor."""

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def format_number(value: float) -> str:
    """Format a number with at most six decimals and no trailing zeros."""
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def wrap_icon_body(body: str, width: float, height: float) -> str:
    """Wrap an icon body (inner SVG markup) in a root element.

    Icon services usually deliver the inner markup and the icon size
    separately; this builds the full document.

    Args:
        body: Inner SVG markup
        width: View box width
        height: View box height

    Returns:
        Complete SVG document
    """
    return (
        f'<svg xmlns="{SVG_NAMESPACE}" viewBox="0 0 {format_number(width)} '
        f'{format_number(height)}">{body.strip()}</svg>'
    )
