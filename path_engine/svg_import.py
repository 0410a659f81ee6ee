"""Extract path data from SVG documents."""

import logging
import re
from xml.etree import ElementTree as ET

from path_engine.path_parser import parse_path
from path_engine.types import PathCommand

logger = logging.getLogger(__name__)


def extract_path_data(svg_text: str) -> list[str]:
    """Collect the d attribute of every <path> element in document order.

    Args:
        svg_text: Complete SVG document as string

    Returns:
        Non-empty d strings; [] for empty or malformed documents
    """
    if not svg_text or not svg_text.strip():
        return []

    # Default namespace would prefix every tag
    svg_text = re.sub(r'\sxmlns="[^"]*"', "", svg_text)

    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        logger.warning(f"Could not parse SVG document: {e}")
        return []

    data: list[str] = []
    for elem in root.iter():
        if elem.tag == "path" or elem.tag.endswith("}path"):
            d = elem.get("d", "")
            if d.strip():
                data.append(d)
    return data


def parse_svg_paths(svg_text: str) -> list[list[PathCommand]]:
    """Parse every <path> in an SVG document into a command list."""
    return [parse_path(d) for d in extract_path_data(svg_text)]
