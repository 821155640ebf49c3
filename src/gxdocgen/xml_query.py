"""Path-based lookups over parsed export XML.

All helpers accept None as the starting node and treat "not found" as a
normal result, so callers never have to guard against missing structure.
"""

import xml.etree.ElementTree as ET


def find_first(node: ET.Element | None, path: str) -> ET.Element | None:
    """Return the first element matching path under node, or None."""
    if node is None:
        return None
    return node.find(path)


def find_all(node: ET.Element | None, path: str) -> list[ET.Element]:
    """Return all elements matching path under node, in document order."""
    if node is None:
        return []
    return node.findall(path)


def attr(node: ET.Element | None, name: str) -> str | None:
    """Return the trimmed value of attribute name, or None if missing."""
    if node is None:
        return None
    value = node.get(name)
    if value is None:
        return None
    return value.strip()


def text(node: ET.Element | None, path: str | None = None) -> str:
    """Return the trimmed inner text of node or of its first path match.

    Args:
        node: Element to read from
        path: Optional path evaluated relative to node

    Returns:
        Concatenated inner text, stripped; empty string if absent
    """
    if path is not None:
        node = find_first(node, path)
    if node is None:
        return ""
    return "".join(node.itertext()).strip()


def part_path(part_type: str) -> str:
    """Build the path to an object part with the given type identifier."""
    return f".//Part[@type='{part_type}']"
