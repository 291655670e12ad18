"""XML reader producing DocumentNode trees."""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from domain.document import DocumentNode
from domain.errors import MalformedDocumentError
from domain.importer import ROOT_TAG
from infrastructure.document.legacy import LEGACY_ROOT_TAG, translate_legacy
from infrastructure.io import ensure_exists

logger = logging.getLogger(__name__)

# Grouping elements that carry no meaning of their own below the root
TRANSPARENT_TAGS = frozenset({"characteristics", "children", "requirements"})

_WHITESPACE = re.compile(r"\s+")


def _normalize_text(raw: str | None) -> str:
    if raw is None:
        return ""
    return _WHITESPACE.sub(" ", raw).strip()


def _local_name(tag: str) -> str:
    # "{namespace}tag" -> "tag"
    return tag.rsplit("}", 1)[-1].strip().lower()


def _convert(element: ET.Element) -> DocumentNode:
    children: list[DocumentNode] = []
    for child in element:
        if not isinstance(child.tag, str):
            continue
        node = _convert(child)
        if node.tag in TRANSPARENT_TAGS:
            children.extend(node.children)
        else:
            children.append(node)

    return DocumentNode(
        tag=_local_name(element.tag),
        attributes={_local_name(k): _normalize_text(v) for k, v in element.attrib.items()},
        text=_normalize_text(element.text),
        children=children,
    )


def _locate_root(element: ET.Element) -> ET.Element:
    """Return the characteristics (or legacy sqale) element, unwrapping one level of nesting."""
    accepted = (ROOT_TAG, LEGACY_ROOT_TAG)
    if _local_name(element.tag) in accepted:
        return element

    candidates = [child for child in element if isinstance(child.tag, str) and _local_name(child.tag) in accepted]
    if len(candidates) == 1:
        logger.debug("Unwrapping <%s> inside <%s>", _local_name(candidates[0].tag), _local_name(element.tag))
        return candidates[0]

    raise MalformedDocumentError(
        f"Unsupported document root <{_local_name(element.tag)}>: expected <{ROOT_TAG}> or <{LEGACY_ROOT_TAG}>"
    )


def parse_document(source: str | bytes) -> DocumentNode:
    """
    Parse a model document into a canonical DocumentNode tree.

    Args:
        source: XML text (str, or bytes honoring the XML encoding declaration)

    Returns:
        Root DocumentNode tagged "characteristics"

    Raises:
        MalformedDocumentError: If the input is empty, not XML, or has no
            recognizable root element
    """
    if not source or not source.strip():
        raise MalformedDocumentError("Document is empty")

    try:
        element = ET.fromstring(source.strip())
    except ET.ParseError as err:
        raise MalformedDocumentError(f"Cannot parse document: {err}") from err

    root_element = _locate_root(element)
    # Only descendants are flattened; the root element itself is kept
    root = _convert(root_element)

    if root.tag == LEGACY_ROOT_TAG:
        logger.info("Legacy <%s> document detected, translating", LEGACY_ROOT_TAG)
        return translate_legacy(root)
    return root


def read_document(path: Path) -> DocumentNode:
    """Read and parse a model document file."""
    ensure_exists(path, "model document")
    return parse_document(path.read_bytes())
