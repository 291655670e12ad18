"""
Model document reading.

Turns raw XML into the DocumentNode tree walked by the importer:
- whitespace normalization and namespace stripping
- flattening of transparent container elements
- translation of the legacy <sqale> layout into the canonical one
"""

from infrastructure.document.legacy import translate_legacy
from infrastructure.document.xml_reader import parse_document, read_document

__all__ = [
    "parse_document",
    "read_document",
    "translate_legacy",
]
