"""
Payload normalization exports.
"""

from harvester.scraping.parsing.attributes import process_attributes
from harvester.scraping.parsing.descriptions import (
    DescriptionEntry,
    TextEntry,
    UnknownEntry,
    parse_description_entries,
    process_descriptions,
)
from harvester.scraping.parsing.html_text import extract_text_from_html

__all__ = [
    "DescriptionEntry",
    "TextEntry",
    "UnknownEntry",
    "extract_text_from_html",
    "parse_description_entries",
    "process_attributes",
    "process_descriptions",
]
