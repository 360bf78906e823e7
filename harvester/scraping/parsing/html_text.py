"""
BeautifulSoup-based text extraction for rich product description fragments.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

CONTENT_WRAPPER_ID = "rich-content-wrapper"
BLANK_LINES_REGEX = re.compile(r"\n\s*\n")


def extract_text_from_html(fragment: str) -> str:
    """
    Return the readable text of a rich-content fragment.

    Collects the heading, image-free paragraph blocks and ordered-list items
    of the content wrapper, one per line.
    """

    if not fragment or not fragment.strip():
        return ""

    soup = BeautifulSoup(fragment, "html.parser")
    wrapper = soup.find(id=CONTENT_WRAPPER_ID)
    if not isinstance(wrapper, Tag):
        return ""

    lines: list[str] = []

    heading = wrapper.find("h2")
    if isinstance(heading, Tag):
        text = heading.get_text().strip()
        if text:
            lines.append(text)

    for block in wrapper.find_all("div", recursive=False):
        if block.find("img") is not None:
            continue
        text = block.get_text().strip()
        if text and text != "<br>":
            lines.append(text)

    ordered = wrapper.find("ol")
    if isinstance(ordered, Tag):
        for item in ordered.find_all("li"):
            text = item.get_text().strip()
            if text:
                lines.append(text)

    joined = BLANK_LINES_REGEX.sub("\n", "\n".join(lines))
    return joined.strip()
