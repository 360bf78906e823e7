"""
Isolate the product JSON object embedded verbatim in a product detail page.

The page state is valid JSON inside a much larger HTML document, so a single
string-aware brace-depth scan from a known anchor is enough; no HTML or
JavaScript parsing is attempted.
"""

from __future__ import annotations

import re

from harvester.scraping.errors import MissingAnchorError, UnbalancedJsonError

PRODUCT_ID_PATTERN = re.compile(r"-p-(\d+)")
ANCHOR_KEY = '"product":'


def extract_product_id_from_url(url: str) -> int | None:
    """
    Return the id from the last `-p-<digits>` token of `url`.

    Referrer chains can leave several such tokens in one URL; the last one
    names the product actually served.
    """

    matches = PRODUCT_ID_PATTERN.findall(url)
    if not matches:
        return None
    return int(matches[-1])


def build_anchor(product_id: int) -> str:
    return f'{ANCHOR_KEY}{{"id":{product_id},'


def extract_json_object(text: str, start: int) -> str:
    """
    Return the balanced `{...}` region of `text` beginning at `start`.

    Braces inside string literals, including escaped quotes, are ignored.
    """

    depth = 0
    opened = False
    in_string = False
    escape = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escape:
                escape = False
            elif char == "\\":
                escape = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
            opened = True
        elif char == "}":
            depth -= 1
            if opened and depth == 0:
                return text[start : index + 1]

    raise UnbalancedJsonError(f"Embedded JSON starting at offset {start} is not closed")


def extract_product_json(html: str, url: str) -> str:
    """
    Return the exact JSON text of the product object embedded in `html`.
    """

    product_id = extract_product_id_from_url(url)
    if product_id is None:
        raise MissingAnchorError(f"No product id found in URL: {url}")

    anchor_index = html.find(build_anchor(product_id))
    if anchor_index == -1:
        raise MissingAnchorError(f"No embedded JSON found for product id {product_id}")

    return extract_json_object(html, anchor_index + len(ANCHOR_KEY))
