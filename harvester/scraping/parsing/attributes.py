"""
Flattening of nested product attribute pairs.
"""

from __future__ import annotations

from typing import Any

from harvester.domain.products import ProductAttribute


def _nested_name(holder: Any) -> str | None:
    if not isinstance(holder, dict):
        return None
    name = holder.get("name")
    if not isinstance(name, str):
        return None
    return name.strip()


def process_attributes(raw_attributes: Any) -> list[ProductAttribute]:
    """
    Turn `[{"key": {"name": ...}, "value": {"name": ...}}, ...]` into trimmed
    key/value pairs, skipping any pair with a missing or blank side.

    Order is preserved and duplicate keys are kept.
    """

    if not isinstance(raw_attributes, list):
        return []

    attributes: list[ProductAttribute] = []
    for raw in raw_attributes:
        if not isinstance(raw, dict):
            continue
        key = _nested_name(raw.get("key"))
        value = _nested_name(raw.get("value"))
        if not key or not value:
            continue
        attributes.append(ProductAttribute(key=key, value=value))
    return attributes
