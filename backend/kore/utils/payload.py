"""
Helpers for normalising request payloads.

Multipart forms carry nested structures (variants, image URL lists) as JSON
strings and booleans as "true"/"false"; JSON bodies carry them natively.
"""
import json
from typing import Any, Dict, List, Optional


def parse_maybe_json(value: Any, fallback: Any = None) -> Any:
    """Decode a JSON string, passing through already-decoded values"""
    if value is None:
        return fallback
    if isinstance(value, (dict, list)):
        return value
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return fallback


def parse_bool(value: Any) -> bool:
    """Only a real True or the string "true" count as true"""
    return value is True or value == "true"


def size_map_to_pairs(size_qty: Optional[Dict[str, int]]) -> List[Dict[str, Any]]:
    """Ordered size map -> storable list of {"size", "qty"} pairs"""
    if not size_qty:
        return []
    return [{"size": str(size), "qty": int(qty)} for size, qty in size_qty.items()]


def pairs_to_size_map(pairs: Any) -> Dict[str, Any]:
    """
    Stored pairs -> ordered size map. Dicts pass through unchanged.

    Raises ValueError for anything that is neither a map nor a list of
    {"size", "qty"} pairs, so pydantic reports it as a validation error.
    """
    if pairs is None:
        return {}
    if isinstance(pairs, dict):
        return dict(pairs)
    if not isinstance(pairs, list):
        raise ValueError("size_qty must be a size map or a list of {size, qty} pairs")
    size_map = {}
    for pair in pairs:
        if not isinstance(pair, dict) or "size" not in pair or "qty" not in pair:
            raise ValueError("size_qty pairs must have size and qty")
        size_map[str(pair["size"])] = pair["qty"]
    return size_map


def like_pattern(text: str) -> str:
    """Substring LIKE pattern with wildcards in the search text escaped"""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
