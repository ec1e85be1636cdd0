import re
from typing import Iterable, Optional

PO_NUMBER_PATTERN = re.compile(r"PO-(\d+)")
PO_NUMBER_WIDTH = 5


def format_po_number(sequence: int) -> str:
    return f"PO-{sequence:0{PO_NUMBER_WIDTH}d}"


def next_po_number(existing: Iterable[Optional[str]]) -> str:
    """
    Suggest the next PO number: highest numeric suffix seen plus one.

    Numbers that don't follow the PO-<digits> pattern are ignored.
    """
    highest = 0
    for po_number in existing:
        match = PO_NUMBER_PATTERN.search(po_number or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return format_po_number(highest + 1)
