"""Manager and supplier roster caps."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

MAX_MANAGERS = 5
MAX_SUPPLIERS = 10


def limit(names: Iterable[str] | None, cap: int) -> list[str]:
    """Return the first ``cap`` names in input order. Over-long rosters are cut silently."""
    if not names:
        return []
    return list(names)[: max(cap, 0)]


def clean_roster(names: Iterable[Any] | None) -> list[str]:
    """Turn loose roster input into display names, dropping blank entries.

    Order and duplicates are preserved.
    """
    if names is None or isinstance(names, (str, bytes)):
        return []
    cleaned = []
    for name in names:
        if name is None or isinstance(name, (dict, list, tuple, set)):
            continue
        text = str(name).strip()
        if text:
            cleaned.append(text)
    return cleaned


def manager_label_id(name: str) -> str:
    return "Label_Manager_" + re.sub(r"\s+", "", name)


def supplier_label_id(name: str) -> str:
    return "Label_Supplier_" + re.sub(r"[^a-zA-Z0-9]", "", name)
