"""General-purpose helpers."""

import re
from typing import Any, Dict, Iterable, List, Mapping

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def valid_email(value: Any) -> bool:
    """Return True if ``value`` looks like an email address."""
    return isinstance(value, str) and bool(EMAIL_REGEX.match(value.strip()))


def group_by(rows: Iterable[Mapping[str, Any]], key: str) -> Dict[Any, List[Mapping[str, Any]]]:
    """Group rows by the value of ``key``, keeping first-seen group order and row order."""
    groups: Dict[Any, List[Mapping[str, Any]]] = {}
    for row in rows or []:
        group = row.get(key)
        if not isinstance(group, (str, int, float, bool, type(None))):
            group = str(group)
        groups.setdefault(group, []).append(row)
    return groups
