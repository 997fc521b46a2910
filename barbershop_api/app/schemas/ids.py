"""
Identifier normalisation shared by the schemas.

Ids are strings everywhere inside the API.  Hand-edited data files and
some clients use JSON numbers instead; those are converted here, both
on the way in (request bodies) and on the way out (stored records).
"""

from typing import Any


def id_to_str(value: Any) -> Any:
    """Return numeric ids as strings; ``7`` and ``7.0`` both become ``"7"``."""
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value
