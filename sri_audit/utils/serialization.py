"""Shared serialization helpers for camelCase conversion.

Used as the pydantic ``alias_generator`` for every model that
is returned over HTTP, so Python attributes stay snake_case
while the JSON body keeps the camelCase keys clients expect.
"""

from __future__ import annotations


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as
            ``"reference_url"``.

    Returns:
        The camelCase equivalent, e.g. ``"referenceUrl"``.
    """
    parts = name.split("_")
    return parts[0] + "".join(w.capitalize() for w in parts[1:])
