"""Collision-free naming for duplicated material assets."""

import re
from typing import Iterable


_TRAILING_NUMBER = re.compile(r"(.+?)( \d+)?", re.DOTALL)


def base_name(name: str) -> str:
    """Strip a trailing ``"<space><digits>"`` suffix from a name.

    Args:
        name: Asset name, possibly carrying a generated suffix.

    Returns:
        str: The logical base name.

    Examples:
        >>> base_name("Metal 12")
        'Metal'
        >>> base_name("Metal Sheet 2")
        'Metal Sheet'
        >>> base_name("Metal")
        'Metal'
    """
    match = _TRAILING_NUMBER.fullmatch(name)
    return match.group(1) if match else name


def allocate_name(desired_base: str, existing_names: Iterable[str]) -> str:
    """Return a name for ``desired_base`` that is absent from ``existing_names``.

    Only existing names whose base name matches ``desired_base``
    case-insensitively take part; within that family names are compared
    exactly. If the bare base is free it is returned unchanged, otherwise the
    lowest free ``"<base> <n>"`` with ``n >= 1``.

    Args:
        desired_base: Base name to allocate from.
        existing_names: Names already present in the destination folder.

    Returns:
        str: A collision-free name.

    Examples:
        >>> allocate_name("Metal", ["Metal", "Metal 1"])
        'Metal 2'
        >>> allocate_name("Metal", ["Wood"])
        'Metal'
    """
    family_key = desired_base.casefold()
    family = {
        existing
        for existing in existing_names
        if base_name(existing).casefold() == family_key
    }

    if desired_base not in family:
        return desired_base

    # At most len(family) + 1 candidates.
    number = 1
    while True:
        candidate = f"{desired_base} {number}"
        if candidate not in family:
            return candidate
        number += 1


def unique_material_name(source_name: str, existing_names: Iterable[str]) -> str:
    """Allocate a duplicate name seeded from the source's base name."""
    return allocate_name(base_name(source_name), existing_names)
