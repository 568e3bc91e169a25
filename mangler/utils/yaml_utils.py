"""Helpers for YAML parsing quirks in mutation-set documents."""

from typing import Any, Dict, TypeVar

V = TypeVar("V")


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Return ``data`` with every key converted to a string.

    YAML 1.1 reads unquoted ``yes``, ``no``, ``on``, ``off``, ``true`` and
    ``false`` keys as booleans, and bare numbers as ints. A mutation set named
    ``on:`` or ``2024:`` would otherwise reach the loader as ``True`` or
    ``2024``.

    Examples:
        >>> normalize_yaml_dict_keys({True: ["nothing"], 2024: ["reverse"]})
        {'True': ['nothing'], '2024': ['reverse']}
    """
    return {str(key): value for key, value in data.items()}
