"""
Small dict helpers shared across the library
"""

# Standard
from typing import Any, Optional

# Local
from . import constants


def nested_get(dct: dict, key: str, dflt=None) -> Any:
    """Look up a value by 'foo.bar' key notation

    Args:
        dct:  dict
            The (possibly nested) dict to read from
        key:  str
            The '.' delimited path of the value

    Returns:
        val:  Any
            The value at the path, or dflt if any part of the path is missing

    Raises:
        TypeError: A non-final part of the path holds something other than a
            dict
    """
    *parents, leaf = key.split(constants.NESTED_DICT_DELIM)
    current = dct
    for depth, part in enumerate(parents):
        if part not in current:
            return dflt
        current = current[part]
        if not isinstance(current, dict):
            walked = constants.NESTED_DICT_DELIM.join(parents[: depth + 1])
            raise TypeError(f"Intermediate key {walked} is not a dict")
    return current.get(leaf, dflt)


def object_name(obj: dict) -> Optional[str]:
    """Get metadata.name from an object dict"""
    return (obj.get("metadata") or {}).get("name")
