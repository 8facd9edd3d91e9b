"""Member name normalization."""

from __future__ import annotations

import re
from typing import Any

_NON_ALNUM = re.compile(r"[^0-9A-Za-z]+")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_UNDERSCORES = re.compile(r"_+")


def member_key(name: Any) -> str:
    """Canonical by-name key: every lookup key is compared as a string."""
    return name if isinstance(name, str) else str(name)


def constant_identifier(name: Any) -> str:
    """Upper-case identifier under which a member is exposed on its type.

    >>> constant_identifier("with.punctuation")
    'WITH_PUNCTUATION'
    >>> constant_identifier("multiple_.underscores")
    'MULTIPLE_UNDERSCORES'
    >>> constant_identifier("CamelCase")
    'CAMEL_CASE'
    """
    value = _NON_ALNUM.sub("_", member_key(name).strip())
    value = _ACRONYM_BOUNDARY.sub(r"\1_\2", value)
    value = _CAMEL_BOUNDARY.sub(r"\1_\2", value)
    value = _UNDERSCORES.sub("_", value).strip("_").upper()
    if not value:
        raise ValueError(f"Cannot derive a constant identifier from {name!r}")
    return value
