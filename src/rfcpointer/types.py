from __future__ import annotations

import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class JsonKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"

    @property
    def is_container(self) -> bool:
        return self is JsonKind.OBJECT or self is JsonKind.ARRAY


def kind_of(value: Any) -> JsonKind:
    """Classify a Python value as one of the JSON value kinds.

    Mappings are objects; sequences other than ``str``/``bytes`` are arrays.
    ``bool`` is checked before numbers since it subclasses ``int``.
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, numbers.Number):
        return JsonKind.NUMBER
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return JsonKind.ARRAY
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


@dataclass(slots=True)
class LocateOptions:
    """Options for reverse lookup (:func:`rfcpointer.pointer.locate_child`).

    ``depth_limit``
        Maximum number of tokens below the starting pointer the search may
        descend.  ``None`` means unlimited.
    ``warn_on_singletons``
        Warn when the target is ``None``, ``True`` or ``False``; identity
        search cannot tell such values apart.
    """

    depth_limit: int | None = None
    warn_on_singletons: bool = True
