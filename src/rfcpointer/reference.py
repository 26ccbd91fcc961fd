"""A JSON Pointer bound to a base document.

A :class:`JsonReference` remembers whether its pointer resolves against the
base and, if so, the value it resolves to.  Descending with :meth:`child`
only inspects the cached value, so walking a tree one step at a time never
re-walks from the root.  :meth:`parent` is the exception: the parent's value
was never cached, so it is looked up from the base again.

The base document is not copied.  A reference assumes the document is not
mutated while it is in use.
"""

from __future__ import annotations

import json
from typing import Any

from .pointer import (
    _MISSING,
    ROOT,
    JsonPointer,
    _step,
    _walk,
    locate_child,
)
from .types import JsonKind, LocateOptions, kind_of


class JsonReference:
    """A pointer, the document it navigates and the value it reaches.

    ``JsonReference(None)`` is never valid; a ``None`` *member* of a document
    is an ordinary value.
    """

    __slots__ = ("_base", "_pointer", "_valid", "_value")

    def __init__(self, base: Any, pointer: JsonPointer | str = ROOT) -> None:
        if isinstance(pointer, str):
            pointer = JsonPointer.parse(pointer)
        value = _walk(pointer.tokens, base)
        self._base = base
        self._pointer = pointer
        self._valid = value is not _MISSING
        self._value = value if self._valid else None

    @classmethod
    def _derive(cls, base: Any, pointer: JsonPointer, value: Any) -> JsonReference:
        ref = object.__new__(cls)
        ref._base = base
        ref._pointer = pointer
        ref._valid = value is not _MISSING
        ref._value = value if ref._valid else None
        return ref

    # -- state --------------------------------------------------------------

    @property
    def base(self) -> Any:
        return self._base

    @property
    def pointer(self) -> JsonPointer:
        return self._pointer

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def value(self) -> Any:
        """The referenced value, or ``None`` when the reference is invalid."""
        return self._value

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._pointer.tokens

    @property
    def current_token(self) -> str | None:
        return self._pointer.current_token

    @property
    def is_root(self) -> bool:
        return self._pointer.is_root

    def to_uri_fragment(self) -> str:
        return self._pointer.to_uri_fragment()

    # -- navigation ---------------------------------------------------------

    def has_child(self, token: str | int) -> bool:
        """Whether the referenced value has the named member.

        A ``str`` matches object keys only; an ``int`` matches an array
        index or the decimal key of an object.  This is narrower than
        :meth:`child`, which accepts a numeric ``str`` token against an array:
        ``child("0")`` on an array is valid while ``has_child("0")`` is
        ``False``.  Use ``child(token).valid`` for the pointer-evaluation view.
        """
        if not self._valid:
            return False
        kind = kind_of(self._value)
        if isinstance(token, int) and not isinstance(token, bool):
            if kind is JsonKind.ARRAY:
                return 0 <= token < len(self._value)
            return kind is JsonKind.OBJECT and str(token) in self._value
        return kind is JsonKind.OBJECT and token in self._value

    def child(self, token: str | int) -> JsonReference:
        pointer = self._pointer.child(token)
        if not self._valid:
            return self._derive(self._base, pointer, _MISSING)
        return self._derive(self._base, pointer, _step(self._value, pointer.tokens[-1]))

    def __truediv__(self, token: str | int) -> JsonReference:
        return self.child(token)

    def parent(self) -> JsonReference:
        return JsonReference(self._base, self._pointer.parent())

    def locate_child(
        self, target: Any, *, options: LocateOptions | None = None
    ) -> JsonReference | None:
        """Find *target* below this reference, searching by identity.

        Returns a reference on the same base, or ``None`` if this reference
        is invalid or *target* is not found.
        """
        if not self._valid:
            return None
        found = locate_child(self._value, target, start=self._pointer, options=options)
        if found is None:
            return None
        return self._derive(self._base, found, target)

    # -- dunder -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, JsonReference):
            return NotImplemented
        return (
            self._pointer == other._pointer
            and self._base is other._base
            and self._valid == other._valid
            and self._value is other._value
        )

    def __hash__(self) -> int:
        return hash((self._pointer, id(self._base), self._valid, id(self._value)))

    def __str__(self) -> str:
        if not self._valid:
            return "invalid"
        return json.dumps(self._value, separators=(",", ":"), ensure_ascii=False)

    def __repr__(self) -> str:
        return f"JsonReference({str(self._pointer)!r}, valid={self._valid})"
