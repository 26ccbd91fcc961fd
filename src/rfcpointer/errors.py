"""Exceptions raised by pointer parsing, navigation and resolution.

Every exception derives from :class:`JsonPointerError`, which is itself a
:class:`ValueError` so callers that only care about "bad input" can catch
that.  Resolution failures additionally carry the *prefix* of the pointer up
to and including the token where navigation diverged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pointer import JsonPointer


class JsonPointerError(ValueError):
    """Base exception for all JSON Pointer errors."""


class MalformedPointerError(JsonPointerError):
    """Raised when a non-empty pointer string does not start with ``/``."""


class MalformedFragmentError(JsonPointerError):
    """Raised when a URI fragment does not start with ``#``."""


class NoParentOfRootError(JsonPointerError):
    """Raised by ``parent()`` on the root pointer or a root reference."""

    def __init__(self) -> None:
        super().__init__("Can't get parent of root JSON Pointer")


class NegativeIndexError(JsonPointerError):
    """Raised by ``child(index)`` when *index* is negative."""

    def __init__(self, index: int) -> None:
        super().__init__(f"JSON Pointer index must not be negative, got {index}")
        self.index = index


# ---------------------------------------------------------------------------
# Resolution failures
# ---------------------------------------------------------------------------


class ResolutionError(JsonPointerError):
    """A pointer could not be resolved against a document.

    ``pointer`` is the prefix of the original pointer up to and including the
    offending token.
    """

    reason = "Can't resolve JSON Pointer"

    def __init__(self, pointer: JsonPointer, detail: str | None = None) -> None:
        message = f"{self.reason} {str(pointer) or '(root)'}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.pointer = pointer


class UnresolvedPathError(ResolutionError):
    """Missing object key, or a scalar reached with tokens remaining."""


class InvalidIndexError(ResolutionError):
    """An array was addressed with a token that is not a valid index."""

    reason = "Illegal array index in JSON Pointer"


class IndexOutOfRangeError(ResolutionError):
    reason = "Array index out of range in JSON Pointer"


class EndOfArrayError(ResolutionError):
    """The ``-`` token names the (nonexistent) element past the end of an array."""

    reason = "Can't dereference end-of-array JSON Pointer"


__all__ = [
    "EndOfArrayError",
    "IndexOutOfRangeError",
    "InvalidIndexError",
    "JsonPointerError",
    "MalformedFragmentError",
    "MalformedPointerError",
    "NegativeIndexError",
    "NoParentOfRootError",
    "ResolutionError",
    "UnresolvedPathError",
]
