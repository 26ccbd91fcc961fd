from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter

from .pointer import JsonPointer, locate_child
from .types import LocateOptions

T = TypeVar("T")


def _as_pointer(pointer: str | JsonPointer) -> JsonPointer:
    if isinstance(pointer, JsonPointer):
        return pointer
    return JsonPointer.parse(pointer)


def resolve(pointer: str | JsonPointer, doc: Any) -> Any:
    """
    Return the value *pointer* addresses in *doc*.

    Raises a :class:`~rfcpointer.errors.ResolutionError` subclass when the
    path does not resolve.
    """
    return _as_pointer(pointer).resolve(doc)


def exists(pointer: str | JsonPointer, doc: Any) -> bool:
    """
    Test whether *pointer* addresses a value in *doc* (``None`` counts).

    A malformed pointer string still raises
    :class:`~rfcpointer.errors.MalformedPointerError`.
    """
    return _as_pointer(pointer).exists(doc)


def resolve_as(
    pointer: str | JsonPointer,
    doc: Any,
    target: type[T] | TypeAdapter[T],
) -> T:
    """Resolve *pointer* in *doc* then validate the value against a Pydantic type.

    If *doc* is a :class:`~pydantic.BaseModel` it is first converted to a
    ``dict`` via :meth:`~pydantic.BaseModel.model_dump`.

    Raises
    ------
    ResolutionError
        If the pointer does not resolve.
    pydantic.ValidationError
        If the resolved value does not conform to *target*.
    """
    if isinstance(doc, BaseModel):
        doc = doc.model_dump(mode="json")
    value = _as_pointer(pointer).resolve(doc)
    adapter: TypeAdapter[T] = target if isinstance(target, TypeAdapter) else TypeAdapter(target)
    return adapter.validate_python(value)


def locate(doc: Any, target: Any, *, options: LocateOptions | None = None) -> JsonPointer | None:
    """Return the pointer from the root of *doc* to the node that *is* *target*."""
    if doc is None:
        return None
    return locate_child(doc, target, options=options)
