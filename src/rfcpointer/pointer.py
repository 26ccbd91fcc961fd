"""JSON Pointer values and the RFC 6901 navigation algorithm.

:class:`JsonPointer` is an immutable tuple of *unescaped* reference tokens.
Escaping (``~0``/``~1``) and percent-encoding only exist at the string
boundary; see :mod:`rfcpointer.json_pointer`.

Navigation rules:

* objects are indexed by the token as a key;
* arrays accept ``0`` or a non-zero-led run of at most eight digits; ``-``
  names the slot past the end and never resolves;
* scalars have no children.

:func:`resolve_tokens` raises a :class:`~rfcpointer.errors.ResolutionError`
subclass naming the failing prefix, :func:`exists_tokens` answers the same
question with a ``bool``.

Parsing is lenient: a ``~`` not followed by ``0`` or ``1`` is kept as a
literal tilde, so ``str(JsonPointer.parse("/a~2b"))`` is ``"/a~02b"``.  Only
strings with well-formed escapes survive a parse and re-serialize unchanged.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .errors import (
    EndOfArrayError,
    IndexOutOfRangeError,
    InvalidIndexError,
    NegativeIndexError,
    NoParentOfRootError,
    UnresolvedPathError,
)
from .json_pointer import (
    build_json_pointer,
    build_uri_fragment,
    is_array_index,
    parse_json_pointer,
    parse_uri_fragment,
)
from .types import JsonKind, LocateOptions, kind_of

# Returned by ``_step`` / ``_walk`` when a member is absent; ``None`` is a value.
_MISSING: Any = object()


# ---------------------------------------------------------------------------
# Pointer value
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, repr=False)
class JsonPointer:
    """An RFC 6901 JSON Pointer.

    Build one with :meth:`parse`, :meth:`from_uri_fragment`, or from an
    iterable of raw tokens::

        JsonPointer.parse("/foo/0") == JsonPointer(("foo", "0")) == ROOT / "foo" / 0
    """

    tokens: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.tokens, str):
            raise TypeError("JsonPointer takes a sequence of tokens; use JsonPointer.parse()")
        object.__setattr__(self, "tokens", tuple(self.tokens))

    @classmethod
    def parse(cls, path: str) -> JsonPointer:
        return cls(tuple(parse_json_pointer(path)))

    @classmethod
    def from_uri_fragment(cls, fragment: str) -> JsonPointer:
        return cls(tuple(parse_uri_fragment(fragment)))

    # -- introspection ------------------------------------------------------

    @property
    def is_root(self) -> bool:
        return not self.tokens

    @property
    def current_token(self) -> str | None:
        """The last token, or ``None`` for the root pointer."""
        return self.tokens[-1] if self.tokens else None

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __str__(self) -> str:
        return build_json_pointer(self.tokens)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def to_uri_fragment(self) -> str:
        return build_uri_fragment(self.tokens)

    # -- navigation ---------------------------------------------------------

    def parent(self) -> JsonPointer:
        if not self.tokens:
            raise NoParentOfRootError()
        return JsonPointer(self.tokens[:-1])

    def child(self, token: str | int) -> JsonPointer:
        """Append a key (``str``) or array index (non-negative ``int``)."""
        return JsonPointer(self.tokens + (_child_token(token),))

    def __truediv__(self, token: str | int) -> JsonPointer:
        return self.child(token)

    def resolve(self, base: Any) -> Any:
        return resolve_tokens(self.tokens, base)

    def exists(self, base: Any) -> bool:
        return exists_tokens(self.tokens, base)

    def locate_child(
        self, value: Any, target: Any, *, options: LocateOptions | None = None
    ) -> JsonPointer | None:
        """Find *target* inside *value*, the node this pointer addresses."""
        return locate_child(value, target, start=self, options=options)

    # -- pydantic -----------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate from a pointer string, serialize back to one."""
        from_str = core_schema.no_info_after_validator_function(cls.parse, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_str]),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema()
            ),
        )


ROOT = JsonPointer()


def _child_token(token: str | int) -> str:
    if isinstance(token, bool) or not isinstance(token, (str, int)):
        raise TypeError(f"JSON Pointer token must be str or int, got {type(token).__name__}")
    if isinstance(token, int):
        if token < 0:
            raise NegativeIndexError(token)
        return str(token)
    return token


def _prefix(tokens: Sequence[str], n: int) -> JsonPointer:
    return JsonPointer(tuple(tokens[:n]))


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _step(current: Any, token: str) -> Any:
    """Return the member of *current* named by *token*, or ``_MISSING``."""
    kind = kind_of(current)
    if kind is JsonKind.OBJECT:
        return current[token] if token in current else _MISSING
    if kind is JsonKind.ARRAY:
        if is_array_index(token):
            index = int(token)
            if index < len(current):
                return current[index]
        return _MISSING
    return _MISSING


def _walk(tokens: Sequence[str], base: Any) -> Any:
    if base is None:
        return _MISSING
    current = base
    for token in tokens:
        current = _step(current, token)
        if current is _MISSING:
            break
    return current


def resolve_tokens(tokens: Sequence[str], base: Any) -> Any:
    """Resolve *tokens* against *base* and return the addressed value.

    Raises
    ------
    UnresolvedPathError
        A key is missing, a scalar has tokens remaining, or *base* is ``None``.
    EndOfArrayError
        The ``-`` token was applied to an array.
    InvalidIndexError
        An array token is not a valid index.
    IndexOutOfRangeError
        An array index is past the end.
    """
    if base is None:
        raise UnresolvedPathError(ROOT, "document is null")
    current = base
    for i, token in enumerate(tokens):
        kind = kind_of(current)
        if kind is JsonKind.OBJECT:
            if token not in current:
                raise UnresolvedPathError(_prefix(tokens, i + 1))
            current = current[token]
        elif kind is JsonKind.ARRAY:
            if token == "-":
                raise EndOfArrayError(_prefix(tokens, i + 1))
            if not is_array_index(token):
                raise InvalidIndexError(_prefix(tokens, i + 1))
            index = int(token)
            if index >= len(current):
                raise IndexOutOfRangeError(_prefix(tokens, i + 1), f"length {len(current)}")
            current = current[index]
        else:
            raise UnresolvedPathError(_prefix(tokens, i + 1), f"{kind.value} has no children")
    return current


def exists_tokens(tokens: Sequence[str], base: Any) -> bool:
    """Return ``True`` if *tokens* resolve against *base* (even to ``None``)."""
    return _walk(tokens, base) is not _MISSING


# ---------------------------------------------------------------------------
# Reverse lookup
# ---------------------------------------------------------------------------


def _children(node: Any, kind: JsonKind) -> Iterable[tuple[str, Any]]:
    if kind is JsonKind.OBJECT:
        return node.items()
    return ((str(index), item) for index, item in enumerate(node))


def locate_child(
    value: Any,
    target: Any,
    *,
    start: JsonPointer = ROOT,
    options: LocateOptions | None = None,
) -> JsonPointer | None:
    """Return the pointer to the first node in *value* that *is* *target*.

    *start* is the pointer addressing *value*; the result extends it.  The
    search is depth-first in document order (object keys as stored, array
    indices ascending) and compares by identity, so an equal but distinct
    node never matches.  Returns ``None`` when *target* is not in the tree.

    With ``options.depth_limit`` set, branches deeper than the limit are not
    descended and the rest of the tree is still searched.  If *target* is
    not found and some branch was cut off, ``RecursionError`` is raised
    since the answer is incomplete.
    """
    opts = options or LocateOptions()
    if opts.depth_limit is not None and opts.depth_limit <= 0:
        raise ValueError("depth_limit must be > 0")
    if opts.warn_on_singletons and (target is None or isinstance(target, bool)):
        warnings.warn(
            f"locate_child target {target!r} is a singleton; the first {target!r} "
            "in the document will match",
            stacklevel=2,
        )

    seen: set[int] = set()
    truncated = False
    stack: list[tuple[tuple[str, ...], Any]] = [((), value)]
    while stack:
        path, node = stack.pop()
        if node is target:
            return JsonPointer(start.tokens + path)
        kind = kind_of(node)
        if not kind.is_container or id(node) in seen:
            continue
        seen.add(id(node))
        children = list(_children(node, kind))
        if not children:
            continue
        if opts.depth_limit is not None and len(path) >= opts.depth_limit:
            truncated = True
            continue
        for token, item in reversed(children):
            stack.append((path + (token,), item))
    if truncated:
        raise RecursionError(f"locate depth limit ({opts.depth_limit}) exceeded")
    return None
