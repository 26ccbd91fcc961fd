from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("rfcpointer")
except PackageNotFoundError:  # pragma: no cover - local source tree without installed metadata
    __version__ = "0.1.0"

from .api import exists, locate, resolve, resolve_as
from .errors import (
    EndOfArrayError,
    IndexOutOfRangeError,
    InvalidIndexError,
    JsonPointerError,
    MalformedFragmentError,
    MalformedPointerError,
    NegativeIndexError,
    NoParentOfRootError,
    ResolutionError,
    UnresolvedPathError,
)
from .json_pointer import (
    encode_uri_component,
    escape_json_pointer_token,
    is_array_index,
    unescape_json_pointer_token,
)
from .pointer import ROOT, JsonPointer, exists_tokens, locate_child, resolve_tokens
from .reference import JsonReference
from .types import JsonKind, LocateOptions, kind_of

__all__ = [
    "ROOT",
    "EndOfArrayError",
    "IndexOutOfRangeError",
    "InvalidIndexError",
    "JsonKind",
    "JsonPointer",
    "JsonPointerError",
    "JsonReference",
    "LocateOptions",
    "MalformedFragmentError",
    "MalformedPointerError",
    "NegativeIndexError",
    "NoParentOfRootError",
    "ResolutionError",
    "UnresolvedPathError",
    "encode_uri_component",
    "escape_json_pointer_token",
    "exists",
    "exists_tokens",
    "is_array_index",
    "kind_of",
    "locate",
    "locate_child",
    "resolve",
    "resolve_as",
    "resolve_tokens",
    "unescape_json_pointer_token",
]
