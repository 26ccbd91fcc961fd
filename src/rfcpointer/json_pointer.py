"""RFC 6901 token and URI-fragment codec."""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import quote, unquote

from .errors import MalformedFragmentError, MalformedPointerError

# 1-8 ASCII digits, no leading zero except "0" itself.
_ARRAY_INDEX = re.compile(r"0|[1-9][0-9]{0,7}", re.ASCII)
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def escape_json_pointer_token(token: str) -> str:
    """Escape a single JSON Pointer token (RFC 6901)."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape_json_pointer_token(token: str) -> str:
    """Unescape a single JSON Pointer token (RFC 6901).

    A ``~`` not followed by ``0`` or ``1`` is kept as-is.
    """
    return token.replace("~1", "/").replace("~0", "~")


def parse_json_pointer(path: str) -> list[str]:
    """Split a JSON Pointer into unescaped tokens.

    The root pointer ``""`` returns an empty list.
    """
    if path == "":
        return []
    if not path.startswith("/"):
        raise MalformedPointerError(f"Illegal JSON Pointer {path!r}")
    return [unescape_json_pointer_token(tok) for tok in path[1:].split("/")]


def build_json_pointer(tokens: Iterable[str]) -> str:
    """Build a JSON Pointer string from raw tokens."""
    return "".join("/" + escape_json_pointer_token(token) for token in tokens)


def encode_uri_component(text: str) -> str:
    """Percent-encode *text* for a URI fragment.

    Only RFC 3986 unreserved characters stay literal; space becomes ``%20``.
    """
    return quote(text, safe="")


def build_uri_fragment(tokens: Iterable[str]) -> str:
    """Build a ``#``-prefixed URI fragment from raw tokens."""
    return "#" + "".join(
        "/" + encode_uri_component(escape_json_pointer_token(token)) for token in tokens
    )


def parse_uri_fragment(fragment: str) -> list[str]:
    """Percent-decode a URI fragment and split it into unescaped tokens.

    A ``%`` must start a two-digit hex escape and the decoded bytes must be
    UTF-8; anything else raises :class:`MalformedFragmentError`.
    """
    if not fragment.startswith("#"):
        raise MalformedFragmentError(f"Illegal URI fragment {fragment!r}")
    body = fragment[1:]
    if _BAD_PERCENT.search(body):
        raise MalformedFragmentError(f"Illegal percent-escape in URI fragment {fragment!r}")
    try:
        decoded = unquote(body, errors="strict")
    except UnicodeDecodeError as exc:
        raise MalformedFragmentError(f"URI fragment {fragment!r} is not UTF-8") from exc
    return parse_json_pointer(decoded)


def is_array_index(token: str) -> bool:
    return _ARRAY_INDEX.fullmatch(token) is not None
