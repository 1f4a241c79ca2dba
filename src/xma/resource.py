"""Resource kind/session heuristic.

Clients commonly build resources as a readable device or client name
followed by a volatile token, e.g. ``laptop.AB12CD`` or ``android3f9a``.
Splitting them lets a roster treat two sessions of the same client as one
entry. This is a best-effort convention matched to known naming patterns,
not a grammar.
"""
from __future__ import annotations

_HEX = frozenset("0123456789abcdefABCDEF")


def is_hex(ch: str) -> bool:
    return ch in _HEX


def _split_end(resource: str, i: int) -> int:
    """Return the split index for a non-hex character found at ``i``."""
    ch = resource[i]
    # "android" ends in "d", which is hex; keep the whole word
    if i == 5 and ch == "i" and resource.startswith("an"):
        return i + 2
    # likewise "iPhone" ends in "e"
    if i == 4 and ch == "n" and resource.startswith("iP"):
        return i + 2
    return i + 1


def split_resource(resource: str | None) -> tuple[str, str] | None:
    """Split ``resource`` into ``(kind, session)``.

    The last dot wins when it is not the first character. Otherwise the
    trailing run of hex digits is taken as the session. Returns ``None`` when
    no split point exists (empty, or nothing but hex digits).
    """
    if not resource:
        return None

    dot = resource.rfind(".")
    if dot > 0:
        return resource[:dot], resource[dot + 1:]

    for i in range(len(resource) - 1, -1, -1):
        if not is_hex(resource[i]):
            end = _split_end(resource, i)
            return resource[:end], resource[end:]
    return None
