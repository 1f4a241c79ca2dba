"""Structural scanner for ``identifier@host/resource`` strings.

Only the two delimiters are inspected. Character sets of the parts are not
validated.
"""
from __future__ import annotations

from .errors import DuplicateDelimiter, MisplacedDelimiter


def scan(text: str | None) -> list[str] | None:
    """Split ``text`` into one, two or three parts.

    Returns ``None`` for empty input. Raises ``DuplicateDelimiter`` on a
    second ``@`` and ``MisplacedDelimiter`` on a ``/`` that does not follow a
    non-empty identifier and host.
    """
    if not text:
        return None

    at = slash = -1
    for i, ch in enumerate(text):
        if ch == "/":
            # identifier and host must both be non-empty
            if 0 < at and at + 1 < i:
                slash = i
                break
            raise MisplacedDelimiter(text)
        if ch == "@":
            if at != -1:
                raise DuplicateDelimiter(text)
            at = i

    if at == -1:
        return [text]
    # Stricter than a bare left-to-right cut, which would give ["", host]:
    # a leading "@" is rejected so the identifier is never empty.
    if at == 0:
        raise MisplacedDelimiter(text)
    if slash == -1:
        return [text[:at], text[at + 1:]]
    return [text[:at], text[at + 1:slash], text[slash + 1:]]
