"""The XMPP address value type.

::

    logon = identifier@host
    full  = logon/resource

An address is parsed from an identifier, a logon or a full string. Missing
components stay ``None``.

Equality compares logon (or identifier) and the resource *kind*, never the
resource session, so two sessions of the same client are the same roster
entry. Ordering compares the most specific components both sides share, and
by ``full`` when both have a resource. The two therefore disagree when kinds
match but sessions differ: ``a == b`` can hold while ``compare(a, b) != 0``.
Hashing uses the string projection, so such addresses usually hash
differently as well. Index rosters by ``str(address)`` when a hash-consistent
key is needed, and use ``==`` when kind-merging is wanted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import EmptyInput, InsufficientComponents, MisplacedDelimiter
from .resource import split_resource
from .scan import scan


class Require(str, Enum):
    """Minimum number of structural levels an input must carry."""

    IDENTIFIER = "identifier"
    LOGON = "logon"
    FULL = "full"

    @property
    def levels(self) -> int:
        return _LEVELS[self]


_LEVELS = {Require.IDENTIFIER: 1, Require.LOGON: 2, Require.FULL: 3}


@dataclass(frozen=True, eq=False)
class Address:
    """An address built from its three structural parts.

    ``resource_kind``, ``resource_session``, ``logon`` and ``full`` are
    derived and cannot be passed in.
    """

    identifier: str
    host: str | None = None
    resource: str | None = None
    resource_kind: str | None = field(init=False, default=None)
    resource_session: str | None = field(init=False, default=None)
    logon: str | None = field(init=False, default=None)
    full: str | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        if not self.identifier:
            raise EmptyInput(self.identifier)
        if self.resource is not None and self.host is None:
            raise MisplacedDelimiter(f"{self.identifier}/{self.resource}")

        if self.host is not None:
            object.__setattr__(self, "logon", f"{self.identifier}@{self.host}")
        if self.resource is not None:
            kind, session = split_resource(self.resource) or (self.resource, self.resource)
            object.__setattr__(self, "resource_kind", kind)
            object.__setattr__(self, "resource_session", session)
            object.__setattr__(self, "full", f"{self.logon}/{self.resource}")

    @classmethod
    def parse(cls, text: str | None, require: Require = Require.IDENTIFIER) -> Address:
        """Parse ``text``, requiring at least ``require`` levels.

        Raises an ``AddressError`` subclass on failure; no partial address is
        ever returned.
        """
        parts = scan(text)
        if parts is None:
            raise EmptyInput(text)
        if len(parts) < Require(require).levels:
            raise InsufficientComponents(text)
        return cls(*parts)

    # ── String projection ──────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        """The most specific composite: ``full``, ``logon`` or ``identifier``."""
        if self.full is not None:
            return self.full
        if self.logon is not None:
            return self.logon
        return self.identifier

    @property
    def levels(self) -> int:
        if self.resource is not None:
            return 3
        if self.host is not None:
            return 2
        return 1

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)

    def __hash__(self) -> int:
        return hash(self.text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "identifier": self.identifier,
            "host": self.host,
            "resource": self.resource,
            "resource_kind": self.resource_kind,
            "resource_session": self.resource_session,
            "logon": self.logon,
            "full": self.full,
        }

    # ── Equality and ordering ──────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, Address):
            return same_entry(self, other)
        if isinstance(other, str):
            return other == (self.identifier if self.host is None else self.logon)
        return NotImplemented

    def __lt__(self, other: Address) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: Address) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: Address) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: Address) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return compare(self, other) >= 0

    def __repr__(self) -> str:
        return f"Address({self.text!r})"


def parse_address(text: str | None, require: Require = Require.IDENTIFIER) -> Address:
    return Address.parse(text, require)


def _shared_keys(a: Address, b: Address) -> tuple[str, str]:
    """Return the least specific level both sides carry, below resource."""
    if a.host is None or b.host is None:
        return a.identifier, b.identifier
    return a.logon, b.logon  # type: ignore[return-value]


def same_entry(a: Address, b: Address) -> bool:
    """Roster equality: resource sessions are ignored, kinds are not."""
    if a is b:
        return True
    if a.resource is None or b.resource is None:
        left, right = _shared_keys(a, b)
        return left == right
    return a.logon == b.logon and a.resource_kind == b.resource_kind


def compare(a: Address, b: Address) -> int:
    """Three-way comparison for sorting; see the module notes on equality."""
    if a is b:
        return 0
    if a.resource is None or b.resource is None:
        left, right = _shared_keys(a, b)
    else:
        left, right = a.full, b.full  # type: ignore[assignment]
    return (left > right) - (left < right)
