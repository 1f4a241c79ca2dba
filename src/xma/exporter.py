from __future__ import annotations

from functools import cmp_to_key
from pathlib import Path

import vobject

from .model import compare
from .roster import RosterEntry

EXPORT_FORMATS = ("txt", "vcf")


def _sorted(entries: list[RosterEntry]) -> list[RosterEntry]:
    return sorted(entries, key=cmp_to_key(lambda x, y: compare(x.address, y.address)))


def _entry_vcard(e: RosterEntry, target_version: str) -> str:
    a = e.address
    v = vobject.vCard()
    v.add('version')
    v.version.value = target_version
    v.add('fn'); v.fn.value = a.logon or a.identifier
    v.add('n'); v.n.value = vobject.vcard.Name(given=a.identifier)
    it = v.add('impp'); it.value = f"xmpp:{a.logon or a.identifier}"
    it = v.add('prodid'); it.value = "-//xma//EN"
    return v.serialize()


def export_roster(
    entries: list[RosterEntry],
    path: Path,
    fmt: str = "txt",
    target_version: str = "4.0",
) -> int:
    """Write ``entries`` to ``path`` in address order; return the count written."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"unknown export format: {fmt!r}")

    entries_sorted = _sorted(entries)
    if fmt == "vcf":
        data = "".join(_entry_vcard(e, target_version) for e in entries_sorted)
    else:
        data = "".join(f"{e.address}\n" for e in entries_sorted)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data, encoding="utf-8")
    return len(entries_sorted)
