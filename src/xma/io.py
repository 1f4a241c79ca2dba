from __future__ import annotations

import logging
from pathlib import Path

import vobject

from .errors import AddressError
from .model import Address, Require

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".txt", ".vcf")

Reject = tuple[str, str, AddressError]


# ── vCard extraction ───────────────────────────────────────────────────────────
#
# Address books carry XMPP addresses in two places:
#
#   IMPP:xmpp:alice@example.org      vCard 3.0/4.0 (RFC 4770, RFC 6350)
#   X-JABBER:alice@example.org       older Apple / Evolution exports
#
# IMPP values with another scheme (sip:, skype:, ...) are ignored.

def _vcard_values(vc: vobject.base.Component) -> list[str]:
    out: list[str] = []
    for prop in vc.contents.get("impp", []):
        value = str(prop.value).strip()
        scheme, sep, rest = value.partition(":")
        if sep and scheme.lower() == "xmpp":
            out.append(rest.strip())
    for prop in vc.contents.get("x-jabber", []):
        value = str(prop.value).strip()
        if value:
            out.append(value)
    return out


def _text_values(data: str) -> list[str]:
    out: list[str] = []
    for line in data.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        out.append(line)
    return out


# ── Public API ─────────────────────────────────────────────────────────────────

def read_addresses_from_files(
    paths: list[Path],
    require: Require = Require.IDENTIFIER,
) -> tuple[list[tuple[Address, str]], list[Reject]]:
    """Parse every address in ``paths``.

    Returns ``(address, source_label)`` pairs and the rejected values as
    ``(source_label, value, error)``.
    """
    pairs: list[tuple[Address, str]] = []
    rejects: list[Reject] = []
    for p in paths:
        label = p.stem
        data = p.read_text(encoding="utf-8", errors="replace")
        if p.suffix.lower() == ".vcf":
            values = []
            for vc in vobject.readComponents(data, ignoreUnreadable=True):
                if vc.name.upper() == "VCARD":
                    values.extend(_vcard_values(vc))
        else:
            values = _text_values(data)

        for value in values:
            try:
                pairs.append((Address.parse(value, require), label))
            except AddressError as e:
                logger.warning("%s: rejected %r (%s)", label, value, e.reason)
                rejects.append((label, value, e))
        logger.debug("%s: %d value(s) read", label, len(values))
    return pairs, rejects


def collect_sources(directory: Path) -> list[Path]:
    """Return all roster source files directly inside ``directory``, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix.lower() in SOURCE_SUFFIXES)
