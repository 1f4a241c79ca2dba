from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key

from rapidfuzz import fuzz, process

from .model import Address, compare

logger = logging.getLogger(__name__)


@dataclass
class RosterEntry:
    address: Address
    resources: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    changes: list[str] = field(default_factory=list)

    def log_change(self, message: str) -> None:
        self.changes.append(message)

    def __str__(self) -> str:
        return str(self.address)


def find_duplicate_clusters(addresses: list[Address]) -> list[list[Address]]:
    """Group addresses that are the same roster entry.

    Each address joins the first cluster whose head it equals. Equality is
    not transitive across levels, so the head decides membership.
    """
    visited: set[int] = set()
    clusters: list[list[Address]] = []
    for i, a in enumerate(addresses):
        if i in visited:
            continue
        cluster = [a]
        visited.add(i)
        for j in range(i + 1, len(addresses)):
            if j in visited:
                continue
            if a == addresses[j]:
                cluster.append(addresses[j])
                visited.add(j)
        clusters.append(cluster)
    return clusters


def _most_specific(cluster: list[Address]) -> Address:
    best = cluster[0]
    for a in cluster[1:]:
        if a.levels > best.levels or (a.levels == best.levels and compare(a, best) < 0):
            best = a
    return best


def merge_cluster(cluster: list[Address], sources: list[str] | None = None) -> RosterEntry:
    base = _most_specific(cluster)
    entry = RosterEntry(
        address=base,
        resources=sorted({a.resource for a in cluster if a.resource is not None}),
        sources=sorted(set(sources or [])),
    )
    if len(cluster) > 1:
        merged = ", ".join(sorted({a.text for a in cluster if a is not base}))
        entry.log_change(f"Merged {len(cluster) - 1} address(es): {merged}")
        logger.debug("%s: merged %d address(es)", base, len(cluster) - 1)
    return entry


def build_roster(pairs: list[tuple[Address, str]]) -> list[RosterEntry]:
    """Deduplicate ``(address, source_label)`` pairs into sorted roster entries."""
    addresses = [a for a, _ in pairs]
    labels: dict[int, list[str]] = {}
    for a, label in pairs:
        labels.setdefault(id(a), []).append(label)

    entries = []
    for cluster in find_duplicate_clusters(addresses):
        cluster_sources = [s for a in cluster for s in labels.get(id(a), [])]
        entries.append(merge_cluster(cluster, cluster_sources))

    entries.sort(key=cmp_to_key(lambda x, y: compare(x.address, y.address)))
    return entries


def index_by_text(entries: list[RosterEntry]) -> dict[str, RosterEntry]:
    """Index entries by their string projection, the hash-consistent key."""
    return {e.address.text: e for e in entries}


def search(
    entries: list[RosterEntry],
    query: str,
    limit: int = 5,
    score_cutoff: float = 60.0,
) -> list[tuple[RosterEntry, float]]:
    """Fuzzy-match ``query`` against entry addresses, best first."""
    choices = [e.address.text for e in entries]
    matches = process.extract(
        query,
        choices,
        scorer=fuzz.partial_ratio,
        limit=limit,
        score_cutoff=score_cutoff,
    )
    return [(entries[idx], score) for _, score, idx in matches]
