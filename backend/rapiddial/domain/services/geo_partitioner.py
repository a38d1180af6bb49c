"""
Geo Partitioner
Splits a prioritized prospect list into N visiting groups
"""
from typing import List, Sequence

from rapiddial.domain.models.prospect import Prospect


def partition(prospects: Sequence[Prospect], n: int) -> List[List[Prospect]]:
    """
    Split prospects into exactly n groups.

    Prospects are sorted by latitude (missing latitude counts as 0) and dealt
    round-robin: sorted position i goes to group i mod n. Group sizes differ by
    at most one. This is a latitude-band approximation, not spatial
    clustering: neighbours in one band land in different groups. Callers and
    tests rely on this exact assignment, so keep it stable.

    Raises:
        ValueError: If n < 1
    """
    if n < 1:
        raise ValueError(f"Group count must be at least 1, got {n}")

    groups: List[List[Prospect]] = [[] for _ in range(n)]
    ordered = sorted(prospects, key=lambda p: p.address_lat if p.address_lat is not None else 0.0)

    for index, prospect in enumerate(ordered):
        groups[index % n].append(prospect)

    return groups
