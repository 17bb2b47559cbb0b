"""Relevance ranking of repository names against a typed fragment.

Relevance is the length of the longest common substring between the query
and a candidate. At equal similarity, shorter names come first: for ``mov``,
``movid`` ranks before ``movida-account-setup-scripts``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def lcs(s1: str, s2: str) -> int:
    """Return the length of the longest common substring of ``s1`` and ``s2``."""
    longest = 0
    # table[i][j] holds the length of the common run ending at s1[i-1], s2[j-1]
    table = [[0] * (len(s2) + 1) for _ in range(len(s1) + 1)]
    for i, a in enumerate(s1):
        for j, b in enumerate(s2):
            if a == b:
                run = table[i][j] + 1
                table[i + 1][j + 1] = run
                if run > longest:
                    longest = run
    return longest


def rank(query: str, candidates: Sequence[str], limit: int) -> list[str]:
    """Return the ``limit`` most relevant candidates, most relevant first.

    Sort key is (similarity desc, length asc). ``sorted`` is stable, so
    candidates tied on both keys keep their source order and repeated calls
    with the same input give the same result.
    """
    if limit <= 0 or not candidates:
        return []
    similarity = {name: lcs(query, name) for name in set(candidates)}
    ordered = sorted(candidates, key=lambda name: (-similarity[name], len(name)))
    return ordered[:limit]
