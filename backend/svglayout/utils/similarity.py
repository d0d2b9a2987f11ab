"""String similarity for "did you mean" suggestions."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit insert/delete/substitute costs."""
    if not a:
        return len(b)
    if not b:
        return len(a)
    dp = np.zeros((len(a) + 1, len(b) + 1), dtype=np.int64)
    dp[:, 0] = np.arange(len(a) + 1)
    dp[0, :] = np.arange(len(b) + 1)
    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i, j] = min(dp[i - 1, j] + 1, dp[i, j - 1] + 1, dp[i - 1, j - 1] + cost)
    return int(dp[len(a), len(b)])


def similarity(a: str, b: str) -> float:
    """1.0 for identical strings, falling linearly with edit distance."""
    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    return (longer - levenshtein_distance(a, b)) / longer


def rank_similar(
    target: str,
    candidates: Iterable[str],
    threshold: float = 0.5,
    limit: int = 3,
) -> list[str]:
    """Candidates scoring above ``threshold``, best first (ties keep input order)."""
    scored = [(similarity(target, c), i, c) for i, c in enumerate(candidates)]
    ranked = sorted((s for s in scored if s[0] > threshold), key=lambda s: (-s[0], s[1]))
    return [c for _, _, c in ranked[:limit]]
