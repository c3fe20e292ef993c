"""Approximate string matching used to filter package names."""

from __future__ import annotations

from collections.abc import Iterable


def levenshtein_distance(s: str, t: str) -> int:
    """Return the edit distance between ``s`` and ``t``."""
    if not s:
        return len(t)
    if not t:
        return len(s)
    previous = list(range(len(t) + 1))
    for i, s_char in enumerate(s, 1):
        current = [i]
        for j, t_char in enumerate(t, 1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (s_char != t_char),
                )
            )
        previous = current
    return previous[-1]


def fuzz(word_list: Iterable[str], query: str, threshold: int) -> list[str]:
    """Keep the words whose edit distance to ``query`` is below ``threshold``."""
    return [word for word in word_list if levenshtein_distance(word, query) < threshold]