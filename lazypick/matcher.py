"""Candidate scoring for picker queries.

``match_items`` ranks every candidate against a query: substring hits first,
then in-order subsequence (fuzzy) hits, then non-matches with score ``0``.
Ordering is deterministic so repeated keystrokes never reshuffle the list.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

Matcher = Callable[[str, Sequence[str]], list[tuple[str, int]]]

SUBSTRING_BASE_SCORE = 10_000
FUZZY_BASE_SCORE = 1_000
WORD_BOUNDARY_CHARS = "/_- ."


def substring_index(query: str, candidate: str) -> int | None:
    if not query:
        return 0
    idx = candidate.casefold().find(query.casefold())
    if idx < 0:
        return None
    return idx


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score an in-order subsequence match, or ``None`` when absent.

    Contiguous runs and hits right after a word boundary are rewarded; gaps
    between hits and long candidates are penalised. The raw value may be
    negative; callers normalise it.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in WORD_BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def score_candidate(query: str, candidate: str) -> int:
    """Return a relevance score; strictly positive iff ``candidate`` matches."""
    if not query:
        return 0
    substr_idx = substring_index(query, candidate)
    if substr_idx is not None:
        return max(FUZZY_BASE_SCORE + 1, SUBSTRING_BASE_SCORE - (substr_idx * 50) - len(candidate))
    score = fuzzy_score(query, candidate)
    if score is None:
        return 0
    return max(1, min(FUZZY_BASE_SCORE, FUZZY_BASE_SCORE // 2 + score))


def match_items(query: str, candidates: Sequence[str]) -> list[tuple[str, int]]:
    """Score every candidate and order by descending score, then input order."""
    scored = [(score_candidate(query, candidate), idx, candidate) for idx, candidate in enumerate(candidates)]
    scored.sort(key=lambda item: (-item[0], item[1]))
    return [(candidate, score) for score, _, candidate in scored]


def match_positions(query: str, candidate: str) -> list[int]:
    """Return character offsets in ``candidate`` that the query matched."""
    if not query:
        return []
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()
    if len(candidate_folded) != len(candidate) or len(query_folded) != len(query):
        # Case folding changed length; offsets would not line up.
        return []
    substr_idx = candidate_folded.find(query_folded)
    if substr_idx >= 0:
        return list(range(substr_idx, substr_idx + len(query)))

    positions: list[int] = []
    prev_idx = -1
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return []
        positions.append(idx)
        prev_idx = idx
    return positions
