"""Query-driven re-filtering of the candidate set."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .matcher import Matcher, match_items

logger = logging.getLogger(__name__)


@dataclass
class FilterPipeline:
    """Derive the visible candidate list from the current query.

    An empty query shows every candidate the matcher returns; a non-empty query
    keeps only candidates scored strictly above zero. Matcher order is kept.
    """

    candidates: Sequence[str]
    matcher: Matcher = match_items
    query: str = ""
    items: list[str] = field(default_factory=list)
    scores: list[int] = field(default_factory=list)
    dirty: bool = True

    def recompute(self, query: str) -> list[str]:
        """Run the matcher for ``query`` and rebuild ``items``/``scores``."""
        results = self.matcher(query, self.candidates)
        items: list[str] = []
        scores: list[int] = []
        for candidate, score in results:
            if query and score <= 0:
                continue
            items.append(candidate)
            scores.append(score)
        self.query = query
        self.items = items
        self.scores = scores
        self.dirty = False
        logger.debug("query %r matched %d/%d candidates", query, len(items), len(self.candidates))
        return items

    def mark_dirty(self) -> None:
        self.dirty = True

    def refresh(self, query: str) -> bool:
        """Recompute only when the query changed since the last run."""
        if not self.dirty and query == self.query:
            return False
        self.recompute(query)
        return True
