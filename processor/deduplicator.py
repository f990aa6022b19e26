"""
Deduplicator - Collapse near-duplicate articles collected from several regions.

Two items describe the same story when their normalized titles are
identical, one contains the other, or their word sets overlap by at least
the similarity threshold (intersection / union).
"""
import re
from datetime import datetime
from typing import Optional, Sequence

from loguru import logger

from data_transformers.models import RawNewsItem
from utils.dates import parse_published_at


DEFAULT_SIMILARITY_THRESHOLD = 0.7

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Lower-case, strip punctuation and collapse whitespace."""
    if not text:
        return ""
    text = _PUNCTUATION.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def token_overlap(a: str, b: str) -> float:
    """Word-level Jaccard overlap of two normalized strings."""
    words_a = set(a.split())
    words_b = set(b.split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def is_similar(a: str, b: str, threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> bool:
    """Check whether two normalized titles describe the same story."""
    if a == b:
        return True
    if not a or not b:
        return False
    if a in b or b in a:
        return True
    return token_overlap(a, b) >= threshold


class Deduplicator:
    """
    Merge regional results into one list with one item per story.

    When an incoming item matches kept items, the matching group collapses
    to a single winner: the most recent by parsed publish date, or the
    earlier-seen item whenever a date in the comparison is unparseable.
    The winner takes the position of the earliest-seen group member.
    """

    def __init__(self, similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD):
        if not 0.0 < similarity_threshold <= 1.0:
            raise ValueError(f"similarity_threshold must be in (0, 1], got {similarity_threshold}")
        self.similarity_threshold = similarity_threshold

    def deduplicate(self, items: Sequence[RawNewsItem], now: Optional[datetime] = None) -> list[RawNewsItem]:
        """
        Deduplicate news items.

        Args:
            items: Unioned items from all regions
            now: Reference time for relative publish dates

        Returns:
            Items with at most one representative per story
        """
        # (normalized title, parsed date, item)
        kept: list[tuple[str, Optional[datetime], RawNewsItem]] = []

        for item in items:
            entry = (normalize_text(item.title), parse_published_at(item.published_at, now), item)

            matches = [
                idx for idx, (title, _, _) in enumerate(kept)
                if is_similar(entry[0], title, self.similarity_threshold)
            ]
            if not matches:
                kept.append(entry)
                continue

            # Group members in seen order, incoming item last
            winner = kept[matches[0]]
            for candidate in [kept[idx] for idx in matches[1:]] + [entry]:
                winner = self._more_recent(winner, candidate)

            kept[matches[0]] = winner
            for idx in reversed(matches[1:]):
                del kept[idx]

        result = [item for _, _, item in kept]
        if len(result) < len(items):
            logger.info(f"[Dedup] {len(items)} -> {len(result)} items ({len(items) - len(result)} duplicates)")
        return result

    @staticmethod
    def _more_recent(current, challenger):
        current_date = current[1]
        challenger_date = challenger[1]
        if current_date is None or challenger_date is None:
            return current
        if challenger_date > current_date:
            return challenger
        return current
