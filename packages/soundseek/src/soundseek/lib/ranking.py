"""Ranking and pagination of merged results."""

import math
import re
from collections.abc import Sequence
from typing import TypeVar

from soundseek.models.domain import AggregatedResultSet, NormalizedTrack, Pagination

TrackT = TypeVar("TrackT", bound=NormalizedTrack)

_NON_NUMERIC = re.compile(r"[^\d.]")

# Checked in order; the first suffix present in the text wins
_VIEW_MULTIPLIERS = (("K", 1_000), ("M", 1_000_000), ("B", 1_000_000_000))


def parse_view_count(text: str | None) -> float:
    """Approximate a view-count display string such as "1.2M views".

    Non-numeric characters are stripped and the number is scaled by its
    K/M/B suffix. Absent or unparseable values (including "N/A") are 0.
    """
    if not text:
        return 0.0
    digits = _NON_NUMERIC.sub("", text)
    try:
        value = float(digits)
    except ValueError:
        return 0.0
    for suffix, multiplier in _VIEW_MULTIPLIERS:
        if suffix in text:
            return value * multiplier
    return value


def is_official(track: NormalizedTrack) -> bool:
    """Whether a track came from an "official" search strategy."""
    return "official" in (track.source_strategy or "")


def rank_by_official_source(tracks: Sequence[TrackT]) -> list[TrackT]:
    """Officially-tagged tracks first; merge order kept within each group."""
    return sorted(tracks, key=lambda track: not is_official(track))


def rank_by_views(tracks: Sequence[TrackT]) -> list[TrackT]:
    """Sort by parsed view count, highest first (stable for ties)."""
    return sorted(
        tracks, key=lambda track: parse_view_count(track.view_count_text), reverse=True
    )


def paginate(
    tracks: Sequence[NormalizedTrack], page: int, page_size: int
) -> AggregatedResultSet:
    """Slice one page out of the full ranked sequence.

    Pages start at 1. A page past the end yields an empty slice, not an
    error. Pagination metadata is always computed from the full sequence.
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")
    page = max(page, 1)
    total = len(tracks)
    start = (page - 1) * page_size
    end = start + page_size
    return AggregatedResultSet(
        items=list(tracks[start:end]),
        pagination=Pagination(
            current_page=page,
            total_pages=math.ceil(total / page_size),
            total_items=total,
            has_more=end < total,
            items_per_page=page_size,
        ),
    )
