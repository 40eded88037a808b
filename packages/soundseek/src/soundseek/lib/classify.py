"""Music classification heuristics.

Search results mix music with trailers, vlogs, podcasts and the like. Two
independent heuristics tell them apart, and each call site picks exactly
one of them through ClassifierStrategy; they are never composed:

- NEGATIVE_KEYWORDS (generic search): reject a result whose title or
  channel contains a non-music indicator.
- POSITIVE_PATTERNS (popular charts): accept a result whose title follows a
  music-titling convention or whose channel looks like a music channel.
"""

import re

from soundseek.models.enums import ClassifierStrategy

# No "ad" or "channel": as substrings they reject "Adele" and most channel names
NON_MUSIC_KEYWORDS: tuple[str, ...] = (
    "trailer",
    "movie",
    "film",
    "episode",
    "full episode",
    "series",
    "shorts",
    "documentary",
    "news",
    "interview",
    "review",
    "gameplay",
    "live stream",
    "official trailer",
    "reaction",
    "explained",
    "recap",
    "behind the scenes",
    "tutorial",
    "how to",
    "walkthrough",
    "meme",
    "funny",
    "challenge",
    "prank",
    "vlog",
    "commercial",
    "subscribe",
    "announcement",
    "podcast",
)

MUSIC_TITLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^.* - .*$"),  # "Artist - Song"
    re.compile(r"^.* \| .*$"),  # "Artist | Song"
    re.compile(r"official video", re.IGNORECASE),
    re.compile(r"official music video", re.IGNORECASE),
    re.compile(r"official audio", re.IGNORECASE),
    re.compile(r"lyric video", re.IGNORECASE),
    re.compile(r"visualizer", re.IGNORECASE),
    re.compile(r"^.*\(official.*\)$", re.IGNORECASE),  # "Song (Official ...)"
    re.compile(r"^.*\[official.*\]$", re.IGNORECASE),  # "Song [Official ...]"
)

MUSIC_CHANNEL_INDICATORS: tuple[str, ...] = (
    "vevo",
    "music",
    "records",
    "official",
    "lyrics",
    "audio",
    "song",
)


def has_non_music_keyword(title: str | None, channel_name: str | None) -> bool:
    """Check title and channel for any non-music indicator (case-insensitive)."""
    haystacks = ((title or "").lower(), (channel_name or "").lower())
    return any(keyword in text for text in haystacks for keyword in NON_MUSIC_KEYWORDS)


def has_music_pattern(title: str | None, channel_name: str | None) -> bool:
    """Check for a music-style title or a music channel indicator."""
    lowered_title = (title or "").lower()
    lowered_channel = (channel_name or "").lower()
    if any(pattern.search(lowered_title) for pattern in MUSIC_TITLE_PATTERNS):
        return True
    return any(indicator in lowered_channel for indicator in MUSIC_CHANNEL_INDICATORS)


def is_music(
    title: str | None,
    channel_name: str | None,
    strategy: ClassifierStrategy = ClassifierStrategy.NEGATIVE_KEYWORDS,
) -> bool:
    """Decide whether a result is plausibly music under the given strategy.

    Args:
        title: Result title.
        channel_name: Uploading channel or author name.
        strategy: Heuristic chosen by the call site.

    Returns:
        True if the result passes the selected heuristic.
    """
    match strategy:
        case ClassifierStrategy.NEGATIVE_KEYWORDS:
            return not has_non_music_keyword(title, channel_name)
        case ClassifierStrategy.POSITIVE_PATTERNS:
            return has_music_pattern(title, channel_name)
