"""Channel-name matching for artist resolution.

Channel names on the catalog decorate the artist name in predictable ways
("Artist VEVO", "Artist - Topic", "ArtistOfficial"). Matching compares
alphanumeric-only, case-folded forms so punctuation and spacing never
matter.
"""

# Channel naming conventions that are exact artist matches
_CHANNEL_SUFFIXES = ("vevo", "topic")


def clean_name(name: str | None) -> str:
    """Case-fold a name and keep only its alphanumeric characters."""
    if not name:
        return ""
    return "".join(char for char in name.casefold() if char.isalnum())


def is_artist_match(channel_name: str | None, artist_name: str | None) -> bool:
    """Check whether a channel name plausibly belongs to an artist.

    A match occurs if the cleaned channel name contains the cleaned artist
    name, or equals it followed by "vevo" or "topic". Internal spaces are
    removed by cleaning, so "Some Artist" matches "SomeArtistVEVO".

    Args:
        channel_name: Candidate channel or author name.
        artist_name: Artist name being resolved.

    Returns:
        True if the channel matches, False otherwise (including when either
        name has no alphanumeric characters).
    """
    channel = clean_name(channel_name)
    artist = clean_name(artist_name)
    if not channel or not artist:
        return False
    if artist in channel:
        return True
    return any(channel == artist + suffix for suffix in _CHANNEL_SUFFIXES)
