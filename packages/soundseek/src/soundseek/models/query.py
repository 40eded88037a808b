"""Outbound catalog request model."""

from pydantic import BaseModel, ConfigDict, Field

from soundseek.models.enums import ContentType


class CatalogQuery(BaseModel):
    """A single search request against the catalog.

    Constructed per call and never persisted. Everything beyond the query
    text and content type is a hint: the backend may not honor it, and
    call sites that depend on one enforce it on the results themselves.

    Attributes:
        query: Free-text search string.
        content_type: Which kind of result to search for.
        region: Optional region/locale hint (e.g. "US").
        sort_by: Optional sort hint (e.g. "rating").
        duration: Optional duration hint (e.g. "long").
        features: Optional feature hints (e.g. ["hd", "cc"]).
    """

    model_config = ConfigDict(frozen=True)

    query: str
    content_type: ContentType = ContentType.VIDEO
    region: str | None = None
    sort_by: str | None = None
    duration: str | None = None
    features: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def cache_key(self) -> tuple[str, str]:
        """Key used by the response cache (hints do not change results)."""
        return (self.content_type.value, self.query)

    @property
    def hints(self) -> dict[str, object]:
        """Non-empty advisory hints carried by this query."""
        hints: dict[str, object] = {
            "region": self.region,
            "sort_by": self.sort_by,
            "duration": self.duration,
            "features": list(self.features),
        }
        return {key: value for key, value in hints.items() if value}
