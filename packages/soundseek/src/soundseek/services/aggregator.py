"""Multi-query content aggregation service."""

import logging
from dataclasses import dataclass

from soundseek.client import CatalogProtocol
from soundseek.config import PipelineConfig
from soundseek.exceptions import CatalogError, CatalogUnavailableError
from soundseek.lib.normalize import DEEP_SEARCH_POLICY, extract_id, normalize
from soundseek.lib.pacing import paced
from soundseek.lib.ranking import paginate, rank_by_official_source
from soundseek.models.domain import AggregatedResultSet, NormalizedTrack
from soundseek.models.enums import ContentType
from soundseek.models.query import CatalogQuery

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryTemplate:
    """Named search template applied to a seed term."""

    name: str
    template: str

    def render(self, term: str) -> str:
        return self.template.format(term=term)


# Priority order: earlier templates win duplicate IDs
ARTIST_TEMPLATES: tuple[QueryTemplate, ...] = (
    QueryTemplate("official_video", "{term} official video"),
    QueryTemplate("official_music", "{term} official music"),
    QueryTemplate("official", "{term} official"),
    QueryTemplate("album", "{term} album"),
    QueryTemplate("playlist", "{term} playlist"),
    QueryTemplate("mixes", "{term} mixes"),
    QueryTemplate("general", "{term}"),
)


class ContentAggregator:
    """Merge several searches for one seed term into a ranked, paged set.

    Templates are issued sequentially with a cooldown between them. Results
    are merged by content ID (first-seen wins) and tagged with the template
    that produced them. Once ``early_stop_pages`` pages' worth of items are
    merged, the remaining templates are skipped.
    """

    def __init__(
        self,
        client: CatalogProtocol,
        config: PipelineConfig | None = None,
        templates: tuple[QueryTemplate, ...] = ARTIST_TEMPLATES,
    ) -> None:
        self._client = client
        self._config = config or PipelineConfig()
        self._templates = templates

    @property
    def early_stop_threshold(self) -> int:
        return self._config.early_stop_pages * self._config.items_per_page

    async def collect(self, term: str) -> list[NormalizedTrack]:
        """Run the templates for a term and return the merged, unranked tracks.

        Raises:
            CatalogUnavailableError: If the catalog client cannot initialize,
                or every issued template failed.
        """
        await self._client.initialize()

        merged: dict[str, NormalizedTrack] = {}
        attempted = 0
        failures = 0

        async for template in paced(self._templates, self._config.strategy_delay):
            attempted += 1
            query = CatalogQuery(
                query=template.render(term), content_type=ContentType.VIDEO
            )
            try:
                results = await self._client.search(query)
            except CatalogError as e:
                logger.warning(
                    "Template '%s' failed for '%s': %s", template.name, term, e
                )
                failures += 1
                continue

            added = 0
            for raw in results:
                video_id = extract_id(raw)
                if not video_id or video_id in merged:
                    continue
                merged[video_id] = normalize(
                    raw, source_strategy=template.name, policy=DEEP_SEARCH_POLICY
                )
                added += 1
            logger.debug(
                "Template '%s' added %d of %d results (%d merged)",
                template.name,
                added,
                len(results),
                len(merged),
            )

            if len(merged) >= self.early_stop_threshold:
                logger.debug(
                    "Early stop after %d of %d templates",
                    attempted,
                    len(self._templates),
                )
                break

        if attempted and failures == attempted:
            raise CatalogUnavailableError(f"All searches failed for '{term}'")
        return list(merged.values())

    async def aggregate(self, term: str, page: int = 1) -> AggregatedResultSet:
        """Collect, rank (official templates first) and paginate.

        Args:
            term: Seed term, usually a resolved artist name.
            page: 1-based page number. Pages past the end are empty.

        Returns:
            One page of tracks with pagination computed over the full set.
        """
        tracks = await self.collect(term)
        ranked = rank_by_official_source(tracks)
        return paginate(ranked, page, self._config.items_per_page)
