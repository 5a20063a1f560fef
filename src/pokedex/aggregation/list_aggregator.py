"""Search, paginate, hydrate, then type-filter the name index."""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from pokedex.aggregation.normalize import (
    DEFAULT_PLACEHOLDER_IMAGE,
    resolve_image_url,
    slot_ordered_types,
)
from pokedex.aggregation.pokemon_models import EntitySummary, NameIndexEntry, PokemonListPage
from pokedex.cache.name_index import NameIndexCache
from pokedex.retrieval.client import UpstreamClient
from pokedex.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_CONCURRENT_FETCHES = 20


class ListAggregator:
    """Builds list pages from the cached name index.

    Only the requested page is hydrated, and the type filter runs on that page
    after hydration. A typed page can therefore come back short even when more
    matches exist further along, and total_count never reflects the type filter.
    """

    def __init__(
        self,
        cache: NameIndexCache,
        client: UpstreamClient,
        *,
        max_concurrent_fetches: int = DEFAULT_MAX_CONCURRENT_FETCHES,
        placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE,
    ):
        self.cache = cache
        self.client = client
        self.max_concurrent_fetches = max(1, max_concurrent_fetches)
        self.placeholder_image = placeholder_image

    def list(
        self,
        limit: int,
        offset: int,
        search_term: Optional[str] = None,
        type_filter: Optional[str] = None,
    ) -> PokemonListPage:
        """
        Produce one page of summaries.

        Args:
            limit: Page size (>= 0)
            offset: Index of the first entry in the search-filtered index (>= 0)
            search_term: Case-insensitive substring to match against names
            type_filter: Case-insensitive type name applied to the hydrated page

        Returns:
            PokemonListPage with items in index order and the search-filtered count

        Raises:
            IndexUnavailable: If the name index cannot be obtained at all
        """
        index = self.cache.get_index()

        filtered: Sequence[NameIndexEntry] = index
        if search_term:
            needle = search_term.lower()
            filtered = [entry for entry in index if needle in entry.name.lower()]
        total_count = len(filtered)

        page_slice = list(filtered[offset:offset + limit])
        summaries = self._hydrate(page_slice)

        if type_filter:
            wanted = type_filter.lower()
            summaries = [
                summary for summary in summaries
                if any(name.lower() == wanted for name in summary.types)
            ]

        logger.info(
            f"List page offset={offset} limit={limit}: {len(summaries)} items "
            f"({len(page_slice)} hydrated, total_count={total_count})"
        )
        return PokemonListPage(pokemon=summaries, total_count=total_count)

    def _hydrate(self, page_slice: List[NameIndexEntry]) -> List[EntitySummary]:
        """Fetch and shape the slice concurrently, keeping slice order."""
        if not page_slice:
            return []

        workers = min(len(page_slice), self.max_concurrent_fetches)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hydrate") as pool:
            outcomes = list(pool.map(self._fetch_summary, enumerate(page_slice)))

        # pool.map already yields in input order; sort keeps that explicit
        outcomes.sort(key=lambda pair: pair[0])
        summaries = [summary for _, summary in outcomes if summary is not None]
        dropped = len(page_slice) - len(summaries)
        if dropped:
            logger.warning(f"Dropped {dropped} of {len(page_slice)} entries that failed to hydrate")
        return summaries

    def _fetch_summary(self, indexed_entry: Tuple[int, NameIndexEntry]) -> Tuple[int, Optional[EntitySummary]]:
        """Hydrate one entry; unreachable or unshapeable records come back as None."""
        position, entry = indexed_entry
        outcome = self.client.fetch_json(entry.resource_url)
        if not outcome.ok:
            logger.warning(f"Skipping {entry.name}: {outcome.error.message}")
            return position, None
        try:
            return position, self._to_summary(outcome.data)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            logger.warning(f"Skipping {entry.name}: malformed record from {entry.resource_url} ({e!r})")
            return position, None

    def _to_summary(self, record: Dict) -> EntitySummary:
        return EntitySummary(
            id=record["id"],
            name=record["name"],
            image_url=resolve_image_url(record.get("sprites"), self.placeholder_image),
            types=slot_ordered_types(record),
        )
